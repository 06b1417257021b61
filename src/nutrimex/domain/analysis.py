"""Nutrition analysis view models."""

from dataclasses import dataclass

# Approximate adult daily values.
DAILY_VALUES: dict[str, float] = {
    "energ_kcal": 2000,
    "protein_g": 50,
    "carbohidratos_g": 300,
    "lipid_tot_g": 65,
    "fiber_td_g": 25,
    "calcium_mg": 1000,
    "iron_mg": 18,
    "vit_c_mg": 90,
    "vit_a_rae_mcg": 900,
    "vit_e_mg": 15,
    "vit_k_mcg": 120,
}


@dataclass(frozen=True)
class MacroSlice:
    """One slice of the macronutrient pie chart."""

    name: str
    value: float
    color: str


@dataclass(frozen=True)
class DailyValueBar:
    """Nutrient amount against its daily value."""

    name: str
    value: float
    daily_value: float
    unit: str
    percent: float


@dataclass(frozen=True)
class RadarPoint:
    """Point of the nutrient profile radar chart."""

    nutrient: str
    percent: float


@dataclass(frozen=True)
class Highlight:
    """Badge shown when a food stands out for a nutrient."""

    title: str
    description: str


@dataclass(frozen=True)
class MacroCalories:
    """Calories contributed by each macronutrient."""

    protein_kcal: int
    carbohydrate_kcal: int
    fat_kcal: int
    total_kcal: int


@dataclass(frozen=True)
class NutritionReport:
    """Everything the analysis page renders for one food."""

    codigomex2: int
    name: str
    energy_kcal: int
    macros: list[MacroSlice]
    macro_progress: list[DailyValueBar]
    vitamins: list[DailyValueBar]
    minerals: list[DailyValueBar]
    radar: list[RadarPoint]
    highlights: list[Highlight]
    macro_calories: MacroCalories
