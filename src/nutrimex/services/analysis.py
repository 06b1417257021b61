"""Derived nutrition values for the analysis page."""

import math

from nutrimex.domain.analysis import (
    DAILY_VALUES,
    DailyValueBar,
    Highlight,
    MacroCalories,
    MacroSlice,
    NutritionReport,
    RadarPoint,
)
from nutrimex.domain.foods import Food

KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBOHYDRATE = 4
KCAL_PER_G_FAT = 9

MACRO_COLORS = ("#65a30d", "#f59e0b", "#8b5cf6")

# (label, food field, unit)
_MACRO_PROGRESS = (
    ("Proteína", "protein_g", "g"),
    ("Carbohidratos", "carbohidratos_g", "g"),
    ("Grasa", "lipid_tot_g", "g"),
    ("Fibra", "fiber_td_g", "g"),
)
_VITAMINS = (
    ("Vit C", "vit_c_mg", "mg"),
    ("Vit A", "vit_a_rae_mcg", "μg"),
    ("Vit E", "vit_e_mg", "mg"),
    ("Vit K", "vit_k_mcg", "μg"),
)
_MINERALS = (
    ("Calcio", "calcium_mg", "mg"),
    ("Hierro", "iron_mg", "mg"),
)
_RADAR = (
    ("Proteína", "protein_g"),
    ("Fibra", "fiber_td_g"),
    ("Calcio", "calcium_mg"),
    ("Hierro", "iron_mg"),
    ("Vit C", "vit_c_mg"),
    ("Vit A", "vit_a_rae_mcg"),
)


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves away from zero for positive values, as displays expect."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def percent_of_daily_value(value: float, daily_value: float) -> float:
    """Return ``value`` as a percentage of ``daily_value``."""
    if daily_value <= 0:
        return 0.0
    return value / daily_value * 100


def calories_from_macros(food: Food) -> MacroCalories:
    """Estimate calories from protein, carbohydrate and fat content."""
    protein = food.protein_g * KCAL_PER_G_PROTEIN
    carbohydrate = food.carbohidratos_g * KCAL_PER_G_CARBOHYDRATE
    fat = food.lipid_tot_g * KCAL_PER_G_FAT
    return MacroCalories(
        protein_kcal=int(round_half_up(protein)),
        carbohydrate_kcal=int(round_half_up(carbohydrate)),
        fat_kcal=int(round_half_up(fat)),
        total_kcal=int(round_half_up(protein + carbohydrate + fat)),
    )


def highlights(food: Food) -> list[Highlight]:
    """Return the badges a food qualifies for."""
    rules = (
        (food.protein_g > 15, "Alto en Proteína", "Excelente para desarrollo muscular"),
        (food.fiber_td_g > 5, "Rico en Fibra", "Beneficioso para la digestión"),
        (food.calcium_mg > 100, "Alto en Calcio", "Fortalece huesos y dientes"),
        (food.vit_c_mg > 20, "Rico en Vitamina C", "Antioxidante natural"),
        (food.iron_mg > 2, "Alto en Hierro", "Previene la anemia"),
        (food.energ_kcal < 50, "Bajo en Calorías", "Ideal para control de peso"),
    )
    return [
        Highlight(title=title, description=description)
        for matched, title, description in rules
        if matched
    ]


def build_report(food: Food) -> NutritionReport:
    """Build every chart series and summary shown for one food."""
    macros = [
        MacroSlice(name="Proteína", value=food.protein_g, color=MACRO_COLORS[0]),
        MacroSlice(name="Carbohidratos", value=food.carbohidratos_g, color=MACRO_COLORS[1]),
        MacroSlice(name="Grasa", value=food.lipid_tot_g, color=MACRO_COLORS[2]),
    ]
    return NutritionReport(
        codigomex2=food.codigomex2,
        name=food.nombre,
        energy_kcal=int(round_half_up(food.energ_kcal)),
        macros=macros,
        macro_progress=_bars(food, _MACRO_PROGRESS),
        vitamins=_bars(food, _VITAMINS),
        minerals=_bars(food, _MINERALS),
        radar=[
            RadarPoint(
                nutrient=label,
                percent=percent_of_daily_value(getattr(food, attr), DAILY_VALUES[attr]),
            )
            for label, attr in _RADAR
        ],
        highlights=highlights(food),
        macro_calories=calories_from_macros(food),
    )


def _bars(food: Food, rows: tuple[tuple[str, str, str], ...]) -> list[DailyValueBar]:
    bars = []
    for label, attr, unit in rows:
        value = getattr(food, attr)
        daily_value = DAILY_VALUES[attr]
        bars.append(
            DailyValueBar(
                name=label,
                value=value,
                daily_value=daily_value,
                unit=unit,
                percent=percent_of_daily_value(value, daily_value),
            )
        )
    return bars
