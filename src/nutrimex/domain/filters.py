"""Nutrient filter criteria for food searches."""

from dataclasses import dataclass, field
from enum import StrEnum


class Nutrient(StrEnum):
    """Filterable nutrient dimensions, valued by their wire suffix."""

    CALORIES = "calorias"
    CARBOHYDRATES = "carbohidratos"
    PROTEIN = "proteina"
    FAT = "lipidos"
    FIBER = "fiber_td"


@dataclass(frozen=True)
class NutrientRange:
    """Full slider range for a nutrient dimension."""

    floor: float
    ceiling: float
    step: float


NUTRIENT_RANGES: dict[Nutrient, NutrientRange] = {
    Nutrient.CALORIES: NutrientRange(floor=0, ceiling=1000, step=10),
    Nutrient.CARBOHYDRATES: NutrientRange(floor=0, ceiling=100, step=1),
    Nutrient.PROTEIN: NutrientRange(floor=0, ceiling=100, step=1),
    Nutrient.FAT: NutrientRange(floor=0, ceiling=100, step=1),
    Nutrient.FIBER: NutrientRange(floor=0, ceiling=50, step=0.5),
}


@dataclass(frozen=True)
class Bounds:
    """Selected minimum and maximum for one dimension."""

    minimum: float
    maximum: float


def _default_bounds() -> dict[Nutrient, Bounds]:
    return {
        nutrient: Bounds(minimum=spec.floor, maximum=spec.ceiling)
        for nutrient, spec in NUTRIENT_RANGES.items()
    }


@dataclass
class FilterCriteria:
    """Min/max bounds over the nutrient dimensions plus an optional name.

    Edits that would leave ``minimum > maximum`` are rejected and the previous
    bounds are kept.
    """

    bounds: dict[Nutrient, Bounds] = field(default_factory=_default_bounds)
    name: str | None = None

    def set_min(self, nutrient: Nutrient, value: float) -> bool:
        """Set the lower bound, returning False when the edit is rejected."""
        current = self.bounds[nutrient]
        if not _in_range(nutrient, value) or value > current.maximum:
            return False
        self.bounds[nutrient] = Bounds(minimum=value, maximum=current.maximum)
        return True

    def set_max(self, nutrient: Nutrient, value: float) -> bool:
        """Set the upper bound, returning False when the edit is rejected."""
        current = self.bounds[nutrient]
        if not _in_range(nutrient, value) or value < current.minimum:
            return False
        self.bounds[nutrient] = Bounds(minimum=current.minimum, maximum=value)
        return True

    def reset(self) -> None:
        """Restore every dimension to its full range and drop the name."""
        self.bounds = _default_bounds()
        self.name = None

    def active_bounds(self) -> dict[str, float]:
        """Return wire keys for bounds that differ from the full range."""
        active: dict[str, float] = {}
        for nutrient, spec in NUTRIENT_RANGES.items():
            selected = self.bounds[nutrient]
            if selected.minimum > spec.floor:
                active[f"min_{nutrient.value}"] = float(selected.minimum)
            if selected.maximum < spec.ceiling:
                active[f"max_{nutrient.value}"] = float(selected.maximum)
        return active

    @property
    def is_unfiltered(self) -> bool:
        """True when no bound is narrowed and no name is set."""
        return not self.name and not self.active_bounds()


def _in_range(nutrient: Nutrient, value: float) -> bool:
    spec = NUTRIENT_RANGES[nutrient]
    return spec.floor <= value <= spec.ceiling
