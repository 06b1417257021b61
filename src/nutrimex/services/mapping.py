"""Translation of service payloads into UI food records."""

import math

from nutrimex.domain.foods import NUTRIENT_FIELDS, Food

DEFAULT_FOOD_NAME = "Sin nombre"


def map_api_food(
    raw: dict[str, object], placeholder_name: str = DEFAULT_FOOD_NAME
) -> Food:
    """Map a remote food record to a ``Food`` with every nutrient populated."""
    nutrients = {
        ui_name: _to_number(raw.get(api_name))
        for api_name, ui_name in NUTRIENT_FIELDS.items()
    }
    name = raw.get("nombre_del_alimento")
    return Food(
        codigomex2=int(_to_number(raw.get("codigomex2"))),
        nombre=str(name) if name else placeholder_name,
        **nutrients,
    )


def map_api_foods(
    payload: object, placeholder_name: str = DEFAULT_FOOD_NAME
) -> list[Food]:
    """Map a list payload; anything that is not a list maps to no foods."""
    if not isinstance(payload, list):
        return []
    return [
        map_api_food(item, placeholder_name)
        for item in payload
        if isinstance(item, dict)
    ]


def _to_number(value: object) -> float:
    """Parse a numeric field, treating missing or invalid values as zero."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number
