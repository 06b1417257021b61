"""Request payload builders for the nutrition service."""

from collections.abc import Iterable

from nutrimex.domain.filters import FilterCriteria
from nutrimex.domain.recipes import SelectedIngredient

MIN_NAME_LENGTH = 2


def parse_food_code(text: str) -> int | None:
    """Return the food code typed by the user, or None if it is not numeric."""
    cleaned = text.strip()
    if not cleaned.isdigit():
        return None
    return int(cleaned)


def search_body(criteria: FilterCriteria) -> dict[str, object]:
    """Build the ``/buscar`` body with only the bounds that narrow the search."""
    body: dict[str, object] = {}
    if criteria.name:
        body["nombre"] = criteria.name
    body.update(criteria.active_bounds())
    return body


def is_searchable_name(term: str) -> bool:
    """True when a name is long enough to search for."""
    return len(term.strip()) >= MIN_NAME_LENGTH


def recipe_body(ingredients: Iterable[SelectedIngredient]) -> dict[str, object]:
    """Build the ``/receta`` body preserving ingredient order."""
    return {
        "ingredientes": [
            {"codigomex2": item.food.codigomex2, "cantidad_g": item.quantity_g}
            for item in ingredients
        ]
    }


def ask_body(question: str, max_results: int | None = None) -> dict[str, object]:
    """Build the ``/ask`` body."""
    body: dict[str, object] = {"question": question}
    if max_results is not None:
        body["max_results"] = max_results
    return body
