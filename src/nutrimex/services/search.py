"""Controller for the food search page."""

from dataclasses import dataclass, field

from nutrimex.adapters.nutrition_api_client import NutritionApiError
from nutrimex.domain.filters import FilterCriteria, Nutrient
from nutrimex.domain.foods import Food
from nutrimex.services.fetch import IncrementalFetchController
from nutrimex.services.requests import parse_food_code

CODE_NOT_FOUND_MESSAGE = "No se encontró ningún alimento con el código {code}"
NO_MATCHES_MESSAGE = (
    "No se encontraron alimentos que cumplan con los filtros seleccionados. "
    "Intenta ajustar los criterios de búsqueda."
)


def code_not_found_message(code: int) -> str:
    """User-facing message for an unknown food code."""
    return CODE_NOT_FOUND_MESSAGE.format(code=code)


@dataclass
class FoodSearchController(IncrementalFetchController):
    """Search page state: code box, nutrient sliders and paged results.

    A numeric code in the search box takes precedence over the sliders and
    yields at most one food.
    """

    criteria: FilterCriteria = field(default_factory=FilterCriteria)
    code_query: str = ""

    def set_code_query(self, text: str) -> None:
        """Update the code box and schedule a refresh."""
        self.code_query = text
        self.schedule_refresh()

    def set_min(self, nutrient: Nutrient, value: float) -> bool:
        """Move a minimum slider; rejected moves leave everything unchanged."""
        accepted = self.criteria.set_min(nutrient, value)
        if accepted:
            self.schedule_refresh()
        return accepted

    def set_max(self, nutrient: Nutrient, value: float) -> bool:
        """Move a maximum slider; rejected moves leave everything unchanged."""
        accepted = self.criteria.set_max(nutrient, value)
        if accepted:
            self.schedule_refresh()
        return accepted

    def clear_filters(self) -> None:
        """Reset every slider and the code box."""
        self.criteria.reset()
        self.code_query = ""
        self.schedule_refresh()

    async def _load(self, page: int) -> None:
        code = parse_food_code(self.code_query)
        if code is None:
            await super()._load(page)
            return
        generation = self._begin(1)
        try:
            food = await self.food_service.get_food(code)
        except NutritionApiError as exc:
            if self._is_stale(generation, 1):
                return
            self._fail(1, code_not_found_message(code) if exc.is_not_found else str(exc))
            return
        if self._is_stale(generation, 1):
            return
        self.foods = [food]
        self.cursor.collapse()
        self._finish()

    async def _fetch_page(self, limit: int, offset: int) -> list[Food]:
        return await self.food_service.search_foods(self.criteria, limit, offset)

    def _describe_error(self, exc: NutritionApiError) -> str:
        if exc.is_not_found:
            return NO_MATCHES_MESSAGE
        return str(exc)
