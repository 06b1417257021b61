"""Controller for the nutrition analysis page."""

from dataclasses import dataclass, field

from nutrimex.adapters.nutrition_api_client import NutritionApiError
from nutrimex.domain.analysis import NutritionReport
from nutrimex.domain.foods import Food
from nutrimex.services.analysis import build_report
from nutrimex.services.debounce import DebounceTimer
from nutrimex.services.fetch import IncrementalFetchController
from nutrimex.services.requests import parse_food_code
from nutrimex.services.search import code_not_found_message

INVALID_CODE_MESSAGE = "El código debe ser un número válido"


@dataclass
class NutritionExplorerController(IncrementalFetchController):
    """Food list with a selected food and a debounced lookup by code."""

    selected: Food | None = None
    code_query: str = ""
    search_error: str | None = None
    is_searching: bool = False
    _lookup_timer: DebounceTimer = field(
        default_factory=DebounceTimer, init=False, repr=False
    )
    _lookup_generation: int = field(default=0, init=False, repr=False)

    @property
    def report(self) -> NutritionReport | None:
        """Analysis of the selected food."""
        if self.selected is None:
            return None
        return build_report(self.selected)

    def select(self, food: Food) -> None:
        """Show the analysis of ``food``."""
        self.selected = food

    def set_code_query(self, text: str) -> None:
        """Update the code box; a non-empty value is looked up after a delay."""
        self.code_query = text
        self._supersede_lookup(None)
        if not text.strip():
            self._lookup_timer.cancel()
            return
        self._lookup_timer.schedule(self.debounce_seconds, self.lookup_code)

    async def lookup_code(self) -> None:
        """Select the food whose code is in the code box."""
        text = self.code_query.strip()
        if not text:
            self._supersede_lookup(None)
            return
        code = parse_food_code(text)
        if code is None:
            self._supersede_lookup(INVALID_CODE_MESSAGE)
            return
        generation = self._supersede_lookup(None)
        self.is_searching = True
        try:
            food = await self.food_service.get_food(code)
        except NutritionApiError as exc:
            if generation == self._lookup_generation:
                self.search_error = (
                    code_not_found_message(code) if exc.is_not_found else str(exc)
                )
                self.is_searching = False
            return
        if generation != self._lookup_generation:
            return
        self.is_searching = False
        self.selected = food
        if not any(item.codigomex2 == food.codigomex2 for item in self.foods):
            self.foods = [food, *self.foods]

    async def wait_idle(self) -> None:
        """Wait for pending list refreshes and code lookups."""
        await super().wait_idle()
        await self._lookup_timer.wait()

    def close(self) -> None:
        """Cancel pending refreshes and lookups."""
        super().close()
        self._lookup_timer.cancel()

    def _supersede_lookup(self, error: str | None) -> int:
        # Any lookup still in flight is ignored when it completes.
        self._lookup_generation += 1
        self.is_searching = False
        self.search_error = error
        return self._lookup_generation

    async def _fetch_page(self, limit: int, offset: int) -> list[Food]:
        return await self.food_service.list_foods(limit, offset)

    def _on_first_page(self) -> None:
        if self.selected is None and self.foods:
            self.selected = self.foods[0]
