"""Controller for the recipe builder page."""

import logging
from dataclasses import dataclass, field

from nutrimex.adapters.nutrition_api_client import NutritionApiError
from nutrimex.domain.foods import Food
from nutrimex.domain.recipes import GeneratedRecipe, IngredientSelection
from nutrimex.services.debounce import DebounceTimer
from nutrimex.services.foods import FoodService
from nutrimex.services.recipes import RecipeService
from nutrimex.services.requests import is_searchable_name

_logger = logging.getLogger(__name__)

INGREDIENT_SEARCH_LIMIT = 10


@dataclass
class RecipeBuilderController:
    """Ingredient search, selection and recipe generation state."""

    food_service: FoodService
    recipe_service: RecipeService
    debounce_seconds: float = 0.5
    selection: IngredientSelection = field(default_factory=IngredientSelection)
    search_term: str = ""
    search_results: list[Food] = field(default_factory=list)
    is_searching: bool = False
    recipe: GeneratedRecipe | None = None
    is_generating: bool = False
    _timer: DebounceTimer = field(default_factory=DebounceTimer, init=False, repr=False)
    _generation: int = field(default=0, init=False, repr=False)

    @property
    def available_results(self) -> list[Food]:
        """Search results that are not selected yet."""
        return [
            food
            for food in self.search_results
            if not self.selection.contains(food.codigomex2)
        ]

    def set_search_term(self, text: str) -> None:
        """Update the ingredient search box."""
        self.search_term = text
        self._timer.cancel()
        if not is_searchable_name(text):
            self._reset_search()
            return
        self._timer.schedule(self.debounce_seconds, self.search)

    async def search(self) -> None:
        """Search ingredients by the current term."""
        term = self.search_term
        if not is_searchable_name(term):
            self._reset_search()
            return
        self._generation += 1
        generation = self._generation
        self.is_searching = True
        try:
            foods = await self.food_service.search_by_name(
                term, limit=INGREDIENT_SEARCH_LIMIT, offset=0
            )
        except NutritionApiError as exc:
            _logger.warning("Ingredient search failed for %r: %s", term, exc)
            foods = []
        if generation != self._generation:
            return
        self.search_results = foods
        self.is_searching = False

    def add_ingredient(self, food: Food) -> bool:
        """Select a food with the default quantity and clear the search."""
        added = self.selection.add(food)
        self._timer.cancel()
        self.search_term = ""
        self._reset_search()
        return added

    def remove_ingredient(self, code: int) -> None:
        """Remove a selected food."""
        self.selection.remove(code)

    def update_quantity(self, code: int, quantity_g: float) -> None:
        """Change the grams of a selected food."""
        self.selection.update_quantity(code, quantity_g)

    async def generate(self) -> GeneratedRecipe | None:
        """Generate a recipe; does nothing without ingredients."""
        if not len(self.selection) or self.is_generating:
            return None
        self.is_generating = True
        try:
            self.recipe = await self.recipe_service.generate(self.selection)
        finally:
            self.is_generating = False
        return self.recipe

    def clear_all(self) -> None:
        """Reset the page."""
        self._timer.cancel()
        self.selection.clear()
        self.recipe = None
        self.search_term = ""
        self._reset_search()

    async def wait_idle(self) -> None:
        """Wait for a pending ingredient search."""
        await self._timer.wait()

    def _reset_search(self) -> None:
        # Results of a search still in flight are dropped.
        self._generation += 1
        self.search_results = []
        self.is_searching = False
