"""Food lookups against the nutrition service."""

import logging
from dataclasses import dataclass

from nutrimex.adapters.nutrition_api_client import (
    ApiErrorKind,
    NutritionApiClient,
    NutritionApiError,
)
from nutrimex.domain.filters import FilterCriteria
from nutrimex.domain.foods import Food
from nutrimex.services.mapping import map_api_food, map_api_foods
from nutrimex.services.requests import is_searchable_name, search_body

_logger = logging.getLogger(__name__)


@dataclass
class FoodService:
    """Service that shapes food queries and normalizes the results."""

    client: NutritionApiClient

    async def list_foods(self, limit: int = 100, offset: int = 0) -> list[Food]:
        """Return one page of the unfiltered food listing."""
        payload = await self.client.list_foods(limit, offset)
        foods = map_api_foods(payload)
        _logger.debug("List foods: offset=%s results=%s", offset, len(foods))
        return foods

    async def get_food(self, code: int) -> Food:
        """Return a single food by code; an empty answer counts as not found."""
        payload = await self.client.get_food(code)
        if not isinstance(payload, dict) or not payload:
            _logger.warning("Food %s lookup returned no record", code)
            raise NutritionApiError(
                ApiErrorKind.NOT_FOUND, None, f"no record for food {code}"
            )
        return map_api_food(payload)

    async def search_foods(
        self, criteria: FilterCriteria, limit: int = 100, offset: int = 0
    ) -> list[Food]:
        """Search by nutrient bounds, using the plain listing when unfiltered."""
        if criteria.is_unfiltered:
            return await self.list_foods(limit, offset)
        body = search_body(criteria)
        payload = await self.client.search_foods(body, limit, offset)
        foods = map_api_foods(payload)
        _logger.debug(
            "Search foods: filters=%s offset=%s results=%s", body, offset, len(foods)
        )
        return foods

    async def search_by_name(
        self, term: str, limit: int = 50, offset: int = 0
    ) -> list[Food]:
        """Search by name; terms shorter than two characters match nothing."""
        if not is_searchable_name(term):
            return []
        payload = await self.client.search_foods_by_name(term.strip(), limit, offset)
        return map_api_foods(payload)

    async def create_food(self, payload: dict[str, object]) -> Food:
        """Create a food from remote-format fields."""
        created = await self.client.create_food(payload)
        return map_api_food(created if isinstance(created, dict) else payload)
