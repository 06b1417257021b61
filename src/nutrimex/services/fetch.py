"""Incremental fetch controller shared by the paged food pages."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from nutrimex.adapters.nutrition_api_client import NutritionApiError
from nutrimex.domain.foods import Food
from nutrimex.domain.pagination import FetchState, PaginationCursor
from nutrimex.services.debounce import DebounceTimer
from nutrimex.services.foods import FoodService

_logger = logging.getLogger(__name__)


@dataclass
class IncrementalFetchController(ABC):
    """Per-page state machine for debounced, paged food queries.

    A new query replaces the accumulated foods and starts again at page 1;
    ``load_more`` appends the next page. Every fetch is tagged with a
    generation number and responses from superseded fetches are dropped.
    """

    food_service: FoodService
    debounce_seconds: float = 0.5
    cursor: PaginationCursor = field(default_factory=PaginationCursor)
    foods: list[Food] = field(default_factory=list)
    state: FetchState = FetchState.IDLE
    loading_page: int | None = None
    error: str | None = None
    _timer: DebounceTimer = field(default_factory=DebounceTimer, init=False, repr=False)
    _generation: int = field(default=0, init=False, repr=False)

    @property
    def is_loading(self) -> bool:
        """True while a fetch is in flight."""
        return self.state is FetchState.LOADING

    def schedule_refresh(self) -> None:
        """Refresh page 1 once input has been quiet for the debounce delay."""
        self._timer.schedule(self.debounce_seconds, self.refresh)

    async def refresh(self) -> None:
        """Fetch page 1 now, replacing the current results."""
        self._timer.cancel()
        await self._load(1)

    async def load_more(self) -> bool:
        """Fetch and append the next page; False when there is nothing to do."""
        if self.is_loading or not self.cursor.has_more:
            return False
        await self._load(self.cursor.page + 1)
        return True

    async def wait_idle(self) -> None:
        """Wait for any scheduled or running refresh to finish."""
        await self._timer.wait()

    def close(self) -> None:
        """Cancel a scheduled refresh."""
        self._timer.cancel()

    async def _load(self, page: int) -> None:
        generation = self._begin(page)
        try:
            results = await self._fetch_page(
                self.cursor.fetch_limit, self.cursor.offset_for(page)
            )
        except NutritionApiError as exc:
            if not self._is_stale(generation, page):
                self._fail(page, self._describe_error(exc))
            return
        if self._is_stale(generation, page):
            return
        shown = self.cursor.record_page(page, results)
        self.foods = shown if page == 1 else [*self.foods, *shown]
        self._finish()
        if page == 1:
            self._on_first_page()

    @abstractmethod
    async def _fetch_page(self, limit: int, offset: int) -> list[Food]:
        """Fetch one page of foods for the current query."""

    def _describe_error(self, exc: NutritionApiError) -> str:
        return str(exc)

    def _on_first_page(self) -> None:
        """Hook run after page 1 has been stored."""

    def _begin(self, page: int) -> int:
        self._generation += 1
        self.state = FetchState.LOADING
        self.loading_page = page
        self.error = None
        return self._generation

    def _is_stale(self, generation: int, page: int) -> bool:
        if generation == self._generation:
            return False
        _logger.debug("Dropping superseded response for page %s", page)
        return True

    def _finish(self) -> None:
        self.state = FetchState.LOADED
        self.loading_page = None

    def _fail(self, page: int, message: str) -> None:
        self.state = FetchState.ERROR
        self.loading_page = None
        self.error = message
        if page == 1:
            self.foods = []
            self.cursor.collapse()
