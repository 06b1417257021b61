"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from nutrimex.adapters.nutrition_api_client import (
    HttpxNutritionApiClient,
    NutritionApiClient,
)
from nutrimex.config import Settings
from nutrimex.domain.pagination import PaginationCursor
from nutrimex.services.chat import ChatService, ChatSession
from nutrimex.services.explorer import NutritionExplorerController
from nutrimex.services.foods import FoodService
from nutrimex.services.recipe_builder import RecipeBuilderController
from nutrimex.services.recipes import RecipeService
from nutrimex.services.search import FoodSearchController


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    api_client: NutritionApiClient
    food_service: FoodService
    recipe_service: RecipeService
    chat_service: ChatService
    close_resources: Callable[[], Awaitable[None]]

    def new_cursor(self) -> PaginationCursor:
        """Create a pagination cursor from settings."""
        return PaginationCursor(
            page_size=self.settings.page_size,
            lookahead=self.settings.pagination_lookahead,
        )

    def search_controller(self) -> FoodSearchController:
        """Create the state of a search page."""
        return FoodSearchController(
            food_service=self.food_service,
            debounce_seconds=self.settings.debounce_seconds,
            cursor=self.new_cursor(),
        )

    def explorer_controller(self) -> NutritionExplorerController:
        """Create the state of a nutrition analysis page."""
        return NutritionExplorerController(
            food_service=self.food_service,
            debounce_seconds=self.settings.debounce_seconds,
            cursor=self.new_cursor(),
        )

    def recipe_controller(self) -> RecipeBuilderController:
        """Create the state of a recipe builder page."""
        return RecipeBuilderController(
            food_service=self.food_service,
            recipe_service=self.recipe_service,
            debounce_seconds=self.settings.debounce_seconds,
        )

    def chat_session(self) -> ChatSession:
        """Create the state of a chat page."""
        return ChatSession(chat_service=self.chat_service)


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    api_client = HttpxNutritionApiClient.create(
        base_url=resolved_settings.api_base_url,
        timeout=resolved_settings.request_timeout_seconds,
    )

    async def close_resources() -> None:
        await api_client.close()

    return AppContainer(
        settings=resolved_settings,
        api_client=api_client,
        food_service=FoodService(api_client),
        recipe_service=RecipeService(api_client),
        chat_service=ChatService(api_client),
        close_resources=close_resources,
    )
