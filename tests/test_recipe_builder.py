"""Tests for the recipe builder page controller."""

import asyncio

from nutrimex.services.foods import FoodService
from nutrimex.services.mapping import map_api_food
from nutrimex.services.recipe_builder import RecipeBuilderController
from nutrimex.services.recipes import RecipeService
from tests.conftest import CHICKEN, FakeNutritionApiClient, server_error


def _controller(api_client: FakeNutritionApiClient) -> RecipeBuilderController:
    return RecipeBuilderController(
        food_service=FoodService(api_client),
        recipe_service=RecipeService(api_client),
        debounce_seconds=0.05,
    )


def test_search_is_debounced(api_client: FakeNutritionApiClient) -> None:
    controller = _controller(api_client)

    async def scenario() -> None:
        controller.set_search_term("po")
        await asyncio.sleep(0.01)
        controller.set_search_term("pollo")
        await controller.wait_idle()

    asyncio.run(scenario())

    assert api_client.calls_to("search_foods_by_name") == [{"nombre": "pollo", "limit": 10}]
    assert [food.codigomex2 for food in controller.search_results] == [101001]
    assert not controller.is_searching


def test_short_term_clears_results_without_request(
    api_client: FakeNutritionApiClient,
) -> None:
    controller = _controller(api_client)

    async def scenario() -> None:
        controller.set_search_term("arroz")
        await controller.wait_idle()
        controller.set_search_term("a")
        await controller.wait_idle()

    asyncio.run(scenario())

    assert controller.search_results == []
    assert len(api_client.calls_to("search_foods_by_name")) == 1


def test_search_failure_clears_results(api_client: FakeNutritionApiClient) -> None:
    api_client.errors["search_foods_by_name"] = server_error()
    controller = _controller(api_client)
    controller.search_term = "pollo"

    asyncio.run(controller.search())

    assert controller.search_results == []
    assert not controller.is_searching


def test_selected_foods_are_hidden_from_results(
    api_client: FakeNutritionApiClient,
) -> None:
    controller = _controller(api_client)

    async def scenario() -> None:
        controller.search_term = "co"
        await controller.search()
        rice = controller.search_results[0]
        assert controller.add_ingredient(rice)
        controller.search_term = "co"
        await controller.search()

    asyncio.run(scenario())

    assert [food.codigomex2 for food in controller.search_results] == [101002]
    assert controller.available_results == []


def test_add_remove_and_generate(api_client: FakeNutritionApiClient) -> None:
    controller = _controller(api_client)

    async def scenario() -> None:
        controller.search_term = "pollo"
        await controller.search()
        controller.add_ingredient(controller.search_results[0])
        controller.search_term = "arroz"
        await controller.search()
        controller.add_ingredient(controller.search_results[0])
        controller.update_quantity(101001, 150)
        controller.remove_ingredient(101002)
        await controller.generate()

    asyncio.run(scenario())

    assert controller.search_term == ""
    assert controller.search_results == []
    assert [item.quantity_g for item in controller.selection] == [150]
    assert controller.recipe is not None
    assert controller.recipe.title == "Bowl mexicano"
    assert not controller.is_generating


def test_generate_without_ingredients_does_nothing(
    api_client: FakeNutritionApiClient,
) -> None:
    controller = _controller(api_client)

    assert asyncio.run(controller.generate()) is None
    assert api_client.calls_to("generate_recipe") == []


def test_clear_all(api_client: FakeNutritionApiClient) -> None:
    controller = _controller(api_client)

    async def scenario() -> None:
        controller.search_term = "pollo"
        await controller.search()
        controller.add_ingredient(controller.search_results[0])
        await controller.generate()

    asyncio.run(scenario())
    controller.clear_all()

    assert len(controller.selection) == 0
    assert controller.recipe is None


def test_adding_ingredient_discards_search_in_flight(
    api_client: FakeNutritionApiClient,
) -> None:
    api_client.delay_seconds = 0.05
    controller = _controller(api_client)
    chicken = map_api_food(CHICKEN)

    async def scenario() -> None:
        controller.search_term = "pollo"
        running = asyncio.create_task(controller.search())
        await asyncio.sleep(0.01)
        controller.add_ingredient(chicken)
        await running

    asyncio.run(scenario())

    assert controller.search_term == ""
    assert controller.search_results == []
    assert not controller.is_searching


def test_clear_all_discards_search_in_flight(
    api_client: FakeNutritionApiClient,
) -> None:
    api_client.delay_seconds = 0.05
    controller = _controller(api_client)

    async def scenario() -> None:
        controller.search_term = "arroz"
        running = asyncio.create_task(controller.search())
        await asyncio.sleep(0.01)
        controller.clear_all()
        await running

    asyncio.run(scenario())

    assert controller.search_results == []
    assert not controller.is_searching
