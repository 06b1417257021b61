"""Tests for the food search page controller."""

import asyncio

import pytest

from nutrimex.domain.filters import Nutrient
from nutrimex.domain.pagination import FetchState, PaginationCursor
from nutrimex.services.fetch import IncrementalFetchController
from nutrimex.services.foods import FoodService
from nutrimex.services.search import NO_MATCHES_MESSAGE, FoodSearchController
from tests.conftest import FakeNutritionApiClient, catalog, not_found, server_error


def _controller(food_service: FoodService, debounce: float = 0.05) -> FoodSearchController:
    return FoodSearchController(
        food_service=food_service,
        debounce_seconds=debounce,
        cursor=PaginationCursor(page_size=20),
    )


def test_code_lookup_fetches_single_food(
    food_service: FoodService, api_client: FakeNutritionApiClient
) -> None:
    controller = _controller(food_service)

    async def scenario() -> None:
        controller.set_code_query("101001")
        await controller.wait_idle()

    asyncio.run(scenario())

    assert api_client.calls_to("get_food") == [101001]
    assert api_client.calls_to("list_foods") == []
    assert [food.nombre for food in controller.foods] == ["Pollo, pechuga"]
    assert not controller.cursor.has_more
    assert controller.cursor.total_pages == 1
    assert controller.state is FetchState.LOADED


def test_unknown_code_shows_message(food_service: FoodService) -> None:
    controller = _controller(food_service)
    controller.code_query = "999999"

    asyncio.run(controller.refresh())

    assert controller.foods == []
    assert controller.error == "No se encontró ningún alimento con el código 999999"
    assert controller.state is FetchState.ERROR
    assert not controller.cursor.has_more


def test_debounced_searches_issue_one_request(
    food_service: FoodService, api_client: FakeNutritionApiClient
) -> None:
    controller = _controller(food_service, debounce=0.5)

    async def scenario() -> None:
        controller.set_code_query("101001")
        await asyncio.sleep(0.1)
        controller.set_code_query("101002")
        await controller.wait_idle()

    asyncio.run(scenario())

    assert api_client.calls_to("get_food") == [101002]
    assert [food.codigomex2 for food in controller.foods] == [101002]


def test_rejected_slider_move_keeps_bounds_and_skips_fetch(
    food_service: FoodService, api_client: FakeNutritionApiClient
) -> None:
    controller = _controller(food_service)

    async def scenario() -> None:
        assert controller.set_min(Nutrient.CALORIES, 1000)
        await controller.wait_idle()
        assert not controller.set_min(Nutrient.CALORIES, 1001)
        await controller.wait_idle()

    asyncio.run(scenario())

    assert controller.criteria.bounds[Nutrient.CALORIES].minimum == 1000
    assert len(api_client.calls_to("search_foods")) == 1


def test_full_page_advertises_more(api_client: FakeNutritionApiClient) -> None:
    api_client.records = catalog(25)
    controller = _controller(FoodService(api_client))

    asyncio.run(controller.refresh())

    assert len(controller.foods) == 20
    assert controller.cursor.has_more


def test_short_page_ends_pagination(api_client: FakeNutritionApiClient) -> None:
    api_client.records = catalog(7)
    controller = _controller(FoodService(api_client))

    asyncio.run(controller.refresh())

    assert len(controller.foods) == 7
    assert not controller.cursor.has_more
    assert controller.cursor.total_pages == 1


def test_load_more_appends_next_page(api_client: FakeNutritionApiClient) -> None:
    api_client.records = catalog(25)
    controller = _controller(FoodService(api_client))

    async def scenario() -> None:
        await controller.refresh()
        assert await controller.load_more()
        assert not await controller.load_more()

    asyncio.run(scenario())

    assert [food.codigomex2 for food in controller.foods] == list(range(200001, 200026))
    assert api_client.calls_to("list_foods")[1] == {"limit": 20, "offset": 20}
    assert controller.cursor.page == 2
    assert controller.cursor.total_pages == 2


def test_load_more_failure_keeps_loaded_results(
    api_client: FakeNutritionApiClient,
) -> None:
    api_client.records = catalog(45)
    controller = _controller(FoodService(api_client))

    async def scenario() -> None:
        await controller.refresh()
        api_client.errors["list_foods"] = server_error()
        await controller.load_more()
        assert len(controller.foods) == 20
        assert controller.state is FetchState.ERROR
        assert controller.error == "API error 500: Internal Server Error"
        assert controller.cursor.page == 1
        assert controller.cursor.has_more

        del api_client.errors["list_foods"]
        await controller.load_more()

    asyncio.run(scenario())

    assert len(controller.foods) == 40
    assert controller.error is None
    assert api_client.calls_to("list_foods")[2] == {"limit": 20, "offset": 20}


def test_first_page_failure_clears_results(api_client: FakeNutritionApiClient) -> None:
    api_client.records = catalog(25)
    controller = _controller(FoodService(api_client))

    async def scenario() -> None:
        await controller.refresh()
        api_client.errors["list_foods"] = server_error()
        await controller.refresh()

    asyncio.run(scenario())

    assert controller.foods == []
    assert not controller.cursor.has_more


def test_filtered_not_found_shows_no_matches(
    food_service: FoodService, api_client: FakeNutritionApiClient
) -> None:
    api_client.errors["search_foods"] = not_found()
    controller = _controller(food_service)
    controller.criteria.set_min(Nutrient.PROTEIN, 90)

    asyncio.run(controller.refresh())

    assert controller.error == NO_MATCHES_MESSAGE
    assert controller.foods == []


def test_empty_filtered_result_is_not_an_error(
    food_service: FoodService, api_client: FakeNutritionApiClient
) -> None:
    api_client.search_payload = []
    controller = _controller(food_service)
    controller.criteria.set_min(Nutrient.PROTEIN, 90)

    asyncio.run(controller.refresh())

    assert controller.foods == []
    assert controller.error is None
    assert controller.state is FetchState.LOADED
    assert not controller.cursor.has_more


def test_superseded_response_is_dropped(
    food_service: FoodService, api_client: FakeNutritionApiClient
) -> None:
    controller = _controller(food_service)

    async def scenario() -> None:
        api_client.delay_seconds = 0.05
        slow = asyncio.create_task(controller.refresh())
        await asyncio.sleep(0)
        api_client.delay_seconds = 0
        controller.code_query = "101003"
        await controller.refresh()
        await slow

    asyncio.run(scenario())

    assert [food.codigomex2 for food in controller.foods] == [101003]
    assert controller.state is FetchState.LOADED


def test_load_more_ignored_while_loading(
    api_client: FakeNutritionApiClient,
) -> None:
    api_client.records = catalog(45)
    controller = _controller(FoodService(api_client))

    async def scenario() -> None:
        await controller.refresh()
        api_client.delay_seconds = 0.02
        first = asyncio.create_task(controller.load_more())
        await asyncio.sleep(0)
        assert controller.loading_page == 2
        assert not await controller.load_more()
        assert await first

    asyncio.run(scenario())

    assert len(controller.foods) == 40


def test_clear_filters_resets_criteria(
    food_service: FoodService, api_client: FakeNutritionApiClient
) -> None:
    controller = _controller(food_service)

    async def scenario() -> None:
        controller.set_max(Nutrient.FAT, 10)
        controller.set_code_query("12")
        controller.clear_filters()
        await controller.wait_idle()

    asyncio.run(scenario())

    assert controller.criteria.is_unfiltered
    assert controller.code_query == ""
    assert len(api_client.calls_to("list_foods")) == 1
    assert api_client.calls_to("get_food") == []


def test_base_controller_requires_page_fetcher(food_service: FoodService) -> None:
    with pytest.raises(TypeError):
        IncrementalFetchController(food_service=food_service)  # type: ignore[abstract]
