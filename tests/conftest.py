"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field

import pytest

from nutrimex.adapters.nutrition_api_client import (
    ApiErrorKind,
    NutritionApiClient,
    NutritionApiError,
)
from nutrimex.config import Settings
from nutrimex.containers import AppContainer
from nutrimex.services.chat import ChatService
from nutrimex.services.foods import FoodService
from nutrimex.services.recipes import RecipeService


def make_record(code: int, name: str, **nutrients: float) -> dict[str, object]:
    """Build a remote food record."""
    return {"codigomex2": code, "nombre_del_alimento": name, **nutrients}


def catalog(count: int, start: int = 200001) -> list[dict[str, object]]:
    """Build ``count`` generic remote records with consecutive codes."""
    return [
        make_record(start + index, f"Alimento {index}", energ_kcal=100 + index)
        for index in range(count)
    ]


def not_found() -> NutritionApiError:
    return NutritionApiError(ApiErrorKind.NOT_FOUND, 404, '{"detail":"Not Found"}')


def server_error() -> NutritionApiError:
    return NutritionApiError(ApiErrorKind.HTTP, 500, "Internal Server Error")


CHICKEN = make_record(
    101001, "Pollo, pechuga", energ_kcal=165, protein=31, lipid_tot=3.6, iron=1.0
)
RICE = make_record(
    101002,
    "Arroz blanco cocido",
    energ_kcal=130,
    carbohydrt=28.2,
    protein=2.7,
    lipid_tot=0.3,
    fiber_td=0.4,
    calcium=10,
)
SPINACH = make_record(
    101003,
    "Espinaca cruda",
    energ_kcal=23,
    carbohydrt=3.6,
    protein=2.9,
    lipid_tot=0.4,
    fiber_td=2.2,
    calcium=99,
    iron=2.7,
    vit_c=28.1,
    vit_a_rae=469,
    vit_k=482.9,
)


@dataclass
class FakeNutritionApiClient(NutritionApiClient):
    """Fake nutrition client serving an in-memory catalog."""

    records: list[dict[str, object]] = field(
        default_factory=lambda: [CHICKEN, RICE, SPINACH]
    )
    search_payload: object | None = None
    ask_payload: object = field(default_factory=lambda: [SPINACH])
    recipe_payload: object = field(
        default_factory=lambda: {
            "titulo": "Bowl mexicano",
            "ingredientes": ["150g de pollo", "100g de arroz"],
            "instrucciones": "Mezcla todo.",
            "nutricion_total": {"energ_kcal": 380, "protein": 49.2, "fat": 5.7, "carbs": 28.2},
        }
    )
    errors: dict[str, NutritionApiError] = field(default_factory=dict)
    delay_seconds: float = 0
    calls: list[tuple[str, object]] = field(default_factory=list)

    async def _call(self, name: str, args: object) -> None:
        self.calls.append((name, args))
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)
        if name in self.errors:
            raise self.errors[name]

    def calls_to(self, name: str) -> list[object]:
        return [args for call, args in self.calls if call == name]

    async def list_foods(self, limit: int, offset: int) -> object:
        await self._call("list_foods", {"limit": limit, "offset": offset})
        return self.records[offset : offset + limit]

    async def get_food(self, code: int) -> object:
        await self._call("get_food", code)
        for record in self.records:
            if record["codigomex2"] == code:
                return record
        raise not_found()

    async def search_foods(
        self, body: dict[str, object], limit: int, offset: int
    ) -> object:
        await self._call("search_foods", {"body": body, "limit": limit, "offset": offset})
        if self.search_payload is not None:
            return self.search_payload
        return self.records[offset : offset + limit]

    async def search_foods_by_name(self, name: str, limit: int, offset: int) -> object:
        await self._call("search_foods_by_name", {"nombre": name, "limit": limit})
        matches = [
            record
            for record in self.records
            if name.lower() in str(record["nombre_del_alimento"]).lower()
        ]
        return matches[offset : offset + limit]

    async def create_food(self, payload: dict[str, object]) -> object:
        await self._call("create_food", payload)
        self.records.append(payload)
        return payload

    async def ask(self, body: dict[str, object]) -> object:
        await self._call("ask", body)
        return self.ask_payload

    async def generate_recipe(self, body: dict[str, object]) -> object:
        await self._call("generate_recipe", body)
        return self.recipe_payload


@pytest.fixture
def settings() -> Settings:
    return Settings(
        nutrition_api_url="https://nutrition.test/",
        page_size=20,
        debounce_seconds=0.05,
    )


@pytest.fixture
def api_client() -> FakeNutritionApiClient:
    return FakeNutritionApiClient()


@pytest.fixture
def food_service(api_client: FakeNutritionApiClient) -> FoodService:
    return FoodService(api_client)


@pytest.fixture
def container(settings: Settings, api_client: FakeNutritionApiClient) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        api_client=api_client,
        food_service=FoodService(api_client),
        recipe_service=RecipeService(api_client),
        chat_service=ChatService(api_client),
        close_resources=close_resources,
    )
