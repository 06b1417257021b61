"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse

from nutrimex.adapters.nutrition_api_client import NutritionApiError
from nutrimex.api.models import AskRequest, RecipeRequest
from nutrimex.app_logging import configure_logging
from nutrimex.containers import AppContainer
from nutrimex.domain.filters import FilterCriteria, Nutrient
from nutrimex.domain.foods import Food
from nutrimex.domain.recipes import IngredientSelection
from nutrimex.services.analysis import build_report
from nutrimex.services.chat import NO_MATCHES_REPLY, food_card, matches_reply
from nutrimex.services.requests import parse_food_code
from nutrimex.services.search import NO_MATCHES_MESSAGE, code_not_found_message

HTTP_UNPROCESSABLE = 422


def create_app(container: AppContainer) -> FastAPI:  # noqa: C901
    """Create a FastAPI app configured with dependencies."""
    configure_logging(logging.DEBUG if container.settings.debug else logging.INFO)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(NutritionApiError)
    async def nutrition_api_error_handler(
        request: Request, exc: NutritionApiError
    ) -> JSONResponse:
        logger.warning("Nutrition API error on %s: %s", request.url.path, exc)
        status_code = exc.status_code or status.HTTP_502_BAD_GATEWAY
        if status_code < status.HTTP_400_BAD_REQUEST:
            status_code = status.HTTP_502_BAD_GATEWAY
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/foods")
    async def list_foods(
        request: Request,
        limit: int = Query(default=100, ge=1, le=500),
        offset: int = Query(default=0, ge=0),
    ) -> dict[str, object]:
        """Return one page of foods."""
        state_container: AppContainer = request.app.state.container
        foods = await state_container.food_service.list_foods(limit, offset)
        return {"foods": foods}

    @app.get("/foods/{code}")
    async def get_food(code: int, request: Request) -> dict[str, object]:
        """Return one food by code."""
        state_container: AppContainer = request.app.state.container
        return {"food": await _get_food_or_404(state_container, code)}

    @app.post("/foods", status_code=status.HTTP_201_CREATED)
    async def create_food(
        payload: dict[str, object], request: Request
    ) -> dict[str, object]:
        """Create a food from service-format fields."""
        state_container: AppContainer = request.app.state.container
        return {"food": await state_container.food_service.create_food(payload)}

    @app.get("/pages/search")
    async def search_page(
        request: Request,
        codigo: str = "",
        page: int = Query(default=1, ge=1),
    ) -> dict[str, object]:
        """Return one page of the search page results."""
        state_container: AppContainer = request.app.state.container
        cursor = state_container.new_cursor()
        code = parse_food_code(codigo)
        if code is not None:
            food = await _get_food_or_404(state_container, code)
            cursor.collapse()
            foods = [food]
        else:
            criteria = _criteria_from_query(request)
            try:
                results = await state_container.food_service.search_foods(
                    criteria, cursor.fetch_limit, cursor.offset_for(page)
                )
            except NutritionApiError as exc:
                if exc.is_not_found:
                    raise HTTPException(
                        status_code=status.HTTP_404_NOT_FOUND, detail=NO_MATCHES_MESSAGE
                    ) from exc
                raise
            foods = cursor.record_page(page, results)
        return {
            "foods": foods,
            "page": cursor.page,
            "has_more": cursor.has_more,
            "total_pages": cursor.total_pages,
        }

    @app.get("/pages/nutrition/{code}")
    async def nutrition_page(code: int, request: Request) -> dict[str, object]:
        """Return the analysis of one food."""
        state_container: AppContainer = request.app.state.container
        food = await _get_food_or_404(state_container, code)
        return {"food": food, "report": build_report(food)}

    @app.post("/pages/recipes")
    async def recipe_page(payload: RecipeRequest, request: Request) -> dict[str, object]:
        """Generate a recipe from selected ingredient codes."""
        state_container: AppContainer = request.app.state.container
        selection = IngredientSelection()
        for ingredient in payload.ingredientes:
            food = await _get_food_or_404(state_container, ingredient.codigomex2)
            selection.add(food, ingredient.cantidad_g)
        recipe = await state_container.recipe_service.generate(selection)
        return {"recipe": recipe}

    @app.post("/pages/chat")
    async def chat_page(payload: AskRequest, request: Request) -> dict[str, object]:
        """Answer a nutrition question with matching foods."""
        state_container: AppContainer = request.app.state.container
        foods = await state_container.chat_service.ask(
            payload.question, payload.max_results
        )
        return {
            "reply": matches_reply(len(foods)) if foods else NO_MATCHES_REPLY,
            "foods": [{"food": food, "nutrients": food_card(food)} for food in foods],
        }

    return app


async def _get_food_or_404(container: AppContainer, code: int) -> Food:
    """Fetch a food, turning a service 404 into a user-facing message."""
    try:
        return await container.food_service.get_food(code)
    except NutritionApiError as exc:
        if exc.is_not_found:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=code_not_found_message(code),
            ) from exc
        raise


def _criteria_from_query(request: Request) -> FilterCriteria:
    """Read ``min_*``/``max_*`` query parameters into filter criteria."""
    criteria = FilterCriteria(name=request.query_params.get("nombre") or None)
    for nutrient in Nutrient:
        for bound in ("max", "min"):
            raw = request.query_params.get(f"{bound}_{nutrient.value}")
            if raw is None:
                continue
            try:
                value = float(raw)
            except ValueError as exc:
                raise HTTPException(
                    status_code=HTTP_UNPROCESSABLE,
                    detail=f"{bound}_{nutrient.value} must be a number",
                ) from exc
            setter = criteria.set_max if bound == "max" else criteria.set_min
            if not setter(nutrient, value):
                raise HTTPException(
                    status_code=HTTP_UNPROCESSABLE,
                    detail=f"Invalid range for {nutrient.value}",
                )
    return criteria
