"""HTTP client for the remote nutrition service."""

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

import httpx

_logger = logging.getLogger(__name__)


class ApiErrorKind(StrEnum):
    """Classification of a failed service call."""

    NOT_FOUND = "not_found"
    HTTP = "http"
    TRANSPORT = "transport"


class NutritionApiError(Exception):
    """A nutrition service call that did not produce a usable response."""

    def __init__(
        self, kind: ApiErrorKind, status_code: int | None, body: str
    ) -> None:
        self.kind = kind
        self.status_code = status_code
        self.body = body
        if status_code is None:
            super().__init__(f"API error: {body}")
        else:
            super().__init__(f"API error {status_code}: {body}")

    @property
    def is_not_found(self) -> bool:
        """True when the service answered 404."""
        return self.kind is ApiErrorKind.NOT_FOUND

    @classmethod
    def from_response(cls, response: httpx.Response) -> "NutritionApiError":
        """Build an error from a non-2xx response."""
        kind = (
            ApiErrorKind.NOT_FOUND
            if response.status_code == httpx.codes.NOT_FOUND
            else ApiErrorKind.HTTP
        )
        return cls(kind, response.status_code, response.text or response.reason_phrase)


class NutritionApiClient(Protocol):
    """Interface for nutrition service interactions."""

    async def list_foods(self, limit: int, offset: int) -> object:
        """Return a page of foods as raw API data."""

    async def get_food(self, code: int) -> object:
        """Return one food by code as raw API data."""

    async def search_foods(
        self, body: dict[str, object], limit: int, offset: int
    ) -> object:
        """Return foods matching nutrient bounds as raw API data."""

    async def search_foods_by_name(self, name: str, limit: int, offset: int) -> object:
        """Return foods whose name matches as raw API data."""

    async def create_food(self, payload: dict[str, object]) -> object:
        """Create a food and return it as raw API data."""

    async def ask(self, body: dict[str, object]) -> object:
        """Answer a natural language question with matching foods."""

    async def generate_recipe(self, body: dict[str, object]) -> object:
        """Generate a recipe from selected ingredients."""


@dataclass
class HttpxNutritionApiClient(NutritionApiClient):
    """HTTPX-backed nutrition service client."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout: float = 15

    @classmethod
    def create(cls, base_url: str, timeout: float = 15) -> "HttpxNutritionApiClient":
        """Create a client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
            timeout=timeout,
        )

    async def list_foods(self, limit: int, offset: int) -> object:
        """List foods."""
        return await self._request(
            "GET", "/alimentos", params={"limit": limit, "offset": offset}
        )

    async def get_food(self, code: int) -> object:
        """Fetch a food by its code."""
        return await self._request("GET", f"/alimento/{code}")

    async def search_foods(
        self, body: dict[str, object], limit: int, offset: int
    ) -> object:
        """Search foods by nutrient bounds."""
        return await self._request(
            "POST",
            "/buscar",
            params={"limit": limit, "offset": offset},
            json=body,
        )

    async def search_foods_by_name(self, name: str, limit: int, offset: int) -> object:
        """Search foods by name."""
        return await self._request(
            "GET",
            "/buscar_alimento",
            params={"nombre": name, "limit": limit, "offset": offset},
        )

    async def create_food(self, payload: dict[str, object]) -> object:
        """Create a food record."""
        return await self._request("POST", "/alimento", json=payload)

    async def ask(self, body: dict[str, object]) -> object:
        """Ask the question answering endpoint."""
        return await self._request("POST", "/ask", json=body)

    async def generate_recipe(self, body: dict[str, object]) -> object:
        """Ask the recipe generation endpoint."""
        return await self._request("POST", "/receta", json=body)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, object] | None = None,
        json: dict[str, object] | None = None,
    ) -> object:
        """Send a request and decode its JSON body."""
        url = f"{self.base_url}{path}"
        try:
            response = await self.http_client.request(
                method, url, params=params, json=json, timeout=self.timeout
            )
        except httpx.TransportError as exc:
            _logger.warning("Nutrition API %s %s unreachable: %s", method, path, exc)
            raise NutritionApiError(ApiErrorKind.TRANSPORT, None, str(exc)) from exc
        if not response.is_success:
            _logger.warning(
                "Nutrition API %s %s failed: status=%s", method, path, response.status_code
            )
            raise NutritionApiError.from_response(response)
        if response.status_code == httpx.codes.NO_CONTENT:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise NutritionApiError(
                ApiErrorKind.HTTP, response.status_code, "invalid JSON response"
            ) from exc
