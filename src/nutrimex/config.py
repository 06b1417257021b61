"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    nutrition_api_url: str = "http://localhost:8000"
    request_timeout_seconds: float = 15
    page_size: int = 20
    debounce_seconds: float = 0.5
    pagination_lookahead: bool = False
    debug: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def api_base_url(self) -> str:
        """Base URL of the nutrition service without a trailing slash."""
        return self.nutrition_api_url.rstrip("/")
