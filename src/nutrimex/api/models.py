"""Pydantic models for page request payloads."""

from pydantic import BaseModel, Field

from nutrimex.domain.recipes import DEFAULT_QUANTITY_G, MIN_QUANTITY_G


class RecipeIngredientIn(BaseModel):
    """One selected ingredient."""

    codigomex2: int
    cantidad_g: float = Field(default=DEFAULT_QUANTITY_G, ge=MIN_QUANTITY_G)


class RecipeRequest(BaseModel):
    """Recipe page submission."""

    ingredientes: list[RecipeIngredientIn] = Field(min_length=1)


class AskRequest(BaseModel):
    """Chat page question."""

    question: str = Field(min_length=1)
    max_results: int = Field(default=10, ge=1, le=100)
