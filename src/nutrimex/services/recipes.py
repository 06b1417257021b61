"""Recipe generation with a local fallback."""

import logging
from dataclasses import dataclass

from pydantic import ValidationError

from nutrimex.adapters.nutrition_api_client import NutritionApiClient, NutritionApiError
from nutrimex.domain.recipes import (
    GeneratedRecipe,
    IngredientSelection,
    RecipeApiResponse,
    RecipeNutrition,
)
from nutrimex.services.analysis import round_half_up
from nutrimex.services.requests import recipe_body

_logger = logging.getLogger(__name__)

DEFAULT_INSTRUCTIONS = "Instrucciones generadas por IA"

# recipe total -> Food field, amounts are per 100 g
_TOTAL_FIELDS = {
    "energ_kcal": "energ_kcal",
    "protein": "protein_g",
    "lipid_tot": "lipid_tot_g",
    "carbohydrt": "carbohidratos_g",
    "fiber_td": "fiber_td_g",
    "calcium": "calcium_mg",
    "iron": "iron_mg",
    "vit_c": "vit_c_mg",
}


@dataclass
class RecipeService:
    """Generates recipes remotely, degrading to a locally built one."""

    client: NutritionApiClient

    async def generate(self, selection: IngredientSelection) -> GeneratedRecipe:
        """Generate a recipe for the selected ingredients."""
        if not len(selection):
            raise ValueError("At least one ingredient is required")
        try:
            payload = await self.client.generate_recipe(recipe_body(selection))
            response = RecipeApiResponse.model_validate(payload)
        except (NutritionApiError, ValidationError) as exc:
            _logger.warning("Recipe generation failed, using local recipe: %s", exc)
            return build_local_recipe(selection)
        return _merge(response, selection)


def compute_totals(selection: IngredientSelection) -> dict[str, float]:
    """Sum nutrients over the selection, scaled by grams."""
    totals = dict.fromkeys(_TOTAL_FIELDS, 0.0)
    for item in selection:
        factor = item.quantity_g / 100
        for key, attr in _TOTAL_FIELDS.items():
            totals[key] += getattr(item.food, attr) * factor
    return totals


def build_local_recipe(selection: IngredientSelection) -> GeneratedRecipe:
    """Build a simple recipe from the ingredients alone."""
    names = [item.food.nombre.lower() for item in selection]
    if any("pollo" in name for name in names) and any("arroz" in name for name in names):
        title = "Bowl de Pollo con Arroz"
        instructions = (
            "1. Cocina el arroz según las instrucciones del paquete.\n"
            "2. Sazona y cocina el pollo a la plancha.\n"
            "3. Combina todos los ingredientes y sirve caliente."
        )
    else:
        title = f"Plato Saludable con {selection.items[0].food.nombre}"
        instructions = (
            "1. Prepara todos los ingredientes.\n"
            "2. Cocina según sea necesario.\n"
            "3. Combina y sirve."
        )
    totals = compute_totals(selection)
    return GeneratedRecipe(
        title=title,
        ingredients=_ingredient_lines(selection),
        instructions=instructions,
        nutrition=_rounded(totals),
        generated_locally=True,
    )


def _merge(response: RecipeApiResponse, selection: IngredientSelection) -> GeneratedRecipe:
    totals = compute_totals(selection)
    remote = response.nutricion_total
    if remote is not None:
        totals["energ_kcal"] = remote.energ_kcal or totals["energ_kcal"]
        totals["protein"] = remote.protein or totals["protein"]
        totals["lipid_tot"] = remote.fat or totals["lipid_tot"]
        totals["carbohydrt"] = remote.carbs or totals["carbohydrt"]
    return GeneratedRecipe(
        title=response.titulo or f"Receta con {selection.items[0].food.nombre}",
        ingredients=response.ingredientes or _ingredient_lines(selection),
        instructions=response.instrucciones or DEFAULT_INSTRUCTIONS,
        nutrition=_rounded(totals),
    )


def _rounded(totals: dict[str, float]) -> RecipeNutrition:
    return RecipeNutrition(
        energ_kcal=round_half_up(totals["energ_kcal"]),
        protein=round_half_up(totals["protein"], 1),
        lipid_tot=round_half_up(totals["lipid_tot"], 1),
        carbohydrt=round_half_up(totals["carbohydrt"], 1),
        fiber_td=round_half_up(totals["fiber_td"], 1),
        calcium=round_half_up(totals["calcium"]),
        iron=round_half_up(totals["iron"], 1),
        vit_c=round_half_up(totals["vit_c"]),
    )


def _ingredient_lines(selection: IngredientSelection) -> list[str]:
    return [
        f"{item.quantity_g:g}g de {item.food.nombre.lower()}" for item in selection
    ]
