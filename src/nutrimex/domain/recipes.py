"""Recipe domain models."""

from collections.abc import Iterator
from dataclasses import dataclass, field, replace

from pydantic import BaseModel

from nutrimex.domain.foods import Food

MIN_QUANTITY_G = 10.0
DEFAULT_QUANTITY_G = 100.0
DEFAULT_COOKING_TIME = "20 min"
DEFAULT_SERVINGS = 2


@dataclass(frozen=True)
class SelectedIngredient:
    """A food chosen for a recipe with its quantity in grams."""

    food: Food
    quantity_g: float


@dataclass
class IngredientSelection:
    """Ordered ingredient list, unique by food code."""

    items: list[SelectedIngredient] = field(default_factory=list)

    def __iter__(self) -> Iterator[SelectedIngredient]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def contains(self, code: int) -> bool:
        """Return True when a food with this code is selected."""
        return any(item.food.codigomex2 == code for item in self.items)

    def add(self, food: Food, quantity_g: float = DEFAULT_QUANTITY_G) -> bool:
        """Append a food unless it is already selected."""
        if self.contains(food.codigomex2):
            return False
        self.items.append(
            SelectedIngredient(food=food, quantity_g=max(MIN_QUANTITY_G, quantity_g))
        )
        return True

    def remove(self, code: int) -> None:
        """Drop the food with this code, keeping the order of the rest."""
        self.items = [item for item in self.items if item.food.codigomex2 != code]

    def update_quantity(self, code: int, quantity_g: float) -> None:
        """Change a quantity, clamped to the minimum."""
        self.items = [
            replace(item, quantity_g=max(MIN_QUANTITY_G, quantity_g))
            if item.food.codigomex2 == code
            else item
            for item in self.items
        ]

    def clear(self) -> None:
        """Remove every ingredient."""
        self.items = []


@dataclass(frozen=True)
class RecipeNutrition:
    """Rounded nutrition totals for a recipe."""

    energ_kcal: float
    protein: float
    lipid_tot: float
    carbohydrt: float
    fiber_td: float
    calcium: float
    iron: float
    vit_c: float


@dataclass(frozen=True)
class GeneratedRecipe:
    """Recipe ready to display."""

    title: str
    ingredients: list[str]
    instructions: str
    nutrition: RecipeNutrition
    cooking_time: str = DEFAULT_COOKING_TIME
    servings: int = DEFAULT_SERVINGS
    generated_locally: bool = False


class RecipeApiNutrition(BaseModel):
    """Totals returned by the recipe generation service."""

    energ_kcal: float | None = None
    protein: float | None = None
    fat: float | None = None
    carbs: float | None = None


class RecipeApiResponse(BaseModel):
    """Payload returned by the recipe generation service."""

    titulo: str | None = None
    ingredientes: list[str] | None = None
    instrucciones: str | None = None
    nutricion_total: RecipeApiNutrition | None = None
