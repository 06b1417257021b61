"""Natural language nutrition chat."""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

from nutrimex.adapters.nutrition_api_client import NutritionApiClient, NutritionApiError
from nutrimex.domain.chat import Author, ChatMessage
from nutrimex.domain.foods import Food
from nutrimex.services.analysis import round_half_up
from nutrimex.services.mapping import map_api_foods
from nutrimex.services.requests import ask_body

_logger = logging.getLogger(__name__)

DEFAULT_MAX_RESULTS = 10
UNKNOWN_FOOD_NAME = "Alimento desconocido"

WELCOME_MESSAGE = (
    "¡Hola! Soy tu asistente nutricional con IA. Puedo ayudarte a encontrar "
    "información sobre alimentos, nutrientes y responder preguntas sobre "
    "nutrición basándome en nuestra base de datos real. ¿En qué puedo ayudarte hoy?"
)
NO_MATCHES_REPLY = (
    "No encontré alimentos específicos para tu consulta. Intenta ser más "
    "específico sobre qué nutriente o tipo de alimento te interesa. Por ejemplo: "
    "'alimentos altos en proteína', 'fuentes de hierro', o 'opciones bajas en calorías'."
)

SUGGESTED_QUESTIONS = (
    "¿Qué alimentos tienen más proteína?",
    "Dame opciones bajas en calorías",
    "¿Cuáles son ricos en hierro?",
    "Alimentos con grasas saludables",
    "¿Qué tiene más zinc?",
    "Fuentes de vitamina C",
    "Alimentos ricos en calcio",
    "¿Cuáles tienen más fibra?",
)

# (label, Food field, unit) shown on chat food cards
CHAT_NUTRIENTS = (
    ("Energía", "energ_kcal", " kcal"),
    ("Proteína", "protein_g", "g"),
    ("Grasas", "lipid_tot_g", "g"),
    ("Carbohidratos", "carbohidratos_g", "g"),
    ("Fibra", "fiber_td_g", "g"),
    ("Hierro", "iron_mg", "mg"),
    ("Vitamina C", "vit_c_mg", "mg"),
    ("Calcio", "calcium_mg", "mg"),
    ("Zinc", "zinc_mg", "mg"),
    ("Vitamina A", "vit_a_rae_mcg", "μg"),
    ("Vitamina E", "vit_e_mg", "mg"),
    ("Vitamina K", "vit_k_mcg", "μg"),
)


def matches_reply(count: int) -> str:
    """Assistant text introducing matched foods."""
    return f"Encontré {count} alimentos que coinciden con tu consulta:"


def error_reply(exc: Exception) -> str:
    """Assistant text for a failed question."""
    return (
        f"Lo siento, hubo un error procesando tu pregunta. {exc}. "
        "Por favor, inténtalo de nuevo con una pregunta más específica."
    )


def is_meaningful_value(value: object) -> bool:
    """True for numeric values large enough to display."""
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return False
    return number > 0.01


def format_nutrient_value(value: object, unit: str = "") -> str:
    """Render a nutrient amount with up to two decimals, or '-'."""
    if not is_meaningful_value(value):
        return "-"
    rounded = round_half_up(float(value), 2)  # type: ignore[arg-type]
    text = f"{rounded:.2f}".rstrip("0").rstrip(".")
    return f"{text}{unit}"


def food_card(food: Food) -> list[tuple[str, str]]:
    """Label and formatted value for each nutrient worth showing."""
    return [
        (label, format_nutrient_value(getattr(food, attr), unit))
        for label, attr, unit in CHAT_NUTRIENTS
        if is_meaningful_value(getattr(food, attr))
    ]


@dataclass
class ChatService:
    """Asks the question answering endpoint for matching foods."""

    client: NutritionApiClient

    async def ask(self, question: str, max_results: int = DEFAULT_MAX_RESULTS) -> list[Food]:
        """Return foods answering ``question``."""
        payload = await self.client.ask(ask_body(question, max_results))
        foods = map_api_foods(payload, placeholder_name=UNKNOWN_FOOD_NAME)
        _logger.debug("Chat question answered: results=%s", len(foods))
        return foods


def _message(author: Author, content: str, foods: list[Food] | None = None) -> ChatMessage:
    return ChatMessage(
        id=uuid4(),
        author=author,
        content=content,
        timestamp=datetime.now(tz=UTC),
        foods=foods or [],
    )


@dataclass
class ChatSession:
    """Message log of the chat page."""

    chat_service: ChatService
    max_results: int = DEFAULT_MAX_RESULTS
    messages: list[ChatMessage] = field(
        default_factory=lambda: [_message(Author.ASSISTANT, WELCOME_MESSAGE)]
    )
    is_loading: bool = False

    async def send(self, text: str) -> ChatMessage | None:
        """Send a question and append the assistant's reply."""
        if not text.strip() or self.is_loading:
            return None
        self.messages.append(_message(Author.USER, text))
        self.is_loading = True
        try:
            foods = await self.chat_service.ask(text, self.max_results)
        except NutritionApiError as exc:
            _logger.warning("Chat question failed: %s", exc)
            reply = _message(Author.ASSISTANT, error_reply(exc))
        else:
            if foods:
                reply = _message(Author.ASSISTANT, matches_reply(len(foods)), foods)
            else:
                reply = _message(Author.ASSISTANT, NO_MATCHES_REPLY)
        finally:
            self.is_loading = False
        self.messages.append(reply)
        return reply
