"""Chat domain models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID

from nutrimex.domain.foods import Food


class Author(StrEnum):
    """Who wrote a chat message."""

    USER = "usuario"
    ASSISTANT = "ia"


@dataclass(frozen=True)
class ChatMessage:
    """A single message in the chat log."""

    id: UUID
    author: Author
    content: str
    timestamp: datetime
    foods: list[Food] = field(default_factory=list)
