from dataclasses import dataclass

from ..entity import EntityId, UuidEntityId


@dataclass(frozen=True)
class UserId(EntityId):
    """Strongly-typed user identifier."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("UserId must be non-negative")


@dataclass(frozen=True)
class FlashcardId(UuidEntityId):
    """Strongly-typed flashcard identifier."""


@dataclass(frozen=True)
class GenerationId(UuidEntityId):
    """Strongly-typed AI generation identifier."""
