"""Common value objects shared across all domain modules."""

from .ids import FlashcardId, GenerationId, UserId

__all__ = [
    "FlashcardId",
    "GenerationId",
    "UserId",
]
