from .ai_generation_repository import (
    AcceptanceFailure,
    AcceptanceFailureCode,
    AIGenerationRepositoryProtocol,
)
from .flashcard_repository import FlashcardRepositoryProtocol
from .generation_client import GenerationClientProtocol

__all__ = [
    "AIGenerationRepositoryProtocol",
    "AcceptanceFailure",
    "AcceptanceFailureCode",
    "FlashcardRepositoryProtocol",
    "GenerationClientProtocol",
]
