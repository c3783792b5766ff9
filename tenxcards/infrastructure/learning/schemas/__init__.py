"""Learning context schemas."""

from tenxcards.infrastructure.learning.schemas.ai_generation_schemas import (
    AIGenerationAcceptRequest,
    AIGenerationCreateRequest,
    AIGenerationResponse,
    ProposalSchema,
)
from tenxcards.infrastructure.learning.schemas.flashcard_schemas import (
    Flashcard,
    FlashcardBulkDeleteRequest,
    FlashcardListResponse,
    FlashcardUpdateRequest,
    FlashcardUpdateResponse,
    PaginationSchema,
)

__all__ = [
    "AIGenerationAcceptRequest",
    "AIGenerationCreateRequest",
    "AIGenerationResponse",
    "Flashcard",
    "FlashcardBulkDeleteRequest",
    "FlashcardListResponse",
    "FlashcardUpdateRequest",
    "FlashcardUpdateResponse",
    "PaginationSchema",
    "ProposalSchema",
]
