"""Pydantic schemas for Flashcard API request/response validation."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from tenxcards.constants import (
    FLASHCARD_BACK_MAX_LENGTH,
    FLASHCARD_FRONT_MAX_LENGTH,
    MAX_BULK_DELETE_IDS,
)
from tenxcards.domain.learning.value_objects import FlashcardSourceType


class Flashcard(BaseModel):
    """Schema for Flashcard response."""

    id: UUID
    front: str
    back: str
    source_type: FlashcardSourceType
    created_at: datetime
    updated_at: datetime


class PaginationSchema(BaseModel):
    """Pagination metadata for list responses."""

    page: int
    page_size: int
    total_items: int
    total_pages: int


class FlashcardListResponse(BaseModel):
    """Schema for a page of flashcards."""

    data: list[Flashcard] = Field(..., description="Flashcards on this page, newest first")
    pagination: PaginationSchema


class FlashcardUpdateRequest(BaseModel):
    """Schema for updating a flashcard."""

    front: str = Field(
        ..., min_length=1, max_length=FLASHCARD_FRONT_MAX_LENGTH, description="New front text"
    )
    back: str = Field(
        ..., min_length=1, max_length=FLASHCARD_BACK_MAX_LENGTH, description="New back text"
    )


class FlashcardUpdateResponse(BaseModel):
    """Schema for flashcard update response."""

    flashcard: Flashcard = Field(..., description="Updated flashcard")


class FlashcardBulkDeleteRequest(BaseModel):
    """Schema for deleting several flashcards."""

    ids: list[UUID] = Field(
        ..., min_length=1, max_length=MAX_BULK_DELETE_IDS, description="Flashcard IDs to delete"
    )
