"""Use case for flashcard operations."""

from collections.abc import Sequence
from uuid import UUID

import structlog

from tenxcards.application.common.pagination import PaginatedResult, Pagination
from tenxcards.application.learning.protocols.flashcard_repository import (
    FlashcardRepositoryProtocol,
)
from tenxcards.constants import DEFAULT_PAGE_SIZE, MAX_BULK_DELETE_IDS
from tenxcards.domain.common.value_objects.ids import FlashcardId, UserId
from tenxcards.domain.learning.entities.flashcard import Flashcard
from tenxcards.domain.learning.value_objects import FlashcardSourceType
from tenxcards.exceptions import FlashcardNotFoundError, NotFoundError, ValidationError

logger = structlog.get_logger(__name__)


class FlashcardUseCase:
    """Use case for listing, editing and deleting flashcards."""

    def __init__(self, flashcard_repository: FlashcardRepositoryProtocol) -> None:
        """Initialize use case with repository protocols."""
        self.flashcard_repository = flashcard_repository

    def list_flashcards(
        self,
        user_id: int,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        source_type: FlashcardSourceType | None = None,
    ) -> PaginatedResult[Flashcard]:
        """
        List a user's flashcards, newest first.

        Args:
            user_id: ID of the user
            page: Page number (1-indexed)
            page_size: Items per page (1-100)
            source_type: Only return cards with this provenance

        Returns:
            One page of flashcards with totals

        Raises:
            ValidationError: If page or page_size is out of range
        """
        pagination = Pagination(page=page, page_size=page_size)
        items, total = self.flashcard_repository.find_page(
            UserId(user_id), pagination, source_type
        )
        return PaginatedResult(items=items, total_items=total, pagination=pagination)

    def update_flashcard(self, flashcard_id: UUID, user_id: int, front: str, back: str) -> Flashcard:
        """
        Update a flashcard's front and back.

        AI cards become ai-edited; other source types are kept.

        Args:
            flashcard_id: ID of the flashcard to update
            user_id: ID of the user
            front: New front text
            back: New back text

        Returns:
            Updated flashcard domain entity

        Raises:
            FlashcardNotFoundError: If flashcard is not found or owned by another user
            ValidationError: If the new content is invalid
        """
        flashcard = self.flashcard_repository.find_by_id(FlashcardId(flashcard_id), UserId(user_id))
        if not flashcard:
            raise FlashcardNotFoundError(flashcard_id)

        previous_source = flashcard.source_type
        flashcard.edit(front, back)
        flashcard = self.flashcard_repository.save(flashcard)

        logger.info(
            "updated_flashcard",
            flashcard_id=str(flashcard_id),
            source_type=flashcard.source_type.value,
            previous_source_type=previous_source.value,
        )
        return flashcard

    def delete_flashcard(self, flashcard_id: UUID, user_id: int) -> None:
        """
        Delete a flashcard.

        Raises:
            FlashcardNotFoundError: If no owned flashcard was deleted
        """
        deleted = self.flashcard_repository.delete(FlashcardId(flashcard_id), UserId(user_id))
        if not deleted:
            raise FlashcardNotFoundError(flashcard_id)

        logger.info("deleted_flashcard", flashcard_id=str(flashcard_id))

    def bulk_delete_flashcards(self, flashcard_ids: Sequence[UUID], user_id: int) -> int:
        """
        Delete several flashcards at once. Ids the user does not own are skipped.

        Returns:
            Number of flashcards deleted

        Raises:
            ValidationError: If no ids or more than 100 ids are given
            NotFoundError: If none of the ids matched an owned flashcard
        """
        unique_ids = list(dict.fromkeys(flashcard_ids))
        if not unique_ids:
            raise ValidationError("At least one flashcard id is required", field="ids")
        if len(unique_ids) > MAX_BULK_DELETE_IDS:
            raise ValidationError(
                f"Cannot delete more than {MAX_BULK_DELETE_IDS} flashcards at once", field="ids"
            )

        deleted = self.flashcard_repository.delete_many(
            [FlashcardId(fid) for fid in unique_ids], UserId(user_id)
        )
        if deleted == 0:
            raise NotFoundError("No matching flashcards found")

        logger.info("bulk_deleted_flashcards", requested=len(unique_ids), deleted=deleted)
        return deleted
