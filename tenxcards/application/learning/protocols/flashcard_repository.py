"""Protocol for Flashcard repository in learning context."""

from typing import Protocol

from tenxcards.application.common.pagination import Pagination
from tenxcards.domain.common.value_objects.ids import FlashcardId, UserId
from tenxcards.domain.learning.entities.flashcard import Flashcard
from tenxcards.domain.learning.value_objects import FlashcardSourceType


class FlashcardRepositoryProtocol(Protocol):
    """Protocol for Flashcard repository operations in learning context."""

    def find_by_id(self, flashcard_id: FlashcardId, user_id: UserId) -> Flashcard | None:
        """
        Find a flashcard by ID with user ownership check.

        Returns:
            Flashcard entity if found and owned by user, None otherwise
        """
        ...

    def find_page(
        self,
        user_id: UserId,
        pagination: Pagination,
        source_type: FlashcardSourceType | None = None,
    ) -> tuple[list[Flashcard], int]:
        """
        Get one page of a user's flashcards, newest first.

        Returns:
            Tuple of (flashcards on the page, total matching count)
        """
        ...

    def save(self, flashcard: Flashcard) -> Flashcard: ...

    def delete(self, flashcard_id: FlashcardId, user_id: UserId) -> bool:
        """
        Delete a flashcard.

        Returns:
            True if deleted, False if not found
        """
        ...

    def delete_many(self, flashcard_ids: list[FlashcardId], user_id: UserId) -> int:
        """
        Delete every listed flashcard owned by the user.

        Returns:
            Number of flashcards deleted
        """
        ...
