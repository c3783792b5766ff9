"""
Flashcard entity for study cards.
"""

from dataclasses import dataclass
from datetime import datetime

from tenxcards.domain.common.entity import Entity
from tenxcards.domain.common.value_objects import FlashcardId, GenerationId, UserId
from tenxcards.domain.learning.value_objects import (
    FlashcardSourceType,
    Proposal,
    validate_card_text,
)


@dataclass
class Flashcard(Entity[FlashcardId]):
    """
    A persisted, user-owned study card.

    Business Rules:
    - Front is 1-300 characters, back is 1-600 characters
    - Editing an AI card marks it as ai-edited; manual and ai-edited stay put
    - Cards created from an accepted generation keep a link to it
    """

    id: FlashcardId
    user_id: UserId
    front: str
    back: str
    source_type: FlashcardSourceType
    generation_id: GenerationId | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        validate_card_text(self.front, self.back)

    def edit(self, front: str, back: str) -> None:
        """
        Replace the card content and advance its provenance tag.

        Args:
            front: New front text
            back: New back text

        Raises:
            ValidationError: If either side violates the content rules
        """
        validate_card_text(front, back)
        self.front = front
        self.back = back
        self.source_type = self.source_type.after_edit()

    @classmethod
    def create_from_proposal(
        cls, user_id: UserId, generation_id: GenerationId, proposal: Proposal
    ) -> "Flashcard":
        """Create an AI flashcard from an accepted proposal."""
        return cls(
            id=FlashcardId.generate(),
            user_id=user_id,
            front=proposal.front,
            back=proposal.back,
            source_type=FlashcardSourceType.AI,
            generation_id=generation_id,
        )

    @classmethod
    def create_with_id(
        cls,
        id: FlashcardId,
        user_id: UserId,
        front: str,
        back: str,
        source_type: FlashcardSourceType,
        created_at: datetime,
        updated_at: datetime,
        generation_id: GenerationId | None = None,
    ) -> "Flashcard":
        """Reconstitute a flashcard from persistence."""
        return cls(
            id=id,
            user_id=user_id,
            front=front,
            back=back,
            source_type=source_type,
            generation_id=generation_id,
            created_at=created_at,
            updated_at=updated_at,
        )
