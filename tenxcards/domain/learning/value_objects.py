"""Value objects for the learning context."""

from dataclasses import dataclass
from enum import StrEnum

from tenxcards.constants import FLASHCARD_BACK_MAX_LENGTH, FLASHCARD_FRONT_MAX_LENGTH
from tenxcards.domain.common.exceptions import ValidationError
from tenxcards.domain.common.value_object import ValueObject


class FlashcardSourceType(StrEnum):
    """How a flashcard came to exist."""

    MANUAL = "manual"
    AI = "ai"
    AI_EDITED = "ai-edited"

    def after_edit(self) -> "FlashcardSourceType":
        """Source type a card carries once its content has been edited.

        The only transition is ai -> ai-edited; it never goes back.
        """
        if self is FlashcardSourceType.AI:
            return FlashcardSourceType.AI_EDITED
        return self


def validate_card_text(front: object, back: object) -> None:
    """
    Check front/back against the flashcard content rules.

    Raises:
        ValidationError: If either side is not a non-empty string within bounds
    """
    if not isinstance(front, str) or not front.strip():
        raise ValidationError("Front cannot be empty", field="front")
    if not isinstance(back, str) or not back.strip():
        raise ValidationError("Back cannot be empty", field="back")
    if len(front) > FLASHCARD_FRONT_MAX_LENGTH:
        raise ValidationError(
            f"Front cannot exceed {FLASHCARD_FRONT_MAX_LENGTH} characters",
            field="front",
            value=len(front),
        )
    if len(back) > FLASHCARD_BACK_MAX_LENGTH:
        raise ValidationError(
            f"Back cannot exceed {FLASHCARD_BACK_MAX_LENGTH} characters",
            field="back",
            value=len(back),
        )


@dataclass(frozen=True)
class Proposal(ValueObject):
    """
    A candidate flashcard produced by AI generation.

    Proposals only live in memory between generation and acceptance, and
    inside the generation record's JSON column.
    """

    front: str
    back: str

    def __post_init__(self) -> None:
        validate_card_text(self.front, self.back)

    def to_dict(self) -> dict[str, str]:
        return {"front": self.front, "back": self.back}

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "Proposal":
        """Build a proposal from a JSON object, validating both sides."""
        front = data.get("front")
        back = data.get("back")
        validate_card_text(front, back)
        return cls(front=str(front), back=str(back))
