"""
AI generation record.

One row per successful generation request. Serves as the audit trail and as
the anchor the acceptance step is checked against.
"""

from dataclasses import dataclass, field
from datetime import datetime

from tenxcards.constants import (
    GENERATION_INPUT_MAX_LENGTH,
    GENERATION_INPUT_MIN_LENGTH,
    GENERATION_MAX_PROPOSALS,
    GENERATION_MIN_PROPOSALS,
)
from tenxcards.domain.common.entity import Entity
from tenxcards.domain.common.exceptions import ValidationError
from tenxcards.domain.common.value_objects import GenerationId, UserId
from tenxcards.domain.learning.value_objects import Proposal


@dataclass
class AIGeneration(Entity[GenerationId]):
    """
    Immutable audit record of one generation request.

    Business Rules:
    - Input text is 1000-10000 characters
    - Holds between 1 and 10 proposals; generated_count mirrors their number
    """

    id: GenerationId
    user_id: UserId
    input_text: str
    model_name: str
    proposals: tuple[Proposal, ...]
    duration_ms: int
    created_at: datetime | None = field(default=None)

    def __post_init__(self) -> None:
        """Validate invariants."""
        length = len(self.input_text)
        if length < GENERATION_INPUT_MIN_LENGTH or length > GENERATION_INPUT_MAX_LENGTH:
            raise ValidationError(
                f"Input text must be between {GENERATION_INPUT_MIN_LENGTH} and "
                f"{GENERATION_INPUT_MAX_LENGTH} characters",
                field="input_text",
                value=length,
            )
        count = len(self.proposals)
        if count < GENERATION_MIN_PROPOSALS or count > GENERATION_MAX_PROPOSALS:
            raise ValidationError(
                f"A generation must hold between {GENERATION_MIN_PROPOSALS} and "
                f"{GENERATION_MAX_PROPOSALS} proposals",
                field="proposals",
                value=count,
            )
        if self.duration_ms < 0:
            raise ValidationError("Duration cannot be negative", field="duration_ms")

    @property
    def generated_count(self) -> int:
        return len(self.proposals)

    @classmethod
    def create(
        cls,
        user_id: UserId,
        input_text: str,
        model_name: str,
        proposals: list[Proposal],
        duration_ms: int,
    ) -> "AIGeneration":
        """Create a new generation record with a fresh id."""
        return cls(
            id=GenerationId.generate(),
            user_id=user_id,
            input_text=input_text,
            model_name=model_name,
            proposals=tuple(proposals),
            duration_ms=duration_ms,
        )

    @classmethod
    def create_with_id(
        cls,
        id: GenerationId,
        user_id: UserId,
        input_text: str,
        model_name: str,
        proposals: list[Proposal],
        duration_ms: int,
        created_at: datetime,
    ) -> "AIGeneration":
        """Reconstitute a generation record from persistence."""
        return cls(
            id=id,
            user_id=user_id,
            input_text=input_text,
            model_name=model_name,
            proposals=tuple(proposals),
            duration_ms=duration_ms,
            created_at=created_at,
        )
