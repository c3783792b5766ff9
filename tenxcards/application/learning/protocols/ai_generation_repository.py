"""Protocol for AI generation persistence, including atomic acceptance."""

from enum import StrEnum
from typing import Protocol

from tenxcards.domain.common.value_objects.ids import GenerationId, UserId
from tenxcards.domain.learning.entities.ai_generation import AIGeneration
from tenxcards.domain.learning.value_objects import Proposal


class AcceptanceFailureCode(StrEnum):
    """Why the store refused an acceptance."""

    GENERATION_NOT_FOUND = "generation_not_found"
    ALREADY_ACCEPTED = "already_accepted"
    INVALID_PROPOSALS = "invalid_proposals"


class AcceptanceFailure(Exception):
    """Raised by the store when an acceptance is refused; nothing was written."""

    def __init__(self, code: AcceptanceFailureCode, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(message)


class AIGenerationRepositoryProtocol(Protocol):
    """Protocol for AI generation repository operations."""

    def create(self, generation: AIGeneration) -> AIGeneration:
        """
        Persist a new generation record.

        Args:
            generation: The generation to store

        Returns:
            Stored generation with database-generated values
        """
        ...

    def accept(
        self, generation_id: GenerationId, user_id: UserId, proposals: list[Proposal]
    ) -> int:
        """
        Accept proposals from a generation in a single transaction.

        Verifies ownership, creates one AI flashcard per proposal and records
        the acceptance. Either everything is written or nothing is.

        Args:
            generation_id: Generation being accepted
            user_id: Owner of the generation
            proposals: Proposals chosen by the user

        Returns:
            Number of flashcards created

        Raises:
            AcceptanceFailure: If the generation is missing, already accepted
                or the proposals are invalid
        """
        ...
