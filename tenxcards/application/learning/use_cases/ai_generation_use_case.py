"""Use case for AI flashcard generation and acceptance."""

import time
from collections.abc import Sequence
from dataclasses import dataclass
from uuid import UUID

import structlog
from sqlalchemy.exc import SQLAlchemyError

from tenxcards.application.learning.protocols.ai_generation_repository import (
    AcceptanceFailure,
    AcceptanceFailureCode,
    AIGenerationRepositoryProtocol,
)
from tenxcards.application.learning.protocols.generation_client import GenerationClientProtocol
from tenxcards.application.learning.validation import validate_input_text
from tenxcards.constants import (
    GENERATION_MAX_PROPOSALS,
    GENERATION_MIN_PROPOSALS,
    GENERATION_MODEL_NAME,
)
from tenxcards.domain.common.exceptions import ValidationError as DomainValidationError
from tenxcards.domain.common.value_objects.ids import GenerationId, UserId
from tenxcards.domain.learning.entities.ai_generation import AIGeneration
from tenxcards.domain.learning.value_objects import Proposal
from tenxcards.exceptions import (
    DatabaseError,
    GenerationAlreadyAcceptedError,
    GenerationNotFoundError,
    ValidationError,
)
from tenxcards.infrastructure.ai.exceptions import GenerationParseError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of a successful generation: the record id and its proposals."""

    generation_id: GenerationId
    proposals: list[Proposal]


def normalize_proposals(proposals: Sequence[object]) -> list[Proposal]:
    """
    Re-validate proposals coming back from the generation client.

    Accepts Proposal instances or ``{front, back}`` mappings.

    Raises:
        ValidationError: If the count is outside 1-10 or any proposal is invalid
    """
    count = len(proposals)
    if count < GENERATION_MIN_PROPOSALS or count > GENERATION_MAX_PROPOSALS:
        raise ValidationError(
            f"Expected between {GENERATION_MIN_PROPOSALS} and {GENERATION_MAX_PROPOSALS} "
            f"proposals, got {count}",
            field="proposals",
        )

    normalized: list[Proposal] = []
    for index, proposal in enumerate(proposals):
        try:
            if isinstance(proposal, Proposal):
                normalized.append(Proposal(front=proposal.front, back=proposal.back))
            elif isinstance(proposal, dict):
                normalized.append(Proposal.from_dict(proposal))
            else:
                raise DomainValidationError("Proposal must be an object", field="proposals")
        except DomainValidationError as e:
            raise ValidationError(
                f"Proposal {index + 1} is invalid: {e.message}",
                field="proposals",
                details={"index": index},
            ) from e

    return normalized


class AIGenerationUseCase:
    """Use case for generating flashcard proposals and accepting them."""

    def __init__(
        self,
        generation_repository: AIGenerationRepositoryProtocol,
        generation_client: GenerationClientProtocol,
    ) -> None:
        self.generation_repository = generation_repository
        self.generation_client = generation_client

    async def create_generation(self, user_id: int, input_text: str) -> GenerationResult:
        """
        Generate proposals for a text and record the generation.

        Args:
            user_id: ID of the requesting user
            input_text: Source text (1000-10000 characters after trimming)

        Returns:
            GenerationResult with the new generation id and its proposals

        Raises:
            ValidationError: If the input text is invalid
            GenerationError: Propagated unchanged from the generation client
            GenerationParseError: If the returned proposals break the content or count rules
            DatabaseError: If the generation record cannot be stored
        """
        text = validate_input_text(input_text)

        started = time.perf_counter()
        raw_proposals = await self.generation_client.generate_flashcards(text)
        duration_ms = int((time.perf_counter() - started) * 1000)

        try:
            proposals = normalize_proposals(raw_proposals)
        except ValidationError as e:
            logger.warning(
                "ai_generation_output_rejected",
                user_id=user_id,
                proposals_count=len(raw_proposals),
                error=e.message,
            )
            raise GenerationParseError(
                f"AI service returned unusable proposals: {e.message}",
                details={"proposals_count": len(raw_proposals)},
            ) from e

        generation = AIGeneration.create(
            user_id=UserId(user_id),
            input_text=text,
            model_name=GENERATION_MODEL_NAME,
            proposals=proposals,
            duration_ms=duration_ms,
        )

        try:
            generation = self.generation_repository.create(generation)
        except SQLAlchemyError as e:
            logger.error(
                "ai_generation_persist_failed",
                user_id=user_id,
                proposals_count=len(proposals),
                error_type=type(e).__name__,
                error=str(e),
            )
            raise DatabaseError(
                "Failed to save AI generation",
                details={"error_type": type(e).__name__},
            ) from e

        logger.info(
            "ai_generation_created",
            user_id=user_id,
            generation_id=str(generation.id),
            generated_count=generation.generated_count,
            duration_ms=duration_ms,
        )
        return GenerationResult(generation_id=generation.id, proposals=proposals)

    def accept_generation(
        self, user_id: int, generation_id: UUID, proposals: Sequence[object]
    ) -> None:
        """
        Turn selected proposals into flashcards, exactly once per generation.

        Args:
            user_id: ID of the requesting user
            generation_id: Generation the proposals came from
            proposals: 1-10 proposals chosen (and possibly edited) by the user

        Raises:
            ValidationError: If the proposals are invalid
            GenerationNotFoundError: If the generation is missing or owned by someone else
            GenerationAlreadyAcceptedError: If the generation was accepted before
            DatabaseError: On any other persistence failure
        """
        accepted = normalize_proposals(proposals)

        try:
            accepted_count = self.generation_repository.accept(
                GenerationId(generation_id), UserId(user_id), accepted
            )
        except AcceptanceFailure as failure:
            logger.warning(
                "ai_generation_acceptance_refused",
                user_id=user_id,
                generation_id=str(generation_id),
                proposals_count=len(accepted),
                failure_code=failure.code.value,
            )
            if failure.code is AcceptanceFailureCode.GENERATION_NOT_FOUND:
                raise GenerationNotFoundError(generation_id) from failure
            if failure.code is AcceptanceFailureCode.ALREADY_ACCEPTED:
                raise GenerationAlreadyAcceptedError(generation_id) from failure
            raise ValidationError(failure.message, field="proposals") from failure
        except SQLAlchemyError as e:
            logger.error(
                "ai_generation_accept_failed",
                user_id=user_id,
                generation_id=str(generation_id),
                proposals_count=len(accepted),
                error_type=type(e).__name__,
                error=str(e),
            )
            raise DatabaseError(
                "Failed to accept AI generation",
                details={"error_type": type(e).__name__},
            ) from e

        logger.info(
            "ai_generation_accepted",
            user_id=user_id,
            generation_id=str(generation_id),
            accepted_count=accepted_count,
        )
