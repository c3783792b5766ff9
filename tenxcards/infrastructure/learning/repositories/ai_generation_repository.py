"""Repository for AI generation records and their acceptance."""

import structlog
from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from tenxcards.application.learning.protocols.ai_generation_repository import (
    AcceptanceFailure,
    AcceptanceFailureCode,
)
from tenxcards.constants import GENERATION_MAX_PROPOSALS, GENERATION_MIN_PROPOSALS
from tenxcards.domain.common.exceptions import ValidationError
from tenxcards.domain.common.value_objects.ids import GenerationId, UserId
from tenxcards.domain.learning.entities.ai_generation import AIGeneration
from tenxcards.domain.learning.entities.flashcard import Flashcard
from tenxcards.domain.learning.value_objects import Proposal, validate_card_text
from tenxcards.infrastructure.learning.mappers.ai_generation_mapper import AIGenerationMapper
from tenxcards.infrastructure.learning.mappers.flashcard_mapper import FlashcardMapper
from tenxcards.models import AIGeneration as AIGenerationORM
from tenxcards.models import AIGenerationAcceptance as AIGenerationAcceptanceORM

logger = structlog.get_logger(__name__)


class AIGenerationRepository:
    """Repository for AIGeneration records."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = AIGenerationMapper()
        self.flashcard_mapper = FlashcardMapper()

    def create(self, generation: AIGeneration) -> AIGeneration:
        """
        Persist a new generation record.

        Raises:
            SQLAlchemyError: If the insert fails (the session is rolled back)
        """
        orm_model = self.mapper.to_orm(generation)
        try:
            self.db.add(orm_model)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)

    def accept(
        self, generation_id: GenerationId, user_id: UserId, proposals: list[Proposal]
    ) -> int:
        """
        Accept proposals in one transaction.

        Inserts one AI flashcard per proposal, then the acceptance row keyed by
        the generation id. The acceptance key is the only duplicate check: a
        second acceptance fails on insert and everything is rolled back.

        Returns:
            Number of flashcards created

        Raises:
            AcceptanceFailure: GENERATION_NOT_FOUND, ALREADY_ACCEPTED or
                INVALID_PROPOSALS; nothing is written
            SQLAlchemyError: Any other database failure; nothing is written
        """
        try:
            owned = self.db.execute(
                select(AIGenerationORM.id).where(
                    AIGenerationORM.id == generation_id.value,
                    AIGenerationORM.user_id == user_id.value,
                )
            ).scalar_one_or_none()
            if owned is None:
                raise AcceptanceFailure(
                    AcceptanceFailureCode.GENERATION_NOT_FOUND,
                    "AI generation not found",
                )

            self._check_proposals(proposals)

            for proposal in proposals:
                flashcard = Flashcard.create_from_proposal(user_id, generation_id, proposal)
                self.db.add(self.flashcard_mapper.to_orm(flashcard))
            self.db.flush()

            try:
                self._insert_acceptance(generation_id, user_id, len(proposals))
            except IntegrityError as e:
                raise AcceptanceFailure(
                    AcceptanceFailureCode.ALREADY_ACCEPTED,
                    "AI generation has already been accepted",
                ) from e

            self.db.commit()
        except (AcceptanceFailure, SQLAlchemyError):
            self.db.rollback()
            raise

        logger.debug(
            "ai_generation_acceptance_committed",
            generation_id=str(generation_id),
            accepted_count=len(proposals),
        )
        return len(proposals)

    def _check_proposals(self, proposals: list[Proposal]) -> None:
        count = len(proposals)
        if count < GENERATION_MIN_PROPOSALS or count > GENERATION_MAX_PROPOSALS:
            raise AcceptanceFailure(
                AcceptanceFailureCode.INVALID_PROPOSALS,
                f"Expected between {GENERATION_MIN_PROPOSALS} and {GENERATION_MAX_PROPOSALS} "
                f"proposals, got {count}",
            )
        for proposal in proposals:
            try:
                validate_card_text(proposal.front, proposal.back)
            except ValidationError as e:
                raise AcceptanceFailure(AcceptanceFailureCode.INVALID_PROPOSALS, e.message) from e

    def _insert_acceptance(
        self, generation_id: GenerationId, user_id: UserId, accepted_count: int
    ) -> None:
        self.db.execute(
            insert(AIGenerationAcceptanceORM).values(
                ai_generation_id=generation_id.value,
                user_id=user_id.value,
                accepted_count=accepted_count,
            )
        )
