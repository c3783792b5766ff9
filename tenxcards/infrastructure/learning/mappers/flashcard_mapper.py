"""Mapper for Flashcard ORM <-> Domain conversion."""

from tenxcards.domain.common.value_objects import FlashcardId, GenerationId, UserId
from tenxcards.domain.learning.entities.flashcard import Flashcard
from tenxcards.domain.learning.value_objects import FlashcardSourceType
from tenxcards.models import Flashcard as FlashcardORM
from tenxcards.utils import ensure_utc


class FlashcardMapper:
    """Mapper for Flashcard ORM <-> Domain conversion."""

    def to_domain(self, orm_model: FlashcardORM) -> Flashcard:
        """Convert ORM model to domain entity."""
        return Flashcard.create_with_id(
            id=FlashcardId(orm_model.id),
            user_id=UserId(orm_model.user_id),
            front=orm_model.front,
            back=orm_model.back,
            source_type=FlashcardSourceType(orm_model.source_type),
            generation_id=(
                GenerationId(orm_model.ai_generation_id) if orm_model.ai_generation_id else None
            ),
            created_at=ensure_utc(orm_model.created_at),
            updated_at=ensure_utc(orm_model.updated_at),
        )

    def to_orm(
        self, domain_entity: Flashcard, orm_model: FlashcardORM | None = None
    ) -> FlashcardORM:
        """Convert domain entity to ORM model."""
        if orm_model:
            # Owner, id and provenance link never change after creation
            orm_model.front = domain_entity.front
            orm_model.back = domain_entity.back
            orm_model.source_type = domain_entity.source_type.value
            return orm_model

        return FlashcardORM(
            id=domain_entity.id.value,
            user_id=domain_entity.user_id.value,
            front=domain_entity.front,
            back=domain_entity.back,
            source_type=domain_entity.source_type.value,
            ai_generation_id=(
                domain_entity.generation_id.value if domain_entity.generation_id else None
            ),
        )
