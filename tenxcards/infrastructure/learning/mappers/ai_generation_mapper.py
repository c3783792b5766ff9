"""Mapper for AIGeneration ORM <-> Domain conversion."""

from tenxcards.domain.common.value_objects import GenerationId, UserId
from tenxcards.domain.learning.entities.ai_generation import AIGeneration
from tenxcards.domain.learning.value_objects import Proposal
from tenxcards.models import AIGeneration as AIGenerationORM
from tenxcards.utils import ensure_utc


class AIGenerationMapper:
    """Mapper for AIGeneration ORM <-> Domain conversion."""

    def to_domain(self, orm_model: AIGenerationORM) -> AIGeneration:
        return AIGeneration.create_with_id(
            id=GenerationId(orm_model.id),
            user_id=UserId(orm_model.user_id),
            input_text=orm_model.input_text,
            model_name=orm_model.model_name,
            proposals=[Proposal.from_dict(item) for item in orm_model.generated_proposals],
            duration_ms=orm_model.duration_ms,
            created_at=ensure_utc(orm_model.created_at),
        )

    def to_orm(self, domain_entity: AIGeneration) -> AIGenerationORM:
        """Build a new row; generation records are never updated."""
        return AIGenerationORM(
            id=domain_entity.id.value,
            user_id=domain_entity.user_id.value,
            input_text=domain_entity.input_text,
            model_name=domain_entity.model_name,
            generated_proposals=[p.to_dict() for p in domain_entity.proposals],
            generated_count=domain_entity.generated_count,
            duration_ms=domain_entity.duration_ms,
        )
