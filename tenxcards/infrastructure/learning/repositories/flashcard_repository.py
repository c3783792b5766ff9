"""Repository for Flashcard domain entities."""

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from tenxcards.application.common.pagination import Pagination
from tenxcards.domain.common.value_objects.ids import FlashcardId, UserId
from tenxcards.domain.learning.entities.flashcard import Flashcard
from tenxcards.domain.learning.value_objects import FlashcardSourceType
from tenxcards.infrastructure.learning.mappers.flashcard_mapper import FlashcardMapper
from tenxcards.models import Flashcard as FlashcardORM


class FlashcardRepository:
    """Repository for Flashcard domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = FlashcardMapper()

    def find_by_id(self, flashcard_id: FlashcardId, user_id: UserId) -> Flashcard | None:
        """
        Find a flashcard by ID with user ownership check.

        Args:
            flashcard_id: The flashcard ID
            user_id: The user ID for ownership verification

        Returns:
            Flashcard entity if found and owned by user, None otherwise
        """
        stmt = select(FlashcardORM).where(
            FlashcardORM.id == flashcard_id.value,
            FlashcardORM.user_id == user_id.value,
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_page(
        self,
        user_id: UserId,
        pagination: Pagination,
        source_type: FlashcardSourceType | None = None,
    ) -> tuple[list[Flashcard], int]:
        """
        Get one page of a user's flashcards.

        Args:
            user_id: Owner of the flashcards
            pagination: Page to fetch
            source_type: Optional provenance filter

        Returns:
            Tuple of (flashcards ordered by created_at DESC, total matching count)
        """
        conditions = [FlashcardORM.user_id == user_id.value]
        if source_type is not None:
            conditions.append(FlashcardORM.source_type == source_type.value)

        total = self.db.execute(select(func.count(FlashcardORM.id)).where(*conditions)).scalar()

        stmt = (
            select(FlashcardORM)
            .where(*conditions)
            .order_by(FlashcardORM.created_at.desc(), FlashcardORM.id)
            .offset(pagination.offset)
            .limit(pagination.limit)
        )
        orm_models = self.db.execute(stmt).scalars().all()
        return [self.mapper.to_domain(orm) for orm in orm_models], total or 0

    def save(self, flashcard: Flashcard) -> Flashcard:
        """
        Save a flashcard entity (create or update).

        Args:
            flashcard: The flashcard entity to save

        Returns:
            Saved flashcard entity with database-generated values
        """
        orm_model = self.db.get(FlashcardORM, flashcard.id.value)
        if orm_model is None:
            orm_model = self.mapper.to_orm(flashcard)
            self.db.add(orm_model)
        else:
            self.mapper.to_orm(flashcard, orm_model)
        self.db.commit()
        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)

    def delete(self, flashcard_id: FlashcardId, user_id: UserId) -> bool:
        """
        Delete a flashcard.

        Args:
            flashcard_id: The flashcard ID
            user_id: The user ID for ownership verification

        Returns:
            True if deleted, False if not found
        """
        return self.delete_many([flashcard_id], user_id) > 0

    def delete_many(self, flashcard_ids: list[FlashcardId], user_id: UserId) -> int:
        """
        Delete the listed flashcards that belong to the user.

        Returns:
            Number of rows deleted
        """
        if not flashcard_ids:
            return 0
        stmt = delete(FlashcardORM).where(
            FlashcardORM.id.in_([fid.value for fid in flashcard_ids]),
            FlashcardORM.user_id == user_id.value,
        )
        result = self.db.execute(stmt)
        self.db.commit()
        return result.rowcount or 0
