"""Repository for User domain entities."""

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tenxcards.domain.common.value_objects.ids import UserId
from tenxcards.domain.identity.entities.user import User
from tenxcards.domain.identity.exceptions import EmailAlreadyExistsError
from tenxcards.infrastructure.identity.mappers.user_mapper import UserMapper
from tenxcards.models import User as UserORM

logger = structlog.get_logger(__name__)


class UserRepository:
    """Repository for User domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = UserMapper()

    def find_by_id(self, user_id: UserId) -> User | None:
        stmt = select(UserORM).where(UserORM.id == user_id.value)
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_email(self, email: str) -> User | None:
        stmt = select(UserORM).where(UserORM.email == email)
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def save(self, user: User) -> User:
        """
        Save a user entity.

        Args:
            user: The user entity to save

        Returns:
            Saved user entity with database-generated values

        Raises:
            EmailAlreadyExistsError: If another account already uses the email
        """
        if user.id.value == 0:
            orm_model = self.mapper.to_orm(user)
            self.db.add(orm_model)
        else:
            existing = self.db.get(UserORM, user.id.value)
            if not existing:
                raise ValueError(f"User with id {user.id.value} not found")
            orm_model = self.mapper.to_orm(user, existing)

        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise EmailAlreadyExistsError(user.email) from e

        self.db.refresh(orm_model)
        logger.info("saved_user", user_id=orm_model.id)
        return self.mapper.to_domain(orm_model)
