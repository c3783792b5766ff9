"""Mapper for User ORM <-> Domain conversion."""

from tenxcards.domain.common.value_objects.ids import UserId
from tenxcards.domain.identity.entities.user import User
from tenxcards.models import User as UserORM
from tenxcards.utils import ensure_utc


class UserMapper:
    """Mapper for User ORM <-> Domain conversion."""

    def to_domain(self, orm_model: UserORM) -> User:
        return User.create_with_id(
            id=UserId(orm_model.id),
            email=orm_model.email,
            hashed_password=orm_model.hashed_password,
            created_at=ensure_utc(orm_model.created_at),
            updated_at=ensure_utc(orm_model.updated_at),
        )

    def to_orm(self, domain_entity: User, orm_model: UserORM | None = None) -> UserORM:
        """Copy entity state onto an existing row, or build a new row (id left to the database)."""
        if orm_model is None:
            orm_model = UserORM()
        orm_model.email = domain_entity.email
        orm_model.hashed_password = domain_entity.hashed_password
        return orm_model
