"""Identity domain layer."""

from tenxcards.domain.identity.entities.user import User
from tenxcards.domain.identity.exceptions import (
    EmailAlreadyExistsError,
    InvalidCredentialsError,
    UserNotFoundError,
)

__all__ = [
    "EmailAlreadyExistsError",
    "InvalidCredentialsError",
    "User",
    "UserNotFoundError",
]
