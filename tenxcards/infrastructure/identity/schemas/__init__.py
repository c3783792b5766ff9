"""Identity context schemas."""

from tenxcards.infrastructure.identity.schemas.user_schemas import (
    LogoutResponse,
    UserRegisterRequest,
)

__all__ = [
    "LogoutResponse",
    "UserRegisterRequest",
]
