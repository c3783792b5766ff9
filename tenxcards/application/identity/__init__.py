"""Identity application layer."""

from tenxcards.application.identity.use_cases.authentication_use_case import (
    AuthenticationUseCase,
)
from tenxcards.application.identity.use_cases.register_user_use_case import RegisterUserUseCase

__all__ = [
    "AuthenticationUseCase",
    "RegisterUserUseCase",
]
