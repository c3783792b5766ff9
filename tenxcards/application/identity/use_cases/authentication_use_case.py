"""Use case for authentication operations."""

import structlog

from tenxcards.application.identity.protocols.password_service import PasswordServiceProtocol
from tenxcards.application.identity.protocols.token_service import TokenServiceProtocol
from tenxcards.application.identity.protocols.user_repository import UserRepositoryProtocol
from tenxcards.domain.common.value_objects.ids import UserId
from tenxcards.domain.identity.entities.user import User
from tenxcards.domain.identity.exceptions import InvalidCredentialsError, UserNotFoundError
from tenxcards.infrastructure.identity.services.token_service import TokenWithRefresh

logger = structlog.get_logger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AuthenticationUseCase:
    """Use case for logging users in and resolving them from tokens."""

    def __init__(
        self,
        user_repository: UserRepositoryProtocol,
        password_service: PasswordServiceProtocol,
        token_service: TokenServiceProtocol,
    ) -> None:
        self.user_repository = user_repository
        self.password_service = password_service
        self.token_service = token_service

    def authenticate_user(self, email: str, password: str) -> tuple[User, TokenWithRefresh]:
        """
        Authenticate a user with email and password.

        Returns:
            Tuple of (authenticated user, token pair)

        Raises:
            InvalidCredentialsError: If the email is unknown or the password is wrong
        """
        user = self.user_repository.find_by_email(normalize_email(email))

        if not user:
            # Hash anyway so unknown emails take as long as wrong passwords
            self.password_service.verify_password(password, self.password_service.get_dummy_hash())
            raise InvalidCredentialsError

        if not user.hashed_password or not self.password_service.verify_password(
            password, user.hashed_password
        ):
            logger.info("login_rejected", user_id=user.id.value)
            raise InvalidCredentialsError

        token_pair = self.token_service.create_token_pair(user.id.value)
        logger.info("user_authenticated", user_id=user.id.value)
        return user, token_pair

    def get_user_by_id(self, user_id: int) -> User:
        """
        Get a user by ID (used by the current-user dependency).

        Raises:
            UserNotFoundError: If user is not found
        """
        user = self.user_repository.find_by_id(UserId(user_id))
        if not user:
            raise UserNotFoundError(user_id)
        return user
