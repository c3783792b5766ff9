"""Use case for user registration."""

import structlog

from tenxcards.application.identity.protocols.password_service import PasswordServiceProtocol
from tenxcards.application.identity.protocols.token_service import TokenServiceProtocol
from tenxcards.application.identity.protocols.user_repository import UserRepositoryProtocol
from tenxcards.application.identity.use_cases.authentication_use_case import normalize_email
from tenxcards.domain.identity.entities.user import User
from tenxcards.domain.identity.exceptions import EmailAlreadyExistsError
from tenxcards.infrastructure.identity.services.token_service import TokenWithRefresh

logger = structlog.get_logger(__name__)


class RegisterUserUseCase:
    """Use case for user registration operations."""

    def __init__(
        self,
        user_repository: UserRepositoryProtocol,
        password_service: PasswordServiceProtocol,
        token_service: TokenServiceProtocol,
    ) -> None:
        """Initialize use case with dependencies."""
        self.user_repository = user_repository
        self.password_service = password_service
        self.token_service = token_service

    def register_user(self, email: str, password: str) -> tuple[User, TokenWithRefresh]:
        """
        Register a new user account.

        Whether registration is open is decided by the auth.register flag,
        checked by the route before this runs.

        Args:
            email: User's email address
            password: User's plain text password (will be hashed)

        Returns:
            Tuple of (created user, token pair for immediate login)

        Raises:
            EmailAlreadyExistsError: If email is already registered
        """
        email = normalize_email(email)
        if self.user_repository.find_by_email(email) is not None:
            raise EmailAlreadyExistsError(email)

        hashed_password = self.password_service.hash_password(password)

        user = User.create(email=email, hashed_password=hashed_password)
        user = self.user_repository.save(user)
        token_pair = self.token_service.create_token_pair(user.id.value)

        logger.info("user_registered", user_id=user.id.value)

        return user, token_pair
