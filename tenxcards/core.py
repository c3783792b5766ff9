from dependency_injector import containers, providers
from sqlalchemy.orm import Session

from tenxcards.application.identity.use_cases.authentication_use_case import (
    AuthenticationUseCase,
)
from tenxcards.application.identity.use_cases.register_user_use_case import RegisterUserUseCase
from tenxcards.application.learning.use_cases.ai_generation_use_case import AIGenerationUseCase
from tenxcards.application.learning.use_cases.flashcard_use_case import FlashcardUseCase
from tenxcards.infrastructure.ai.openrouter_client import get_openrouter_client
from tenxcards.infrastructure.identity.repositories.user_repository import UserRepository
from tenxcards.infrastructure.identity.services.adapters import (
    PasswordServiceAdapter,
    TokenServiceAdapter,
)
from tenxcards.infrastructure.learning.repositories.ai_generation_repository import (
    AIGenerationRepository,
)
from tenxcards.infrastructure.learning.repositories.flashcard_repository import (
    FlashcardRepository,
)


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Declare db as a dependency that will be provided at runtime
    db = providers.Dependency(instance_of=Session)

    # Repositories
    flashcard_repository = providers.Factory(FlashcardRepository, db=db)
    ai_generation_repository = providers.Factory(AIGenerationRepository, db=db)
    user_repository = providers.Factory(UserRepository, db=db)

    # External services
    generation_client = providers.Callable(get_openrouter_client)
    password_service = providers.Singleton(PasswordServiceAdapter)
    token_service = providers.Singleton(TokenServiceAdapter)

    # Learning use cases
    flashcard_use_case = providers.Factory(
        FlashcardUseCase,
        flashcard_repository=flashcard_repository,
    )
    ai_generation_use_case = providers.Factory(
        AIGenerationUseCase,
        generation_repository=ai_generation_repository,
        generation_client=generation_client,
    )

    # Identity use cases
    authentication_use_case = providers.Factory(
        AuthenticationUseCase,
        user_repository=user_repository,
        password_service=password_service,
        token_service=token_service,
    )
    register_user_use_case = providers.Factory(
        RegisterUserUseCase,
        user_repository=user_repository,
        password_service=password_service,
        token_service=token_service,
    )


# Initialize container
container = Container()
