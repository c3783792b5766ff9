"""Pytest configuration and fixtures."""

import os

os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key-that-is-long-enough-for-hs256"
os.environ["ENVIRONMENT"] = "test"
os.environ["COOKIE_SECURE"] = "false"
os.environ.pop("ENV_NAME", None)

from collections.abc import Generator, Sequence  # noqa: E402
from datetime import UTC, datetime, timedelta  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
import structlog  # noqa: E402
from dependency_injector import providers  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402

from tenxcards import models  # noqa: E402
from tenxcards.core import container  # noqa: E402
from tenxcards.database import Base, build_engine, get_db  # noqa: E402
from tenxcards.domain.learning.value_objects import Proposal  # noqa: E402
from tenxcards.infrastructure.common.rate_limit import limiter  # noqa: E402
from tenxcards.infrastructure.identity.services.password_service import (  # noqa: E402
    hash_password,
)
from tenxcards.infrastructure.identity.services.token_service import (  # noqa: E402
    create_access_token,
)
from tenxcards.main import app  # noqa: E402

TEST_PASSWORD = "correct-horse-battery"

# In-memory SQLite shared across threads, with foreign keys enforced
test_engine = build_engine("sqlite:///:memory:")

TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

limiter.enabled = False

# Loggers must stay unbound so structlog.testing.capture_logs sees every event
structlog.configure(cache_logger_on_first_use=False)


def source_text(length: int = 1050) -> str:
    """Build generation input of an exact length."""
    sentence = "Photosynthesis converts light energy into chemical energy. "
    text = (sentence * (length // len(sentence) + 1))[: length - 1]
    # Trailing whitespace would be trimmed
    return text + "."


class FakeGenerationClient:
    """Generation client double returning canned proposals."""

    def __init__(
        self,
        proposals: Sequence[Proposal] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.proposals = list(proposals) if proposals is not None else [
            Proposal(front="What does photosynthesis convert?", back="Light into chemical energy"),
            Proposal(front="Where does photosynthesis happen?", back="In the chloroplasts"),
            Proposal(front="What gas is released?", back="Oxygen"),
        ]
        self.error = error
        self.calls: list[str] = []

    async def generate_flashcards(self, input_text: str) -> list[Proposal]:
        self.calls.append(input_text)
        if self.error is not None:
            raise self.error
        return list(self.proposals)


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=test_engine)

    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def fake_generator() -> Generator[FakeGenerationClient, None, None]:
    """Replace the OpenRouter client in the container."""
    fake = FakeGenerationClient()
    container.generation_client.override(providers.Object(fake))
    try:
        yield fake
    finally:
        container.generation_client.reset_override()


@pytest.fixture
def anonymous_client(
    db_session: Session, fake_generator: FakeGenerationClient
) -> Generator[TestClient, Any, None]:
    """Create a test client with database session and no credentials."""

    def override_get_db() -> Generator[Session, None, None]:
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def test_user(db_session: Session) -> models.User:
    """Create a test user with a known password."""
    user = models.User(email="learner@example.com", hashed_password=hash_password(TEST_PASSWORD))
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def other_user(db_session: Session) -> models.User:
    """Create a second user whose data must stay invisible to test_user."""
    user = models.User(email="someone-else@example.com", hashed_password=None)
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def client(anonymous_client: TestClient, test_user: models.User) -> TestClient:
    """Test client authenticated as test_user."""
    token = create_access_token(test_user.id)
    anonymous_client.headers["Authorization"] = f"Bearer {token}"
    return anonymous_client


@pytest.fixture
def make_flashcard(db_session: Session):  # noqa: ANN201
    """Factory inserting flashcards directly, with controllable timestamps."""
    base_time = datetime(2025, 1, 1, tzinfo=UTC)
    counter = {"n": 0}

    def _make(
        user: models.User,
        front: str = "Front",
        back: str = "Back",
        source_type: str = "manual",
    ) -> models.Flashcard:
        counter["n"] += 1
        created = base_time + timedelta(minutes=counter["n"])
        flashcard = models.Flashcard(
            user_id=user.id,
            front=front,
            back=back,
            source_type=source_type,
            created_at=created,
            updated_at=created,
        )
        db_session.add(flashcard)
        db_session.commit()
        db_session.refresh(flashcard)
        return flashcard

    return _make
