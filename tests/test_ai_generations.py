"""Tests for AI generation API endpoints."""

import uuid

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from tenxcards import models
from tenxcards.domain.learning.value_objects import Proposal
from tenxcards.feature_flags import parse_flags_config
from tenxcards.infrastructure.ai.exceptions import (
    GenerationApiError,
    GenerationTimeoutError,
)
from tenxcards.infrastructure.learning.repositories.ai_generation_repository import (
    AIGenerationRepository,
)

from conftest import FakeGenerationClient, source_text

GENERATIONS_URL = "/api/v1/ai/generations"
ACCEPT_URL = "/api/v1/ai/generations/accept"


def _count(db_session: Session, model: type) -> int:
    return db_session.execute(select(func.count()).select_from(model)).scalar_one()


def _generate(client: TestClient, length: int = 1050) -> dict:
    response = client.post(GENERATIONS_URL, json={"input_text": source_text(length)})
    assert response.status_code == status.HTTP_201_CREATED, response.text
    return response.json()


def _proposals(count: int, front: str = "Question", back: str = "Answer") -> list[dict]:
    return [{"front": f"{front} {i}", "back": f"{back} {i}"} for i in range(count)]


class TestCreateGeneration:
    """Test suite for POST /ai/generations."""

    def test_generate_returns_proposals_and_records_generation(
        self,
        client: TestClient,
        db_session: Session,
        fake_generator: FakeGenerationClient,
        test_user: models.User,
    ) -> None:
        data = _generate(client)

        assert len(data["proposals"]) == 3
        assert data["proposals"][0] == {
            "front": "What does photosynthesis convert?",
            "back": "Light into chemical energy",
        }

        generation = db_session.get(models.AIGeneration, uuid.UUID(data["generation_id"]))
        assert generation is not None
        assert generation.user_id == test_user.id
        assert generation.generated_count == 3
        assert generation.duration_ms >= 0
        assert len(generation.input_text) == 1050
        # Proposals are not flashcards until accepted
        assert _count(db_session, models.Flashcard) == 0
        assert fake_generator.calls == [source_text(1050)]

    @pytest.mark.parametrize(
        ("length", "expected"),
        [
            (999, status.HTTP_400_BAD_REQUEST),
            (1000, status.HTTP_201_CREATED),
            (10000, status.HTTP_201_CREATED),
            (10001, status.HTTP_400_BAD_REQUEST),
        ],
    )
    def test_input_length_boundaries(
        self, client: TestClient, fake_generator: FakeGenerationClient, length: int, expected: int
    ) -> None:
        response = client.post(GENERATIONS_URL, json={"input_text": source_text(length)})

        assert response.status_code == expected
        if expected == status.HTTP_400_BAD_REQUEST:
            assert response.json()["code"] == "VALIDATION_ERROR"
            assert fake_generator.calls == []

    def test_input_is_trimmed_before_length_check(
        self, client: TestClient, fake_generator: FakeGenerationClient
    ) -> None:
        padded = "   " + source_text(999) + "\n\n  "

        response = client.post(GENERATIONS_URL, json={"input_text": padded})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert fake_generator.calls == []

    def test_missing_input_text_is_rejected(self, client: TestClient) -> None:
        response = client.post(GENERATIONS_URL, json={})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT

    def test_generator_timeout_is_reported(
        self, client: TestClient, db_session: Session, fake_generator: FakeGenerationClient
    ) -> None:
        fake_generator.error = GenerationTimeoutError(30)

        response = client.post(GENERATIONS_URL, json={"input_text": source_text()})

        assert response.status_code == status.HTTP_504_GATEWAY_TIMEOUT
        body = response.json()
        assert body["code"] == "GENERATION_TIMEOUT"
        assert "details" not in body
        assert _count(db_session, models.AIGeneration) == 0

    def test_rate_limited_generator_answers_503(
        self, client: TestClient, fake_generator: FakeGenerationClient
    ) -> None:
        fake_generator.error = GenerationApiError("Rate limit exceeded", 429)

        response = client.post(GENERATIONS_URL, json={"input_text": source_text()})

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.json()["code"] == "GENERATION_API_429"

    def test_too_many_generated_proposals_is_upstream_error(
        self, client: TestClient, db_session: Session, fake_generator: FakeGenerationClient
    ) -> None:
        fake_generator.proposals = [Proposal(front=f"Q{i}", back=f"A{i}") for i in range(11)]

        response = client.post(GENERATIONS_URL, json={"input_text": source_text()})

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        body = response.json()
        assert body["code"] == "GENERATION_PARSE_ERROR"
        assert "details" not in body
        assert _count(db_session, models.AIGeneration) == 0

    def test_requires_authentication(self, anonymous_client: TestClient) -> None:
        response = anonymous_client.post(GENERATIONS_URL, json={"input_text": source_text()})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_disabled_feature_is_rejected_before_auth(
        self,
        anonymous_client: TestClient,
        fake_generator: FakeGenerationClient,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        config = parse_flags_config({"local": {"flashcards.create.ai": False}})
        monkeypatch.setattr("tenxcards.feature_flags.load_flags_config", lambda: config)

        response = anonymous_client.post(GENERATIONS_URL, json={"input_text": source_text()})

        assert response.status_code == status.HTTP_403_FORBIDDEN
        body = response.json()
        assert body["code"] == "FEATURE_DISABLED"
        assert body["detail"] == "This feature is currently disabled"
        assert body["details"] == {"feature": "flashcards.create.ai"}
        assert fake_generator.calls == []


class TestAcceptGeneration:
    """Test suite for POST /ai/generations/accept."""

    def test_generate_accept_and_repeat(self, client: TestClient, db_session: Session) -> None:
        """Accepting once creates cards; accepting again conflicts and creates nothing."""
        data = _generate(client)
        chosen = data["proposals"][:3]

        response = client.post(
            ACCEPT_URL, json={"generation_id": data["generation_id"], "proposals": chosen}
        )
        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert response.content == b""

        flashcards = db_session.execute(select(models.Flashcard)).scalars().all()
        assert len(flashcards) == 3
        assert {fc.source_type for fc in flashcards} == {"ai"}
        assert {fc.ai_generation_id for fc in flashcards} == {uuid.UUID(data["generation_id"])}

        acceptance = db_session.get(
            models.AIGenerationAcceptance, uuid.UUID(data["generation_id"])
        )
        assert acceptance is not None
        assert acceptance.accepted_count == 3

        repeat = client.post(
            ACCEPT_URL, json={"generation_id": data["generation_id"], "proposals": chosen}
        )
        assert repeat.status_code == status.HTTP_409_CONFLICT
        assert repeat.json()["code"] == "CONFLICT"
        assert _count(db_session, models.Flashcard) == 3
        assert _count(db_session, models.AIGenerationAcceptance) == 1

        listing = client.get("/api/v1/flashcards")
        assert listing.json()["pagination"]["total_items"] == 3

    def test_accept_edited_proposals(self, client: TestClient, db_session: Session) -> None:
        data = _generate(client)
        edited = [{"front": "My own question", "back": "My own answer"}]

        response = client.post(
            ACCEPT_URL, json={"generation_id": data["generation_id"], "proposals": edited}
        )

        assert response.status_code == status.HTTP_204_NO_CONTENT
        flashcard = db_session.execute(select(models.Flashcard)).scalar_one()
        assert flashcard.front == "My own question"
        assert flashcard.source_type == "ai"

    @pytest.mark.parametrize(
        ("front_length", "back_length", "expected"),
        [
            (300, 600, status.HTTP_204_NO_CONTENT),
            (301, 10, status.HTTP_400_BAD_REQUEST),
            (10, 601, status.HTTP_400_BAD_REQUEST),
        ],
    )
    def test_proposal_length_boundaries(
        self,
        client: TestClient,
        db_session: Session,
        front_length: int,
        back_length: int,
        expected: int,
    ) -> None:
        data = _generate(client)
        proposal = {"front": "f" * front_length, "back": "b" * back_length}

        response = client.post(
            ACCEPT_URL, json={"generation_id": data["generation_id"], "proposals": [proposal]}
        )

        assert response.status_code == expected
        if expected == status.HTTP_400_BAD_REQUEST:
            assert _count(db_session, models.Flashcard) == 0
            assert _count(db_session, models.AIGenerationAcceptance) == 0

    @pytest.mark.parametrize(
        ("count", "expected"),
        [
            (0, status.HTTP_400_BAD_REQUEST),
            (1, status.HTTP_204_NO_CONTENT),
            (10, status.HTTP_204_NO_CONTENT),
            (11, status.HTTP_400_BAD_REQUEST),
        ],
    )
    def test_proposal_count_boundaries(
        self, client: TestClient, db_session: Session, count: int, expected: int
    ) -> None:
        data = _generate(client)

        response = client.post(
            ACCEPT_URL,
            json={"generation_id": data["generation_id"], "proposals": _proposals(count)},
        )

        assert response.status_code == expected
        created = count if expected == status.HTTP_204_NO_CONTENT else 0
        assert _count(db_session, models.Flashcard) == created

    def test_empty_front_is_rejected(self, client: TestClient, db_session: Session) -> None:
        data = _generate(client)

        response = client.post(
            ACCEPT_URL,
            json={
                "generation_id": data["generation_id"],
                "proposals": [{"front": "   ", "back": "Answer"}],
            },
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert _count(db_session, models.Flashcard) == 0

    def test_unknown_generation_is_not_found(
        self, client: TestClient, db_session: Session
    ) -> None:
        response = client.post(
            ACCEPT_URL, json={"generation_id": str(uuid.uuid4()), "proposals": _proposals(2)}
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert _count(db_session, models.Flashcard) == 0

    def test_other_users_generation_is_not_found(
        self, client: TestClient, db_session: Session, other_user: models.User
    ) -> None:
        generation = models.AIGeneration(
            user_id=other_user.id,
            input_text=source_text(),
            model_name="gpt-4o-mini",
            generated_proposals=_proposals(2),
            generated_count=2,
            duration_ms=120,
        )
        db_session.add(generation)
        db_session.commit()

        response = client.post(
            ACCEPT_URL, json={"generation_id": str(generation.id), "proposals": _proposals(2)}
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert _count(db_session, models.Flashcard) == 0
        assert _count(db_session, models.AIGenerationAcceptance) == 0

    def test_failure_while_recording_acceptance_writes_nothing(
        self,
        client: TestClient,
        db_session: Session,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        data = _generate(client)

        def fail_insert(*_args: object, **_kwargs: object) -> None:
            raise OperationalError("INSERT INTO ai_generation_acceptances", {}, Exception("disk I/O"))

        monkeypatch.setattr(AIGenerationRepository, "_insert_acceptance", fail_insert)

        response = client.post(
            ACCEPT_URL, json={"generation_id": data["generation_id"], "proposals": _proposals(3)}
        )

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        body = response.json()
        assert body["code"] == "DATABASE_ERROR"
        assert "details" not in body
        assert _count(db_session, models.Flashcard) == 0
        assert _count(db_session, models.AIGenerationAcceptance) == 0

        monkeypatch.undo()
        retry = client.post(
            ACCEPT_URL, json={"generation_id": data["generation_id"], "proposals": _proposals(3)}
        )
        assert retry.status_code == status.HTTP_204_NO_CONTENT
        assert _count(db_session, models.Flashcard) == 3

    def test_malformed_generation_id_is_rejected(self, client: TestClient) -> None:
        response = client.post(
            ACCEPT_URL, json={"generation_id": "not-a-uuid", "proposals": _proposals(1)}
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT
