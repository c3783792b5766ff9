"""Tests for authentication endpoints."""

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy import select
from sqlalchemy.orm import Session

from tenxcards import models
from tenxcards.infrastructure.identity.services.token_service import (
    create_refresh_token,
    verify_access_token,
    verify_refresh_token,
)

from conftest import TEST_PASSWORD

REGISTER_URL = "/api/v1/auth/register"
LOGIN_URL = "/api/v1/auth/login"


class TestRegister:
    def test_register_returns_token_pair(
        self, anonymous_client: TestClient, db_session: Session
    ) -> None:
        response = anonymous_client.post(
            REGISTER_URL, json={"email": "New.User@Example.com", "password": "s3cret-pass"}
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["expires_in"] == 15 * 60
        assert "refresh_token=" in response.headers["set-cookie"]

        user = db_session.execute(select(models.User)).scalar_one()
        assert user.email == "new.user@example.com"
        assert user.hashed_password != "s3cret-pass"
        assert verify_access_token(data["access_token"]) == user.id

    def test_register_duplicate_email(
        self, anonymous_client: TestClient, test_user: models.User
    ) -> None:
        response = anonymous_client.post(
            REGISTER_URL, json={"email": "Learner@example.com", "password": "another-pass"}
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["code"] == "CONFLICT"

    @pytest.mark.parametrize(
        "payload",
        [
            {"email": "not-an-email", "password": "long-enough"},
            {"email": "short@example.com", "password": "short"},
            {"email": "x" * 95 + "@example.com", "password": "long-enough"},
        ],
    )
    def test_register_invalid_payload(self, anonymous_client: TestClient, payload: dict) -> None:
        response = anonymous_client.post(REGISTER_URL, json=payload)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT

    def test_register_disabled_in_production(
        self,
        anonymous_client: TestClient,
        db_session: Session,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("ENV_NAME", "production")

        response = anonymous_client.post(
            REGISTER_URL, json={"email": "late@example.com", "password": "long-enough"}
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["code"] == "FEATURE_DISABLED"
        assert db_session.execute(select(models.User)).first() is None


class TestLogin:
    def test_login_success(self, anonymous_client: TestClient, test_user: models.User) -> None:
        response = anonymous_client.post(
            LOGIN_URL, data={"username": "LEARNER@example.com", "password": TEST_PASSWORD}
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert verify_access_token(data["access_token"]) == test_user.id
        assert verify_refresh_token(data["refresh_token"]) == test_user.id

    def test_login_wrong_password(
        self, anonymous_client: TestClient, test_user: models.User
    ) -> None:
        response = anonymous_client.post(
            LOGIN_URL, data={"username": test_user.email, "password": "wrong-password"}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_login_unknown_email(self, anonymous_client: TestClient) -> None:
        response = anonymous_client.post(
            LOGIN_URL, data={"username": "nobody@example.com", "password": TEST_PASSWORD}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_login_user_without_password(
        self, anonymous_client: TestClient, other_user: models.User
    ) -> None:
        response = anonymous_client.post(
            LOGIN_URL, data={"username": other_user.email, "password": "anything"}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_logout_clears_cookie(self, anonymous_client: TestClient) -> None:
        response = anonymous_client.post("/api/v1/auth/logout")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"message": "Logged out successfully"}
        assert "refresh_token=" in response.headers["set-cookie"]


class TestCurrentUser:
    def test_invalid_token_is_rejected(self, anonymous_client: TestClient) -> None:
        response = anonymous_client.get(
            "/api/v1/flashcards", headers={"Authorization": "Bearer not-a-jwt"}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_refresh_token_is_not_an_access_token(
        self, anonymous_client: TestClient, test_user: models.User
    ) -> None:
        token = create_refresh_token(test_user.id)

        response = anonymous_client.get(
            "/api/v1/flashcards", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_token_for_deleted_user_is_rejected(
        self, client: TestClient, db_session: Session, test_user: models.User
    ) -> None:
        db_session.delete(test_user)
        db_session.commit()

        response = client.get("/api/v1/flashcards")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
