# tests/v1/test_dependencies.py
"""Tests for API dependencies module."""

from datetime import UTC, datetime, timedelta

import pytest
from fastapi import HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials
from jose import jwt

from middle_ground.api.v1.dependencies import get_current_username
from middle_ground.core.security import create_access_token
from middle_ground.core.settings import settings


def _credentials(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


class TestGetCurrentUsername:
    """Test the get_current_username dependency function."""

    def test_valid_token(self):
        token = create_access_token("alice")

        assert get_current_username(_credentials(token)) == "alice"

    def test_missing_credentials(self):
        with pytest.raises(HTTPException) as exc_info:
            get_current_username(None)

        assert exc_info.value.status_code == status.HTTP_401_UNAUTHORIZED

    def test_expired_token(self):
        token = create_access_token("alice", expires_minutes=-1)

        with pytest.raises(HTTPException) as exc_info:
            get_current_username(_credentials(token))

        assert exc_info.value.status_code == status.HTTP_401_UNAUTHORIZED
        assert exc_info.value.detail == "Could not validate credentials"

    def test_wrong_secret(self):
        token = jwt.encode(
            {"sub": "alice", "exp": datetime.now(UTC) + timedelta(minutes=5)},
            "not-the-secret",
            algorithm=settings.jwt_algorithm,
        )

        with pytest.raises(HTTPException):
            get_current_username(_credentials(token))

    def test_token_without_subject(self):
        token = jwt.encode(
            {"exp": datetime.now(UTC) + timedelta(minutes=5)},
            settings.secret_key,
            algorithm=settings.jwt_algorithm,
        )

        with pytest.raises(HTTPException):
            get_current_username(_credentials(token))


class TestBearerHeaderEdgeCases:
    """Malformed Authorization headers never reach the endpoints."""

    def test_without_bearer_prefix(self, client):
        response = client.get("/api/v1/auth/profile", headers={"Authorization": "Token123"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_with_empty_token(self, client):
        response = client.get("/api/v1/auth/profile", headers={"Authorization": "Bearer "})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_token_for_deleted_user(self, client):
        headers = {"Authorization": f"Bearer {create_access_token('ghost')}"}

        response = client.get("/api/v1/auth/profile", headers=headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND
