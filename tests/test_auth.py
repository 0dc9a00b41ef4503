"""
Authentication and role tests for Launchboard API
"""
from datetime import timedelta

import pytest
from httpx import AsyncClient
from jose import jwt

from launchboard.auth.security import create_access_token, decode_token
from launchboard.core.config import settings


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def profiles(gateway):
    gateway.seed(
        "profiles",
        {"id": "u-admin", "email": "admin@example.com", "role": "admin"},
        {"id": "u-super", "email": "owner@example.com", "role": "super_admin"},
        {"id": "u-plain", "email": "member@example.com", "role": "user"},
    )
    return gateway


class TestTokenVerification:

    def test_round_trip(self):
        payload = decode_token(create_access_token("u-1", email="a@example.com"))
        assert payload["sub"] == "u-1"
        assert payload["aud"] == settings.JWT_AUDIENCE

    async def test_missing_token(self, anonymous_client: AsyncClient):
        response = await anonymous_client.get("/api/v1/me")

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    async def test_garbage_token(self, anonymous_client: AsyncClient):
        response = await anonymous_client.get("/api/v1/me", headers=bearer("not-a-jwt"))
        assert response.status_code == 401

    async def test_expired_token(self, anonymous_client: AsyncClient):
        token = create_access_token("u-admin", expires_delta=timedelta(minutes=-5))

        response = await anonymous_client.get("/api/v1/me", headers=bearer(token))

        assert response.status_code == 401
        assert response.json()["detail"] == "Token has expired"

    async def test_wrong_audience(self, anonymous_client: AsyncClient):
        token = jwt.encode(
            {"sub": "u-admin", "aud": "anon"},
            settings.JWT_SECRET_KEY.get_secret_value(),
            algorithm=settings.ALGORITHM
        )

        response = await anonymous_client.get("/api/v1/me", headers=bearer(token))
        assert response.status_code == 401


class TestSessionUser:

    async def test_me_reads_profile_role(self, anonymous_client: AsyncClient, profiles):
        response = await anonymous_client.get("/api/v1/me", headers=bearer(create_access_token("u-super")))

        assert response.status_code == 200
        data = response.json()
        assert data["role"] == "super_admin"
        assert data["email"] == "owner@example.com"

    async def test_missing_profile_defaults_to_user(self, anonymous_client: AsyncClient, profiles):
        token = create_access_token("u-new", email="new@example.com")

        response = await anonymous_client.get("/api/v1/me", headers=bearer(token))

        assert response.json()["role"] == "user"
        assert response.json()["email"] == "new@example.com"


class TestRoles:

    async def test_plain_user_cannot_open_board(self, anonymous_client: AsyncClient, profiles):
        response = await anonymous_client.get("/api/v1/board", headers=bearer(create_access_token("u-plain")))
        assert response.status_code == 403

    async def test_admin_opens_board(self, anonymous_client: AsyncClient, profiles):
        response = await anonymous_client.get("/api/v1/board", headers=bearer(create_access_token("u-admin")))
        assert response.status_code == 200

    async def test_admin_cannot_delete_phase(self, anonymous_client: AsyncClient, profiles):
        profiles.seed("kanban_phases", {"id": "ph-1", "name": "Launch", "position": 0})

        response = await anonymous_client.delete(
            "/api/v1/phases/ph-1", headers=bearer(create_access_token("u-admin"))
        )
        assert response.status_code == 403

    async def test_super_admin_deletes_phase(self, anonymous_client: AsyncClient, profiles):
        profiles.seed("kanban_phases", {"id": "ph-1", "name": "Launch", "position": 0})

        response = await anonymous_client.delete(
            "/api/v1/phases/ph-1", headers=bearer(create_access_token("u-super"))
        )

        assert response.status_code == 204
        assert profiles.rows("kanban_phases") == []
