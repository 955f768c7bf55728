"""Tests for Auth API endpoints."""

import pytest

from tests.constants import ADMIN_ID, OWNER_ID


class TestAuth:
    @pytest.mark.asyncio
    async def test_me_no_auth(self, client):
        r = await client.get("/api/auth/me")
        assert r.status_code == 401

    @pytest.mark.asyncio
    async def test_me_with_auth(self, client, owner_headers):
        r = await client.get("/api/auth/me", headers=owner_headers)
        assert r.status_code == 200
        data = r.json()
        assert data["user_id"] == OWNER_ID
        assert data["is_admin"] is False

    @pytest.mark.asyncio
    async def test_me_admin_flag(self, client, admin_headers):
        r = await client.get("/api/auth/me", headers=admin_headers)
        assert r.json()["user_id"] == ADMIN_ID
        assert r.json()["is_admin"] is True

    @pytest.mark.asyncio
    async def test_me_invalid_token(self, client):
        r = await client.get("/api/auth/me", headers={"Authorization": "Bearer invalid.token.here"})
        assert r.status_code == 401


class TestHealthCheck:
    @pytest.mark.asyncio
    async def test_health(self, client):
        r = await client.get("/api/health")
        assert r.status_code == 200
        assert r.json()["status"] == "ok"
