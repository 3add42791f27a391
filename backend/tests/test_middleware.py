"""
Food Ordering Backend — Middleware and Health Tests
=====================================================

What:  Request IDs, auth rate limiting, /health and the root banner.
How:   HTTPX AsyncClient; settings patched with monkeypatch where a test
       needs a tighter limit.
"""

import pytest

from food_ordering.config import settings


class TestHealth:

    @pytest.mark.asyncio
    async def test_root_banner(self, test_client):
        response = await test_client.get("/")
        assert response.status_code == 200
        assert response.text == "Food Ordering Backend API is running!"

    @pytest.mark.asyncio
    async def test_healthy(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert "uptimeSeconds" in body

    @pytest.mark.asyncio
    async def test_unhealthy_without_database(self, app, test_client):
        app.state.database = None

        response = await test_client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"


class TestRequestId:

    @pytest.mark.asyncio
    async def test_generated_when_absent(self, test_client):
        response = await test_client.get("/api/all-menus")
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_client_id_is_echoed(self, test_client):
        response = await test_client.get("/api/all-menus", headers={"X-Request-ID": "abc-123"})
        assert response.headers["X-Request-ID"] == "abc-123"

    @pytest.mark.asyncio
    async def test_error_body_carries_request_id(self, test_client):
        response = await test_client.get("/api/menus/nope", headers={"X-Request-ID": "req-404"})

        assert response.status_code == 404
        assert response.json()["requestId"] == "req-404"


class TestAuthRateLimit:

    @pytest.mark.asyncio
    async def test_login_limited_after_threshold(self, test_client, monkeypatch):
        monkeypatch.setattr(settings, "auth_rate_limit_requests", 2)
        credentials = {"email": "a@x.com", "password": "pw1"}

        for _ in range(2):
            response = await test_client.post("/api/login", json=credentials)
            assert response.status_code == 401

        response = await test_client.post("/api/login", json=credentials)
        assert response.status_code == 429
        assert response.json()["error"] == "rate_limit_exceeded"
        assert int(response.headers["Retry-After"]) >= 1

    @pytest.mark.asyncio
    async def test_register_limited(self, test_client, monkeypatch):
        monkeypatch.setattr(settings, "auth_rate_limit_requests", 1)

        first = await test_client.post("/api/register", json={})
        assert first.status_code == 400

        second = await test_client.post("/api/register", json={})
        assert second.status_code == 429

    @pytest.mark.asyncio
    async def test_menu_routes_not_limited(self, test_client, monkeypatch):
        monkeypatch.setattr(settings, "auth_rate_limit_requests", 1)

        for _ in range(5):
            response = await test_client.get("/api/all-menus")
            assert response.status_code == 200
