"""
Food Ordering Backend — Auth Endpoint Tests
=============================================

What:  HTTP contract of /api/register, /api/login and /api/me.
How:   HTTPX AsyncClient against the app with an in-memory database.
"""

import logging
from uuid import uuid4

import pytest

from food_ordering.security import create_access_token


async def register(client, payload):
    response = await client.post("/api/register", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def login_token(client, email="a@x.com", password="pw1"):
    response = await client.post("/api/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]


class TestRegisterEndpoint:

    @pytest.mark.asyncio
    async def test_register_success(self, test_client, al_payload):
        response = await test_client.post("/api/register", json=al_payload)

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "User registered successfully!"
        assert body["email"] == "a@x.com"
        assert body["username"] == "al"
        assert body["userId"]
        assert "password" not in body
        assert "passwordHash" not in body

    @pytest.mark.asyncio
    async def test_repeat_registration_conflicts(self, test_client, al_payload):
        await register(test_client, al_payload)

        response = await test_client.post("/api/register", json=al_payload)
        assert response.status_code == 409
        assert response.json()["error"] == "conflict"

    @pytest.mark.asyncio
    async def test_same_username_different_email_conflicts(self, test_client, al_payload):
        await register(test_client, al_payload)

        al_payload["email"] = "other@x.com"
        response = await test_client.post("/api/register", json=al_payload)
        assert response.status_code == 409

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", ["username", "email", "password"])
    async def test_missing_field(self, test_client, al_payload, missing):
        del al_payload[missing]
        response = await test_client.post("/api/register", json=al_payload)

        assert response.status_code == 400
        assert response.json()["message"] == "All fields are required."

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field,value", [("username", "u" * 65), ("email", "e" * 312 + "@x.com" + "m" * 3)])
    async def test_over_long_field(self, test_client, al_payload, field, value):
        al_payload[field] = value
        response = await test_client.post("/api/register", json=al_payload)

        assert response.status_code == 400
        assert field in response.json()["message"]

    @pytest.mark.asyncio
    async def test_username_at_column_size_accepted(self, test_client, al_payload):
        al_payload["username"] = "u" * 64
        body = await register(test_client, al_payload)
        assert body["username"] == "u" * 64

    @pytest.mark.asyncio
    async def test_whitespace_password_rejected(self, test_client, al_payload):
        al_payload["password"] = "   "
        response = await test_client.post("/api/register", json=al_payload)

        assert response.status_code == 400
        assert response.json()["message"] == "All fields are required."

    @pytest.mark.asyncio
    async def test_error_body_never_echoes_password(self, test_client):
        response = await test_client.post(
            "/api/register",
            json={"username": "al", "email": "a@x.com", "password": ["s3cret-value"]},
        )
        assert response.status_code == 400
        assert "s3cret-value" not in response.text


class TestLoginEndpoint:

    @pytest.mark.asyncio
    async def test_login_success(self, test_client, al_payload):
        registered = await register(test_client, al_payload)

        response = await test_client.post("/api/login", json={"email": "a@x.com", "password": "pw1"})

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Logged in successfully!"
        assert body["username"] == "al"
        assert body["userId"] == registered["userId"]
        assert body["role"] == "user"
        assert body["tokenType"] == "bearer"
        assert body["token"]
        assert "pw1" not in response.text
        assert "$2b$" not in response.text

    @pytest.mark.asyncio
    async def test_wrong_password(self, test_client, al_payload):
        await register(test_client, al_payload)

        response = await test_client.post("/api/login", json={"email": "a@x.com", "password": "nope"})

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        assert "token" not in response.json()

    @pytest.mark.asyncio
    async def test_unknown_email_looks_like_wrong_password(self, test_client, al_payload):
        await register(test_client, al_payload)

        wrong_password = await test_client.post("/api/login", json={"email": "a@x.com", "password": "nope"})
        unknown_email = await test_client.post("/api/login", json={"email": "b@x.com", "password": "pw1"})

        assert unknown_email.status_code == wrong_password.status_code == 401
        assert unknown_email.json()["message"] == wrong_password.json()["message"]
        assert unknown_email.json()["error"] == wrong_password.json()["error"]

    @pytest.mark.asyncio
    async def test_over_long_password_answers_alike_for_any_email(self, test_client, al_payload):
        await register(test_client, al_payload)
        password = "p" * 80

        known = await test_client.post("/api/login", json={"email": "a@x.com", "password": password})
        unknown = await test_client.post("/api/login", json={"email": "b@x.com", "password": password})

        assert known.status_code == unknown.status_code == 400
        assert known.json()["message"] == unknown.json()["message"]

    @pytest.mark.asyncio
    async def test_missing_password(self, test_client):
        response = await test_client.post("/api/login", json={"email": "a@x.com"})
        assert response.status_code == 400
        assert response.json()["message"] == "Please enter email and password."


class TestMeEndpoint:

    @pytest.mark.asyncio
    async def test_profile_with_valid_token(self, test_client, al_payload):
        await register(test_client, al_payload)
        token = await login_token(test_client)

        response = await test_client.get("/api/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        body = response.json()
        assert body["username"] == "al"
        assert body["email"] == "a@x.com"
        assert body["role"] == "user"
        assert "createdAt" in body

    @pytest.mark.asyncio
    async def test_missing_header(self, test_client):
        response = await test_client.get("/api/me")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_garbage_token(self, test_client):
        response = await test_client.get("/api/me", headers={"Authorization": "Bearer garbage"})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_token_for_unknown_user(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="food_ordering.routes.auth")
        subject = str(uuid4())
        token = create_access_token(subject)

        response = await test_client.get("/api/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert any(subject in record.getMessage() for record in caplog.records)

    @pytest.mark.asyncio
    async def test_token_with_non_uuid_subject(self, test_client):
        token = create_access_token("not-a-user-id")
        response = await test_client.get("/api/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
