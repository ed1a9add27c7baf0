"""
Authentication Tests
====================

Registration, login, token checks and the role / onboarding updates.
"""

import pytest


def _registration(email: str, role: str = "organization") -> dict:
    return {
        "email": email,
        "password": "secret123",
        "firstName": "Ada",
        "lastName": "Lovelace",
        "role": role,
    }


# =============================================================================
# Registration
# =============================================================================

class TestRegister:

    @pytest.mark.asyncio
    async def test_register_returns_created_user(self, client):
        response = await client.post("/api/register", json=_registration("ada@acme.com"))

        assert response.status_code == 201
        body = response.json()
        assert body["email"] == "ada@acme.com"
        assert body["firstName"] == "Ada"
        assert body["role"] == "organization"
        assert body["onboardingCompleted"] is False
        assert "hashedPassword" not in body
        assert "password" not in body

    @pytest.mark.asyncio
    async def test_duplicate_email_is_case_insensitive(self, client):
        await client.post("/api/register", json=_registration("ada@acme.com"))

        response = await client.post("/api/register", json=_registration("ADA@Acme.com"))

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_short_password_is_rejected(self, client):
        payload = _registration("ada@acme.com")
        payload["password"] = "123"

        response = await client.post("/api/register", json=payload)

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_unknown_role_is_rejected(self, client):
        response = await client.post(
            "/api/register", json=_registration("ada@acme.com", role="admin")
        )

        assert response.status_code == 422


# =============================================================================
# Login
# =============================================================================

class TestLogin:

    @pytest.mark.asyncio
    async def test_login_returns_bearer_token(self, client):
        await client.post("/api/register", json=_registration("ada@acme.com"))

        response = await client.post(
            "/api/login", json={"email": "Ada@acme.com", "password": "secret123"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["tokenType"] == "bearer"
        assert body["accessToken"]
        assert body["expiresIn"] > 0
        assert body["user"]["email"] == "ada@acme.com"

    @pytest.mark.asyncio
    async def test_form_login(self, client):
        await client.post("/api/register", json=_registration("ada@acme.com"))

        response = await client.post(
            "/api/token", data={"username": "ada@acme.com", "password": "secret123"}
        )

        assert response.status_code == 200
        assert response.json()["accessToken"]

    @pytest.mark.asyncio
    async def test_wrong_password_is_unauthorized(self, client):
        await client.post("/api/register", json=_registration("ada@acme.com"))

        response = await client.post(
            "/api/login", json={"email": "ada@acme.com", "password": "wrong-password"}
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_unknown_email_is_unauthorized(self, client):
        response = await client.post(
            "/api/login", json={"email": "nobody@acme.com", "password": "secret123"}
        )

        assert response.status_code == 401


# =============================================================================
# Authenticated user
# =============================================================================

class TestCurrentUser:

    @pytest.mark.asyncio
    async def test_missing_token_is_unauthorized(self, client):
        response = await client.get("/api/auth/user")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_garbage_token_is_unauthorized(self, client):
        response = await client.get(
            "/api/auth/user", headers={"Authorization": "Bearer not-a-jwt"}
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_returns_authenticated_user(self, client, signup):
        headers = await signup("ada@acme.com")

        response = await client.get("/api/auth/user", headers=headers)

        assert response.status_code == 200
        assert response.json()["email"] == "ada@acme.com"

    @pytest.mark.asyncio
    async def test_role_update(self, client, signup):
        headers = await signup("ada@acme.com")

        response = await client.patch(
            "/api/user/role", json={"role": "consultant"}, headers=headers
        )

        assert response.status_code == 200
        assert response.json()["role"] == "consultant"

    @pytest.mark.asyncio
    async def test_onboarding_completed(self, client, signup):
        headers = await signup("ada@acme.com")

        response = await client.patch("/api/user/onboarding", headers=headers)

        assert response.status_code == 200
        assert response.json()["onboardingCompleted"] is True
