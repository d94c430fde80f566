"""Integration tests for authentication API endpoints."""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from finance_dashboard.core.security import get_token_service
from finance_dashboard.models.user import User
from finance_dashboard.repositories.user import UserRepository


class TestUserRegistration:
    """Test user registration endpoint."""

    @pytest.mark.asyncio
    async def test_register_success(self, client: AsyncClient, db_session: AsyncSession):
        """Registration returns the user together with a token pair."""
        response = await client.post(
            "/api/v1/auth/register",
            json={"email": "newuser@example.com", "password": "SecurePass123!"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["access_token"]
        assert data["refresh_token"]
        assert data["user"]["email"] == "newuser@example.com"
        assert data["user"]["global_currency"] == "RUB"
        assert "password" not in data["user"]
        assert "password_hash" not in data["user"]

        repo = UserRepository(db_session)
        user = await repo.get_by_email("newuser@example.com")
        assert user is not None
        assert user.password_hash != "SecurePass123!"

    @pytest.mark.asyncio
    async def test_register_duplicate_email(self, client: AsyncClient, test_user: User):
        response = await client.post(
            "/api/v1/auth/register",
            json={"email": test_user.email, "password": "AnotherPass123!"},
        )

        assert response.status_code == 409
        assert response.json()["error_code"] == "AUTH_001"

    @pytest.mark.asyncio
    async def test_register_invalid_email(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/auth/register",
            json={"email": "not-an-email", "password": "SecurePass123!"},
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "VAL_001"

    @pytest.mark.asyncio
    async def test_register_short_password(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/auth/register",
            json={"email": "short@example.com", "password": "short"},
        )

        assert response.status_code == 400


class TestUserLogin:
    """Test password login endpoint."""

    @pytest.mark.asyncio
    async def test_login_success(self, client: AsyncClient, test_user: User):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "testuser@example.com", "password": "password123"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["user"]["id"] == str(test_user.id)
        claims = get_token_service().validate_access_token(data["access_token"])
        assert claims.user_id == str(test_user.id)
        assert claims.email == "testuser@example.com"

    @pytest.mark.asyncio
    async def test_login_failures_look_the_same(self, client: AsyncClient, test_user: User):
        """Wrong password and unknown email produce identical responses."""
        wrong_password = await client.post(
            "/api/v1/auth/login",
            json={"email": "testuser@example.com", "password": "WrongPassword"},
        )
        unknown_user = await client.post(
            "/api/v1/auth/login",
            json={"email": "nobody@example.com", "password": "password123"},
        )

        assert wrong_password.status_code == unknown_user.status_code == 401
        assert wrong_password.json() == unknown_user.json()
        assert wrong_password.json()["error_code"] == "AUTH_002"


class TestGoogleLogin:
    """Test federated login endpoint."""

    @pytest.mark.asyncio
    async def test_google_login_creates_then_reuses(self, client: AsyncClient):
        payload = {"google_id": "google-42", "email": "fed@example.com"}

        first = await client.post("/api/v1/auth/google", json=payload)
        second = await client.post("/api/v1/auth/google", json=payload)

        assert first.status_code == second.status_code == 200
        assert first.json()["user"]["id"] == second.json()["user"]["id"]

    @pytest.mark.asyncio
    async def test_google_login_links_existing_account(self, client: AsyncClient, test_user: User):
        user_id = str(test_user.id)

        response = await client.post(
            "/api/v1/auth/google",
            json={"google_id": "google-7", "email": "testuser@example.com"},
        )

        assert response.status_code == 200
        assert response.json()["user"]["id"] == user_id

    @pytest.mark.asyncio
    async def test_google_login_relinks_to_new_google_id(self, client: AsyncClient):
        first = await client.post(
            "/api/v1/auth/google", json={"google_id": "google-1", "email": "x@example.com"}
        )

        response = await client.post(
            "/api/v1/auth/google",
            json={"google_id": "google-2", "email": "x@example.com"},
        )
        again = await client.post(
            "/api/v1/auth/google",
            json={"google_id": "google-2", "email": "x@example.com"},
        )

        assert response.status_code == 200
        assert response.json()["user"]["id"] == first.json()["user"]["id"]
        assert again.json()["user"]["id"] == first.json()["user"]["id"]


class TestTokenRefresh:
    """Test token refresh endpoint."""

    @pytest.mark.asyncio
    async def test_refresh_token_success(self, client: AsyncClient, test_user: User):
        login = await client.post(
            "/api/v1/auth/login",
            json={"email": "testuser@example.com", "password": "password123"},
        )

        response = await client.post(
            "/api/v1/auth/refresh",
            json={"refresh_token": login.json()["refresh_token"]},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["access_token"]
        assert data["refresh_token"]
        assert data["token_type"] == "bearer"

    @pytest.mark.asyncio
    async def test_refresh_token_malformed(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/auth/refresh",
            json={"refresh_token": "invalid.token.here"},
        )

        assert response.status_code == 401
        assert response.json()["error_code"] == "TOKEN_003"

    @pytest.mark.asyncio
    async def test_refresh_token_using_access_token(self, client: AsyncClient, test_user: User):
        access_token = get_token_service().issue_access_token(str(test_user.id), test_user.email)

        response = await client.post("/api/v1/auth/refresh", json={"refresh_token": access_token})

        assert response.status_code == 401
        assert response.json()["error_code"] == "TOKEN_001"


class TestCurrentUser:
    """Test the authenticated profile endpoint."""

    @pytest.mark.asyncio
    async def test_get_me_with_valid_token(
        self, client: AsyncClient, test_user: User, auth_headers: dict
    ):
        response = await client.get("/api/v1/auth/me", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["email"] == test_user.email
        assert data["id"] == str(test_user.id)

    @pytest.mark.asyncio
    async def test_get_me_without_token(self, client: AsyncClient):
        response = await client.get("/api/v1/auth/me")

        # HTTPBearer answers 403 on older FastAPI releases and 401 on newer ones.
        assert response.status_code in (401, 403)

    @pytest.mark.asyncio
    async def test_get_me_with_invalid_token(self, client: AsyncClient):
        response = await client.get(
            "/api/v1/auth/me", headers={"Authorization": "Bearer invalid.token.here"}
        )

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_get_me_with_refresh_token(self, client: AsyncClient, test_user: User):
        refresh_token = get_token_service().issue_refresh_token(str(test_user.id))

        response = await client.get(
            "/api/v1/auth/me", headers={"Authorization": f"Bearer {refresh_token}"}
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_logout(self, client: AsyncClient):
        response = await client.post("/api/v1/auth/logout")

        assert response.status_code == 200
        assert response.json()["message"] == "logged out successfully"
