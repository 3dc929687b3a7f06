"""Authentication API tests."""
import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import create_refresh_token
from app.models.user import User


@pytest.mark.asyncio
async def test_login_success(client: AsyncClient, admin: User):
    """Test successful login."""
    response = await client.post(
        "/api/v1/auth/login",
        json={"email": "admin@sabor.pe", "password": "secret123"}
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["user"]["email"] == "admin@sabor.pe"
    assert data["user"]["tenantId"] == admin.tenant_id
    assert data["user"]["lastLogin"] is not None
    assert "accessToken" in data["tokens"]
    assert "refreshToken" in data["tokens"]


@pytest.mark.asyncio
async def test_login_email_is_case_insensitive(client: AsyncClient, admin: User):
    response = await client.post(
        "/api/v1/auth/login",
        json={"email": "Admin@Sabor.pe", "password": "secret123"}
    )
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_login_invalid_password(client: AsyncClient, admin: User):
    """Test login with invalid password."""
    response = await client.post(
        "/api/v1/auth/login",
        json={"email": "admin@sabor.pe", "password": "wrongpassword"}
    )

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid email or password"


@pytest.mark.asyncio
async def test_login_user_not_found(client: AsyncClient):
    """Test login with non-existent user."""
    response = await client.post(
        "/api/v1/auth/login",
        json={"email": "nadie@sabor.pe", "password": "password"}
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_login_inactive_user(client: AsyncClient, db_session: AsyncSession, admin: User):
    admin.is_active = False
    await db_session.commit()

    response = await client.post(
        "/api/v1/auth/login",
        json={"email": "admin@sabor.pe", "password": "secret123"}
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_get_me_authenticated(client: AsyncClient, admin_headers: dict):
    """Test getting current user info when authenticated."""
    response = await client.get("/api/v1/auth/me", headers=admin_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["email"] == "admin@sabor.pe"
    assert data["role"] == "ADMIN"


@pytest.mark.asyncio
async def test_get_me_unauthenticated(client: AsyncClient):
    """Test getting current user info without authentication."""
    response = await client.get("/api/v1/auth/me")

    assert response.status_code == 401
    assert response.json()["success"] is False


@pytest.mark.asyncio
async def test_get_me_with_garbage_token(client: AsyncClient):
    response = await client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_refresh_token(client: AsyncClient, admin: User):
    """Test token refresh."""
    # First login to get tokens
    login_response = await client.post(
        "/api/v1/auth/login",
        json={"email": "admin@sabor.pe", "password": "secret123"}
    )
    refresh_token = login_response.json()["data"]["tokens"]["refreshToken"]

    # Refresh the token
    response = await client.post(
        "/api/v1/auth/refresh",
        json={"refreshToken": refresh_token}
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert "accessToken" in data
    assert "refreshToken" in data


@pytest.mark.asyncio
async def test_refresh_token_cannot_authenticate(client: AsyncClient, admin: User):
    token = create_refresh_token(admin.id, admin.email, admin.role.value, admin.tenant_id)
    response = await client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
