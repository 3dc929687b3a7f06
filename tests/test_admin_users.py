"""Tenant user management tests."""
import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User

from conftest import make_order


@pytest.mark.asyncio
async def test_list_users_is_tenant_scoped(client: AsyncClient, admin, manager, other_admin, admin_headers):
    response = await client.get("/api/v1/admin/users", headers=admin_headers)

    assert response.status_code == 200
    emails = sorted(u["email"] for u in response.json()["data"])
    assert emails == ["admin@sabor.pe", "caja@sabor.pe"]


@pytest.mark.asyncio
async def test_create_user_defaults_to_orders_manager(client: AsyncClient, tenant, admin_headers):
    response = await client.post(
        "/api/v1/admin/users",
        headers=admin_headers,
        json={"email": "Mozo@Sabor.pe", "name": "Mozo Uno", "password": "secret123"},
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["role"] == "ORDERS_MANAGER"
    assert data["email"] == "mozo@sabor.pe"
    assert data["tenantId"] == tenant.id

    # the new user can sign in and reach the order board
    login = await client.post("/api/v1/auth/login", json={"email": "mozo@sabor.pe", "password": "secret123"})
    token = login.json()["data"]["tokens"]["accessToken"]
    response = await client.get("/api/v1/orders", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_create_user_role_is_restricted(client: AsyncClient, tenant, admin_headers):
    response = await client.post(
        "/api/v1/admin/users",
        headers=admin_headers,
        json={"email": "jefe@sabor.pe", "name": "Jefe", "password": "secret123", "role": "SUPERADMIN"},
    )
    assert response.status_code == 400

    response = await client.post(
        "/api/v1/admin/users",
        headers=admin_headers,
        json={"email": "jefe@sabor.pe", "name": "Jefe", "password": "secret123", "role": "ADMIN"},
    )
    assert response.status_code == 201
    assert response.json()["data"]["role"] == "ADMIN"


@pytest.mark.asyncio
async def test_create_user_duplicate_email(client: AsyncClient, other_admin, admin_headers):
    response = await client.post(
        "/api/v1/admin/users",
        headers=admin_headers,
        json={"email": "admin@otro.pe", "name": "Copia", "password": "secret123"},
    )
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_manager_cannot_manage_users(client: AsyncClient, manager_headers):
    response = await client.get("/api/v1/admin/users", headers=manager_headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_update_user(client: AsyncClient, manager, other_admin, admin_headers):
    response = await client.put(
        f"/api/v1/admin/users/{manager.id}",
        headers=admin_headers,
        json={"name": "Caja Principal", "role": "ADMIN"},
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["name"] == "Caja Principal"
    assert data["role"] == "ADMIN"

    response = await client.put(
        f"/api/v1/admin/users/{manager.id}", headers=admin_headers, json={"role": "SUPERADMIN"}
    )
    assert response.status_code == 400

    response = await client.put(
        f"/api/v1/admin/users/{other_admin.id}", headers=admin_headers, json={"name": "Intruso"}
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_user(client: AsyncClient, db_session: AsyncSession, admin, manager, admin_headers):
    response = await client.delete(f"/api/v1/admin/users/{admin.id}", headers=admin_headers)
    assert response.status_code == 400

    response = await client.delete(f"/api/v1/admin/users/{manager.id}", headers=admin_headers)
    assert response.status_code == 200

    result = await db_session.execute(select(User.id).where(User.id == manager.id))
    assert result.scalar_one_or_none() is None


@pytest.mark.asyncio
async def test_tenant_overview(client: AsyncClient, db_session: AsyncSession, tenant, other_tenant, admin, admin_headers):
    await make_order(db_session, tenant, "2505230001")
    await make_order(db_session, tenant, "2505230002")
    await make_order(db_session, other_tenant, "2505230001")

    response = await client.get("/api/v1/admin/stats", headers=admin_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["orders"] == 2
    assert data["users"] == 1
    assert data["dishes"] == 0
    assert len(data["recentOrders"]) == 2
