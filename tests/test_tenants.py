"""Tenant administration API tests."""
from decimal import Decimal

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.enums import LogAction, OrderStatus, TenantStatus, UserRole
from app.models.category import Category
from app.models.log import Log
from app.models.order import Order
from app.models.tenant import Tenant
from app.models.user import User

from conftest import make_order, make_tenant


def tenant_payload(**overrides) -> dict:
    payload = {
        "name": "La Brasa",
        "subdomain": "brasa",
        "email": "hola@labrasa.pe",
        "plan": "premium",
        "adminName": "Carlos Rojas",
        "adminEmail": "carlos@labrasa.pe",
        "adminPassword": "brasa123",
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_get_tenant_by_domain_is_public(client: AsyncClient, tenant):
    response = await client.get("/api/v1/tenants/domain/sabor.james.pe")
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["id"] == tenant.id
    assert data["settings"] == {"currency": "PEN"}


@pytest.mark.asyncio
async def test_get_tenant_by_domain_suspended(client: AsyncClient, db_session: AsyncSession):
    await make_tenant(db_session, "cerrado", status=TenantStatus.SUSPENDED)
    response = await client.get("/api/v1/tenants/domain/cerrado.james.pe")
    assert response.status_code == 403
    assert response.json()["tenant"]["slug"] == "cerrado"

    response = await client.get("/api/v1/tenants/domain/nadie.james.pe")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_create_tenant(client: AsyncClient, db_session: AsyncSession, superadmin_headers):
    response = await client.post("/api/v1/tenants", headers=superadmin_headers, json=tenant_payload())

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["slug"] == "brasa"
    assert data["domain"] == "brasa.james.pe"
    assert data["accessUrl"] == "https://brasa.james.pe"
    assert data["adminEmail"] == "carlos@labrasa.pe"

    result = await db_session.execute(select(User).where(User.email == "carlos@labrasa.pe"))
    admin = result.scalar_one()
    assert admin.role == UserRole.ADMIN
    assert admin.tenant_id == data["id"]

    result = await db_session.execute(select(Log).where(Log.action == LogAction.TENANT_CREATED))
    assert result.scalar_one().tenant_id == data["id"]


@pytest.mark.asyncio
async def test_create_tenant_conflicts(client: AsyncClient, tenant, admin, superadmin_headers):
    response = await client.post(
        "/api/v1/tenants", headers=superadmin_headers, json=tenant_payload(subdomain="sabor")
    )
    assert response.status_code == 409

    response = await client.post(
        "/api/v1/tenants", headers=superadmin_headers, json=tenant_payload(adminEmail="admin@sabor.pe")
    )
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_create_tenant_requires_superadmin(client: AsyncClient, admin_headers):
    response = await client.post("/api/v1/tenants", headers=admin_headers, json=tenant_payload())
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_list_tenants(client: AsyncClient, tenant, other_tenant, superadmin_headers):
    response = await client.get("/api/v1/tenants", headers=superadmin_headers)
    assert response.status_code == 200
    assert response.json()["pagination"]["total"] == 2

    response = await client.get("/api/v1/tenants", headers=superadmin_headers, params={"search": "otro"})
    assert [t["slug"] for t in response.json()["data"]] == ["otro"]


@pytest.mark.asyncio
async def test_admin_updates_own_tenant(client: AsyncClient, tenant, other_tenant, admin_headers):
    response = await client.patch(
        f"/api/v1/tenants/{tenant.id}", headers=admin_headers, json={"name": "Sabor Criollo"}
    )
    assert response.status_code == 200
    assert response.json()["data"]["name"] == "Sabor Criollo"

    response = await client.patch(
        f"/api/v1/tenants/{other_tenant.id}", headers=admin_headers, json={"name": "Ajeno"}
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_custom_domain_must_be_unique(client: AsyncClient, db_session: AsyncSession, tenant, superadmin_headers):
    await make_tenant(db_session, "brasa", custom_domain="www.labrasa.com")
    response = await client.patch(
        f"/api/v1/tenants/{tenant.id}",
        headers=superadmin_headers,
        json={"customDomain": "WWW.labrasa.com"},
    )
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_settings_are_merged(client: AsyncClient, tenant, admin_headers):
    response = await client.patch(
        f"/api/v1/tenants/{tenant.id}/settings", headers=admin_headers, json={"whatsapp": "+51999999999"}
    )
    assert response.status_code == 200
    assert response.json()["data"]["settings"] == {"currency": "PEN", "whatsapp": "+51999999999"}

    response = await client.put(
        f"/api/v1/tenants/{tenant.id}/settings", headers=admin_headers, json={"currency": "USD"}
    )
    assert response.json()["data"]["settings"] == {"currency": "USD", "whatsapp": "+51999999999"}


@pytest.mark.asyncio
async def test_suspend_and_activate(client: AsyncClient, db_session: AsyncSession, tenant, superadmin_headers):
    response = await client.patch(f"/api/v1/tenants/{tenant.id}/suspend", headers=superadmin_headers)
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "suspended"

    response = await client.get("/api/v1/tenants/domain/sabor.james.pe")
    assert response.status_code == 403

    response = await client.patch(f"/api/v1/tenants/{tenant.id}/activate", headers=superadmin_headers)
    assert response.json()["data"]["status"] == "active"

    result = await db_session.execute(
        select(Log.action).where(Log.tenant_id == tenant.id).order_by(Log.created_at)
    )
    actions = set(result.scalars().all())
    assert {LogAction.TENANT_SUSPENDED, LogAction.TENANT_ACTIVATED} <= actions


@pytest.mark.asyncio
async def test_delete_tenant_cascades(
    client: AsyncClient, db_session: AsyncSession, tenant, other_tenant, admin, superadmin_headers
):
    db_session.add(Category(tenant_id=tenant.id, name="Entradas", slug="entradas"))
    await db_session.commit()
    await make_order(db_session, tenant, "2505230001")

    response = await client.delete(f"/api/v1/tenants/{tenant.id}", headers=superadmin_headers)
    assert response.status_code == 200

    for model in (Tenant, Order, Category):
        column = model.id if model is Tenant else model.tenant_id
        result = await db_session.execute(select(model).where(column == tenant.id))
        assert result.scalars().all() == []

    result = await db_session.execute(select(User).where(User.email == "admin@sabor.pe"))
    assert result.scalar_one_or_none() is None

    result = await db_session.execute(select(Log).where(Log.action == LogAction.TENANT_DELETED))
    log = result.scalar_one()
    assert log.tenant_id is None
    assert log.details["tenantId"] == tenant.id


@pytest.mark.asyncio
async def test_last_tenant_cannot_be_deleted(client: AsyncClient, tenant, superadmin_headers):
    response = await client.delete(f"/api/v1/tenants/{tenant.id}", headers=superadmin_headers)
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_tenant_stats(client: AsyncClient, db_session: AsyncSession, tenant, admin, superadmin_headers):
    await make_order(db_session, tenant, "2505230001", total="12.50")
    await make_order(db_session, tenant, "2505230002", total="7.50", status=OrderStatus.DELIVERED)

    response = await client.get(f"/api/v1/tenants/{tenant.id}/stats", headers=superadmin_headers)
    assert response.status_code == 200
    stats = response.json()["data"]
    assert stats["totalOrders"] == 2
    assert Decimal(stats["totalRevenue"]) == Decimal("20.00")
    assert stats["activeUsers"] == 1
    assert stats["ordersThisMonth"] == 2
    assert Decimal(stats["revenueThisMonth"]) == Decimal("20.00")
