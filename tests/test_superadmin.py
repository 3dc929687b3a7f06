"""Superadmin dashboard and platform stats tests."""
from datetime import datetime, timezone
from decimal import Decimal

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.enums import LogAction, LogLevel, TenantStatus
from app.models.log import Log

from conftest import FIXED_NOW, make_order, make_tenant


@pytest.mark.asyncio
async def test_dashboard(
    client: AsyncClient, db_session: AsyncSession, tenant, other_tenant, admin, superadmin, superadmin_headers
):
    other_tenant.status = TenantStatus.SUSPENDED
    other_tenant.created_at = datetime(2025, 4, 10, tzinfo=timezone.utc)
    db_session.add(Log(level=LogLevel.WARNING, action=LogAction.TENANT_SUSPENDED, message="suspended", created_at=FIXED_NOW))
    await db_session.commit()

    response = await client.get("/api/v1/superadmin/dashboard", headers=superadmin_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["tenantStats"] == {
        "totalTenants": 2,
        "activeTenants": 1,
        "suspendedTenants": 1,
        "inactiveTenants": 0,
        "newTenantsThisMonth": 1,
    }
    assert data["logStats"]["warningLogs"] == 1
    assert len(data["recentTenants"]) == 2
    assert [log["action"] for log in data["recentLogs"]] == ["tenant_suspended"]
    assert data["totalUsers"] == 2


@pytest.mark.asyncio
async def test_platform_stats(
    client: AsyncClient, db_session: AsyncSession, tenant, admin, manager, superadmin, superadmin_headers
):
    await make_tenant(db_session, "cerrado", status=TenantStatus.INACTIVE)
    await make_order(db_session, tenant, "2505230001", total="20.50")
    await make_order(db_session, tenant, "2504300001", total="10.00", created_at=datetime(2025, 4, 30, 20, tzinfo=timezone.utc))

    response = await client.get("/api/v1/superadmin/stats", headers=superadmin_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["tenantStats"]["inactiveTenants"] == 1
    assert data["userStats"] == {"total": 3, "superAdmins": 1, "admins": 1, "ordersManagers": 1}
    assert data["orderStats"]["total"] == 2
    assert data["orderStats"]["thisMonth"] == 1
    assert Decimal(data["orderStats"]["totalRevenue"]) == Decimal("30.50")
    assert data["dishStats"] == {"total": 0, "active": 0, "inactive": 0}


@pytest.mark.asyncio
async def test_superadmin_endpoints_require_superadmin(client: AsyncClient, admin_headers):
    response = await client.get("/api/v1/superadmin/dashboard", headers=admin_headers)
    assert response.status_code == 403

    response = await client.get("/api/v1/superadmin/stats")
    assert response.status_code == 401
