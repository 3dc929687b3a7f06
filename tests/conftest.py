"""Test configuration and fixtures."""
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("ENVIRONMENT", "test")

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import AsyncGenerator, Optional

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.core.database import Base, configure_sqlite, get_db
from app.core.dependencies import get_clock
from app.core.enums import OrderStatus, TenantPlan, TenantStatus, UserRole
from app.core.security import get_password_hash, create_access_token
from app.models.order import Order
from app.models.tenant import Tenant
from app.models.user import User


# Test database URL (use SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# 10:00 on 23 May 2025 in Lima
FIXED_NOW = datetime(2025, 5, 23, 15, 0, tzinfo=timezone.utc)

TENANT_HEADER = "X-Tenant-Domain"


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh in-memory database and a session on it."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)
    configure_sqlite(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession, clock) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database and clock overrides."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


async def make_tenant(
    db_session: AsyncSession,
    slug: str,
    status: TenantStatus = TenantStatus.ACTIVE,
    custom_domain: Optional[str] = None,
    domain: Optional[str] = None,
) -> Tenant:
    tenant = Tenant(
        id=str(uuid.uuid4()),
        name=f"Restaurante {slug.title()}",
        slug=slug,
        domain=domain or f"{slug}.james.pe",
        custom_domain=custom_domain,
        email=f"contacto@{slug}.pe",
        status=status,
        plan=TenantPlan.FREE,
        settings={"currency": "PEN"},
    )
    db_session.add(tenant)
    await db_session.commit()
    return tenant


async def make_user(
    db_session: AsyncSession,
    email: str,
    role: UserRole,
    tenant: Optional[Tenant] = None,
    password: str = "secret123",
) -> User:
    user = User(
        id=str(uuid.uuid4()),
        tenant_id=tenant.id if tenant else None,
        email=email,
        name=email.split("@")[0].title(),
        hashed_password=get_password_hash(password),
        role=role,
        is_active=True,
    )
    db_session.add(user)
    await db_session.commit()
    return user


async def make_order(
    db_session: AsyncSession,
    tenant: Tenant,
    order_number: str,
    status: OrderStatus = OrderStatus.PREPARING,
    total: str = "50.00",
    created_at: datetime = FIXED_NOW,
    phone: str = "+51987654321",
) -> Order:
    order = Order(
        tenant_id=tenant.id,
        order_number=order_number,
        items=[{"dish_id": "d-1", "name": "Lomo Saltado", "unit_price": total, "quantity": 1, "subtotal": total}],
        customer={"name": "Ana Torres", "phone": phone, "document_type": "boleta"},
        delivery={"type": "pickup", "address": None},
        payment={"method": "efectivo"},
        customer_phone=phone,
        customer_name="Ana Torres",
        subtotal=Decimal(total),
        total=Decimal(total),
        status=status,
        created_at=created_at,
        updated_at=created_at,
    )
    db_session.add(order)
    await db_session.commit()
    return order


def bearer(user: User) -> dict:
    token = create_access_token(
        user_id=user.id,
        email=user.email,
        role=user.role.value,
        tenant_id=user.tenant_id,
    )
    return {"Authorization": f"Bearer {token}"}


def order_payload(**overrides) -> dict:
    payload = {
        "items": [
            {"dishId": "d-1", "name": "Lomo Saltado", "unitPrice": "25.00", "quantity": 2, "subtotal": "50.00"},
        ],
        "customer": {"name": "Ana Torres", "phone": "+51987654321"},
        "delivery": {"type": "pickup"},
        "payment": {"method": "efectivo"},
        "subtotal": "50.00",
        "total": "50.00",
    }
    payload.update(overrides)
    return payload


@pytest_asyncio.fixture
async def tenant(db_session: AsyncSession) -> Tenant:
    return await make_tenant(db_session, "sabor")


@pytest_asyncio.fixture
async def other_tenant(db_session: AsyncSession) -> Tenant:
    return await make_tenant(db_session, "otro")


@pytest_asyncio.fixture
async def admin(db_session: AsyncSession, tenant: Tenant) -> User:
    return await make_user(db_session, "admin@sabor.pe", UserRole.ADMIN, tenant)


@pytest_asyncio.fixture
async def manager(db_session: AsyncSession, tenant: Tenant) -> User:
    return await make_user(db_session, "caja@sabor.pe", UserRole.ORDERS_MANAGER, tenant)


@pytest_asyncio.fixture
async def other_admin(db_session: AsyncSession, other_tenant: Tenant) -> User:
    return await make_user(db_session, "admin@otro.pe", UserRole.ADMIN, other_tenant)


@pytest_asyncio.fixture
async def superadmin(db_session: AsyncSession) -> User:
    return await make_user(db_session, "root@james.pe", UserRole.SUPERADMIN)


@pytest.fixture
def admin_headers(admin: User) -> dict:
    return bearer(admin)


@pytest.fixture
def manager_headers(manager: User) -> dict:
    return bearer(manager)


@pytest.fixture
def other_admin_headers(other_admin: User) -> dict:
    return bearer(other_admin)


@pytest.fixture
def superadmin_headers(superadmin: User) -> dict:
    return bearer(superadmin)
