"""Tenant and user persistence."""
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.enums import TenantPlan, TenantStatus, UserRole
from app.models.category import Category
from app.models.dish import Dish
from app.models.order import Order
from app.models.tenant import Tenant
from app.models.user import User


class TenantRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, tenant_id: str) -> Optional[Tenant]:
        result = await self.session.execute(select(Tenant).where(Tenant.id == tenant_id))
        return result.scalar_one_or_none()

    async def find_by_host(
        self,
        domain: str,
        slug: str,
        statuses: Sequence[TenantStatus],
    ) -> List[Tenant]:
        """Tenants whose domain, custom domain or slug matches."""
        result = await self.session.execute(
            select(Tenant).where(
                or_(
                    Tenant.domain == domain,
                    Tenant.custom_domain == domain,
                    Tenant.slug == slug,
                ),
                Tenant.status.in_(list(statuses)),
            )
        )
        return list(result.scalars().all())

    async def find_conflicting(self, slug: str, domain: str) -> Optional[Tenant]:
        result = await self.session.execute(
            select(Tenant).where(or_(Tenant.slug == slug, Tenant.domain == domain)).limit(1)
        )
        return result.scalar_one_or_none()

    async def custom_domain_taken(self, custom_domain: str, exclude_id: str) -> bool:
        result = await self.session.execute(
            select(Tenant.id).where(
                or_(Tenant.custom_domain == custom_domain, Tenant.domain == custom_domain),
                Tenant.id != exclude_id,
            ).limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def search(
        self,
        status: Optional[TenantStatus],
        plan: Optional[TenantPlan],
        search: Optional[str],
        offset: int,
        limit: int,
    ) -> Tuple[List[Tenant], int]:
        conditions = []
        if status:
            conditions.append(Tenant.status == status)
        if plan:
            conditions.append(Tenant.plan == plan)
        if search:
            pattern = f"%{search.lower()}%"
            conditions.append(
                or_(
                    func.lower(Tenant.name).like(pattern),
                    func.lower(Tenant.domain).like(pattern),
                    func.lower(Tenant.email).like(pattern),
                )
            )

        total_result = await self.session.execute(select(func.count(Tenant.id)).where(*conditions))
        total = total_result.scalar() or 0

        result = await self.session.execute(
            select(Tenant)
            .where(*conditions)
            .order_by(Tenant.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all()), total

    async def count(self, status: Optional[TenantStatus] = None, since: Optional[datetime] = None) -> int:
        query = select(func.count(Tenant.id))
        if status is not None:
            query = query.where(Tenant.status == status)
        if since is not None:
            query = query.where(Tenant.created_at >= since)
        result = await self.session.execute(query)
        return result.scalar() or 0

    async def count_owned(self, tenant_id: str) -> dict:
        """Row counts of everything a tenant owns, keyed by collection."""
        counts = {}
        for key, model in (("users", User), ("dishes", Dish), ("categories", Category), ("orders", Order)):
            result = await self.session.execute(
                select(func.count(model.id)).where(model.tenant_id == tenant_id)
            )
            counts[key] = result.scalar() or 0
        return counts

    async def order_totals(self, tenant_id: str, since: Optional[datetime] = None) -> List:
        query = select(Order.total).where(Order.tenant_id == tenant_id)
        if since is not None:
            query = query.where(Order.created_at >= since)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count_orders(self, tenant_id: str, since: Optional[datetime] = None) -> int:
        query = select(func.count(Order.id)).where(Order.tenant_id == tenant_id)
        if since is not None:
            query = query.where(Order.created_at >= since)
        result = await self.session.execute(query)
        return result.scalar() or 0

    async def count_active(self, tenant_id: str) -> dict:
        """Active users, dishes and categories of a tenant."""
        counts = {}
        for key, model in (("users", User), ("dishes", Dish), ("categories", Category)):
            result = await self.session.execute(
                select(func.count(model.id)).where(model.tenant_id == tenant_id, model.is_active.is_(True))
            )
            counts[key] = result.scalar() or 0
        return counts

    def add(self, tenant: Tenant) -> None:
        self.session.add(tenant)

    async def delete(self, tenant_id: str) -> None:
        # Owned rows go with ON DELETE CASCADE
        await self.session.execute(delete(Tenant).where(Tenant.id == tenant_id))


class UserRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, user_id: str) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.session.execute(
            select(User).where(func.lower(User.email) == email.lower())
        )
        return result.scalar_one_or_none()

    def add(self, user: User) -> None:
        self.session.add(user)

    async def list_for_tenant(self, tenant_id: str) -> List[User]:
        result = await self.session.execute(
            select(User).where(User.tenant_id == tenant_id).order_by(User.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_in_tenant(self, user_id: str, tenant_id: str) -> Optional[User]:
        result = await self.session.execute(
            select(User).where(User.id == user_id, User.tenant_id == tenant_id)
        )
        return result.scalar_one_or_none()

    async def count(self, role: Optional[UserRole] = None) -> int:
        query = select(func.count(User.id))
        if role is not None:
            query = query.where(User.role == role)
        result = await self.session.execute(query)
        return result.scalar() or 0

    async def delete(self, user_id: str) -> None:
        await self.session.execute(delete(User).where(User.id == user_id))
