"""Platform-wide figures for superadmins."""
from typing import Optional
from zoneinfo import ZoneInfo

from app.core.clock import Clock, business_tz, month_start, utcnow
from app.core.enums import TenantStatus, UserRole
from app.models.order import Order
from app.repositories import Storage
from app.schemas.log import LogResponse
from app.schemas.platform import (
    DishCounts, OrderCounts, PlatformDashboard, PlatformStats, TenantCounts, UserCounts
)
from app.schemas.tenant import TenantResponse
from app.services.audit import AuditLog
from app.services.order_queries import exact_sum


RECENT_TENANTS = 5
RECENT_LOGS = 10


class PlatformService:
    def __init__(self, storage: Storage, clock: Clock = utcnow, tz: Optional[ZoneInfo] = None):
        self.storage = storage
        self.clock = clock
        self.tz = tz or business_tz()
        self.audit = AuditLog(storage)

    async def tenant_counts(self) -> TenantCounts:
        tenants = self.storage.tenants
        return TenantCounts(
            total_tenants=await tenants.count(),
            active_tenants=await tenants.count(TenantStatus.ACTIVE),
            suspended_tenants=await tenants.count(TenantStatus.SUSPENDED),
            inactive_tenants=await tenants.count(TenantStatus.INACTIVE),
            new_tenants_this_month=await tenants.count(since=month_start(self.clock(), self.tz)),
        )

    async def dashboard(self) -> PlatformDashboard:
        now = self.clock()
        recent_tenants, _ = await self.storage.tenants.search(None, None, None, 0, RECENT_TENANTS)
        recent_logs = await self.audit.recent(now, RECENT_LOGS)
        return PlatformDashboard(
            tenant_stats=await self.tenant_counts(),
            log_stats=await self.audit.stats(now),
            recent_tenants=[TenantResponse.model_validate(t) for t in recent_tenants],
            recent_logs=[LogResponse.model_validate(log) for log in recent_logs],
            total_users=await self.storage.users.count(),
        )

    async def stats(self) -> PlatformStats:
        now = self.clock()
        since = month_start(now, self.tz)
        users = self.storage.users
        orders = self.storage.orders
        dishes = self.storage.dishes

        return PlatformStats(
            tenant_stats=await self.tenant_counts(),
            log_stats=await self.audit.stats(now),
            user_stats=UserCounts(
                total=await users.count(),
                super_admins=await users.count(UserRole.SUPERADMIN),
                admins=await users.count(UserRole.ADMIN),
                orders_managers=await users.count(UserRole.ORDERS_MANAGER),
            ),
            order_stats=OrderCounts(
                total=await orders.count(None),
                this_month=await orders.count(None, Order.created_at >= since),
                total_revenue=exact_sum(await orders.totals(None)),
            ),
            dish_stats=DishCounts(
                total=await dishes.count(),
                active=await dishes.count(is_active=True),
                inactive=await dishes.count(is_active=False),
            ),
        )
