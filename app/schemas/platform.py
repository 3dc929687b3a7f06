"""Superadmin platform-wide statistics."""
from decimal import Decimal
from typing import List

from app.schemas.common import CamelModel
from app.schemas.log import LogResponse, LogStats
from app.schemas.tenant import TenantResponse


class TenantCounts(CamelModel):
    total_tenants: int
    active_tenants: int
    suspended_tenants: int
    inactive_tenants: int
    new_tenants_this_month: int


class UserCounts(CamelModel):
    total: int
    super_admins: int
    admins: int
    orders_managers: int


class OrderCounts(CamelModel):
    total: int
    this_month: int
    total_revenue: Decimal


class DishCounts(CamelModel):
    total: int
    active: int
    inactive: int


class PlatformDashboard(CamelModel):
    tenant_stats: TenantCounts
    log_stats: LogStats
    recent_tenants: List[TenantResponse]
    recent_logs: List[LogResponse]
    total_users: int


class PlatformStats(CamelModel):
    tenant_stats: TenantCounts
    log_stats: LogStats
    user_stats: UserCounts
    order_stats: OrderCounts
    dish_stats: DishCounts
