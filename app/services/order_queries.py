"""Order search, pagination and aggregate statistics."""
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple
from zoneinfo import ZoneInfo

from app.core.clock import business_tz, day_bounds, local_date, to_utc
from app.core.enums import OrderStatus
from app.models.order import Order
from app.repositories.order import OrderRepository
from app.schemas.common import Pagination
from app.schemas.order import OrderFilters, OrderStats


def exact_sum(values: Iterable[Optional[Decimal]]) -> Decimal:
    total = Decimal("0.00")
    for value in values:
        if value is not None:
            total += Decimal(value)
    return total.quantize(Decimal("0.01"))


class OrderQueryEngine:
    def __init__(self, orders: OrderRepository, tz: Optional[ZoneInfo] = None):
        self.orders = orders
        self.tz = tz or business_tz()

    def _window(self, filters: OrderFilters) -> Tuple[Optional[datetime], Optional[datetime], Optional[datetime]]:
        """(created_from, created_before, created_until) in UTC.

        A bare ``date_to`` date includes that whole business day.
        """
        created_from = created_before = created_until = None

        if isinstance(filters.date_from, datetime):
            created_from = to_utc(filters.date_from, self.tz)
        elif isinstance(filters.date_from, date):
            created_from, _ = day_bounds(filters.date_from, self.tz)

        if isinstance(filters.date_to, datetime):
            created_until = to_utc(filters.date_to, self.tz)
        elif isinstance(filters.date_to, date):
            _, created_before = day_bounds(filters.date_to, self.tz)

        return created_from, created_before, created_until

    async def search(self, filters: OrderFilters) -> Tuple[List[Order], Pagination]:
        created_from, created_before, created_until = self._window(filters)
        conditions = self.orders.search_conditions(
            tenant_id=filters.tenant_id,
            status=filters.status,
            created_from=created_from,
            created_before=created_before,
            created_until=created_until,
            customer_phone=filters.customer_phone,
            search=filters.search,
        )
        offset = (filters.page - 1) * filters.limit
        orders, total = await self.orders.search(conditions, offset, filters.limit)
        return orders, Pagination.build(filters.page, filters.limit, total)

    async def stats(self, tenant_id: Optional[str], now: datetime) -> OrderStats:
        """Counters for a tenant, or for every tenant when ``tenant_id`` is None.

        Revenue sums every order created today regardless of status.
        """
        day_start, day_end = day_bounds(local_date(now, self.tz), self.tz)
        today = (Order.created_at >= day_start, Order.created_at < day_end)

        return OrderStats(
            total=await self.orders.count(tenant_id),
            preparing=await self.orders.count(tenant_id, Order.status == OrderStatus.PREPARING),
            delivered=await self.orders.count(tenant_id, Order.status == OrderStatus.DELIVERED),
            today_total=await self.orders.count(tenant_id, *today),
            today_revenue=exact_sum(await self.orders.totals(tenant_id, *today)),
        )
