"""Order persistence."""
from datetime import datetime
from typing import Any, List, Optional, Tuple

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.enums import OrderStatus
from app.models.order import Order


class OrderRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def _scope(query, tenant_id: Optional[str]):
        if tenant_id is not None:
            query = query.where(Order.tenant_id == tenant_id)
        return query

    async def get(self, order_id: str, tenant_id: Optional[str]) -> Optional[Order]:
        query = self._scope(select(Order).where(Order.id == order_id), tenant_id)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def last_number_for_day(
        self,
        tenant_id: str,
        prefix: str,
        day_start: datetime,
        day_end: datetime,
    ) -> Optional[str]:
        """Greatest order number of the tenant-day, or None."""
        result = await self.session.execute(
            select(Order.order_number)
            .where(
                Order.tenant_id == tenant_id,
                Order.order_number.startswith(prefix),
                Order.created_at >= day_start,
                Order.created_at < day_end,
            )
            .order_by(Order.order_number.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def insert(self, order: Order) -> Order:
        """Insert and flush so uniqueness violations surface here."""
        self.session.add(order)
        await self.session.flush()
        return order

    async def search(self, conditions: List[Any], offset: int, limit: int) -> Tuple[List[Order], int]:
        total_result = await self.session.execute(select(func.count(Order.id)).where(*conditions))
        total = total_result.scalar() or 0

        result = await self.session.execute(
            select(Order)
            .where(*conditions)
            .order_by(Order.created_at.desc(), Order.order_number.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all()), total

    async def count(self, tenant_id: Optional[str], *conditions: Any) -> int:
        query = self._scope(select(func.count(Order.id)).where(*conditions), tenant_id)
        result = await self.session.execute(query)
        return result.scalar() or 0

    async def totals(self, tenant_id: Optional[str], *conditions: Any) -> List:
        """``total`` of every matching order, as Decimals."""
        query = self._scope(select(Order.total).where(*conditions), tenant_id)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def recent(self, tenant_id: Optional[str], limit: int) -> List[Order]:
        query = self._scope(select(Order).order_by(Order.created_at.desc()).limit(limit), tenant_id)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def by_phone(self, tenant_id: Optional[str], phone: str) -> List[Order]:
        query = self._scope(
            select(Order).where(Order.customer_phone == phone).order_by(Order.created_at.desc()),
            tenant_id,
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def set_status(self, order: Order, new_status: OrderStatus) -> Order:
        order.status = new_status
        await self.session.flush()
        return order

    async def delete(self, order_id: str) -> None:
        await self.session.execute(delete(Order).where(Order.id == order_id))

    @staticmethod
    def search_conditions(
        tenant_id: Optional[str],
        status: Optional[OrderStatus],
        created_from: Optional[datetime],
        created_before: Optional[datetime],
        created_until: Optional[datetime],
        customer_phone: Optional[str],
        search: Optional[str],
    ) -> List[Any]:
        """Translate resolved filter values into WHERE clauses."""
        conditions = []
        if tenant_id is not None:
            conditions.append(Order.tenant_id == tenant_id)
        if status is not None:
            conditions.append(Order.status == status)
        if created_from is not None:
            conditions.append(Order.created_at >= created_from)
        if created_before is not None:
            conditions.append(Order.created_at < created_before)
        if created_until is not None:
            conditions.append(Order.created_at <= created_until)
        if customer_phone:
            conditions.append(Order.customer_phone == customer_phone)
        if search:
            pattern = f"%{search.lower()}%"
            conditions.append(
                or_(
                    Order.order_number.contains(search),
                    func.lower(Order.customer_name).like(pattern),
                )
            )
        return conditions
