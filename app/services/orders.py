"""Order lifecycle: creation, status changes, deletion and reads."""
from typing import List, Optional, Tuple
from zoneinfo import ZoneInfo

from sqlalchemy.exc import IntegrityError

from app.core.clock import Clock, business_tz, utcnow
from app.core.config import settings
from app.core.enums import LogAction, LogLevel, OrderStatus
from app.core.errors import ConflictError, NotFoundError, OrderCapacityExceeded
from app.core.logging import get_logger
from app.models.order import Order
from app.repositories import Storage
from app.schemas.common import Pagination
from app.schemas.log import RequestMeta
from app.schemas.order import OrderCreate, OrderFilters, OrderStats
from app.services.audit import AuditLog
from app.services.order_numbers import (
    MAX_DAILY_SEQUENCE, OrderNumberGenerator, is_number_collision, sequence_of
)
from app.services.order_queries import OrderQueryEngine
from app.services.order_state import INITIAL_STATUS, ensure_deletable, parse_status, plan_transition


logger = get_logger(__name__)


class OrderService:
    def __init__(
        self,
        storage: Storage,
        clock: Clock = utcnow,
        tz: Optional[ZoneInfo] = None,
        numbers: Optional[OrderNumberGenerator] = None,
        max_attempts: Optional[int] = None,
    ):
        self.storage = storage
        self.clock = clock
        self.tz = tz or business_tz()
        self.numbers = numbers or OrderNumberGenerator(storage.orders, self.tz)
        self.queries = OrderQueryEngine(storage.orders, self.tz)
        self.audit = AuditLog(storage)
        self.max_attempts = max_attempts or settings.ORDER_NUMBER_MAX_RETRIES

    async def create(self, data: OrderCreate, tenant_id: str) -> Order:
        """Persist a new PREPARING order under a fresh daily number.

        Each insert runs in a savepoint; a unique-constraint collision on
        the number rolls back only that attempt and a new number is drawn.
        """
        now = self.clock()
        customer = data.customer

        for attempt in range(1, self.max_attempts + 1):
            number = await self.numbers.next_number(tenant_id, now)
            if sequence_of(number) > MAX_DAILY_SEQUENCE:
                logger.error(
                    "Daily order capacity exhausted",
                    extra={"tenant_id": tenant_id, "event": "order_capacity_exceeded"},
                )
                raise OrderCapacityExceeded(
                    message="This restaurant cannot take more orders today",
                    limit=MAX_DAILY_SEQUENCE,
                )

            order = Order(
                tenant_id=tenant_id,
                order_number=number,
                items=[item.model_dump(mode="json") for item in data.items],
                customer=customer.model_dump(mode="json"),
                delivery=data.delivery.model_dump(mode="json"),
                payment=data.payment.model_dump(mode="json"),
                customer_phone=customer.phone,
                customer_name=customer.name,
                subtotal=data.subtotal,
                total=data.total,
                status=INITIAL_STATUS,
                notes=data.notes,
                created_at=now,
                updated_at=now,
            )
            try:
                async with self.storage.savepoint():
                    await self.storage.orders.insert(order)
            except IntegrityError as exc:
                if not is_number_collision(exc):
                    raise
                logger.warning(
                    f"Order number {number} taken, retrying ({attempt}/{self.max_attempts})",
                    extra={"tenant_id": tenant_id, "order_number": number},
                )
                continue

            await self.storage.commit()
            logger.info(
                f"Order created: {number}",
                extra={"tenant_id": tenant_id, "order_number": number, "event": "order_created"},
            )
            return order

        raise ConflictError(
            message="Could not assign an order number, please try again",
            error="Order number conflict",
        )

    async def get(self, order_id: str, tenant_id: Optional[str]) -> Order:
        order = await self.storage.orders.get(order_id, tenant_id)
        if order is None:
            raise NotFoundError(message="Order not found")
        return order

    async def list(self, filters: OrderFilters) -> Tuple[List[Order], Pagination]:
        return await self.queries.search(filters)

    async def stats(self, tenant_id: Optional[str]) -> OrderStats:
        return await self.queries.stats(tenant_id, self.clock())

    async def by_phone(self, tenant_id: Optional[str], phone: str) -> List[Order]:
        return await self.storage.orders.by_phone(tenant_id, phone)

    async def update_status(
        self,
        order_id: str,
        requested: str,
        tenant_id: Optional[str],
        meta: Optional[RequestMeta] = None,
    ) -> Order:
        """Apply a status change; requesting the current status is a no-op."""
        target = parse_status(requested)
        order = await self.get(order_id, tenant_id)

        new_status = plan_transition(order.status, target)
        if new_status is None:
            return order

        previous = order.status
        await self.storage.orders.set_status(order, new_status)

        if new_status == OrderStatus.DELIVERED:
            details = {
                "orderId": order.id,
                "orderNumber": order.order_number,
                "customerName": order.customer_name,
                "customerPhone": order.customer_phone,
                "deliveryType": (order.delivery or {}).get("type"),
                "tenantId": order.tenant_id,
                "total": str(order.total),
            }
            logger.info(
                f"Order delivered: {order.order_number}",
                extra={
                    "tenant_id": order.tenant_id,
                    "order_number": order.order_number,
                    "event": "order_delivered",
                    "details": details,
                },
            )
            await self.audit.event(
                LogAction.ORDER_DELIVERED,
                f"Order {order.order_number} delivered",
                meta,
                tenant_id=order.tenant_id,
                details=details,
            )

        await self.storage.commit()
        logger.info(
            f"Order {order.order_number}: {previous.value} -> {new_status.value}",
            extra={"tenant_id": order.tenant_id, "order_number": order.order_number},
        )
        return order

    async def delete(self, order_id: str, tenant_id: Optional[str], meta: Optional[RequestMeta] = None) -> None:
        order = await self.get(order_id, tenant_id)
        ensure_deletable(order.status)

        await self.storage.orders.delete(order.id)
        await self.audit.event(
            LogAction.ORDER_DELETED,
            f"Order {order.order_number} deleted",
            meta,
            level=LogLevel.WARNING,
            tenant_id=order.tenant_id,
            details={"orderNumber": order.order_number, "status": order.status.value},
        )
        await self.storage.commit()
        logger.info(
            f"Order deleted: {order.order_number}",
            extra={"tenant_id": order.tenant_id, "order_number": order.order_number},
        )
