"""Per-tenant, per-day order numbers.

An order number is ``YYMMDD`` (business-local date of creation) followed by
a four digit daily sequence: ``2505230001`` is the first order of 23 May
2025. The generator only proposes a candidate; uniqueness is enforced by
the ``(order_number, tenant_id)`` constraint and the caller retries on a
collision.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from sqlalchemy.exc import IntegrityError

from app.core.clock import business_tz, day_bounds, local_date
from app.repositories.order import OrderRepository


DATE_PREFIX_LENGTH = 6
SEQUENCE_DIGITS = 4
MAX_DAILY_SEQUENCE = 10 ** SEQUENCE_DIGITS - 1
ORDER_NUMBER_CONSTRAINT = "uq_orders_order_number_tenant"


@dataclass(frozen=True)
class BusinessDay:
    prefix: str
    start: datetime  # UTC, inclusive
    end: datetime  # UTC, exclusive


def business_day(now: datetime, tz: ZoneInfo) -> BusinessDay:
    day = local_date(now, tz)
    start, end = day_bounds(day, tz)
    return BusinessDay(prefix=day.strftime("%y%m%d"), start=start, end=end)


def format_order_number(prefix: str, sequence: int) -> str:
    return f"{prefix}{sequence:0{SEQUENCE_DIGITS}d}"


def sequence_of(order_number: str) -> int:
    """Daily sequence encoded after the date prefix.

    Overflowing candidates carry more than four digits here, which is how
    callers detect an exhausted day.
    """
    return int(order_number[DATE_PREFIX_LENGTH:])


def is_number_collision(exc: IntegrityError) -> bool:
    """True when ``exc`` is a duplicate (order_number, tenant_id) insert.

    PostgreSQL names the violated constraint; SQLite only lists the columns.
    """
    diag = getattr(exc.orig, "diag", None)
    constraint = getattr(diag, "constraint_name", None)
    if constraint:
        return constraint == ORDER_NUMBER_CONSTRAINT
    message = str(exc.orig)
    return ORDER_NUMBER_CONSTRAINT in message or "orders.order_number, orders.tenant_id" in message


class OrderNumberGenerator:
    def __init__(self, orders: OrderRepository, tz: Optional[ZoneInfo] = None):
        self.orders = orders
        self.tz = tz or business_tz()

    async def next_number(self, tenant_id: str, now: datetime) -> str:
        """Candidate number for an order created at ``now``."""
        day = business_day(now, self.tz)
        last = await self.orders.last_number_for_day(tenant_id, day.prefix, day.start, day.end)
        sequence = sequence_of(last) + 1 if last else 1
        return format_order_number(day.prefix, sequence)
