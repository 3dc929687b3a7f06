"""Order status rules.

Orders are created PREPARING. The status endpoint only moves them between
PREPARING and DELIVERED. DELIVERED and CANCELLED are terminal, and
delivered orders are kept as sales records.
"""
from typing import Optional

from app.core.enums import OrderStatus
from app.core.errors import BadRequestError, IllegalStateTransition


INITIAL_STATUS = OrderStatus.PREPARING
PUBLIC_TARGETS = (OrderStatus.PREPARING, OrderStatus.DELIVERED)

_TERMINAL_MESSAGES = {
    OrderStatus.DELIVERED: "This order was already delivered and its status can no longer change",
    OrderStatus.CANCELLED: "This order was cancelled and its status can no longer change",
}


def parse_status(value: str) -> OrderStatus:
    """Case-insensitive parse restricted to the public targets."""
    normalized = (value or "").strip().upper()
    try:
        status = OrderStatus(normalized)
    except ValueError:
        status = None
    if status not in PUBLIC_TARGETS:
        allowed = ", ".join(s.value for s in PUBLIC_TARGETS)
        raise BadRequestError(
            message=f"Invalid status '{value}'. Allowed values: {allowed}",
            error="Invalid status",
        )
    return status


def plan_transition(current: OrderStatus, requested: OrderStatus) -> Optional[OrderStatus]:
    """Status to write, or None when nothing changes."""
    if current == requested:
        return None
    if current in _TERMINAL_MESSAGES:
        raise IllegalStateTransition(
            message=_TERMINAL_MESSAGES[current],
            currentStatus=current.value,
            requestedStatus=requested.value,
        )
    return requested


def ensure_deletable(current: OrderStatus) -> None:
    if current == OrderStatus.DELIVERED:
        raise IllegalStateTransition(
            message="Delivered orders cannot be deleted",
            error="Order not deletable",
            currentStatus=current.value,
        )
