"""Order schemas and value types.

The nested types (``OrderItem``, ``Customer``, ``Delivery``, ``Payment``)
carry their own invariants; orders are persisted from their JSON dump.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Any, List, Optional, Union

from pydantic import Field, TypeAdapter, field_validator, model_validator

from app.core.enums import DeliveryType, DocumentType, OrderStatus, PaymentMethod
from app.schemas.common import CamelModel


# Peru: country code followed by nine digits
PHONE_PATTERN = r"^\+51\d{9}$"

_DATETIME = TypeAdapter(datetime)
_DATE = TypeAdapter(date)


class OrderItem(CamelModel):
    """One order line.

    Accepts either the flat shape (``dishId``/``name``/``unitPrice``) or a
    nested ``dish`` object ``{id, name, price}`` and normalizes to the flat one.
    """
    dish_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    unit_price: Decimal = Field(..., gt=0, decimal_places=2)
    quantity: int = Field(..., gt=0)
    subtotal: Decimal = Field(..., gt=0, decimal_places=2)

    @model_validator(mode="before")
    @classmethod
    def flatten_dish(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("dish"), dict):
            dish = data["dish"]
            data = {k: v for k, v in data.items() if k != "dish"}
            data.setdefault("dishId", dish.get("id"))
            data.setdefault("name", dish.get("name"))
            data.setdefault("unitPrice", dish.get("price"))
        return data


class Customer(CamelModel):
    """Customer contact and invoicing data."""
    name: str = Field(..., min_length=1, max_length=255)
    phone: str = Field(..., pattern=PHONE_PATTERN)
    document_type: DocumentType = DocumentType.BOLETA
    document_number: Optional[str] = Field(None, max_length=20)
    business_name: Optional[str] = Field(None, max_length=255)
    business_address: Optional[str] = Field(None, max_length=500)


class Delivery(CamelModel):
    """Delivery mode; an address is required exactly when delivering."""
    type: DeliveryType
    address: Optional[str] = Field(None, max_length=500)

    @model_validator(mode="after")
    def check_address(self) -> "Delivery":
        if self.type == DeliveryType.DELIVERY:
            if not self.address or not self.address.strip():
                raise ValueError("address is required for delivery orders")
        else:
            self.address = None
        return self


class Payment(CamelModel):
    method: PaymentMethod


class OrderCreate(CamelModel):
    """Payload for placing an order."""
    items: List[OrderItem] = Field(..., min_length=1)
    customer: Customer
    delivery: Delivery
    payment: Payment
    subtotal: Decimal = Field(..., ge=0, decimal_places=2)
    total: Decimal = Field(..., gt=0, decimal_places=2)
    notes: Optional[str] = Field(None, max_length=1000)


class OrderStatusUpdate(CamelModel):
    status: str = Field(..., min_length=1)


class OrderResponse(CamelModel):
    """Order response schema."""
    id: str
    tenant_id: str
    order_number: str
    items: List[OrderItem]
    customer: Customer
    delivery: Delivery
    payment: Payment
    subtotal: Decimal
    total: Decimal
    status: OrderStatus
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class OrderStats(CamelModel):
    """Aggregate counters for a tenant (or all tenants for a superadmin)."""
    total: int
    preparing: int
    delivered: int
    today_total: int
    today_revenue: Decimal


class OrderFilters(CamelModel):
    """Validated order search criteria.

    - ``tenant_id``: scope; only ``None`` for superadmin cross-tenant reads
    - ``status``: exact status, given in any case
    - ``date_from`` / ``date_to``: creation window; a bare date as
      ``date_to`` covers that whole day
    - ``customer_phone``: exact match on the customer's phone
    - ``search``: substring of the order number or customer name
    - ``page`` / ``limit``: 1-based page, at most 100 rows per page
    """
    tenant_id: Optional[str] = None
    status: Optional[OrderStatus] = None
    date_from: Optional[Union[datetime, date]] = None
    date_to: Optional[Union[datetime, date]] = None
    customer_phone: Optional[str] = None
    search: Optional[str] = Field(None, max_length=100)
    page: int = Field(1, ge=1)
    limit: int = Field(50, ge=1, le=100)

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().upper() or None
        return v

    @field_validator("date_from", "date_to", mode="before")
    @classmethod
    def parse_window_bound(cls, v: Any) -> Any:
        """Anything with a time part stays an instant, even at midnight."""
        if not isinstance(v, str):
            return v
        v = v.strip()
        if not v:
            return None
        if "T" in v or " " in v:
            return _DATETIME.validate_python(v)
        return _DATE.validate_python(v)

    @field_validator("customer_phone", "search", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip() or None
        return v
