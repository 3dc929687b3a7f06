"""Order model."""
from datetime import datetime, timezone
from decimal import Decimal
from sqlalchemy import (
    String, DateTime, ForeignKey, Numeric, Text, JSON,
    Enum as SQLEnum, Index, UniqueConstraint
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
import uuid

from app.core.database import Base
from app.core.enums import OrderStatus


class Order(Base):
    """A customer order.

    ``items``, ``customer``, ``delivery`` and ``payment`` hold the JSON
    dump of the value types in ``app.schemas.order``; they are only ever
    written through those types. ``customer_phone`` and ``customer_name``
    are copied out of ``customer`` so filters hit plain indexed columns.
    """

    __tablename__ = "orders"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4())
    )
    tenant_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    order_number: Mapped[str] = mapped_column(String(10), nullable=False)
    items: Mapped[list] = mapped_column(JSON, nullable=False)
    customer: Mapped[dict] = mapped_column(JSON, nullable=False)
    delivery: Mapped[dict] = mapped_column(JSON, nullable=False)
    payment: Mapped[dict] = mapped_column(JSON, nullable=False)
    customer_phone: Mapped[str] = mapped_column(String(20), nullable=False)
    customer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    subtotal: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    total: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    status: Mapped[OrderStatus] = mapped_column(
        SQLEnum(OrderStatus),
        default=OrderStatus.PREPARING,
        nullable=False
    )
    notes: Mapped[str] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False
    )

    # Relationships
    tenant = relationship("Tenant", back_populates="orders")

    __table_args__ = (
        # Backstop for concurrent order-number allocation
        UniqueConstraint("order_number", "tenant_id", name="uq_orders_order_number_tenant"),
        Index("ix_order_tenant_created", "tenant_id", "created_at"),
        Index("ix_order_tenant_status", "tenant_id", "status"),
        Index("ix_order_tenant_phone", "tenant_id", "customer_phone"),
    )
