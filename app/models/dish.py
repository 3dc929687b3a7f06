"""Dish model."""
from datetime import datetime, timezone
from decimal import Decimal
from sqlalchemy import (
    String, Integer, Boolean, DateTime, ForeignKey, Numeric, Text, JSON,
    UniqueConstraint, Index
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
import uuid

from app.core.database import Base


class Dish(Base):
    """A menu item.

    ``subtag_ids`` is a soft reference list: no foreign key backs it, the
    ids are resolved against ``subtags`` when read and pruned by the
    subtag service when a subtag is deleted.
    """

    __tablename__ = "dishes"

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
    category_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("categories.id", ondelete="RESTRICT"),
        nullable=False,
        index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    image: Mapped[str] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    is_featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    allergens: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    tags: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    subtag_ids: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    preparation_time: Mapped[int] = mapped_column(Integer, nullable=True)
    servings: Mapped[int] = mapped_column(Integer, nullable=True)
    sort_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
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
    tenant = relationship("Tenant", back_populates="dishes")
    category = relationship("Category", back_populates="dishes")

    __table_args__ = (
        UniqueConstraint("slug", "tenant_id", name="uq_dishes_slug_tenant"),
        Index("ix_dish_tenant_category", "tenant_id", "category_id"),
    )
