"""Tenant model for multi-tenancy."""
from datetime import datetime, timezone
from sqlalchemy import String, DateTime, JSON, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
import uuid

from app.core.database import Base
from app.core.enums import TenantPlan, TenantStatus


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class Tenant(Base):
    """A restaurant account; every catalog row and order hangs off one."""

    __tablename__ = "tenants"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4())
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)
    domain: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    custom_domain: Mapped[str] = mapped_column(String(255), nullable=True, unique=True, index=True)
    email: Mapped[str] = mapped_column(String(255), nullable=True)
    status: Mapped[TenantStatus] = mapped_column(
        SQLEnum(TenantStatus, values_callable=_enum_values, name="tenantstatus"),
        default=TenantStatus.ACTIVE,
        nullable=False
    )
    plan: Mapped[TenantPlan] = mapped_column(
        SQLEnum(TenantPlan, values_callable=_enum_values, name="tenantplan"),
        default=TenantPlan.FREE,
        nullable=False
    )
    settings: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
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

    # Relationships (rows are removed by ON DELETE CASCADE, never loaded for it)
    users = relationship("User", back_populates="tenant", cascade="all, delete-orphan", passive_deletes=True)
    orders = relationship("Order", back_populates="tenant", cascade="all, delete-orphan", passive_deletes=True)
    categories = relationship("Category", back_populates="tenant", cascade="all, delete-orphan", passive_deletes=True)
    dishes = relationship("Dish", back_populates="tenant", cascade="all, delete-orphan", passive_deletes=True)
    subtags = relationship("Subtag", back_populates="tenant", cascade="all, delete-orphan", passive_deletes=True)
    logs = relationship("Log", back_populates="tenant", cascade="all, delete-orphan", passive_deletes=True)
