"""Audit log model."""
from datetime import datetime, timezone
from sqlalchemy import String, DateTime, ForeignKey, Text, JSON, Enum as SQLEnum, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
import uuid

from app.core.database import Base
from app.core.enums import LogAction, LogLevel


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class Log(Base):
    """Append-only record of a privileged action."""

    __tablename__ = "logs"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4())
    )
    level: Mapped[LogLevel] = mapped_column(
        SQLEnum(LogLevel, values_callable=_enum_values, name="loglevel"),
        nullable=False
    )
    action: Mapped[LogAction] = mapped_column(
        SQLEnum(LogAction, values_callable=_enum_values, name="logaction"),
        nullable=False
    )
    message: Mapped[str] = mapped_column(Text, nullable=False)
    details: Mapped[dict] = mapped_column(JSON, nullable=True)
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True
    )
    user_email: Mapped[str] = mapped_column(String(255), nullable=True)
    tenant_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=True
    )
    tenant_name: Mapped[str] = mapped_column(String(255), nullable=True)
    ip_address: Mapped[str] = mapped_column(String(64), nullable=True)
    user_agent: Mapped[str] = mapped_column(String(500), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False
    )

    # Relationships
    tenant = relationship("Tenant", back_populates="logs")

    __table_args__ = (
        Index("ix_log_created", "created_at"),
        Index("ix_log_tenant_created", "tenant_id", "created_at"),
        Index("ix_log_action", "action"),
    )
