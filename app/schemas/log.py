"""Audit log schemas."""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import Field

from app.core.enums import LogAction, LogLevel
from app.schemas.common import CamelModel


@dataclass
class AuditEntry:
    """What the audit sink accepts. Actor and tenant fields are optional."""
    level: LogLevel
    action: LogAction
    message: str
    details: Optional[Dict[str, Any]] = None
    user_id: Optional[str] = None
    user_email: Optional[str] = None
    tenant_id: Optional[str] = None
    tenant_name: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


@dataclass
class RequestMeta:
    """Caller identity and client info copied onto audit entries."""
    user_id: Optional[str] = None
    user_email: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


class LogResponse(CamelModel):
    id: str
    level: LogLevel
    action: LogAction
    message: str
    details: Optional[Dict[str, Any]] = None
    user_id: Optional[str] = None
    user_email: Optional[str] = None
    tenant_id: Optional[str] = None
    tenant_name: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: datetime


class LogFilters(CamelModel):
    level: Optional[LogLevel] = None
    action: Optional[LogAction] = None
    user_id: Optional[str] = None
    tenant_id: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    limit: int = Field(50, ge=1, le=100)
    offset: int = Field(0, ge=0)


class LogStats(CamelModel):
    total_logs: int
    error_logs: int
    warning_logs: int
    recent_logs: int
