"""Tenant schemas."""
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional
from pydantic import EmailStr, Field

from app.core.enums import TenantPlan, TenantStatus
from app.schemas.common import CamelModel


SLUG_PATTERN = r"^[a-z0-9-]+$"


class TenantContext(CamelModel):
    """Minimal tenant projection attached to a request once resolved."""
    id: str
    name: str
    slug: str
    domain: str
    settings: Dict[str, Any] = {}
    plan: TenantPlan
    status: TenantStatus


class TenantCreate(CamelModel):
    """Super-admin payload creating a tenant and its first admin."""
    name: str = Field(..., min_length=3, max_length=255)
    subdomain: str = Field(..., min_length=3, max_length=100, pattern=SLUG_PATTERN)
    domain: Optional[str] = Field(None, max_length=255)
    email: Optional[EmailStr] = None
    plan: TenantPlan = TenantPlan.FREE
    settings: Dict[str, Any] = {}
    admin_name: str = Field(..., min_length=3, max_length=255)
    admin_email: EmailStr
    admin_password: str = Field(..., min_length=6)


class TenantUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=3, max_length=255)
    email: Optional[EmailStr] = None
    custom_domain: Optional[str] = Field(None, max_length=255)
    plan: Optional[TenantPlan] = None


class TenantResponse(CamelModel):
    """Tenant response schema."""
    id: str
    name: str
    slug: str
    domain: str
    custom_domain: Optional[str] = None
    email: Optional[str] = None
    status: TenantStatus
    plan: TenantPlan
    settings: Dict[str, Any] = {}
    created_at: datetime
    updated_at: datetime


class TenantCreatedResponse(TenantResponse):
    access_url: str
    admin_email: str


class TenantStats(CamelModel):
    total_orders: int
    total_revenue: Decimal
    active_users: int
    active_dishes: int
    active_categories: int
    orders_this_month: int
    revenue_this_month: Decimal
