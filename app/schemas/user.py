"""Tenant user management schemas."""
from typing import Any, List, Optional
from pydantic import EmailStr, Field, field_validator

from app.core.enums import UserRole
from app.schemas.common import CamelModel
from app.schemas.order import OrderResponse


# Roles a tenant admin may hand out
MANAGEABLE_ROLES = (UserRole.ADMIN, UserRole.ORDERS_MANAGER)


def _check_role(v: Any) -> Any:
    if v is not None and v not in MANAGEABLE_ROLES:
        raise ValueError("Only ADMIN or ORDERS_MANAGER can be assigned")
    return v


class UserCreate(CamelModel):
    email: EmailStr
    name: str = Field(..., min_length=2, max_length=255)
    password: str = Field(..., min_length=6)
    role: UserRole = UserRole.ORDERS_MANAGER

    @field_validator("role")
    @classmethod
    def manageable_role(cls, v: UserRole) -> UserRole:
        return _check_role(v)


class UserUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=2, max_length=255)
    role: Optional[UserRole] = None
    is_active: Optional[bool] = None

    @field_validator("role")
    @classmethod
    def manageable_role(cls, v: Optional[UserRole]) -> Optional[UserRole]:
        return _check_role(v)


class TenantOverview(CamelModel):
    """Counts for a tenant admin's dashboard."""
    dishes: int
    categories: int
    orders: int
    users: int
    recent_orders: List[OrderResponse]
