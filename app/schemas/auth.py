"""Authentication schemas."""
from datetime import datetime
from typing import Optional
from pydantic import EmailStr, Field

from app.core.enums import UserRole
from app.schemas.common import CamelModel


class LoginRequest(CamelModel):
    """Login request schema."""
    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenResponse(CamelModel):
    """Token response schema."""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds


class UserResponse(CamelModel):
    """User response schema."""
    id: str
    tenant_id: Optional[str] = None
    email: str
    name: Optional[str] = None
    role: UserRole
    is_active: bool
    created_at: datetime
    last_login: Optional[datetime] = None


class LoginResponse(CamelModel):
    """Login response with user and tokens."""
    user: UserResponse
    tokens: TokenResponse


class RefreshTokenRequest(CamelModel):
    """Refresh token request schema."""
    refresh_token: str
