"""Security utilities for JWT and password handling."""
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import jwt, JWTError
from passlib.context import CryptContext
from pydantic import BaseModel, ValidationError
import uuid
from dataclasses import dataclass

from app.core.config import settings
from app.core.enums import UserRole
from app.core.logging import get_logger


pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
logger = get_logger(__name__)


class TokenPayload(BaseModel):
    """JWT claims issued by this API."""
    sub: str  # user_id
    email: Optional[str] = None
    role: str
    tenant_id: Optional[str] = None  # None for SUPERADMIN
    type: str = "access"
    exp: datetime
    iat: datetime


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a hashed password."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a plain password."""
    return pwd_context.hash(password)


def _create_token(
    token_type: str,
    expires_delta: timedelta,
    user_id: str,
    email: str,
    role: str,
    tenant_id: Optional[str],
) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "email": email,
        "role": role,
        "tenant_id": tenant_id,
        "type": token_type,
        "exp": now + expires_delta,
        "iat": now,
        "jti": str(uuid.uuid4()),
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def create_access_token(
    user_id: str,
    email: str,
    role: str,
    tenant_id: Optional[str] = None,
) -> str:
    """Create a new access token."""
    return _create_token(
        "access",
        timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        user_id, email, role, tenant_id,
    )


def create_refresh_token(
    user_id: str,
    email: str,
    role: str,
    tenant_id: Optional[str] = None,
) -> str:
    """Create a new refresh token."""
    return _create_token(
        "refresh",
        timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
        user_id, email, role, tenant_id,
    )


def decode_token(token: str) -> Optional[TokenPayload]:
    """Decode and validate a token; None when invalid or expired."""
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
        )
        return TokenPayload(**payload)
    except (JWTError, ValidationError) as e:
        logger.info(f"Token rejected: {type(e).__name__}")
        return None


@dataclass(frozen=True)
class Principal:
    """The authenticated caller as carried by an access token."""
    id: str
    email: Optional[str]
    role: UserRole
    tenant_id: Optional[str]

    @property
    def is_superadmin(self) -> bool:
        return self.role == UserRole.SUPERADMIN

    @classmethod
    def from_token(cls, payload: TokenPayload) -> Optional["Principal"]:
        try:
            role = UserRole(payload.role)
        except ValueError:
            logger.warning(f"Unknown role in token: {payload.role}")
            return None
        return cls(id=payload.sub, email=payload.email, role=role, tenant_id=payload.tenant_id)
