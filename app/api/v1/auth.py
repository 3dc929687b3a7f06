"""Authentication API endpoints."""
from fastapi import APIRouter

from app.core.config import settings
from app.core.dependencies import Audit, ClockDep, CurrentPrincipal, Meta, StorageDep
from app.core.enums import LogAction
from app.core.errors import ForbiddenError, UnauthenticatedError
from app.core.logging import get_logger
from app.core.security import (
    create_access_token, create_refresh_token, decode_token, verify_password
)
from app.models.user import User
from app.schemas.auth import (
    LoginRequest, LoginResponse, RefreshTokenRequest, TokenResponse, UserResponse
)
from app.schemas.common import ApiResponse


router = APIRouter()
logger = get_logger(__name__)


def _issue_tokens(user: User) -> TokenResponse:
    claims = dict(user_id=user.id, email=user.email, role=user.role.value, tenant_id=user.tenant_id)
    return TokenResponse(
        access_token=create_access_token(**claims),
        refresh_token=create_refresh_token(**claims),
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )


@router.post("/login", response_model=ApiResponse[LoginResponse])
async def login(
    request: LoginRequest,
    storage: StorageDep,
    audit: Audit,
    meta: Meta,
    clock: ClockDep,
):
    """Authenticate user and return JWT tokens."""
    user = await storage.users.get_by_email(request.email)

    if user is None or not verify_password(request.password, user.hashed_password):
        logger.warning(f"Failed login attempt for email: {request.email}")
        raise UnauthenticatedError(message="Invalid email or password")

    if not user.is_active:
        raise ForbiddenError(message="User account is inactive")

    user.last_login = clock()
    meta.user_id, meta.user_email = user.id, user.email
    await audit.event(
        LogAction.USER_LOGIN,
        f"User {user.email} logged in",
        meta,
        tenant_id=user.tenant_id,
        details={"role": user.role.value},
    )
    await storage.commit()

    logger.info(f"User logged in: {user.id}, tenant: {user.tenant_id}", extra={"user_id": user.id})

    return ApiResponse(
        message="Login successful",
        data=LoginResponse(user=UserResponse.model_validate(user), tokens=_issue_tokens(user)),
    )


@router.post("/refresh", response_model=ApiResponse[TokenResponse])
async def refresh_token(
    request: RefreshTokenRequest,
    storage: StorageDep,
):
    """Refresh access token using a valid refresh token."""
    payload = decode_token(request.refresh_token)

    if payload is None:
        raise UnauthenticatedError(message="Invalid or expired refresh token")

    if payload.type != "refresh":
        raise UnauthenticatedError(message="Invalid token type. Refresh token required.")

    # Verify user still exists and is active
    user = await storage.users.get(payload.sub)
    if user is None or not user.is_active:
        raise UnauthenticatedError(message="User not found or inactive")

    return ApiResponse(data=_issue_tokens(user))


@router.get("/me", response_model=ApiResponse[UserResponse])
async def get_current_user_info(
    principal: CurrentPrincipal,
    storage: StorageDep,
):
    """Get current authenticated user information."""
    user = await storage.users.get(principal.id)
    if user is None:
        raise UnauthenticatedError(message="User not found")
    return ApiResponse(data=UserResponse.model_validate(user))
