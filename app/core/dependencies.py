"""Application dependencies for dependency injection."""
from dataclasses import dataclass
from typing import Annotated, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.clock import Clock, utcnow
from app.core.config import settings
from app.core.database import get_db
from app.core.enums import UserRole
from app.core.errors import ForbiddenError, TenantHeaderMissingError, UnauthenticatedError
from app.core.logging import get_logger
from app.core.security import Principal, decode_token
from app.repositories import Storage
from app.schemas.log import RequestMeta
from app.schemas.tenant import TenantContext
from app.services.audit import AuditLog
from app.services.categories import CategoryService
from app.services.dishes import DishService
from app.services.isolation import enforce_tenant_isolation
from app.services.orders import OrderService
from app.services.platform import PlatformService
from app.services.subtags import SubtagService
from app.services.tenant_resolver import TenantResolver
from app.services.tenants import TenantService
from app.services.users import UserService


security = HTTPBearer(auto_error=False)
logger = get_logger(__name__)


DbSession = Annotated[AsyncSession, Depends(get_db)]


async def get_storage(db: DbSession) -> Storage:
    return Storage(db)


def get_clock() -> Clock:
    """Source of "now"; overridden in tests to pin the date."""
    return utcnow


StorageDep = Annotated[Storage, Depends(get_storage)]
ClockDep = Annotated[Clock, Depends(get_clock)]


async def get_optional_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[Principal]:
    """Principal from a Bearer access token, or None when no token is sent."""
    if credentials is None:
        return None

    payload = decode_token(credentials.credentials)
    if payload is None:
        raise UnauthenticatedError(message="Invalid or expired token")
    if payload.type != "access":
        raise UnauthenticatedError(message="Invalid token type. Access token required.")

    principal = Principal.from_token(payload)
    if principal is None:
        raise UnauthenticatedError(message="Invalid token claims")
    return principal


async def get_current_principal(
    principal: Optional[Principal] = Depends(get_optional_principal),
) -> Principal:
    if principal is None:
        raise UnauthenticatedError(message="No authentication token provided")
    return principal


OptionalPrincipal = Annotated[Optional[Principal], Depends(get_optional_principal)]
CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]


async def get_tenant_resolver(storage: StorageDep) -> TenantResolver:
    return TenantResolver(storage.tenants)


Resolver = Annotated[TenantResolver, Depends(get_tenant_resolver)]


async def resolve_request_tenant(
    request: Request,
    principal: Optional[Principal],
    resolver: TenantResolver,
) -> Optional[TenantContext]:
    """Tenant for this request: domain header, then one already attached
    to the request, then the principal's own tenant. Cached on
    ``request.state.tenant``.
    """
    header = request.headers.get(settings.TENANT_HEADER)
    if header and header.strip():
        tenant = await resolver.resolve(header)
    elif getattr(request.state, "tenant", None) is not None:
        return request.state.tenant
    elif principal is not None and principal.tenant_id:
        tenant = await resolver.resolve_id(principal.tenant_id)
    else:
        return None

    request.state.tenant = tenant
    return tenant


async def get_request_tenant(
    request: Request,
    principal: OptionalPrincipal,
    resolver: Resolver,
) -> Optional[TenantContext]:
    return await resolve_request_tenant(request, principal, resolver)


async def get_header_tenant(request: Request, resolver: Resolver) -> TenantContext:
    """Tenant named by the domain header; the header is mandatory."""
    tenant = await resolver.resolve(request.headers.get(settings.TENANT_HEADER))
    request.state.tenant = tenant
    return tenant


RequestTenant = Annotated[Optional[TenantContext], Depends(get_request_tenant)]
HeaderTenant = Annotated[TenantContext, Depends(get_header_tenant)]


@dataclass
class TenantScope:
    """An authorized principal and the tenant it may act on.

    ``tenant`` is None only for a superadmin that named no tenant.
    """
    principal: Principal
    tenant: Optional[TenantContext]

    @property
    def tenant_id(self) -> Optional[str]:
        return self.tenant.id if self.tenant else None

    def require_tenant_id(self) -> str:
        if self.tenant is None:
            raise TenantHeaderMissingError(
                message=f"The {settings.TENANT_HEADER} header is required for this operation",
            )
        return self.tenant.id


async def get_tenant_scope(principal: CurrentPrincipal, tenant: RequestTenant) -> TenantScope:
    enforce_tenant_isolation(principal, tenant)
    return TenantScope(principal=principal, tenant=tenant)


Scope = Annotated[TenantScope, Depends(get_tenant_scope)]


async def get_public_tenant(principal: OptionalPrincipal, tenant: RequestTenant) -> TenantContext:
    """Tenant for anonymous-capable reads; signed-in callers stay in their tenant."""
    if tenant is None:
        raise TenantHeaderMissingError(message=f"The {settings.TENANT_HEADER} header is required")
    if principal is not None:
        enforce_tenant_isolation(principal, tenant)
    return tenant


PublicTenant = Annotated[TenantContext, Depends(get_public_tenant)]


def require_role(*roles: UserRole):
    """Dependency factory to require specific roles."""
    async def role_checker(scope: Scope) -> TenantScope:
        if scope.principal.role not in roles:
            logger.warning(
                f"Role {scope.principal.role.value} denied",
                extra={"user_id": scope.principal.id},
            )
            raise ForbiddenError(message="You do not have permission to perform this action")
        return scope
    return role_checker


async def require_superadmin(principal: CurrentPrincipal) -> Principal:
    if not principal.is_superadmin:
        raise ForbiddenError(message="Only superadmins can perform this action")
    return principal


AdminScope = Annotated[TenantScope, Depends(require_role(UserRole.SUPERADMIN, UserRole.ADMIN))]
OrdersScope = Annotated[
    TenantScope,
    Depends(require_role(UserRole.SUPERADMIN, UserRole.ADMIN, UserRole.ORDERS_MANAGER)),
]
Superadmin = Annotated[Principal, Depends(require_superadmin)]


async def get_request_meta(request: Request, principal: OptionalPrincipal) -> RequestMeta:
    """Actor and client details copied onto audit entries."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        ip_address = forwarded.split(",")[0].strip()
    else:
        ip_address = request.client.host if request.client else None
    return RequestMeta(
        user_id=principal.id if principal else None,
        user_email=principal.email if principal else None,
        ip_address=ip_address,
        user_agent=request.headers.get("user-agent"),
    )


Meta = Annotated[RequestMeta, Depends(get_request_meta)]


# Service factories

async def get_order_service(storage: StorageDep, clock: ClockDep) -> OrderService:
    return OrderService(storage, clock=clock)


async def get_tenant_service(storage: StorageDep, clock: ClockDep) -> TenantService:
    return TenantService(storage, clock=clock)


async def get_category_service(storage: StorageDep) -> CategoryService:
    return CategoryService(storage)


async def get_dish_service(storage: StorageDep) -> DishService:
    return DishService(storage)


async def get_subtag_service(storage: StorageDep) -> SubtagService:
    return SubtagService(storage)


async def get_user_service(storage: StorageDep) -> UserService:
    return UserService(storage)


async def get_platform_service(storage: StorageDep, clock: ClockDep) -> PlatformService:
    return PlatformService(storage, clock=clock)


async def get_audit_log(storage: StorageDep) -> AuditLog:
    return AuditLog(storage)


Orders = Annotated[OrderService, Depends(get_order_service)]
Tenants = Annotated[TenantService, Depends(get_tenant_service)]
Categories = Annotated[CategoryService, Depends(get_category_service)]
Dishes = Annotated[DishService, Depends(get_dish_service)]
Subtags = Annotated[SubtagService, Depends(get_subtag_service)]
Audit = Annotated[AuditLog, Depends(get_audit_log)]
Users = Annotated[UserService, Depends(get_user_service)]
Platform = Annotated[PlatformService, Depends(get_platform_service)]
