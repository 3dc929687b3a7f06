"""Tenant administration."""
from typing import Any, Dict, List, Optional, Tuple
from zoneinfo import ZoneInfo

from app.core.clock import Clock, business_tz, month_start, utcnow
from app.core.config import settings
from app.core.enums import LogAction, LogLevel, TenantPlan, TenantStatus, UserRole
from app.core.errors import ConflictError, ForbiddenError, NotFoundError
from app.core.logging import get_logger
from app.core.security import Principal, get_password_hash
from app.models.tenant import Tenant
from app.models.user import User
from app.repositories import Storage
from app.schemas.common import Pagination
from app.schemas.log import RequestMeta
from app.schemas.tenant import TenantContext, TenantCreate, TenantStats, TenantUpdate
from app.services.audit import AuditLog
from app.services.order_queries import exact_sum
from app.services.tenant_resolver import TenantResolver


logger = get_logger(__name__)


def access_url(tenant: Tenant) -> str:
    if settings.is_development:
        return f"{settings.FRONTEND_URL}?tenant={tenant.slug}"
    return f"https://{tenant.domain}"


class TenantService:
    def __init__(self, storage: Storage, clock: Clock = utcnow, tz: Optional[ZoneInfo] = None):
        self.storage = storage
        self.clock = clock
        self.tz = tz or business_tz()
        self.audit = AuditLog(storage)

    async def get_by_domain(self, domain: str) -> TenantContext:
        return await TenantResolver(self.storage.tenants).resolve(domain)

    async def get(self, tenant_id: str) -> Tenant:
        tenant = await self.storage.tenants.get(tenant_id)
        if tenant is None:
            raise NotFoundError(message="Tenant not found")
        return tenant

    async def list(
        self,
        status: Optional[TenantStatus] = None,
        plan: Optional[TenantPlan] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Tuple[List[Tenant], Pagination]:
        tenants, total = await self.storage.tenants.search(
            status, plan, search, (page - 1) * limit, limit
        )
        return tenants, Pagination.build(page, limit, total)

    async def create(self, data: TenantCreate, meta: Optional[RequestMeta] = None) -> Tuple[Tenant, User]:
        """Create a tenant and its first ADMIN user in one transaction."""
        slug = data.subdomain
        domain = (data.domain or f"{slug}.{settings.TENANT_BASE_DOMAIN}").strip().lower()

        if await self.storage.tenants.find_conflicting(slug, domain):
            raise ConflictError(message="A tenant with this subdomain or domain already exists")
        if await self.storage.users.get_by_email(data.admin_email):
            raise ConflictError(message="A user with this email already exists")

        tenant = Tenant(
            name=data.name,
            slug=slug,
            domain=domain,
            email=data.email,
            plan=data.plan,
            status=TenantStatus.ACTIVE,
            settings=dict(data.settings),
        )
        self.storage.tenants.add(tenant)
        await self.storage.flush()

        admin = User(
            tenant_id=tenant.id,
            email=data.admin_email.lower(),
            name=data.admin_name,
            hashed_password=get_password_hash(data.admin_password),
            role=UserRole.ADMIN,
            is_active=True,
        )
        self.storage.users.add(admin)
        await self.storage.flush()

        await self.audit.event(
            LogAction.TENANT_CREATED,
            f"Tenant {tenant.name} created",
            meta,
            tenant_id=tenant.id,
            tenant_name=tenant.name,
            details={"slug": slug, "domain": domain, "plan": tenant.plan.value, "adminEmail": admin.email},
        )
        await self.storage.commit()
        logger.info(f"Tenant created: {tenant.slug}", extra={"tenant_id": tenant.id, "event": "tenant_created"})
        return tenant, admin

    @staticmethod
    def _check_access(principal: Principal, tenant_id: str) -> None:
        if principal.is_superadmin:
            return
        if principal.role != UserRole.ADMIN or principal.tenant_id != tenant_id:
            raise ForbiddenError(message="You do not have permission to modify this tenant")

    async def update(
        self,
        tenant_id: str,
        data: TenantUpdate,
        principal: Principal,
        meta: Optional[RequestMeta] = None,
    ) -> Tenant:
        self._check_access(principal, tenant_id)
        tenant = await self.get(tenant_id)

        changes = data.model_dump(exclude_unset=True)
        if changes.get("custom_domain"):
            changes["custom_domain"] = changes["custom_domain"].strip().lower()
            if await self.storage.tenants.custom_domain_taken(changes["custom_domain"], tenant.id):
                raise ConflictError(message="This custom domain is already in use")

        for field, value in changes.items():
            setattr(tenant, field, value)
        await self.storage.flush()

        await self.audit.event(
            LogAction.TENANT_UPDATED,
            f"Tenant {tenant.name} updated",
            meta,
            tenant_id=tenant.id,
            tenant_name=tenant.name,
            details={"changes": sorted(changes)},
        )
        await self.storage.commit()
        await self.storage.refresh(tenant)
        return tenant

    async def update_settings(self, tenant_id: str, values: Dict[str, Any], principal: Principal) -> Tenant:
        """Shallow-merge ``values`` into the tenant's settings."""
        self._check_access(principal, tenant_id)
        tenant = await self.get(tenant_id)
        tenant.settings = {**(tenant.settings or {}), **values}
        await self.storage.commit()
        await self.storage.refresh(tenant)
        return tenant

    async def set_status(self, tenant_id: str, status: TenantStatus, meta: Optional[RequestMeta] = None) -> Tenant:
        tenant = await self.get(tenant_id)
        previous = tenant.status
        tenant.status = status
        await self.storage.flush()

        suspended = status == TenantStatus.SUSPENDED
        await self.audit.event(
            LogAction.TENANT_SUSPENDED if suspended else LogAction.TENANT_ACTIVATED,
            f"Tenant {tenant.name} {'suspended' if suspended else 'activated'}",
            meta,
            level=LogLevel.WARNING if suspended else LogLevel.INFO,
            tenant_id=tenant.id,
            tenant_name=tenant.name,
            details={"previousStatus": previous.value, "newStatus": status.value},
        )
        await self.storage.commit()
        await self.storage.refresh(tenant)
        logger.info(f"Tenant {tenant.slug}: {previous.value} -> {status.value}", extra={"tenant_id": tenant.id})
        return tenant

    async def remove(self, tenant_id: str, meta: Optional[RequestMeta] = None) -> None:
        """Delete a tenant and everything it owns."""
        tenant = await self.get(tenant_id)
        if await self.storage.tenants.count() <= 1:
            raise ConflictError(message="The last tenant cannot be deleted")

        owned = await self.storage.tenants.count_owned(tenant.id)
        await self.storage.tenants.delete(tenant.id)

        # The tenant's own logs cascade away, so this entry is not tied to it
        await self.audit.event(
            LogAction.TENANT_DELETED,
            f"Tenant {tenant.name} deleted",
            meta,
            level=LogLevel.WARNING,
            tenant_name=tenant.name,
            details={"tenantId": tenant.id, "slug": tenant.slug, "deleted": owned},
        )
        await self.storage.commit()
        logger.warning(f"Tenant deleted: {tenant.slug}", extra={"tenant_id": tenant.id, "event": "tenant_deleted"})

    async def stats(self, tenant_id: str) -> TenantStats:
        tenant = await self.get(tenant_id)
        since = month_start(self.clock(), self.tz)
        owned = await self.storage.tenants.count_active(tenant.id)
        return TenantStats(
            total_orders=await self.storage.tenants.count_orders(tenant.id),
            total_revenue=exact_sum(await self.storage.tenants.order_totals(tenant.id)),
            active_users=owned["users"],
            active_dishes=owned["dishes"],
            active_categories=owned["categories"],
            orders_this_month=await self.storage.tenants.count_orders(tenant.id, since),
            revenue_this_month=exact_sum(await self.storage.tenants.order_totals(tenant.id, since)),
        )
