"""Tenant resolution from a request's domain signal."""
from typing import List, Optional

from app.core.config import settings
from app.core.enums import TenantStatus
from app.core.errors import TenantHeaderMissingError, TenantNotFoundError, TenantSuspendedError
from app.core.logging import get_logger
from app.models.tenant import Tenant
from app.repositories.tenant import TenantRepository
from app.schemas.tenant import TenantContext


logger = get_logger(__name__)

# Suspended tenants are found so callers get a suspension notice, not a 404
RESOLVABLE_STATUSES = (TenantStatus.ACTIVE, TenantStatus.SUSPENDED)


def normalize_host(domain: str) -> str:
    """"Sabor.James.pe:443 " -> "sabor.james.pe"."""
    host = domain.strip().lower()
    if "://" in host:
        host = host.split("://", 1)[1]
    host = host.split("/", 1)[0]
    return host.split(":", 1)[0]


def slug_candidate(host: str) -> str:
    """Only the first label of a host can name a tenant slug."""
    return host.split(".", 1)[0]


def _pick(matches: List[Tenant], host: str, slug: str) -> Optional[Tenant]:
    # domain beats custom domain beats slug
    for predicate in (
        lambda t: t.domain == host,
        lambda t: t.custom_domain == host,
        lambda t: t.slug == slug,
    ):
        for tenant in matches:
            if predicate(tenant):
                return tenant
    return None


class TenantResolver:
    """Finds the tenant that governs a request."""

    def __init__(self, tenants: TenantRepository):
        self.tenants = tenants

    async def resolve(self, domain: Optional[str]) -> TenantContext:
        if domain is None or not domain.strip():
            raise TenantHeaderMissingError(
                message=f"The {settings.TENANT_HEADER} header is required",
            )

        host = normalize_host(domain)
        slug = slug_candidate(host)
        matches = await self.tenants.find_by_host(host, slug, RESOLVABLE_STATUSES)
        tenant = _pick(matches, host, slug)
        if tenant is None:
            logger.info(f"No tenant for domain '{host}'")
            raise TenantNotFoundError(message="No tenant was found for this domain")
        return self._admit(tenant)

    async def resolve_id(self, tenant_id: str) -> TenantContext:
        tenant = await self.tenants.get(tenant_id)
        if tenant is None or tenant.status not in RESOLVABLE_STATUSES:
            raise TenantNotFoundError(message="No tenant was found for this account")
        return self._admit(tenant)

    @staticmethod
    def _admit(tenant: Tenant) -> TenantContext:
        if tenant.status == TenantStatus.SUSPENDED:
            raise TenantSuspendedError(
                message="This restaurant has been temporarily suspended",
                tenant={"name": tenant.name, "slug": tenant.slug},
            )
        return TenantContext.model_validate(tenant)
