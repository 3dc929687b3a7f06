"""Cross-tenant access guard."""
from typing import Optional

from app.core.errors import ForbiddenError, UnauthenticatedError
from app.core.logging import get_logger
from app.core.security import Principal
from app.schemas.tenant import TenantContext


logger = get_logger(__name__)


def enforce_tenant_isolation(principal: Optional[Principal], tenant: Optional[TenantContext]) -> None:
    """Allow only superadmins or principals that belong to ``tenant``.

    Raises ``UnauthenticatedError`` when either side is missing and
    ``ForbiddenError`` when the principal belongs to another tenant.
    """
    if principal is not None and principal.is_superadmin:
        return

    if principal is None or tenant is None:
        raise UnauthenticatedError(message="Authentication and tenant context are required")

    if principal.tenant_id != tenant.id:
        logger.warning(
            f"Cross-tenant access denied: user {principal.id} -> tenant {tenant.id}",
            extra={"user_id": principal.id, "tenant_id": tenant.id},
        )
        raise ForbiddenError(message="You do not have access to this restaurant")
