"""Tenant administration API endpoints."""
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Query, status

from app.core.dependencies import CurrentPrincipal, Meta, Superadmin, Tenants
from app.core.enums import TenantPlan, TenantStatus
from app.schemas.common import ApiResponse, MessageResponse
from app.schemas.tenant import (
    TenantContext, TenantCreate, TenantCreatedResponse, TenantResponse, TenantStats, TenantUpdate
)
from app.services.tenants import access_url


router = APIRouter()


@router.get("/domain/{domain}", response_model=ApiResponse[TenantContext])
async def get_tenant_by_domain(domain: str, tenants: Tenants):
    """Public lookup used by storefronts to identify their restaurant."""
    return ApiResponse(data=await tenants.get_by_domain(domain))


@router.get("", response_model=ApiResponse[List[TenantResponse]])
async def list_tenants(
    _: Superadmin,
    tenants: Tenants,
    status_filter: Optional[TenantStatus] = Query(None, alias="status"),
    plan: Optional[TenantPlan] = None,
    search: Optional[str] = Query(None, max_length=100),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
):
    found, pagination = await tenants.list(status_filter, plan, search, page, limit)
    return ApiResponse(data=[TenantResponse.model_validate(t) for t in found], pagination=pagination)


@router.post("", response_model=ApiResponse[TenantCreatedResponse], status_code=status.HTTP_201_CREATED)
async def create_tenant(payload: TenantCreate, _: Superadmin, tenants: Tenants, meta: Meta):
    """Create a tenant together with its first admin user."""
    tenant, admin = await tenants.create(payload, meta)
    data = TenantCreatedResponse(
        **TenantResponse.model_validate(tenant).model_dump(),
        access_url=access_url(tenant),
        admin_email=admin.email,
    )
    return ApiResponse(message="Tenant created", data=data)


@router.get("/{tenant_id}", response_model=ApiResponse[TenantResponse])
async def get_tenant(tenant_id: str, _: Superadmin, tenants: Tenants):
    return ApiResponse(data=TenantResponse.model_validate(await tenants.get(tenant_id)))


@router.patch("/{tenant_id}", response_model=ApiResponse[TenantResponse])
async def update_tenant(
    tenant_id: str,
    payload: TenantUpdate,
    principal: CurrentPrincipal,
    tenants: Tenants,
    meta: Meta,
):
    tenant = await tenants.update(tenant_id, payload, principal, meta)
    return ApiResponse(message="Tenant updated", data=TenantResponse.model_validate(tenant))


@router.api_route("/{tenant_id}/settings", methods=["PATCH", "PUT"], response_model=ApiResponse[TenantResponse])
async def update_tenant_settings(
    tenant_id: str,
    principal: CurrentPrincipal,
    tenants: Tenants,
    values: Dict[str, Any] = Body(...),
):
    """Merge the given keys into the tenant's settings."""
    tenant = await tenants.update_settings(tenant_id, values, principal)
    return ApiResponse(message="Settings updated", data=TenantResponse.model_validate(tenant))


@router.patch("/{tenant_id}/suspend", response_model=ApiResponse[TenantResponse])
async def suspend_tenant(tenant_id: str, _: Superadmin, tenants: Tenants, meta: Meta):
    tenant = await tenants.set_status(tenant_id, TenantStatus.SUSPENDED, meta)
    return ApiResponse(message="Tenant suspended", data=TenantResponse.model_validate(tenant))


@router.patch("/{tenant_id}/activate", response_model=ApiResponse[TenantResponse])
async def activate_tenant(tenant_id: str, _: Superadmin, tenants: Tenants, meta: Meta):
    tenant = await tenants.set_status(tenant_id, TenantStatus.ACTIVE, meta)
    return ApiResponse(message="Tenant activated", data=TenantResponse.model_validate(tenant))


@router.delete("/{tenant_id}", response_model=MessageResponse)
async def delete_tenant(tenant_id: str, _: Superadmin, tenants: Tenants, meta: Meta):
    """Delete a tenant and all of its data."""
    await tenants.remove(tenant_id, meta)
    return MessageResponse(message="Tenant deleted")


@router.get("/{tenant_id}/stats", response_model=ApiResponse[TenantStats])
async def get_tenant_stats(tenant_id: str, _: Superadmin, tenants: Tenants):
    return ApiResponse(data=await tenants.stats(tenant_id))
