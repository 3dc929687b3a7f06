"""Menu category API endpoints."""
from typing import List

from fastapi import APIRouter, status

from app.core.dependencies import AdminScope, Categories, PublicTenant
from app.schemas.catalog import CategoryCreate, CategoryResponse, CategoryUpdate, ReorderRequest
from app.schemas.common import ApiResponse, MessageResponse


router = APIRouter()


@router.get("", response_model=ApiResponse[List[CategoryResponse]])
async def list_categories(tenant: PublicTenant, categories: Categories):
    """Categories of the restaurant in display order, with dish counts."""
    return ApiResponse(data=await categories.list(tenant.id))


@router.get("/slug/{slug}", response_model=ApiResponse[CategoryResponse])
async def get_category_by_slug(slug: str, tenant: PublicTenant, categories: Categories):
    category = await categories.get_by_slug(slug, tenant.id)
    return ApiResponse(data=CategoryResponse.model_validate(category))


@router.get("/{category_id}", response_model=ApiResponse[CategoryResponse])
async def get_category(category_id: str, tenant: PublicTenant, categories: Categories):
    category = await categories.get(category_id, tenant.id)
    return ApiResponse(data=CategoryResponse.model_validate(category))


@router.post("", response_model=ApiResponse[CategoryResponse], status_code=status.HTTP_201_CREATED)
async def create_category(payload: CategoryCreate, scope: AdminScope, categories: Categories):
    category = await categories.create(payload, scope.require_tenant_id())
    return ApiResponse(message="Category created", data=CategoryResponse.model_validate(category))


@router.post("/reorder", response_model=MessageResponse)
async def reorder_categories(payload: ReorderRequest, scope: AdminScope, categories: Categories):
    """Set the display order to the order of the given ids."""
    await categories.reorder(payload.ids, scope.require_tenant_id())
    return MessageResponse(message="Categories reordered")


@router.put("/{category_id}", response_model=ApiResponse[CategoryResponse])
async def update_category(
    category_id: str,
    payload: CategoryUpdate,
    scope: AdminScope,
    categories: Categories,
):
    category = await categories.update(category_id, payload, scope.require_tenant_id())
    return ApiResponse(message="Category updated", data=CategoryResponse.model_validate(category))


@router.delete("/{category_id}", response_model=MessageResponse)
async def delete_category(category_id: str, scope: AdminScope, categories: Categories):
    """Delete an empty category."""
    await categories.delete(category_id, scope.require_tenant_id())
    return MessageResponse(message="Category deleted")
