"""Menu dish API endpoints."""
from typing import List, Optional

from fastapi import APIRouter, Query, status

from app.core.dependencies import AdminScope, Dishes, PublicTenant
from app.schemas.catalog import DishCreate, DishFilters, DishResponse, DishUpdate, ReorderRequest
from app.schemas.common import ApiResponse, MessageResponse


router = APIRouter()


@router.get("", response_model=ApiResponse[List[DishResponse]])
async def list_dishes(
    tenant: PublicTenant,
    dishes: Dishes,
    category_id: Optional[str] = Query(None, alias="categoryId"),
    search: Optional[str] = Query(None, max_length=100),
    is_active: Optional[bool] = Query(None, alias="isActive"),
    is_featured: Optional[bool] = Query(None, alias="isFeatured"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
):
    """List dishes with filters and pagination."""
    filters = DishFilters(
        category_id=category_id,
        search=search,
        is_active=is_active,
        is_featured=is_featured,
        page=page,
        limit=limit,
    )
    found, pagination = await dishes.list(filters, tenant.id)
    return ApiResponse(data=await dishes.present(found, tenant.id), pagination=pagination)


@router.get("/slug/{slug}", response_model=ApiResponse[DishResponse])
async def get_dish_by_slug(slug: str, tenant: PublicTenant, dishes: Dishes):
    dish = await dishes.get_by_slug(slug, tenant.id)
    return ApiResponse(data=await dishes.present_one(dish, tenant.id))


@router.get("/{dish_id}", response_model=ApiResponse[DishResponse])
async def get_dish(dish_id: str, tenant: PublicTenant, dishes: Dishes):
    dish = await dishes.get(dish_id, tenant.id)
    return ApiResponse(data=await dishes.present_one(dish, tenant.id))


@router.post("", response_model=ApiResponse[DishResponse], status_code=status.HTTP_201_CREATED)
async def create_dish(payload: DishCreate, scope: AdminScope, dishes: Dishes):
    tenant_id = scope.require_tenant_id()
    dish = await dishes.create(payload, tenant_id)
    return ApiResponse(message="Dish created", data=await dishes.present_one(dish, tenant_id))


@router.post("/reorder", response_model=MessageResponse)
async def reorder_dishes(payload: ReorderRequest, scope: AdminScope, dishes: Dishes):
    await dishes.reorder(payload.ids, scope.require_tenant_id())
    return MessageResponse(message="Dishes reordered")


@router.put("/{dish_id}", response_model=ApiResponse[DishResponse])
async def update_dish(dish_id: str, payload: DishUpdate, scope: AdminScope, dishes: Dishes):
    tenant_id = scope.require_tenant_id()
    dish = await dishes.update(dish_id, payload, tenant_id)
    return ApiResponse(message="Dish updated", data=await dishes.present_one(dish, tenant_id))


@router.delete("/{dish_id}", response_model=MessageResponse)
async def delete_dish(dish_id: str, scope: AdminScope, dishes: Dishes):
    await dishes.delete(dish_id, scope.require_tenant_id())
    return MessageResponse(message="Dish deleted")
