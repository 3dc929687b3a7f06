"""Tenant admin endpoints: the restaurant's own users and overview."""
from typing import List

from fastapi import APIRouter, status

from app.core.dependencies import AdminScope, Users
from app.schemas.auth import UserResponse
from app.schemas.common import ApiResponse, MessageResponse
from app.schemas.user import TenantOverview, UserCreate, UserUpdate


router = APIRouter()


@router.get("/users", response_model=ApiResponse[List[UserResponse]])
async def list_users(scope: AdminScope, users: Users):
    """Users of the tenant, newest first."""
    found = await users.list(scope.require_tenant_id())
    return ApiResponse(data=[UserResponse.model_validate(u) for u in found])


@router.post("/users", response_model=ApiResponse[UserResponse], status_code=status.HTTP_201_CREATED)
async def create_user(payload: UserCreate, scope: AdminScope, users: Users):
    """Add an ADMIN or ORDERS_MANAGER (the default) to the tenant."""
    user = await users.create(payload, scope.require_tenant_id())
    return ApiResponse(message="User created", data=UserResponse.model_validate(user))


@router.put("/users/{user_id}", response_model=ApiResponse[UserResponse])
async def update_user(user_id: str, payload: UserUpdate, scope: AdminScope, users: Users):
    user = await users.update(user_id, payload, scope.require_tenant_id())
    return ApiResponse(message="User updated", data=UserResponse.model_validate(user))


@router.delete("/users/{user_id}", response_model=MessageResponse)
async def delete_user(user_id: str, scope: AdminScope, users: Users):
    await users.delete(user_id, scope.require_tenant_id(), scope.principal)
    return MessageResponse(message="User deleted")


@router.get("/stats", response_model=ApiResponse[TenantOverview])
async def get_overview(scope: AdminScope, users: Users):
    """Dish, category, order and user counts plus the latest orders."""
    return ApiResponse(data=await users.overview(scope.require_tenant_id()))
