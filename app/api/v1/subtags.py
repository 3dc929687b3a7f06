"""Dish subtag API endpoints."""
from typing import List

from fastapi import APIRouter, status

from app.core.dependencies import AdminScope, Scope, Subtags
from app.schemas.catalog import SubtagCreate, SubtagResponse, SubtagUpdate
from app.schemas.common import ApiResponse, MessageResponse


router = APIRouter()


@router.get("", response_model=ApiResponse[List[SubtagResponse]])
async def list_subtags(scope: Scope, subtags: Subtags):
    found = await subtags.list(scope.require_tenant_id())
    return ApiResponse(data=[SubtagResponse.model_validate(s) for s in found])


@router.get("/{subtag_id}", response_model=ApiResponse[SubtagResponse])
async def get_subtag(subtag_id: str, scope: Scope, subtags: Subtags):
    subtag = await subtags.get(subtag_id, scope.require_tenant_id())
    return ApiResponse(data=SubtagResponse.model_validate(subtag))


@router.post("", response_model=ApiResponse[SubtagResponse], status_code=status.HTTP_201_CREATED)
async def create_subtag(payload: SubtagCreate, scope: AdminScope, subtags: Subtags):
    subtag = await subtags.create(payload, scope.require_tenant_id())
    return ApiResponse(message="Subtag created", data=SubtagResponse.model_validate(subtag))


@router.patch("/{subtag_id}", response_model=ApiResponse[SubtagResponse])
async def update_subtag(subtag_id: str, payload: SubtagUpdate, scope: AdminScope, subtags: Subtags):
    subtag = await subtags.update(subtag_id, payload, scope.require_tenant_id())
    return ApiResponse(message="Subtag updated", data=SubtagResponse.model_validate(subtag))


@router.delete("/{subtag_id}", response_model=MessageResponse)
async def delete_subtag(subtag_id: str, scope: AdminScope, subtags: Subtags):
    """Delete a subtag and remove it from every dish."""
    touched = await subtags.delete(subtag_id, scope.require_tenant_id())
    return MessageResponse(message=f"Subtag deleted ({touched} dishes updated)")
