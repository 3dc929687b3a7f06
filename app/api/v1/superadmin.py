"""Superadmin platform overview endpoints."""
from fastapi import APIRouter

from app.core.dependencies import Platform, Superadmin
from app.schemas.common import ApiResponse
from app.schemas.platform import PlatformDashboard, PlatformStats


router = APIRouter()


@router.get("/dashboard", response_model=ApiResponse[PlatformDashboard])
async def get_dashboard(_: Superadmin, platform: Platform):
    """Tenant and log counts with the latest tenants and log entries."""
    return ApiResponse(data=await platform.dashboard())


@router.get("/stats", response_model=ApiResponse[PlatformStats])
async def get_platform_stats(_: Superadmin, platform: Platform):
    return ApiResponse(data=await platform.stats())
