"""Audit log API endpoints (superadmin only)."""
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Query

from app.core.dependencies import Audit, ClockDep, Superadmin
from app.core.enums import LogAction, LogLevel
from app.schemas.common import ApiResponse, Pagination
from app.schemas.log import LogFilters, LogResponse, LogStats


router = APIRouter()


@router.get("", response_model=ApiResponse[List[LogResponse]])
async def list_logs(
    _: Superadmin,
    audit: Audit,
    level: Optional[LogLevel] = None,
    action: Optional[LogAction] = None,
    user_id: Optional[str] = Query(None, alias="userId"),
    tenant_id: Optional[str] = Query(None, alias="tenantId"),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
):
    filters = LogFilters(
        level=level,
        action=action,
        user_id=user_id,
        tenant_id=tenant_id,
        start_date=start_date,
        end_date=end_date,
        limit=limit,
        offset=offset,
    )
    logs, total = await audit.search(filters)
    pagination = Pagination.build(offset // limit + 1, limit, total)
    return ApiResponse(data=[LogResponse.model_validate(log) for log in logs], pagination=pagination)


@router.get("/stats", response_model=ApiResponse[LogStats])
async def get_log_stats(_: Superadmin, audit: Audit, clock: ClockDep):
    """Totals, error and warning counts, and entries from the last 24 hours."""
    return ApiResponse(data=await audit.stats(clock()))


@router.get("/recent", response_model=ApiResponse[List[LogResponse]])
async def get_recent_logs(
    _: Superadmin,
    audit: Audit,
    clock: ClockDep,
    limit: int = Query(20, ge=1, le=100),
):
    logs = await audit.recent(clock(), limit)
    return ApiResponse(data=[LogResponse.model_validate(log) for log in logs])


@router.get("/action/{action}", response_model=ApiResponse[List[LogResponse]])
async def get_logs_by_action(
    action: LogAction,
    _: Superadmin,
    audit: Audit,
    limit: int = Query(50, ge=1, le=100),
):
    logs = await audit.by_action(action, limit)
    return ApiResponse(data=[LogResponse.model_validate(log) for log in logs])
