"""Audit log persistence."""
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.enums import LogAction, LogLevel
from app.models.log import Log
from app.schemas.log import LogFilters


class LogRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def insert(self, log: Log) -> None:
        self.session.add(log)
        await self.session.flush()

    async def search(self, filters: LogFilters) -> Tuple[List[Log], int]:
        conditions = []
        if filters.level:
            conditions.append(Log.level == filters.level)
        if filters.action:
            conditions.append(Log.action == filters.action)
        if filters.user_id:
            conditions.append(Log.user_id == filters.user_id)
        if filters.tenant_id:
            conditions.append(Log.tenant_id == filters.tenant_id)
        if filters.start_date:
            conditions.append(Log.created_at >= filters.start_date)
        if filters.end_date:
            conditions.append(Log.created_at <= filters.end_date)

        total_result = await self.session.execute(select(func.count(Log.id)).where(*conditions))
        total = total_result.scalar() or 0

        result = await self.session.execute(
            select(Log)
            .where(*conditions)
            .order_by(Log.created_at.desc())
            .offset(filters.offset)
            .limit(filters.limit)
        )
        return list(result.scalars().all()), total

    async def count(self, level: Optional[LogLevel] = None, since: Optional[datetime] = None) -> int:
        query = select(func.count(Log.id))
        if level is not None:
            query = query.where(Log.level == level)
        if since is not None:
            query = query.where(Log.created_at >= since)
        result = await self.session.execute(query)
        return result.scalar() or 0

    async def recent(self, since: datetime, limit: int) -> List[Log]:
        result = await self.session.execute(
            select(Log).where(Log.created_at >= since).order_by(Log.created_at.desc()).limit(limit)
        )
        return list(result.scalars().all())

    async def by_action(self, action: LogAction, limit: int) -> List[Log]:
        result = await self.session.execute(
            select(Log).where(Log.action == action).order_by(Log.created_at.desc()).limit(limit)
        )
        return list(result.scalars().all())
