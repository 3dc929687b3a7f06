"""Audit log sink and queries.

Audit writes never decide the outcome of the operation they describe: an
entry is written in its own savepoint and any failure is logged and
dropped. The caller's commit persists the entry together with its work.
"""
from datetime import datetime, timedelta
from typing import List, Optional

from app.core.enums import LogAction, LogLevel
from app.core.logging import get_logger
from app.models.log import Log
from app.repositories import Storage
from app.schemas.log import AuditEntry, LogFilters, LogStats, RequestMeta


logger = get_logger(__name__)

RECENT_WINDOW = timedelta(hours=24)


class AuditLog:
    def __init__(self, storage: Storage):
        self.storage = storage

    async def record(self, entry: AuditEntry) -> bool:
        """Append ``entry``; returns False when it could not be written."""
        try:
            async with self.storage.savepoint():
                await self.storage.logs.insert(
                    Log(
                        level=entry.level,
                        action=entry.action,
                        message=entry.message,
                        details=entry.details,
                        user_id=entry.user_id,
                        user_email=entry.user_email,
                        tenant_id=entry.tenant_id,
                        tenant_name=entry.tenant_name,
                        ip_address=entry.ip_address,
                        user_agent=entry.user_agent,
                    )
                )
            return True
        except Exception:
            logger.exception(
                f"Failed to write audit entry {entry.action.value}",
                extra={"event": entry.action.value, "tenant_id": entry.tenant_id},
            )
            return False

    async def event(
        self,
        action: LogAction,
        message: str,
        meta: Optional[RequestMeta] = None,
        level: LogLevel = LogLevel.INFO,
        tenant_id: Optional[str] = None,
        tenant_name: Optional[str] = None,
        details: Optional[dict] = None,
    ) -> bool:
        """``record`` with actor fields taken from the request."""
        meta = meta or RequestMeta()
        return await self.record(
            AuditEntry(
                level=level,
                action=action,
                message=message,
                details=details,
                user_id=meta.user_id,
                user_email=meta.user_email,
                tenant_id=tenant_id,
                tenant_name=tenant_name,
                ip_address=meta.ip_address,
                user_agent=meta.user_agent,
            )
        )

    async def search(self, filters: LogFilters):
        return await self.storage.logs.search(filters)

    async def stats(self, now: datetime) -> LogStats:
        return LogStats(
            total_logs=await self.storage.logs.count(),
            error_logs=await self.storage.logs.count(level=LogLevel.ERROR),
            warning_logs=await self.storage.logs.count(level=LogLevel.WARNING),
            recent_logs=await self.storage.logs.count(since=now - RECENT_WINDOW),
        )

    async def recent(self, now: datetime, limit: int = 20) -> List[Log]:
        return await self.storage.logs.recent(now - RECENT_WINDOW, limit)

    async def by_action(self, action: LogAction, limit: int = 50) -> List[Log]:
        return await self.storage.logs.by_action(action, limit)
