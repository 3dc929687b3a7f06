"""Dish subtags."""
from typing import List, Optional

from app.core.errors import ConflictError, NotFoundError
from app.core.logging import get_logger
from app.models.subtag import Subtag
from app.repositories import Storage
from app.schemas.catalog import SubtagCreate, SubtagUpdate


logger = get_logger(__name__)


class SubtagService:
    def __init__(self, storage: Storage):
        self.storage = storage

    async def _ensure_unique(self, name: str, tenant_id: str, exclude_id: Optional[str] = None) -> None:
        if await self.storage.subtags.find_by_name(name, tenant_id, exclude_id=exclude_id):
            raise ConflictError(
                message=f"A subtag named '{name}' already exists",
                error="Duplicate subtag name",
            )

    async def list(self, tenant_id: str) -> List[Subtag]:
        return await self.storage.subtags.list(tenant_id)

    async def get(self, subtag_id: str, tenant_id: str) -> Subtag:
        subtag = await self.storage.subtags.get(subtag_id, tenant_id)
        if subtag is None:
            raise NotFoundError(message="Subtag not found")
        return subtag

    async def create(self, data: SubtagCreate, tenant_id: str) -> Subtag:
        await self._ensure_unique(data.name, tenant_id)
        subtag = Subtag(tenant_id=tenant_id, name=data.name)
        self.storage.subtags.add(subtag)
        await self.storage.commit()
        return subtag

    async def update(self, subtag_id: str, data: SubtagUpdate, tenant_id: str) -> Subtag:
        subtag = await self.get(subtag_id, tenant_id)
        if data.name is not None:
            await self._ensure_unique(data.name, tenant_id, exclude_id=subtag.id)
            subtag.name = data.name
        await self.storage.commit()
        await self.storage.refresh(subtag)
        return subtag

    async def delete(self, subtag_id: str, tenant_id: str) -> int:
        """Delete a subtag and unlink it from dishes; returns dishes touched."""
        subtag = await self.get(subtag_id, tenant_id)

        touched = 0
        for dish in await self.storage.dishes.all_for_tenant(tenant_id):
            if subtag.id in (dish.subtag_ids or []):
                # reassign so the JSON column is flagged dirty
                dish.subtag_ids = [i for i in dish.subtag_ids if i != subtag.id]
                touched += 1

        await self.storage.flush()
        await self.storage.subtags.delete(subtag.id)
        await self.storage.commit()
        logger.info(f"Subtag deleted: {subtag.name} ({touched} dishes updated)", extra={"tenant_id": tenant_id})
        return touched
