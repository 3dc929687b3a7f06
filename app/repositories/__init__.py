"""Storage repositories.

``Storage`` bundles one repository per entity over a single session and is
the only thing services receive; they never build queries themselves.
"""
from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories.catalog import CategoryRepository, DishRepository, SubtagRepository
from app.repositories.log import LogRepository
from app.repositories.order import OrderRepository
from app.repositories.tenant import TenantRepository, UserRepository


class Storage:
    """Unit of work over one ``AsyncSession``."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.tenants = TenantRepository(session)
        self.users = UserRepository(session)
        self.orders = OrderRepository(session)
        self.categories = CategoryRepository(session)
        self.dishes = DishRepository(session)
        self.subtags = SubtagRepository(session)
        self.logs = LogRepository(session)

    def savepoint(self):
        """Nested transaction; a failure inside rolls back only this block."""
        return self.session.begin_nested()

    async def flush(self) -> None:
        await self.session.flush()

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()

    async def refresh(self, instance) -> None:
        await self.session.refresh(instance)


__all__ = [
    "Storage",
    "TenantRepository", "UserRepository", "OrderRepository",
    "CategoryRepository", "DishRepository", "SubtagRepository", "LogRepository",
]
