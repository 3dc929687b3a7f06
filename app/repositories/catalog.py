"""Category, dish and subtag persistence. Every lookup is tenant-scoped."""
from typing import Any, Dict, Iterable, List, Optional, Tuple

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.category import Category
from app.models.dish import Dish
from app.models.subtag import Subtag


class CategoryRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def list(self, tenant_id: str) -> List[Tuple[Category, int]]:
        """Categories in display order, each with its dish count."""
        dish_count = (
            select(func.count(Dish.id))
            .where(Dish.category_id == Category.id)
            .correlate(Category)
            .scalar_subquery()
        )
        result = await self.session.execute(
            select(Category, dish_count)
            .where(Category.tenant_id == tenant_id)
            .order_by(Category.sort_order, Category.name)
        )
        return [(row[0], row[1]) for row in result.all()]

    async def get(self, category_id: str, tenant_id: str) -> Optional[Category]:
        result = await self.session.execute(
            select(Category).where(Category.id == category_id, Category.tenant_id == tenant_id)
        )
        return result.scalar_one_or_none()

    async def get_by_slug(self, slug: str, tenant_id: str) -> Optional[Category]:
        result = await self.session.execute(
            select(Category).where(Category.slug == slug, Category.tenant_id == tenant_id)
        )
        return result.scalar_one_or_none()

    async def get_many(self, ids: Iterable[str], tenant_id: str) -> Dict[str, Category]:
        result = await self.session.execute(
            select(Category).where(Category.id.in_(list(ids)), Category.tenant_id == tenant_id)
        )
        return {c.id: c for c in result.scalars().all()}

    async def count_dishes(self, category_id: str) -> int:
        result = await self.session.execute(
            select(func.count(Dish.id)).where(Dish.category_id == category_id)
        )
        return result.scalar() or 0

    def add(self, category: Category) -> None:
        self.session.add(category)

    async def delete(self, category_id: str) -> None:
        await self.session.execute(delete(Category).where(Category.id == category_id))


class DishRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    def _select(self):
        # reload the category even for dishes already in the identity map
        return (
            select(Dish)
            .options(selectinload(Dish.category))
            .execution_options(populate_existing=True)
        )

    async def search(
        self,
        tenant_id: str,
        category_id: Optional[str],
        search: Optional[str],
        is_active: Optional[bool],
        is_featured: Optional[bool],
        offset: int,
        limit: int,
    ) -> Tuple[List[Dish], int]:
        conditions: List[Any] = [Dish.tenant_id == tenant_id]
        if category_id:
            conditions.append(Dish.category_id == category_id)
        if search:
            pattern = f"%{search.lower()}%"
            conditions.append(
                or_(func.lower(Dish.name).like(pattern), func.lower(Dish.description).like(pattern))
            )
        if is_active is not None:
            conditions.append(Dish.is_active == is_active)
        if is_featured is not None:
            conditions.append(Dish.is_featured == is_featured)

        total_result = await self.session.execute(select(func.count(Dish.id)).where(*conditions))
        total = total_result.scalar() or 0

        result = await self.session.execute(
            self._select()
            .where(*conditions)
            .order_by(Dish.sort_order, Dish.name)
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all()), total

    async def get(self, dish_id: str, tenant_id: str) -> Optional[Dish]:
        result = await self.session.execute(
            self._select().where(Dish.id == dish_id, Dish.tenant_id == tenant_id)
        )
        return result.scalar_one_or_none()

    async def get_by_slug(self, slug: str, tenant_id: str) -> Optional[Dish]:
        result = await self.session.execute(
            self._select().where(Dish.slug == slug, Dish.tenant_id == tenant_id)
        )
        return result.scalar_one_or_none()

    async def slug_taken(self, slug: str, tenant_id: str, exclude_id: Optional[str] = None) -> bool:
        query = select(Dish.id).where(Dish.slug == slug, Dish.tenant_id == tenant_id)
        if exclude_id:
            query = query.where(Dish.id != exclude_id)
        result = await self.session.execute(query.limit(1))
        return result.scalar_one_or_none() is not None

    async def get_many(self, ids: Iterable[str], tenant_id: str) -> Dict[str, Dish]:
        result = await self.session.execute(
            select(Dish).where(Dish.id.in_(list(ids)), Dish.tenant_id == tenant_id)
        )
        return {d.id: d for d in result.scalars().all()}

    async def all_for_tenant(self, tenant_id: str) -> List[Dish]:
        result = await self.session.execute(select(Dish).where(Dish.tenant_id == tenant_id))
        return list(result.scalars().all())

    async def count(self, is_active: Optional[bool] = None) -> int:
        """Dishes across every tenant."""
        query = select(func.count(Dish.id))
        if is_active is not None:
            query = query.where(Dish.is_active.is_(is_active))
        result = await self.session.execute(query)
        return result.scalar() or 0

    def add(self, dish: Dish) -> None:
        self.session.add(dish)

    async def delete(self, dish_id: str) -> None:
        await self.session.execute(delete(Dish).where(Dish.id == dish_id))


class SubtagRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def list(self, tenant_id: str) -> List[Subtag]:
        result = await self.session.execute(
            select(Subtag).where(Subtag.tenant_id == tenant_id).order_by(Subtag.name)
        )
        return list(result.scalars().all())

    async def get(self, subtag_id: str, tenant_id: str) -> Optional[Subtag]:
        result = await self.session.execute(
            select(Subtag).where(Subtag.id == subtag_id, Subtag.tenant_id == tenant_id)
        )
        return result.scalar_one_or_none()

    async def find_by_name(self, name: str, tenant_id: str, exclude_id: Optional[str] = None) -> Optional[Subtag]:
        """Case-insensitive name lookup within a tenant.

        Folded in Python: SQLite's ``lower()`` leaves non-ASCII letters alone.
        """
        key = name.strip().casefold()
        for subtag in await self.list(tenant_id):
            if subtag.id != exclude_id and subtag.name.strip().casefold() == key:
                return subtag
        return None

    async def get_many(self, ids: Iterable[str], tenant_id: str) -> Dict[str, Subtag]:
        ids = list(ids)
        if not ids:
            return {}
        result = await self.session.execute(
            select(Subtag).where(Subtag.id.in_(ids), Subtag.tenant_id == tenant_id)
        )
        return {s.id: s for s in result.scalars().all()}

    def add(self, subtag: Subtag) -> None:
        self.session.add(subtag)

    async def delete(self, subtag_id: str) -> None:
        await self.session.execute(delete(Subtag).where(Subtag.id == subtag_id))
