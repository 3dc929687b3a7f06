"""Menu dishes."""
from typing import Iterable, List, Tuple

from app.core.errors import BadRequestError, ConflictError, NotFoundError
from app.core.logging import get_logger
from app.models.dish import Dish
from app.repositories import Storage
from app.schemas.catalog import DishCreate, DishFilters, DishResponse, DishUpdate, SubtagRef
from app.schemas.common import Pagination
from app.services.categories import slug_for


logger = get_logger(__name__)


def _dedupe(ids: Iterable[str]) -> List[str]:
    seen = []
    for i in ids:
        if i not in seen:
            seen.append(i)
    return seen


class DishService:
    def __init__(self, storage: Storage):
        self.storage = storage

    async def _check_category(self, category_id: str, tenant_id: str) -> None:
        if await self.storage.categories.get(category_id, tenant_id) is None:
            raise NotFoundError(message="Category not found")

    async def _check_subtags(self, subtag_ids: List[str], tenant_id: str) -> List[str]:
        subtag_ids = _dedupe(subtag_ids)
        found = await self.storage.subtags.get_many(subtag_ids, tenant_id)
        unknown = [i for i in subtag_ids if i not in found]
        if unknown:
            raise BadRequestError(message="Some subtags do not exist", unknown=unknown)
        return subtag_ids

    async def present(self, dishes: List[Dish], tenant_id: str) -> List[DishResponse]:
        """Responses with ``subtag_ids`` resolved; dangling ids are skipped."""
        wanted = {i for dish in dishes for i in (dish.subtag_ids or [])}
        subtags = await self.storage.subtags.get_many(wanted, tenant_id)
        responses = []
        for dish in dishes:
            refs = [
                SubtagRef(id=i, name=subtags[i].name)
                for i in (dish.subtag_ids or []) if i in subtags
            ]
            responses.append(DishResponse.model_validate(dish).model_copy(update={"subtags": refs}))
        return responses

    async def present_one(self, dish: Dish, tenant_id: str) -> DishResponse:
        return (await self.present([dish], tenant_id))[0]

    async def list(self, filters: DishFilters, tenant_id: str) -> Tuple[List[Dish], Pagination]:
        dishes, total = await self.storage.dishes.search(
            tenant_id,
            filters.category_id,
            filters.search,
            filters.is_active,
            filters.is_featured,
            (filters.page - 1) * filters.limit,
            filters.limit,
        )
        return dishes, Pagination.build(filters.page, filters.limit, total)

    async def get(self, dish_id: str, tenant_id: str) -> Dish:
        dish = await self.storage.dishes.get(dish_id, tenant_id)
        if dish is None:
            raise NotFoundError(message="Dish not found")
        return dish

    async def get_by_slug(self, slug: str, tenant_id: str) -> Dish:
        dish = await self.storage.dishes.get_by_slug(slug, tenant_id)
        if dish is None:
            raise NotFoundError(message="Dish not found")
        return dish

    async def create(self, data: DishCreate, tenant_id: str) -> Dish:
        slug = slug_for(data.name)
        if await self.storage.dishes.slug_taken(slug, tenant_id):
            raise ConflictError(message="A dish with this name already exists")
        await self._check_category(data.category_id, tenant_id)
        subtag_ids = await self._check_subtags(data.subtag_ids, tenant_id)

        dish = Dish(
            tenant_id=tenant_id,
            slug=slug,
            **data.model_dump(exclude={"subtag_ids"}),
            subtag_ids=subtag_ids,
        )
        self.storage.dishes.add(dish)
        await self.storage.commit()
        logger.info(f"Dish created: {slug}", extra={"tenant_id": tenant_id})
        return await self.get(dish.id, tenant_id)

    async def update(self, dish_id: str, data: DishUpdate, tenant_id: str) -> Dish:
        dish = await self.get(dish_id, tenant_id)
        changes = data.model_dump(exclude_unset=True)

        if changes.get("name"):
            slug = slug_for(changes["name"])
            if await self.storage.dishes.slug_taken(slug, tenant_id, exclude_id=dish.id):
                raise ConflictError(message="A dish with this name already exists")
            changes["slug"] = slug
        if changes.get("category_id"):
            await self._check_category(changes["category_id"], tenant_id)
        if changes.get("subtag_ids") is not None:
            changes["subtag_ids"] = await self._check_subtags(changes["subtag_ids"], tenant_id)

        nullable = ("description", "image", "preparation_time", "servings")
        for field, value in changes.items():
            if value is not None or field in nullable:
                setattr(dish, field, value)

        await self.storage.commit()
        return await self.get(dish.id, tenant_id)

    async def delete(self, dish_id: str, tenant_id: str) -> None:
        dish = await self.get(dish_id, tenant_id)
        await self.storage.dishes.delete(dish.id)
        await self.storage.commit()
        logger.info(f"Dish deleted: {dish.slug}", extra={"tenant_id": tenant_id})

    async def reorder(self, ids: List[str], tenant_id: str) -> None:
        found = await self.storage.dishes.get_many(ids, tenant_id)
        missing = [i for i in ids if i not in found]
        if missing:
            raise NotFoundError(message="Some dishes were not found", missing=missing)
        for position, dish_id in enumerate(ids):
            found[dish_id].sort_order = position
        await self.storage.commit()
