"""Menu categories."""
from typing import List

from app.core.errors import BadRequestError, ConflictError, NotFoundError
from app.core.logging import get_logger
from app.core.text import generate_slug
from app.models.category import Category
from app.repositories import Storage
from app.schemas.catalog import CategoryCreate, CategoryResponse, CategoryUpdate


logger = get_logger(__name__)


def slug_for(name: str) -> str:
    slug = generate_slug(name)
    if not slug:
        raise BadRequestError(message="The name must contain letters or digits")
    return slug


class CategoryService:
    def __init__(self, storage: Storage):
        self.storage = storage

    async def list(self, tenant_id: str) -> List[CategoryResponse]:
        rows = await self.storage.categories.list(tenant_id)
        return [
            CategoryResponse.model_validate(category).model_copy(update={"dish_count": count})
            for category, count in rows
        ]

    async def get(self, category_id: str, tenant_id: str) -> Category:
        category = await self.storage.categories.get(category_id, tenant_id)
        if category is None:
            raise NotFoundError(message="Category not found")
        return category

    async def get_by_slug(self, slug: str, tenant_id: str) -> Category:
        category = await self.storage.categories.get_by_slug(slug, tenant_id)
        if category is None:
            raise NotFoundError(message="Category not found")
        return category

    async def create(self, data: CategoryCreate, tenant_id: str) -> Category:
        slug = slug_for(data.name)
        if await self.storage.categories.get_by_slug(slug, tenant_id):
            raise ConflictError(message="A category with this name already exists")

        category = Category(
            tenant_id=tenant_id,
            name=data.name,
            slug=slug,
            description=data.description,
            icon=data.icon,
            sort_order=data.sort_order if data.sort_order is not None else 0,
            is_active=data.is_active if data.is_active is not None else True,
        )
        self.storage.categories.add(category)
        await self.storage.commit()
        logger.info(f"Category created: {slug}", extra={"tenant_id": tenant_id})
        return category

    async def update(self, category_id: str, data: CategoryUpdate, tenant_id: str) -> Category:
        category = await self.get(category_id, tenant_id)
        changes = data.model_dump(exclude_unset=True)

        if changes.get("name"):
            slug = slug_for(changes["name"])
            existing = await self.storage.categories.get_by_slug(slug, tenant_id)
            if existing is not None and existing.id != category.id:
                raise ConflictError(message="A category with this name already exists")
            changes["slug"] = slug

        for field, value in changes.items():
            if value is not None or field in ("description", "icon"):
                setattr(category, field, value)

        await self.storage.commit()
        await self.storage.refresh(category)
        return category

    async def delete(self, category_id: str, tenant_id: str) -> None:
        category = await self.get(category_id, tenant_id)
        dish_count = await self.storage.categories.count_dishes(category.id)
        if dish_count:
            raise ConflictError(
                message="Cannot delete a category that still has dishes",
                dishCount=dish_count,
            )
        await self.storage.categories.delete(category.id)
        await self.storage.commit()
        logger.info(f"Category deleted: {category.slug}", extra={"tenant_id": tenant_id})

    async def reorder(self, ids: List[str], tenant_id: str) -> None:
        """Set ``sort_order`` to each id's position; all or nothing."""
        found = await self.storage.categories.get_many(ids, tenant_id)
        missing = [i for i in ids if i not in found]
        if missing:
            raise NotFoundError(message="Some categories were not found", missing=missing)
        for position, category_id in enumerate(ids):
            found[category_id].sort_order = position
        await self.storage.commit()
