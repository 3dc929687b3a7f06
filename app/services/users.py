"""Users of a tenant, managed by its admins."""
from typing import List

from app.core.errors import BadRequestError, ConflictError, NotFoundError
from app.core.logging import get_logger
from app.core.security import Principal, get_password_hash
from app.models.user import User
from app.repositories import Storage
from app.schemas.order import OrderResponse
from app.schemas.user import TenantOverview, UserCreate, UserUpdate


logger = get_logger(__name__)

RECENT_ORDERS = 5


class UserService:
    def __init__(self, storage: Storage):
        self.storage = storage

    async def list(self, tenant_id: str) -> List[User]:
        return await self.storage.users.list_for_tenant(tenant_id)

    async def get(self, user_id: str, tenant_id: str) -> User:
        user = await self.storage.users.get_in_tenant(user_id, tenant_id)
        if user is None:
            raise NotFoundError(message="User not found")
        return user

    async def create(self, data: UserCreate, tenant_id: str) -> User:
        if await self.storage.users.get_by_email(data.email):
            raise ConflictError(message="A user with this email already exists")

        user = User(
            tenant_id=tenant_id,
            email=data.email.lower(),
            name=data.name,
            hashed_password=get_password_hash(data.password),
            role=data.role,
            is_active=True,
        )
        self.storage.users.add(user)
        await self.storage.commit()
        logger.info(
            f"User created: {user.email} ({user.role.value})",
            extra={"tenant_id": tenant_id, "user_id": user.id},
        )
        return user

    async def update(self, user_id: str, data: UserUpdate, tenant_id: str) -> User:
        user = await self.get(user_id, tenant_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(user, field, value)
        await self.storage.commit()
        return user

    async def delete(self, user_id: str, tenant_id: str, principal: Principal) -> None:
        user = await self.get(user_id, tenant_id)
        if user.id == principal.id:
            raise BadRequestError(message="You cannot delete your own account")
        await self.storage.users.delete(user.id)
        await self.storage.commit()
        logger.info(f"User deleted: {user.email}", extra={"tenant_id": tenant_id, "user_id": user.id})

    async def overview(self, tenant_id: str) -> TenantOverview:
        owned = await self.storage.tenants.count_owned(tenant_id)
        recent = await self.storage.orders.recent(tenant_id, RECENT_ORDERS)
        return TenantOverview(
            dishes=owned["dishes"],
            categories=owned["categories"],
            orders=owned["orders"],
            users=owned["users"],
            recent_orders=[OrderResponse.model_validate(o) for o in recent],
        )
