"""API v1 router."""
from fastapi import APIRouter

from app.api.v1.auth import router as auth_router
from app.api.v1.tenants import router as tenants_router
from app.api.v1.orders import router as orders_router
from app.api.v1.categories import router as categories_router
from app.api.v1.dishes import router as dishes_router
from app.api.v1.subtags import router as subtags_router
from app.api.v1.logs import router as logs_router
from app.api.v1.admin import router as admin_router
from app.api.v1.superadmin import router as superadmin_router


router = APIRouter(prefix="/v1")

router.include_router(auth_router, prefix="/auth", tags=["Authentication"])
router.include_router(tenants_router, prefix="/tenants", tags=["Tenants"])
router.include_router(orders_router, prefix="/orders", tags=["Orders"])
router.include_router(categories_router, prefix="/categories", tags=["Categories"])
router.include_router(dishes_router, prefix="/dishes", tags=["Dishes"])
router.include_router(subtags_router, prefix="/subtags", tags=["Subtags"])
router.include_router(logs_router, prefix="/logs", tags=["Logs"])
router.include_router(admin_router, prefix="/admin", tags=["Admin"])
router.include_router(superadmin_router, prefix="/superadmin", tags=["Superadmin"])
