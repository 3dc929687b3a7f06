"""SQLAlchemy models."""
from app.models.tenant import Tenant
from app.models.user import User
from app.models.category import Category
from app.models.dish import Dish
from app.models.subtag import Subtag
from app.models.order import Order
from app.models.log import Log

__all__ = ["Tenant", "User", "Category", "Dish", "Subtag", "Order", "Log"]
