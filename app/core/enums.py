"""Enum definitions for the application."""
from enum import Enum


class TenantStatus(str, Enum):
    """Tenant lifecycle status."""
    ACTIVE = "active"
    SUSPENDED = "suspended"
    INACTIVE = "inactive"


class TenantPlan(str, Enum):
    """Tenant subscription plan options."""
    FREE = "free"
    PREMIUM = "premium"
    ENTERPRISE = "enterprise"


class UserRole(str, Enum):
    """User role options."""
    SUPERADMIN = "SUPERADMIN"
    ADMIN = "ADMIN"
    ORDERS_MANAGER = "ORDERS_MANAGER"


class OrderStatus(str, Enum):
    """Order status options."""
    PENDING = "PENDING"
    PREPARING = "PREPARING"
    READY = "READY"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class DeliveryType(str, Enum):
    """How the order reaches the customer."""
    DELIVERY = "delivery"
    PICKUP = "pickup"


class PaymentMethod(str, Enum):
    """Payment method options."""
    EFECTIVO = "efectivo"
    TARJETA = "tarjeta"
    BILLETERA = "billetera"


class DocumentType(str, Enum):
    """Sales document requested by the customer."""
    BOLETA = "boleta"
    FACTURA = "factura"


class LogLevel(str, Enum):
    """Audit log severity."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogAction(str, Enum):
    """Audited privileged actions."""
    TENANT_CREATED = "tenant_created"
    TENANT_UPDATED = "tenant_updated"
    TENANT_SUSPENDED = "tenant_suspended"
    TENANT_ACTIVATED = "tenant_activated"
    TENANT_DELETED = "tenant_deleted"
    USER_LOGIN = "user_login"
    ORDER_DELIVERED = "order_delivered"
    ORDER_DELETED = "order_deleted"
