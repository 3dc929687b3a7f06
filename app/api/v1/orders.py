"""Orders API endpoints."""
from typing import List, Optional

from fastapi import APIRouter, Body, Query, status

from app.core.dependencies import (
    AdminScope, HeaderTenant, Meta, Orders, OrdersScope, OptionalPrincipal, RequestTenant
)
from app.core.errors import BadRequestError, TenantHeaderMissingError
from app.core.logging import get_logger
from app.schemas.common import ApiResponse, MessageResponse
from app.schemas.order import OrderCreate, OrderFilters, OrderResponse, OrderStats, OrderStatusUpdate
from app.services.isolation import enforce_tenant_isolation


router = APIRouter()
logger = get_logger(__name__)


@router.post("/public", response_model=ApiResponse[OrderResponse], status_code=status.HTTP_201_CREATED)
async def create_public_order(
    payload: OrderCreate,
    tenant: HeaderTenant,
    orders: Orders,
):
    """Place an order from the public menu of the tenant named by the domain header."""
    order = await orders.create(payload, tenant.id)
    return ApiResponse(message="Order created", data=OrderResponse.model_validate(order))


@router.post("", response_model=ApiResponse[OrderResponse], status_code=status.HTTP_201_CREATED)
async def create_order(
    payload: OrderCreate,
    tenant: RequestTenant,
    principal: OptionalPrincipal,
    orders: Orders,
):
    """Place an order; the tenant comes from the header, the request or the caller."""
    if tenant is None:
        raise TenantHeaderMissingError(message="Could not determine the restaurant for this order")
    if principal is not None:
        enforce_tenant_isolation(principal, tenant)

    order = await orders.create(payload, tenant.id)
    return ApiResponse(message="Order created", data=OrderResponse.model_validate(order))


@router.get("/stats", response_model=ApiResponse[OrderStats])
async def get_order_stats(scope: OrdersScope, orders: Orders):
    """Order counters; superadmins without a tenant get global figures."""
    return ApiResponse(data=await orders.stats(scope.tenant_id))


@router.get("/customer/{phone}", response_model=ApiResponse[List[OrderResponse]])
async def get_orders_by_customer(phone: str, scope: OrdersScope, orders: Orders):
    """Orders placed from a phone number, newest first."""
    found = await orders.by_phone(scope.tenant_id, phone)
    return ApiResponse(data=[OrderResponse.model_validate(o) for o in found])


@router.get("", response_model=ApiResponse[List[OrderResponse]])
async def list_orders(
    scope: OrdersScope,
    orders: Orders,
    status_filter: Optional[str] = Query(None, alias="status"),
    date_from: Optional[str] = Query(None, alias="dateFrom"),
    date_to: Optional[str] = Query(None, alias="dateTo"),
    customer_phone: Optional[str] = Query(None, alias="customerPhone"),
    search: Optional[str] = Query(None, max_length=100),
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=100),
):
    """List orders with filters and pagination, newest first."""
    filters = OrderFilters(
        tenant_id=scope.tenant_id,
        status=status_filter,
        date_from=date_from,
        date_to=date_to,
        customer_phone=customer_phone,
        search=search,
        page=page,
        limit=limit,
    )
    found, pagination = await orders.list(filters)
    return ApiResponse(data=[OrderResponse.model_validate(o) for o in found], pagination=pagination)


@router.get("/{order_id}", response_model=ApiResponse[OrderResponse])
async def get_order(order_id: str, scope: OrdersScope, orders: Orders):
    order = await orders.get(order_id, scope.tenant_id)
    return ApiResponse(data=OrderResponse.model_validate(order))


@router.patch("/{order_id}/status", response_model=ApiResponse[OrderResponse])
async def update_order_status(
    order_id: str,
    scope: OrdersScope,
    orders: Orders,
    meta: Meta,
    payload: Optional[OrderStatusUpdate] = Body(None),
    status_param: Optional[str] = Query(None, alias="status"),
):
    """Move an order between PREPARING and DELIVERED.

    The status may come in the JSON body or as a query parameter.
    """
    requested = payload.status if payload is not None else status_param
    if not requested:
        raise BadRequestError(message="A status is required", error="Invalid status")

    order = await orders.update_status(order_id, requested, scope.tenant_id, meta)
    return ApiResponse(message="Order status updated", data=OrderResponse.model_validate(order))


@router.delete("/{order_id}", response_model=MessageResponse)
async def delete_order(order_id: str, scope: AdminScope, orders: Orders, meta: Meta):
    """Delete an order that has not been delivered."""
    await orders.delete(order_id, scope.tenant_id, meta)
    return MessageResponse(message="Order deleted")
