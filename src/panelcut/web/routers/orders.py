"""Order placement and lifecycle endpoints."""

from fastapi import APIRouter, Query

from panelcut.domain.value_objects import OrderStatus
from panelcut.web.dependencies import OrderServiceDep
from panelcut.web.schemas.requests import OrderCreateRequest, StatusUpdateRequest
from panelcut.web.schemas.responses import OrderListSchema, OrderSchema, OrderStatsSchema

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", response_model=OrderSchema, status_code=201)
def create_order(request: OrderCreateRequest, orders: OrderServiceDep) -> OrderSchema:
    """Place an order.

    Every part is priced again on the server. Submitted prices outside the
    tolerance are rejected (or replaced, depending on settings).
    """
    order = orders.create_order(
        customer_id=request.customer_id,
        parts=request.parts,
        delivery_option=request.delivery_option,
        project_name=request.project_name,
        delivery_address=request.delivery_address,
        delivery_date=request.delivery_date,
        notes=request.notes,
    )
    return OrderSchema.model_validate(order)


@router.get("", response_model=OrderListSchema)
def list_orders(
    orders: OrderServiceDep,
    status: OrderStatus | None = None,
    customer_id: str | None = None,
    search: str | None = None,
    limit: int = Query(default=50, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
) -> OrderListSchema:
    page = orders.list_orders(
        status=status,
        customer_id=customer_id,
        search=search,
        limit=limit,
        offset=offset,
    )
    return OrderListSchema(
        orders=[OrderSchema.model_validate(o) for o in page.orders], total=page.total
    )


@router.get("/stats", response_model=OrderStatsSchema)
def order_stats(orders: OrderServiceDep) -> OrderStatsSchema:
    return OrderStatsSchema.model_validate(orders.stats())


@router.get("/{order_id}", response_model=OrderSchema)
def get_order(
    order_id: str, orders: OrderServiceDep, customer_id: str | None = None
) -> OrderSchema:
    return OrderSchema.model_validate(orders.get(order_id, customer_id))


@router.post("/{order_id}/cancel", response_model=OrderSchema)
def cancel_order(
    order_id: str, orders: OrderServiceDep, customer_id: str | None = None
) -> OrderSchema:
    """Cancel an order that is still DRAFT or PENDING."""
    return OrderSchema.model_validate(orders.cancel(order_id, customer_id))


@router.put("/{order_id}/status", response_model=OrderSchema)
def update_order_status(
    order_id: str, request: StatusUpdateRequest, orders: OrderServiceDep
) -> OrderSchema:
    return OrderSchema.model_validate(orders.update_status(order_id, request.status))


@router.post("/{order_id}/reprice", response_model=OrderSchema)
def reprice_order(order_id: str, orders: OrderServiceDep) -> OrderSchema:
    """Recompute part prices and totals with the current price list."""
    return OrderSchema.model_validate(orders.reprice(order_id))
