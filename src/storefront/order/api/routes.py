"""FastAPI endpoints for checkout and order history.

Every endpoint resolves the caller from the bearer token and passes that
principal to the order queries, which decide ownership and admin access.
"""

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from storefront.identity.api.dependencies import current_principal
from storefront.identity.tokens import Principal
from storefront.order.api.schemas import (
    OrderItemResponse,
    OrderPageResponse,
    OrderResponse,
    PlaceOrderRequest,
    ShippingAddressResponse,
)
from storefront.order.checkout import PlaceOrder
from storefront.order.queries import (
    DEFAULT_PAGE_SIZE,
    change_order_status,
    get_order,
    list_orders,
    list_orders_by_status,
)

order_router = APIRouter(prefix="/orders", tags=["orders"])


def _order_response(order) -> OrderResponse:
    address = order.shipping_address
    return OrderResponse(
        order_id=str(order.id),
        user_id=str(order.user_id),
        items=[
            OrderItemResponse(
                product_id=str(item.product_id),
                product_name=item.product_name,
                price=item.price,
                quantity=item.quantity,
                image=item.image,
            )
            for item in order.items
        ],
        subtotal=order.subtotal,
        tax=order.tax,
        shipping_cost=order.shipping_cost,
        total=order.total,
        shipping_address=ShippingAddressResponse(
            street=address.street,
            city=address.city,
            state=address.state,
            zip_code=address.zip_code,
            country=address.country,
        )
        if address
        else None,
        status=order.status,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


@order_router.post("", response_model=OrderResponse)
async def place_order(
    body: PlaceOrderRequest,
    principal: Principal = Depends(current_principal),
) -> OrderResponse:
    command = PlaceOrder(
        user_id=principal.user_id,
        shipping_address_id=body.shipping_address_id,
        shipping_cost=body.shipping_cost,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return _order_response(get_order(principal, order_id))


@order_router.get("", response_model=OrderPageResponse)
async def my_orders(
    page: int = Query(0, ge=0),
    size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=100),
    principal: Principal = Depends(current_principal),
) -> OrderPageResponse:
    results = list_orders(principal, page=page, size=size)
    return OrderPageResponse(
        items=[_order_response(o) for o in results.items],
        total=results.total,
        page=page,
        size=size,
    )


@order_router.get("/admin/status/{status}", response_model=list[OrderResponse])
async def orders_by_status(status: str, principal: Principal = Depends(current_principal)) -> list[OrderResponse]:
    return [_order_response(o) for o in list_orders_by_status(principal, status)]


@order_router.get("/{order_id}", response_model=OrderResponse)
async def read_order(order_id: str, principal: Principal = Depends(current_principal)) -> OrderResponse:
    return _order_response(get_order(principal, order_id))


@order_router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: str,
    status: str = Query(...),
    principal: Principal = Depends(current_principal),
) -> OrderResponse:
    return _order_response(change_order_status(principal, order_id, status))
