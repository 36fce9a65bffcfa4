"""FastAPI endpoints for the signed-in user's cart.

Thin adapters: the caller's principal comes from the bearer token, writes
go through domain commands and reads through ``get_cart``.
"""

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from storefront.cart.api.schemas import AddCartItemRequest, CartItemResponse, CartResponse
from storefront.cart.items import AddCartItem, ClearCart, RemoveCartItem, UpdateCartItem
from storefront.cart.queries import get_cart
from storefront.identity.api.dependencies import current_principal
from storefront.identity.tokens import Principal

cart_router = APIRouter(prefix="/cart", tags=["cart"])


def _cart_response(cart) -> CartResponse:
    return CartResponse(
        user_id=str(cart.user_id),
        items=[
            CartItemResponse(
                product_id=str(item.product_id),
                product_name=item.product_name,
                price=item.price,
                image=item.image,
                quantity=item.quantity,
            )
            for item in cart.items
        ],
        total_price=cart.total_price or 0.0,
    )


@cart_router.get("", response_model=CartResponse)
async def read_cart(principal: Principal = Depends(current_principal)) -> CartResponse:
    return _cart_response(get_cart(principal.user_id))


@cart_router.post("/items", response_model=CartResponse)
async def add_cart_item(
    body: AddCartItemRequest,
    principal: Principal = Depends(current_principal),
) -> CartResponse:
    command = AddCartItem(
        user_id=principal.user_id,
        product_id=body.product_id,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return _cart_response(get_cart(principal.user_id))


@cart_router.put("/items/{product_id}", response_model=CartResponse)
async def update_cart_item(
    product_id: str,
    quantity: int = Query(...),
    principal: Principal = Depends(current_principal),
) -> CartResponse:
    command = UpdateCartItem(user_id=principal.user_id, product_id=product_id, quantity=quantity)
    current_domain.process(command, asynchronous=False)
    return _cart_response(get_cart(principal.user_id))


@cart_router.delete("/items/{product_id}", status_code=204)
async def remove_cart_item(product_id: str, principal: Principal = Depends(current_principal)) -> None:
    command = RemoveCartItem(user_id=principal.user_id, product_id=product_id)
    current_domain.process(command, asynchronous=False)


@cart_router.delete("", status_code=204)
async def clear_cart(principal: Principal = Depends(current_principal)) -> None:
    current_domain.process(ClearCart(user_id=principal.user_id), asynchronous=False)
