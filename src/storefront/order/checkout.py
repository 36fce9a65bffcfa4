"""Checkout: turns a user's cart into an order.

The handler runs in a single unit of work. Every line is checked against
current stock before any stock is taken, so a shortfall on one product
leaves the catalogue and the cart exactly as they were.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Float, Identifier
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.exceptions import ConflictError
from storefront.identity.address import Address
from storefront.order.order import Order
from storefront.order.pricing import calculate_totals

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    shipping_address_id = Identifier(required=True)
    shipping_cost = Float(min_value=0.0)


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        cart_repo = current_domain.repository_for(Cart)
        product_repo = current_domain.repository_for(Product)

        cart = cart_repo.find_for_user(command.user_id)
        if cart is None or cart.is_empty:
            raise ConflictError({"cart": ["Cart is empty"]})

        address = current_domain.repository_for(Address).get_owned(command.user_id, command.shipping_address_id)

        items = list(cart.items)
        for item in items:
            try:
                product = product_repo.get(item.product_id)
            except ObjectNotFoundError as exc:
                raise ObjectNotFoundError({"product": [f"Product not found: {item.product_id}"]}) from exc
            if not product.has_stock_for(item.quantity):
                raise ConflictError({"stock": [f"Insufficient stock for product: {product.name}"]})

        for item in items:
            product_repo.deduct_stock(str(item.product_id), item.quantity)

        totals = calculate_totals(((item.price, item.quantity) for item in items), command.shipping_cost)
        order = Order.place(command.user_id, items, totals, address)
        current_domain.repository_for(Order).add(order)
        cart_repo.discard(cart)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            user_id=command.user_id,
            total=order.total,
            item_count=len(items),
        )
        return str(order.id)
