"""Cart item management: commands and handler."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.exceptions import ConflictError

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Cart")
class AddCartItem:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.command(part_of="Cart")
class UpdateCartItem:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@storefront.command(part_of="Cart")
class RemoveCartItem:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command(part_of="Cart")
class ClearCart:
    user_id = Identifier(required=True)


def _existing_cart(repo, user_id):
    cart = repo.find_for_user(user_id)
    if cart is None:
        raise ObjectNotFoundError({"cart": [f"Cart not found for user {user_id}"]})
    return cart


@storefront.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddCartItem)
    def add_cart_item(self, command):
        product = current_domain.repository_for(Product).get(command.product_id)

        # Advisory only; stock is checked again and taken at checkout
        if not product.has_stock_for(command.quantity):
            raise ConflictError({"stock": [f"Insufficient stock for product: {product.name}"]})

        repo = current_domain.repository_for(Cart)
        cart = repo.find_for_user(command.user_id) or Cart.create(user_id=command.user_id)
        cart.add_product(product, command.quantity)
        repo.add(cart)

        logger.info(
            "Cart item added",
            user_id=command.user_id,
            product_id=command.product_id,
            quantity=command.quantity,
        )
        return str(cart.id)

    @handle(UpdateCartItem)
    def update_cart_item(self, command):
        repo = current_domain.repository_for(Cart)
        cart = _existing_cart(repo, command.user_id)
        cart.update_quantity(command.product_id, command.quantity)
        repo.add(cart)

    @handle(RemoveCartItem)
    def remove_cart_item(self, command):
        repo = current_domain.repository_for(Cart)
        cart = _existing_cart(repo, command.user_id)
        cart.remove_product(command.product_id)
        repo.add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.find_for_user(command.user_id)
        if cart is not None:
            repo.discard(cart)
            logger.info("Cart cleared", user_id=command.user_id)
