from protean.utils.globals import current_domain

from storefront.cart.cart import Cart


def get_cart(user_id: str) -> Cart:
    """The user's cart, or an empty one that has not been saved."""
    cart = current_domain.repository_for(Cart).find_for_user(user_id)
    return cart if cart is not None else Cart.create(user_id=user_id)
