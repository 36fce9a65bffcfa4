"""Order API package."""

from storefront.order.api.routes import order_router

__all__ = ["order_router"]
