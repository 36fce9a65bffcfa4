"""Identity API package."""

from storefront.identity.api.routes import address_router, user_router

__all__ = ["user_router", "address_router"]
