"""Storefront domain: catalogue, identity, cart and order in one composition root.

Checkout reads the catalogue, the address book and the cart and writes an
order within a single request, so all four areas share one domain and one
Unit of Work instead of exchanging events.

``init()`` only loads modules directly inside the packages next to this file,
so every domain element lives one level down (``cart/cart.py``, not
``cart/model/cart.py``). HTTP adapters sit one level deeper in ``<area>/api/``
and are imported by the application, never by traversal.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")
