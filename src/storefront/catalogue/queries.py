"""Read side of the catalogue: browsing and product lookup."""

from protean.utils.globals import current_domain
from protean.utils.query import Q

from storefront.catalogue.product import Product

DEFAULT_PAGE_SIZE = 10


def get_product(product_id: str) -> Product:
    """Raises ``ObjectNotFoundError`` when the product does not exist."""
    return current_domain.repository_for(Product).get(product_id)


def list_products(
    search: str | None = None,
    category: str | None = None,
    min_price: float | None = None,
    max_price: float | None = None,
    page: int = 0,
    size: int = DEFAULT_PAGE_SIZE,
):
    """Active products, newest first, one page at a time.

    A free-text ``search`` wins over every other filter. Otherwise category and
    price range combine; the price range only applies when both bounds are set.
    """
    query = current_domain.repository_for(Product).active_products()

    if search:
        query = query.filter(Q(name__icontains=search) | Q(description__icontains=search))
    else:
        if category:
            query = query.filter(category=category)
        if min_price is not None and max_price is not None:
            query = query.filter(price__gte=min_price, price__lte=max_price)

    return query.order_by("-created_at").offset(page * size).limit(size).all()
