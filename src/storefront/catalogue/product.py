"""Product aggregate root and its repository.

The product document is read far more often than it is written. The one
write on the hot path, stock deduction during checkout, goes through
the DAO as a conditional, version-checked update so that two concurrent
checkouts cannot both consume the same units.
"""

from datetime import UTC, datetime

import structlog
from protean.exceptions import ExpectedVersionError, ValidationError
from protean.fields import Boolean, DateTime, Float, Integer, List, String, Text

from storefront.domain import storefront
from storefront.exceptions import ConflictError

logger = structlog.get_logger(__name__)

# Bounded re-reads when a concurrent writer changes stock between our read and write
_STOCK_UPDATE_ATTEMPTS = 3


@storefront.aggregate
class Product:
    """A sellable item in the catalogue with its live price and stock level."""

    name: String(required=True, max_length=255)
    description: Text(default="")
    price: Float(required=True, min_value=0.0)
    stock_quantity: Integer(default=0, min_value=0)
    category: String(max_length=100)
    images: List(content_type=String)
    rating: Float(default=0.0, min_value=0.0, max_value=5.0)
    review_count: Integer(default=0, min_value=0)
    active: Boolean(default=True)
    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def create(
        cls,
        name,
        price,
        description=None,
        stock_quantity=0,
        category=None,
        images=None,
        rating=0.0,
        active=True,
    ):
        from storefront.catalogue.events import ProductAdded

        now = datetime.now(UTC)
        product = cls(
            name=name,
            description=description or "",
            price=price,
            stock_quantity=stock_quantity,
            category=category,
            images=images or [],
            rating=rating or 0.0,
            active=active,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                name=name,
                price=price,
                stock_quantity=stock_quantity,
                category=category,
            )
        )
        return product

    def update_details(
        self,
        name,
        price,
        stock_quantity,
        description=None,
        category=None,
        images=None,
        active=True,
    ):
        """Replace every editable field, as an admin edit form does."""
        from storefront.catalogue.events import ProductUpdated

        if stock_quantity is not None and stock_quantity < 0:
            raise ValidationError({"stock_quantity": ["Stock quantity cannot be negative"]})

        self.name = name
        self.description = description or ""
        self.price = price
        self.stock_quantity = stock_quantity
        self.category = category
        self.images = images or []
        self.active = active
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductUpdated(
                product_id=str(self.id),
                name=name,
                price=price,
                stock_quantity=stock_quantity,
                active=active,
            )
        )

    @property
    def primary_image(self):
        return self.images[0] if self.images else None

    def has_stock_for(self, quantity):
        return (self.stock_quantity or 0) >= quantity


@storefront.repository(part_of=Product)
class ProductRepository:
    """Product store with a race-free stock decrement."""

    def deduct_stock(self, product_id: str, quantity: int) -> int:
        """Take ``quantity`` units off a product's stock and return what is left.

        The write only matches a row whose stock still holds the value we read,
        and the aggregate version is checked on save, so a concurrent deduction
        makes it miss instead of overwriting. A miss re-reads the product and
        tries again while enough stock remains.
        """
        for _ in range(_STOCK_UPDATE_ATTEMPTS):
            product = self.get(product_id)
            current = product.stock_quantity or 0
            if current < quantity:
                raise ConflictError({"stock": [f"Insufficient stock for product: {product.name}"]})

            remaining = current - quantity
            try:
                updated = self._dao.query.filter(id=product_id, stock_quantity=current).update(
                    stock_quantity=remaining, updated_at=datetime.now(UTC)
                )
            except ExpectedVersionError:
                updated = 0
            if updated:
                logger.info(
                    "Stock deducted",
                    product_id=product_id,
                    quantity=quantity,
                    remaining=remaining,
                )
                return remaining

            logger.warning("Stock changed concurrently, re-reading", product_id=product_id)

        raise ConflictError({"stock": [f"Stock for product {product_id} is changing too quickly, try again"]})

    def active_products(self):
        return self._dao.query.filter(active=True)
