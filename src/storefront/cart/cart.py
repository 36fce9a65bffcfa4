"""Cart aggregate: one per user, consumed at checkout.

Each line keeps the product name, price and first image as they were when the
product was first added, so the cart (and the order built from it) is priced
at what the shopper saw rather than at whatever the catalogue says later.
"""

from datetime import UTC, datetime
from decimal import Decimal

from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from storefront.cart.events import CartItemAdded, CartItemRemoved, CartQuantityUpdated
from storefront.domain import storefront
from storefront.order.pricing import to_money


@storefront.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    image = String(max_length=1024)
    quantity = Integer(required=True, min_value=1)

    @property
    def line_total(self) -> Decimal:
        return to_money(self.price) * self.quantity


@storefront.aggregate
class Cart:
    user_id = Identifier(required=True, unique=True)
    items = HasMany(CartItem)
    total_price = Float(default=0.0)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(user_id=user_id, total_price=0.0, created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Line management
    # -------------------------------------------------------------------
    def find_item(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def add_product(self, product, quantity):
        """Put ``quantity`` of ``product`` in the cart, growing an existing line."""
        existing = self.find_item(product.id)
        if existing:
            existing.quantity += quantity
        else:
            self.add_items(
                CartItem(
                    product_id=str(product.id),
                    product_name=product.name,
                    price=product.price,
                    image=product.primary_image,
                    quantity=quantity,
                )
            )
        self._recalculate()

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                product_id=str(product.id),
                quantity=quantity,
            )
        )

    def update_quantity(self, product_id, quantity):
        """Overwrite a line's quantity; zero or less drops the line."""
        item = self.find_item(product_id)
        if item is None:
            raise ObjectNotFoundError({"product_id": [f"Item not found in cart: {product_id}"]})

        if quantity <= 0:
            self.remove_product(product_id)
            return

        previous_quantity = item.quantity
        item.quantity = quantity
        self._recalculate()

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def remove_product(self, product_id):
        """Drop a line. Removing a product that is not in the cart is a no-op."""
        item = self.find_item(product_id)
        if item is None:
            return

        self.remove_items(item)
        self._recalculate()

        self.raise_(CartItemRemoved(cart_id=str(self.id), product_id=str(product_id)))

    # -------------------------------------------------------------------
    # Totals
    # -------------------------------------------------------------------
    @property
    def is_empty(self):
        return not self.items

    def _recalculate(self):
        total = sum((item.line_total for item in self.items), Decimal("0"))
        self.total_price = float(total)
        self.updated_at = datetime.now(UTC)


@storefront.repository(part_of=Cart)
class CartRepository:
    def find_for_user(self, user_id: str) -> Cart | None:
        return self._dao.query.filter(user_id=user_id).all().first

    def discard(self, cart: Cart) -> None:
        """Delete the whole cart document."""
        self._dao.delete(cart)
