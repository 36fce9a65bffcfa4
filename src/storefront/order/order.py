"""Order aggregate: an immutable record of a checkout plus its fulfilment status.

Lifecycle:
    PENDING → PAID → SHIPPED → DELIVERED, with CANCELLED as the way out.

Status changes are administrative and are not checked against this sequence;
any known status may be set from any other.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from storefront.domain import storefront
from storefront.order.events import OrderPlaced, OrderStatusChanged


class OrderStatus(Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"

    @classmethod
    def parse(cls, value):
        try:
            return cls(str(value).strip().upper())
        except ValueError as exc:
            allowed = ", ".join(s.value for s in cls)
            raise ValidationError({"status": [f"Unknown order status {value!r}; expected one of {allowed}"]}) from exc


@storefront.value_object(part_of="Order")
class ShippingAddress:
    """Where the order ships, copied from the address book at checkout.

    Later edits or deletion of the source address do not reach the order.
    """

    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(max_length=100)
    zip_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)


@storefront.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    image = String(max_length=1024)


@storefront.aggregate
class Order:
    user_id = Identifier(required=True)
    items = HasMany(OrderItem)
    subtotal = Float(default=0.0)
    tax = Float(default=0.0)
    shipping_cost = Float(default=0.0)
    total = Float(default=0.0)
    shipping_address = ValueObject(ShippingAddress)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def place(cls, user_id, cart_items, totals, address):
        """Build a pending order from cart lines, computed totals and a saved address."""
        now = datetime.now(UTC)
        order = cls(
            user_id=user_id,
            items=[
                OrderItem(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    price=item.price,
                    quantity=item.quantity,
                    image=item.image,
                )
                for item in cart_items
            ],
            subtotal=float(totals.subtotal),
            tax=float(totals.tax),
            shipping_cost=float(totals.shipping_cost),
            total=float(totals.total),
            shipping_address=ShippingAddress(
                street=address.street,
                city=address.city,
                state=address.state,
                zip_code=address.zip_code,
                country=address.country,
            ),
            status=OrderStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                item_count=len(order.items),
                subtotal=order.subtotal,
                tax=order.tax,
                shipping_cost=order.shipping_cost,
                total=order.total,
                placed_at=now,
            )
        )
        return order

    def change_status(self, status):
        new_status = OrderStatus.parse(status)
        previous_status = self.status
        now = datetime.now(UTC)

        self.status = new_status.value
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous_status,
                new_status=new_status.value,
                changed_at=now,
            )
        )


@storefront.repository(part_of=Order)
class OrderRepository:
    def find_for_user(self, user_id: str, page: int = 0, size: int = 10):
        return (
            self._dao.query.filter(user_id=user_id)
            .order_by("-created_at")
            .offset(page * size)
            .limit(size)
            .all()
        )

    def find_by_status(self, status: str) -> list[Order]:
        return self._dao.query.filter(status=status).order_by("-created_at").all().items
