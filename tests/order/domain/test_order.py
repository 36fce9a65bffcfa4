"""Tests for the Order aggregate and its status changes."""

import pytest
from protean.exceptions import ValidationError

from storefront.cart.cart import Cart
from storefront.catalogue.product import Product
from storefront.identity.address import Address
from storefront.order.events import OrderPlaced, OrderStatusChanged
from storefront.order.order import Order, OrderStatus
from storefront.order.pricing import calculate_totals


def _place_order():
    cart = Cart.create(user_id="user-1")
    cart.add_product(Product.create(name="Mug", price=10.0, stock_quantity=5, images=["m.jpg"]), 3)
    address = Address.create(
        user_id="user-1",
        street="1 Main St",
        city="Springfield",
        state="IL",
        zip_code="62704",
        country="US",
    )
    totals = calculate_totals([(i.price, i.quantity) for i in cart.items])
    return Order.place("user-1", cart.items, totals, address), address


class TestPlaceOrder:
    def test_totals_copied(self):
        order, _ = _place_order()
        assert order.subtotal == 30.0
        assert order.tax == 3.0
        assert order.shipping_cost == 0.0
        assert order.total == 33.0

    def test_items_snapshot_cart_lines(self):
        order, _ = _place_order()
        assert len(order.items) == 1
        item = order.items[0]
        assert (item.product_name, item.price, item.quantity, item.image) == ("Mug", 10.0, 3, "m.jpg")

    def test_address_copied(self):
        order, address = _place_order()
        assert order.shipping_address.street == "1 Main St"
        assert order.shipping_address.zip_code == "62704"

        address.street = "99 Elsewhere"
        assert order.shipping_address.street == "1 Main St"

    def test_starts_pending(self):
        order, _ = _place_order()
        assert order.status == OrderStatus.PENDING.value
        assert order.created_at == order.updated_at

    def test_raises_order_placed(self):
        order, _ = _place_order()
        event = order._events[-1]
        assert isinstance(event, OrderPlaced)
        assert event.total == 33.0
        assert event.item_count == 1


class TestChangeStatus:
    @pytest.mark.parametrize("status", ["PAID", "SHIPPED", "DELIVERED", "CANCELLED"])
    def test_any_status_from_pending(self, status):
        order, _ = _place_order()
        order.change_status(status)
        assert order.status == status

    def test_no_transition_guard(self):
        order, _ = _place_order()
        order.change_status("DELIVERED")
        order.change_status("PENDING")
        assert order.status == "PENDING"

    def test_status_is_case_insensitive(self):
        order, _ = _place_order()
        order.change_status("shipped")
        assert order.status == OrderStatus.SHIPPED.value

    def test_unknown_status_rejected(self):
        order, _ = _place_order()
        with pytest.raises(ValidationError) as exc:
            order.change_status("LOST")
        assert "status" in exc.value.messages
        assert order.status == OrderStatus.PENDING.value

    def test_raises_status_changed(self):
        order, _ = _place_order()
        order.change_status("PAID")
        event = order._events[-1]
        assert isinstance(event, OrderStatusChanged)
        assert (event.previous_status, event.new_status) == ("PENDING", "PAID")
