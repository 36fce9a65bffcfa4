"""Shared BDD fixtures and step definitions for checkout."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then

from storefront.cart.cart import Cart
from storefront.cart.items import AddCartItem
from storefront.catalogue.product import Product


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def shopper_id():
    return "shopper-001"


@pytest.fixture()
def products():
    """Product ids by name."""
    return {}


@pytest.fixture()
def outcome():
    """Container for the placed order id or the captured error."""
    return {"order_id": None, "exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{name}" priced {price:f} with {stock:d} in stock'))
def product_in_catalogue(products, make_product, name, price, stock):
    products[name] = make_product(name=name, price=price, stock_quantity=stock)


@given("the shopper has a saved address", target_fixture="address_id")
def saved_address(make_address, shopper_id):
    return make_address(shopper_id)


@given(parsers.cfparse('the shopper has {quantity:d} "{name}" in the cart'))
def item_in_cart(products, shopper_id, name, quantity):
    current_domain.process(
        AddCartItem(user_id=shopper_id, product_id=products[name], quantity=quantity),
        asynchronous=False,
    )


@given(parsers.cfparse('"{name}" stock drops to {stock:d}'))
def stock_drops(products, name, stock):
    current_domain.repository_for(Product)._dao.query.filter(id=products[name]).update(stock_quantity=stock)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('"{name}" has {stock:d} in stock'))
def product_stock(products, name, stock):
    assert current_domain.repository_for(Product).get(products[name]).stock_quantity == stock


@then("the shopper has no cart")
def no_cart(shopper_id):
    assert current_domain.repository_for(Cart).find_for_user(shopper_id) is None


@then(parsers.cfparse("the cart still holds {count:d} lines"))
def cart_lines(shopper_id, count):
    assert len(current_domain.repository_for(Cart).find_for_user(shopper_id).items) == count
