import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Fetch and activate the domain by pushing the associated domain_context. The activated domain can then be referred to elsewhere as `current_domain`
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env

    from storefront.domain import storefront

    storefront.init()
    storefront.domain_context().push()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session", autouse=True)
def setup_db(request):
    from storefront.domain import storefront
    from storefront.utils.db import drop_db, setup_db

    setup_db(storefront)

    yield

    drop_db(storefront)


@pytest.fixture(autouse=True)
def run_around_tests():
    """Fixture to automatically cleanup infrastructure after every test"""
    yield

    from protean import current_domain

    from storefront.identity.tokens import reset_token_verifier

    # Clear all databases
    for _, provider in current_domain.providers.items():
        provider._data_reset()

    # Drain event stores
    current_domain.event_store.store._data_reset()

    reset_token_verifier()


# ---------------------------------------------------------------------------
# Shared factories
# ---------------------------------------------------------------------------
@pytest.fixture()
def make_product():
    """Create and persist a product through the CreateProduct command; returns its id."""
    import json

    from protean import current_domain

    from storefront.catalogue.management import CreateProduct

    def _make(name="Widget", price=10.0, stock_quantity=10, images=None, **overrides):
        command = CreateProduct(
            name=name,
            price=price,
            stock_quantity=stock_quantity,
            images=json.dumps(images or []),
            **overrides,
        )
        return current_domain.process(command, asynchronous=False)

    return _make


@pytest.fixture()
def make_address():
    """Add an address to a user's book through the AddAddress command; returns its id."""
    from protean import current_domain

    from storefront.identity.addresses import AddAddress

    def _make(user_id, street="1 Main St", city="Springfield", is_default=False, **overrides):
        fields = {"state": "IL", "zip_code": "62704", "country": "US", **overrides}
        command = AddAddress(user_id=user_id, street=street, city=city, is_default=is_default, **fields)
        return current_domain.process(command, asynchronous=False)

    return _make


@pytest.fixture()
def user_id():
    return "user-001"


@pytest.fixture()
def add_to_cart(user_id):
    """Put ``quantity`` of a product in a user's cart through the AddCartItem command."""
    from protean import current_domain

    from storefront.cart.items import AddCartItem

    def _add(product_id, quantity=1, owner=None):
        command = AddCartItem(user_id=owner or user_id, product_id=product_id, quantity=quantity)
        return current_domain.process(command, asynchronous=False)

    return _add
