"""Tests for the conditional stock decrement on ProductRepository."""

import pytest
from protean import current_domain
from protean.core.queryset import QuerySet
from protean.exceptions import ExpectedVersionError

from storefront.catalogue.product import Product
from storefront.exceptions import ConflictError


def _stock(product_id):
    return current_domain.repository_for(Product).get(product_id).stock_quantity


def _with_competing_writer(monkeypatch, repo, competing_stock, times=1):
    """Make another writer change stock right after each of the first ``times`` reads."""
    real_get = repo.get
    calls = {"count": 0}

    def racing_get(identifier):
        product = real_get(identifier)
        calls["count"] += 1
        if calls["count"] <= times:
            repo._dao.query.filter(id=identifier).update(stock_quantity=competing_stock(calls["count"]))
        return product

    monkeypatch.setattr(repo, "get", racing_get)
    return calls


class TestDeductStock:
    def test_deducts_quantity(self, make_product):
        product_id = make_product(stock_quantity=10)

        remaining = current_domain.repository_for(Product).deduct_stock(product_id, 4)

        assert remaining == 6
        assert _stock(product_id) == 6

    def test_can_deduct_to_zero(self, make_product):
        product_id = make_product(stock_quantity=3)

        assert current_domain.repository_for(Product).deduct_stock(product_id, 3) == 0
        assert _stock(product_id) == 0

    def test_insufficient_stock_raises_conflict(self, make_product):
        product_id = make_product(name="Lamp", stock_quantity=2)

        with pytest.raises(ConflictError) as exc:
            current_domain.repository_for(Product).deduct_stock(product_id, 3)

        assert exc.value.messages == {"stock": ["Insufficient stock for product: Lamp"]}
        assert _stock(product_id) == 2


class TestConcurrentDeduction:
    def test_lost_race_rereads_and_succeeds(self, make_product, monkeypatch):
        product_id = make_product(stock_quantity=10)
        repo = current_domain.repository_for(Product)
        # Another checkout takes 3 units between our read and our write
        calls = _with_competing_writer(monkeypatch, repo, lambda _: 7)

        remaining = repo.deduct_stock(product_id, 5)

        assert calls["count"] == 2
        assert remaining == 2
        assert _stock(product_id) == 2

    def test_lost_race_with_too_little_left_raises_conflict(self, make_product, monkeypatch):
        product_id = make_product(stock_quantity=10)
        repo = current_domain.repository_for(Product)
        # Another checkout takes 8 units, leaving fewer than we need
        _with_competing_writer(monkeypatch, repo, lambda _: 2)

        with pytest.raises(ConflictError):
            repo.deduct_stock(product_id, 5)

        assert _stock(product_id) == 2

    def test_stock_never_overwritten_by_stale_read(self, make_product, monkeypatch):
        product_id = make_product(stock_quantity=10)
        repo = current_domain.repository_for(Product)
        # Competing writers keep winning on every attempt
        _with_competing_writer(monkeypatch, repo, lambda n: 10 - n, times=10)

        with pytest.raises(ConflictError):
            repo.deduct_stock(product_id, 5)

        # Only the competing writes landed
        assert _stock(product_id) == 7

    def test_version_conflict_on_save_counts_as_lost_race(self, make_product, monkeypatch):
        product_id = make_product(stock_quantity=10)
        real_update = QuerySet.update
        calls = {"count": 0}

        def conflicting_update(queryset, *args, **kwargs):
            calls["count"] += 1
            if calls["count"] == 1:
                raise ExpectedVersionError("Wrong expected version")
            return real_update(queryset, *args, **kwargs)

        monkeypatch.setattr(QuerySet, "update", conflicting_update)

        remaining = current_domain.repository_for(Product).deduct_stock(product_id, 4)

        assert calls["count"] == 2
        assert remaining == 6
        assert _stock(product_id) == 6
