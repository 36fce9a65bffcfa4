"""Integration tests for the product endpoints via TestClient."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean import current_domain

from storefront.catalogue.api import product_router
from storefront.catalogue.product import Product
from storefront.identity.tokens import ADMIN_ROLE, USER_ROLE, Principal, get_token_verifier
from storefront.utils.errors import register_exception_handlers


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(product_router)
    register_exception_handlers(app)
    return TestClient(app)


def _auth(user_id, *roles):
    token = get_token_verifier().issue(Principal(user_id=user_id, roles=frozenset(roles or {USER_ROLE})))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def admin_headers():
    return _auth("admin-001", ADMIN_ROLE)


@pytest.fixture()
def user_headers():
    return _auth("user-001")


_PRODUCT = {
    "name": "Trail Running Shoes",
    "description": "Lightweight and grippy",
    "price": 89.5,
    "stock_quantity": 12,
    "category": "footwear",
    "images": ["https://cdn.example.com/shoe.jpg"],
}


class TestBrowseEndpoints:
    def test_browse_is_public(self, client, make_product):
        make_product(name="Red Mug")

        response = client.get("/products")

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 1
        assert body["items"][0]["name"] == "Red Mug"
        assert body["page"] == 0
        assert body["size"] == 10

    def test_browse_with_search(self, client, make_product):
        make_product(name="Red Mug")
        make_product(name="Chef Knife")

        response = client.get("/products", params={"search": "knife"})

        assert [p["name"] for p in response.json()["items"]] == ["Chef Knife"]

    def test_read_product(self, client, make_product):
        product_id = make_product(name="Red Mug", images=["https://cdn.example.com/mug.jpg"])

        response = client.get(f"/products/{product_id}")

        assert response.status_code == 200
        assert response.json()["images"] == ["https://cdn.example.com/mug.jpg"]

    def test_read_missing_product_is_404(self, client):
        response = client.get("/products/nope")
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"


class TestAdminEndpoints:
    def test_create_product(self, client, admin_headers):
        response = client.post("/products", json=_PRODUCT, headers=admin_headers)

        assert response.status_code == 201
        product = current_domain.repository_for(Product).get(response.json()["product_id"])
        assert product.name == "Trail Running Shoes"
        assert product.images == ["https://cdn.example.com/shoe.jpg"]

    def test_create_requires_token(self, client):
        response = client.post("/products", json=_PRODUCT)
        assert response.status_code == 401

    def test_create_rejects_unknown_token(self, client):
        response = client.post("/products", json=_PRODUCT, headers={"Authorization": "Bearer forged"})
        assert response.status_code == 401

    def test_create_requires_admin(self, client, user_headers):
        response = client.post("/products", json=_PRODUCT, headers=user_headers)
        assert response.status_code == 403
        assert response.json()["error"] == "access_denied"

    def test_update_product(self, client, admin_headers, make_product):
        product_id = make_product(name="Old Name")

        response = client.put(f"/products/{product_id}", json=_PRODUCT, headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["name"] == "Trail Running Shoes"
        assert response.json()["stock_quantity"] == 12

    def test_delete_product(self, client, admin_headers, make_product):
        product_id = make_product()

        response = client.delete(f"/products/{product_id}", headers=admin_headers)

        assert response.status_code == 204
        assert client.get(f"/products/{product_id}").status_code == 404
