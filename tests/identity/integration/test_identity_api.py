"""Integration tests for user and address endpoints via TestClient."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from storefront.identity.api import address_router, user_router
from storefront.utils.errors import register_exception_handlers


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(user_router)
    app.include_router(address_router)
    register_exception_handlers(app)
    return TestClient(app)


def _register(client, email="jane@example.com"):
    response = client.post("/users", json={"email": email, "first_name": "Jane", "last_name": "Doe"})
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.json()['token']}"}


def _add_address(client, headers, street="1 Main St", is_default=False):
    response = client.post(
        "/addresses",
        json={
            "street": street,
            "city": "Springfield",
            "state": "IL",
            "zip_code": "62704",
            "country": "US",
            "is_default": is_default,
        },
        headers=headers,
    )
    assert response.status_code == 201
    return response.json()["address_id"]


class TestUserEndpoints:
    def test_register_returns_usable_token(self, client):
        headers = _register(client)

        response = client.get("/users/me", headers=headers)

        assert response.status_code == 200
        assert response.json()["email"] == "jane@example.com"
        assert response.json()["roles"] == ["USER"]

    def test_duplicate_registration_is_409(self, client):
        _register(client)
        response = client.post("/users", json={"email": "jane@example.com", "first_name": "J", "last_name": "D"})

        assert response.status_code == 409
        assert response.json() == {"error": "conflict", "messages": {"email": ["Email is already registered"]}}

    def test_invalid_email_is_400(self, client):
        response = client.post("/users", json={"email": "not-an-email", "first_name": "J", "last_name": "D"})
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    def test_me_requires_token(self, client):
        assert client.get("/users/me").status_code == 401

    def test_update_profile(self, client):
        headers = _register(client)

        response = client.put("/users/me", json={"first_name": "Janet"}, headers=headers)

        assert response.status_code == 200
        assert response.json()["first_name"] == "Janet"
        assert response.json()["last_name"] == "Doe"

    def test_my_addresses(self, client):
        headers = _register(client)
        _add_address(client, headers)

        response = client.get("/users/me/addresses", headers=headers)

        assert response.status_code == 200
        assert len(response.json()) == 1

    def test_add_my_address_returns_the_address(self, client):
        headers = _register(client)

        response = client.post(
            "/users/me/addresses",
            json={"street": "5 Oak Ave", "city": "Salem", "zip_code": "97301", "country": "US"},
            headers=headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["street"] == "5 Oak Ave"
        assert body["is_default"] is True
        assert client.get("/addresses/default", headers=headers).json()["address_id"] == body["address_id"]

    def test_delete_my_address(self, client):
        headers = _register(client)
        address_id = _add_address(client, headers)

        assert client.delete(f"/users/me/addresses/{address_id}", headers=headers).status_code == 204
        assert client.get("/users/me/addresses", headers=headers).json() == []

    def test_delete_someone_elses_address_via_me_is_404(self, client):
        address_id = _add_address(client, _register(client))
        intruder = _register(client, email="mallory@example.com")

        assert client.delete(f"/users/me/addresses/{address_id}", headers=intruder).status_code == 404


class TestAddressEndpoints:
    def test_first_address_becomes_default(self, client):
        headers = _register(client)
        address_id = _add_address(client, headers)

        response = client.get("/addresses/default", headers=headers)

        assert response.status_code == 200
        assert response.json()["address_id"] == address_id

    def test_no_default_is_404(self, client):
        headers = _register(client)
        assert client.get("/addresses/default", headers=headers).status_code == 404

    def test_set_default(self, client):
        headers = _register(client)
        _add_address(client, headers)
        second = _add_address(client, headers, street="2 Side St")

        response = client.put(f"/addresses/{second}/default", headers=headers)

        assert response.status_code == 200
        defaults = [a for a in client.get("/addresses", headers=headers).json() if a["is_default"]]
        assert [a["address_id"] for a in defaults] == [second]

    def test_delete_address(self, client):
        headers = _register(client)
        address_id = _add_address(client, headers)

        assert client.delete(f"/addresses/{address_id}", headers=headers).status_code == 204
        assert client.get("/addresses", headers=headers).json() == []

    def test_cannot_delete_someone_elses_address(self, client):
        owner = _register(client)
        address_id = _add_address(client, owner)
        intruder = _register(client, email="mallory@example.com")

        response = client.delete(f"/addresses/{address_id}", headers=intruder)

        assert response.status_code == 404
        assert len(client.get("/addresses", headers=owner).json()) == 1
