"""Integration tests for Cart API endpoints via TestClient."""

from ordering.cart.store import CartStore
from protean.exceptions import ExpectedVersionError


class TestAuthentication:
    def test_get_cart_requires_customer(self, client):
        assert client.get("/cart").status_code == 401

    def test_sync_requires_customer(self, client):
        response = client.post("/cart/sync", json={"cart_items": {"1": {"S": 1}}})
        assert response.status_code == 401

    def test_save_requires_customer(self, client):
        response = client.post("/cart/save", json={"cart_items": {"1": {"S": 1}}})
        assert response.status_code == 401

    def test_clear_requires_customer(self, client):
        assert client.delete("/cart").status_code == 401

    def test_blank_header_is_anonymous(self, client):
        assert client.get("/cart", headers={"X-Customer-Id": "  "}).status_code == 401


class TestGetCart:
    def test_empty_cart(self, client, customer_headers):
        response = client.get("/cart", headers=customer_headers)
        assert response.status_code == 200
        assert response.json() == {"cart_items": {}}

    def test_stored_cart(self, client, customer_headers):
        CartStore().merge_upsert("cust-api-001", "1", "S", 2)
        response = client.get("/cart", headers=customer_headers)
        assert response.json() == {"cart_items": {"1": {"S": 2}}}


class TestSyncCart:
    def test_merges_and_drops_unknown_products(self, client, customer_headers):
        CartStore().merge_upsert("cust-api-001", "1", "S", 1)

        response = client.post(
            "/cart/sync",
            json={"cart_items": {"1": {"S": 2}, "9": {"M": 1}}},
            headers=customer_headers,
        )

        assert response.status_code == 200
        assert response.json() == {"cart_items": {"1": {"S": 2}}}

    def test_missing_cart_items(self, client, customer_headers):
        response = client.post("/cart/sync", json={}, headers=customer_headers)
        assert response.status_code == 400
        assert response.json() == {
            "error": "validation_failed",
            "messages": {"cart_items": ["Valid cart data required"]},
        }

    def test_non_object_body_is_unprocessable(self, client, customer_headers):
        response = client.post("/cart/sync", json={"cart_items": [1, 2]}, headers=customer_headers)
        assert response.status_code == 422


class TestSaveCart:
    def test_overwrites_stored_cart(self, client, customer_headers):
        CartStore().merge_upsert("cust-api-001", "1", "S", 5)

        response = client.post(
            "/cart/save",
            json={"cart_items": {"2": {"default": 1}}},
            headers=customer_headers,
        )

        assert response.status_code == 200
        assert response.json() == {"status": "saved"}
        assert CartStore().get("cust-api-001") == {"2": {"default": 1}}


class TestClearCart:
    def test_clears_stored_cart(self, client, customer_headers):
        CartStore().merge_upsert("cust-api-001", "1", "S", 1)

        response = client.delete("/cart", headers=customer_headers)

        assert response.status_code == 200
        assert response.json() == {"status": "cleared"}
        assert CartStore().get("cust-api-001") == {}


class TestWriteConflicts:
    def test_unresolved_conflict_is_409(self, client, customer_headers, monkeypatch):
        def always_conflicting(self, owner_id, change):
            raise ExpectedVersionError("Wrong expected version")

        monkeypatch.setattr(CartStore, "update", always_conflicting)

        response = client.post("/cart/sync", json={"cart_items": {"1": {"S": 1}}}, headers=customer_headers)

        assert response.status_code == 409
        assert response.json()["error"] == "conflict"

    def test_save_with_blank_and_default_size(self, client, customer_headers):
        response = client.post(
            "/cart/save",
            json={"cart_items": {"1": {"": 2, "default": 3}}},
            headers=customer_headers,
        )
        assert response.status_code == 200
        assert CartStore().get("cust-api-001") == {"1": {"default": 3}}
