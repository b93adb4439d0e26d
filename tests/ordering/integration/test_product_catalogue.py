"""Integration tests for the catalogue projection adapter and product reads."""

import json
from decimal import Decimal

import pytest
from ordering.catalog.product_catalogue import ProductCatalogue, ProjectionCatalog
from ordering.order.assembly import OrderAssembler
from protean import current_domain


@pytest.fixture()
def products():
    repo = current_domain.repository_for(ProductCatalogue)
    repo.add(
        ProductCatalogue(
            product_id="p-shirt",
            name="Linen Shirt",
            unit_price=49.99,
            in_stock=True,
            category="Clothing",
            sizes=json.dumps(["S", "M", "L"]),
        )
    )
    repo.add(
        ProductCatalogue(
            product_id="p-mat",
            name="Yoga Mat",
            unit_price=29.5,
            in_stock=False,
            category="Accessories",
        )
    )


class TestProjectionCatalog:
    def test_finds_product(self, products):
        entry = ProjectionCatalog().find_by_id("p-shirt")
        assert entry.name == "Linen Shirt"
        assert entry.unit_price == Decimal("49.99")
        assert entry.in_stock is True

    def test_unknown_product(self, products):
        assert ProjectionCatalog().find_by_id("p-missing") is None

    def test_prices_checkout(self, products, shipping_address):
        order = OrderAssembler(catalog=ProjectionCatalog()).assemble(
            {"p-shirt": {"S": 2}}, shipping_address, customer_id="cust-001"
        )
        assert order.total_amount == 99.98


class TestProductEndpoints:
    def test_list_products(self, client, products):
        response = client.get("/products")
        assert response.status_code == 200
        assert {product["product_id"] for product in response.json()} == {"p-shirt", "p-mat"}

    def test_get_product(self, client, products):
        response = client.get("/products/p-shirt")
        assert response.status_code == 200
        assert response.json() == {
            "product_id": "p-shirt",
            "name": "Linen Shirt",
            "unit_price": 49.99,
            "in_stock": True,
            "category": "Clothing",
            "sizes": ["S", "M", "L"],
        }

    def test_sizeless_product(self, client, products):
        assert client.get("/products/p-mat").json()["sizes"] == []

    def test_unknown_product(self, client, products):
        assert client.get("/products/p-missing").status_code == 404

    def test_list_is_not_truncated(self, client):
        repo = current_domain.repository_for(ProductCatalogue)
        for n in range(105):
            repo.add(ProductCatalogue(product_id=f"p-{n:03d}", name=f"Product {n:03d}", unit_price=1.0))

        response = client.get("/products")

        assert len(response.json()) == 105
        assert response.json()[0]["name"] == "Product 000"
