"""Integration tests for the Order creation endpoint.

Covers:
- Success 201: order body with priced line items and total.
- Stock deduction: products decremented on creation.
- Validation 400: malformed payloads, malformed product ids.
- Business 404/409: unknown customer, unknown product, insufficient stock.
- Authentication enforcement (401 without credentials).
"""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest

from modules.customers.models import Customer
from modules.orders.models import Order
from modules.products.models import Product

pytestmark = pytest.mark.integration

URL = "/api/v1/orders/"


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def customer():
    return Customer.objects.create(name="Create Customer", email="create@example.com")


@pytest.fixture()
def product_a():
    return Product.objects.create(name="Create A", price=Decimal("10.00"), quantity=100)


@pytest.fixture()
def product_b():
    return Product.objects.create(name="Create B", price=Decimal("25.50"), quantity=50)


@pytest.fixture()
def payload(customer, product_a, product_b):
    return {
        "customer_id": str(customer.id),
        "products": [
            {"id": str(product_a.id), "quantity": 2},
            {"id": str(product_b.id), "quantity": 1},
        ],
    }


def _single_error(response):
    data = response.json()
    assert data["type"] == "client_error"
    assert len(data["errors"]) == 1
    return data["errors"][0]


# ===========================================================================
# Success
# ===========================================================================


class TestCreateOrderSuccess:
    def test_returns_201_with_order(self, auth_client, payload, customer):
        response = auth_client.post(URL, payload, format="json")

        assert response.status_code == 201
        data = response.json()
        assert data["id"]
        assert data["customer"]["id"] == str(customer.id)
        assert data["total"] == "45.50"

    def test_line_items_carry_catalog_prices(
        self, auth_client, payload, product_a, product_b
    ):
        data = auth_client.post(URL, payload, format="json").json()

        lines = {line["product_id"]: line for line in data["order_products"]}
        assert lines[str(product_a.id)]["price"] == "10.00"
        assert lines[str(product_a.id)]["quantity"] == 2
        assert lines[str(product_b.id)]["price"] == "25.50"
        assert all(line["order_id"] == data["id"] for line in lines.values())

    def test_deducts_stock(self, auth_client, payload, product_a, product_b):
        auth_client.post(URL, payload, format="json")

        product_a.refresh_from_db()
        product_b.refresh_from_db()
        assert product_a.quantity == 98
        assert product_b.quantity == 49

    def test_order_is_readable_after_creation(self, auth_client, payload):
        created = auth_client.post(URL, payload, format="json").json()

        response = auth_client.get(f"{URL}{created['id']}/")
        assert response.status_code == 200
        assert response.json()["total"] == "45.50"


# ===========================================================================
# Payload validation
# ===========================================================================


class TestCreateOrderValidation:
    def test_empty_products_returns_400(self, auth_client, customer):
        response = auth_client.post(
            URL, {"customer_id": str(customer.id), "products": []}, format="json"
        )

        assert response.status_code == 400
        data = response.json()
        assert data["type"] == "validation_error"
        assert data["errors"][0]["attr"] == "products"

    def test_zero_quantity_returns_400(self, auth_client, customer, product_a):
        response = auth_client.post(
            URL,
            {
                "customer_id": str(customer.id),
                "products": [{"id": str(product_a.id), "quantity": 0}],
            },
            format="json",
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["attr"] == "products.0.quantity"

    def test_missing_customer_id_returns_400(self, auth_client, product_a):
        response = auth_client.post(
            URL, {"products": [{"id": str(product_a.id), "quantity": 1}]}, format="json"
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["attr"] == "customer_id"

    def test_malformed_product_id_returns_400(self, auth_client, customer):
        response = auth_client.post(
            URL,
            {
                "customer_id": str(customer.id),
                "products": [{"id": "not-a-uuid", "quantity": 1}],
            },
            format="json",
        )

        assert response.status_code == 400
        error = _single_error(response)
        assert error["code"] == "product_lookup_failed"
        assert error["detail"] == "Cannot find products with given ids."


# ===========================================================================
# Business rules
# ===========================================================================


class TestCreateOrderBusinessRules:
    def test_unknown_customer_returns_404(self, auth_client, payload):
        missing = str(uuid4())
        payload["customer_id"] = missing

        response = auth_client.post(URL, payload, format="json")

        assert response.status_code == 404
        error = _single_error(response)
        assert error["code"] == "customer_not_found"
        assert error["attr"] == "customer_id"
        assert missing in error["detail"]

    def test_unknown_product_returns_404(self, auth_client, payload):
        missing = str(uuid4())
        payload["products"].append({"id": missing, "quantity": 1})

        response = auth_client.post(URL, payload, format="json")

        assert response.status_code == 404
        error = _single_error(response)
        assert error["code"] == "product_not_found"
        assert error["detail"] == f"Could not find product {missing}."

    def test_insufficient_stock_returns_409(self, auth_client, payload, product_b):
        payload["products"][1]["quantity"] = 51

        response = auth_client.post(URL, payload, format="json")

        assert response.status_code == 409
        error = _single_error(response)
        assert error["code"] == "insufficient_stock"
        assert str(product_b.id) in error["detail"]

    def test_rejected_order_writes_nothing(self, auth_client, payload, product_a):
        payload["products"][1]["quantity"] = 51

        auth_client.post(URL, payload, format="json")

        product_a.refresh_from_db()
        assert product_a.quantity == 100
        assert Order.objects.count() == 0


class TestCreateOrderAuth:
    def test_unauthenticated_returns_401(self, api_client, payload):
        response = api_client.post(URL, payload, format="json")

        assert response.status_code == 401
        assert Order.objects.count() == 0
