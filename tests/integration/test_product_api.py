"""Integration tests for Product API endpoints.

Covers:
- Create and retrieve via /api/v1/products/.
- Domain exception mapping (404, 409).
- Payload validation (negative price and quantity).
"""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest

from modules.products.models import Product

pytestmark = pytest.mark.integration

URL = "/api/v1/products/"


@pytest.fixture()
def sample_product():
    return Product.objects.create(name="Notebook", price=Decimal("3500.00"), quantity=5)


class TestCreateProduct:
    def test_create_returns_201(self, auth_client):
        response = auth_client.post(
            URL, {"name": "Monitor", "price": "899.90", "quantity": 12}, format="json"
        )

        assert response.status_code == 201
        data = response.json()
        assert data["price"] == "899.90"
        assert data["quantity"] == 12

    def test_quantity_defaults_to_zero(self, auth_client):
        response = auth_client.post(
            URL, {"name": "Cable", "price": "5.00"}, format="json"
        )

        assert response.status_code == 201
        assert response.json()["quantity"] == 0

    def test_duplicate_name_returns_409(self, auth_client, sample_product):
        response = auth_client.post(
            URL, {"name": "Notebook", "price": "1.00"}, format="json"
        )

        assert response.status_code == 409
        error = response.json()["errors"][0]
        assert error["code"] == "product_already_exists"
        assert error["attr"] == "name"

    @pytest.mark.parametrize(
        "payload, attr",
        [
            ({"name": "X", "price": "-1.00"}, "price"),
            ({"name": "X", "price": "1.00", "quantity": -1}, "quantity"),
            ({"price": "1.00"}, "name"),
        ],
    )
    def test_invalid_payload_returns_400(self, auth_client, payload, attr):
        response = auth_client.post(URL, payload, format="json")

        assert response.status_code == 400
        data = response.json()
        assert data["type"] == "validation_error"
        assert data["errors"][0]["attr"] == attr


class TestRetrieveProduct:
    def test_retrieve_returns_product(self, auth_client, sample_product):
        response = auth_client.get(f"{URL}{sample_product.id}/")

        assert response.status_code == 200
        assert response.json()["name"] == "Notebook"

    def test_unknown_product_returns_404(self, auth_client):
        response = auth_client.get(f"{URL}{uuid4()}/")

        assert response.status_code == 404
        assert response.json()["errors"][0]["code"] == "product_not_found"
