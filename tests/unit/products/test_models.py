"""Unit tests for the Product model.

Covers:
- Non-negative price: field validator and database check constraint.
- Name normalisation on save.
"""

from __future__ import annotations

import warnings
from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError
from django.db import IntegrityError, models, transaction
from django.utils.deprecation import RemovedInDjango60Warning

from modules.products.models import Product

pytestmark = pytest.mark.unit


class TestPriceValidation:
    def test_full_clean_rejects_negative_price(self):
        product = Product(name="Lamp", price=Decimal("-0.01"), quantity=1)

        with pytest.raises(ValidationError) as exc_info:
            product.full_clean()

        assert list(exc_info.value.message_dict) == ["price"]
        assert len(exc_info.value.message_dict["price"]) == 1

    def test_full_clean_accepts_zero_price(self):
        Product(name="Freebie", price=Decimal("0.00"), quantity=1).full_clean()

    def test_database_rejects_negative_price(self):
        product = Product.objects.create(name="Lamp", price=Decimal("5.00"), quantity=1)

        with pytest.raises(IntegrityError), transaction.atomic():
            Product.objects.filter(id=product.id).update(price=Decimal("-1.00"))


class TestPriceConstraint:
    def test_constraint_uses_condition(self):
        (constraint,) = Product._meta.constraints
        assert constraint.name == "products_price_non_negative"
        assert constraint.condition == models.Q(price__gte=0)

    def test_declaring_constraint_emits_no_deprecation_warning(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error", RemovedInDjango60Warning)
            models.CheckConstraint(
                condition=models.Q(price__gte=0), name="products_price_non_negative"
            )


class TestNameNormalisation:
    def test_name_is_stripped_on_save(self):
        product = Product.objects.create(name="  Lamp ", price=Decimal("5.00"))
        product.refresh_from_db()
        assert product.name == "Lamp"
