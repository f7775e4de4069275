"""Unit tests for ProductDjangoRepository.

Covers:
- find_all_by_id: batch look-up, unknown ids, malformed ids.
- update_quantity: absolute quantity writes.
- get_by_id / get_by_name.
"""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest

from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.repositories.interfaces import IProductRepository

pytestmark = pytest.mark.unit


@pytest.fixture()
def repo():
    return ProductDjangoRepository()


@pytest.fixture()
def keyboard():
    return Product.objects.create(name="Keyboard", price=Decimal("49.90"), quantity=10)


@pytest.fixture()
def mouse():
    return Product.objects.create(name="Mouse", price=Decimal("19.90"), quantity=3)


class TestRepositoryInstantiation:
    def test_is_instance_of_interface(self):
        assert isinstance(ProductDjangoRepository(), IProductRepository)


# ===========================================================================
# find_all_by_id
# ===========================================================================


class TestFindAllById:
    def test_returns_every_known_product(self, repo, keyboard, mouse):
        found = repo.find_all_by_id([str(keyboard.id), str(mouse.id)])
        assert {p.id for p in found} == {keyboard.id, mouse.id}

    def test_unknown_ids_are_omitted(self, repo, keyboard):
        found = repo.find_all_by_id([str(keyboard.id), str(uuid4())])
        assert [p.id for p in found] == [keyboard.id]

    def test_no_matches_returns_empty_list(self, repo):
        assert repo.find_all_by_id([str(uuid4())]) == []

    def test_repeated_ids_return_product_once(self, repo, keyboard):
        found = repo.find_all_by_id([str(keyboard.id), str(keyboard.id)])
        assert len(found) == 1

    def test_accepts_uuid_instances(self, repo, keyboard):
        assert repo.find_all_by_id([keyboard.id])[0].id == keyboard.id

    def test_malformed_id_fails_the_whole_lookup(self, repo, keyboard):
        assert repo.find_all_by_id([str(keyboard.id), "not-a-uuid"]) is None

    def test_uses_a_single_query(self, repo, keyboard, mouse, django_assert_num_queries):
        with django_assert_num_queries(1):
            repo.find_all_by_id([str(keyboard.id), str(mouse.id)])


# ===========================================================================
# update_quantity
# ===========================================================================


class TestUpdateQuantity:
    def test_writes_absolute_quantities(self, repo, keyboard, mouse):
        repo.update_quantity(
            [
                {"id": str(keyboard.id), "quantity": 7},
                {"id": str(mouse.id), "quantity": 0},
            ]
        )

        keyboard.refresh_from_db()
        mouse.refresh_from_db()
        assert keyboard.quantity == 7
        assert mouse.quantity == 0

    def test_leaves_price_untouched(self, repo, keyboard):
        repo.update_quantity([{"id": str(keyboard.id), "quantity": 1}])

        keyboard.refresh_from_db()
        assert keyboard.price == Decimal("49.90")

    def test_bumps_updated_at(self, repo, keyboard):
        before = keyboard.updated_at
        repo.update_quantity([{"id": str(keyboard.id), "quantity": 1}])

        keyboard.refresh_from_db()
        assert keyboard.updated_at >= before

    def test_last_write_wins_for_repeated_ids(self, repo, keyboard):
        repo.update_quantity(
            [
                {"id": str(keyboard.id), "quantity": 8},
                {"id": str(keyboard.id), "quantity": 5},
            ]
        )

        keyboard.refresh_from_db()
        assert keyboard.quantity == 5

    def test_unknown_id_is_ignored(self, repo):
        repo.update_quantity([{"id": str(uuid4()), "quantity": 1}])
        assert Product.objects.count() == 0


# ===========================================================================
# get_by_id / get_by_name
# ===========================================================================


class TestGetters:
    def test_get_by_id_found(self, repo, keyboard):
        assert repo.get_by_id(str(keyboard.id)) == keyboard

    def test_get_by_id_invalid_uuid(self, repo):
        assert repo.get_by_id("not-a-uuid") is None

    def test_get_by_name_strips_whitespace(self, repo, keyboard):
        assert repo.get_by_name("  Keyboard ") == keyboard

    def test_get_by_name_missing(self, repo):
        assert repo.get_by_name("Monitor") is None
