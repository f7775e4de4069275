"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: methods return ``None``
instead of raising, and the Service Layer decides how to translate a
missing entity into an API response.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

import structlog

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Product]:
        """Retrieve a product by primary key.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return Product.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    @transaction.atomic
    def save(self, entity: Product) -> Product:
        """Persist (create or update) a product."""
        entity.save()
        logger.info("product.saved", product_id=str(entity.id))
        return entity

    def get_by_name(self, name: str) -> Optional[Product]:
        return Product.objects.filter(name=name.strip()).first()

    def find_all_by_id(self, ids: Sequence[Any]) -> Optional[List[Product]]:
        """Batch look-up in a single query.

        A malformed identifier makes the whole look-up fail (``None``);
        well-formed but unknown identifiers are just missing from the list.
        """
        try:
            return list(Product.objects.filter(id__in=[str(id) for id in ids]))
        except (ValueError, ValidationError):
            logger.warning("product.lookup_failed", requested=len(ids))
            return None

    @transaction.atomic
    def update_quantity(self, products: Sequence[Dict[str, Any]]) -> None:
        now = timezone.now()
        for product in products:
            Product.objects.filter(id=product["id"]).update(
                quantity=product["quantity"], updated_at=now
            )
        logger.info("product.quantities_updated", count=len(products))
