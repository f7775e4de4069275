"""Product service layer (Use Cases)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from django.db import transaction

from modules.products.exceptions import ProductAlreadyExists, ProductNotFound
from modules.products.models import Product

if TYPE_CHECKING:
    from modules.products.dtos import CreateProductDTO
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    @transaction.atomic
    def create_product(self, dto: CreateProductDTO) -> Product:
        """Add a product to the catalog.

        Raises:
            ProductAlreadyExists: if a product with the same name exists.
        """
        if self._repo.get_by_name(dto.name):
            logger.warning("product.duplicate_name", name=dto.name)
            raise ProductAlreadyExists(
                f"Product with name '{dto.name}' already exists."
            )

        product = self._repo.save(
            Product(name=dto.name, price=dto.price, quantity=dto.quantity)
        )
        logger.info("product.created", product_id=str(product.id))
        return product

    def get_product(self, id: str) -> Product:
        """Raises ``ProductNotFound`` if the product does not exist."""
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound(f"Product {id} not found.")
        return product
