"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Serializers)
and the Service layer.  DTOs are immutable (``frozen=True``).

- ``CreateOrderItemDTO``: one requested line (product id + quantity).
- ``CreateOrderDTO``: input for order creation (customer + lines).
- ``CatalogEntryDTO``: price and stock of a product as read at look-up.
- ``PricedLineDTO``: a requested line with its frozen unit price.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, List
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

if TYPE_CHECKING:
    from modules.products.models import Product


def _normalize_id(v: str) -> str:
    """Strip whitespace; canonicalise UUID strings so they match stored ids."""
    v = v.strip()
    if not v:
        raise ValueError("Identifier must not be empty.")
    try:
        return str(UUID(v))
    except ValueError:
        return v


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateOrderItemDTO(BaseModel):
    """Immutable DTO for a single requested line.

    ``price`` is not part of the request: the Service Layer resolves it
    from the product catalog.
    """

    model_config = ConfigDict(frozen=True)

    product_id: str
    quantity: int

    @field_validator("product_id", mode="before")
    @classmethod
    def normalize_product_id(cls, v: object) -> str:
        return _normalize_id(str(v))

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v


class CreateOrderDTO(BaseModel):
    """Immutable DTO for order creation requests.

    Validates that ``items`` contains at least one line.  Repeated product
    ids are accepted as-is: every line is validated and priced on its own.
    """

    model_config = ConfigDict(frozen=True)

    customer_id: str
    items: List[CreateOrderItemDTO]

    @field_validator("customer_id", mode="before")
    @classmethod
    def normalize_customer_id(cls, v: object) -> str:
        return _normalize_id(str(v))

    @field_validator("items")
    @classmethod
    def items_must_not_be_empty(
        cls, v: List[CreateOrderItemDTO]
    ) -> List[CreateOrderItemDTO]:
        if not v:
            raise ValueError("Order must have at least one item.")
        return v


# ---------------------------------------------------------------------------
# Derived DTOs
# ---------------------------------------------------------------------------


class CatalogEntryDTO(BaseModel):
    """Price and available quantity of a product at look-up time."""

    model_config = ConfigDict(frozen=True)

    product_id: str
    price: Decimal
    quantity: int

    @classmethod
    def from_entity(cls, product: Product) -> CatalogEntryDTO:
        return cls(
            product_id=str(product.id),
            price=product.price,
            quantity=product.quantity,
        )


class PricedLineDTO(BaseModel):
    """A requested line priced against the catalog snapshot."""

    model_config = ConfigDict(frozen=True)

    product_id: str
    quantity: int
    price: Decimal
