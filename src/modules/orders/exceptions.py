"""Order domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.

Every order-creation failure derives from ``OrderCreationError`` and
carries a machine-readable ``code`` plus the offending identifier, so
callers never have to parse the message.
"""

from __future__ import annotations

from typing import Any


class OrderNotFound(Exception):
    """The requested order does not exist."""


class OrderCreationError(Exception):
    """Base class for validation failures while creating an order."""

    code = "order_creation_failed"


class CustomerNotFound(OrderCreationError):
    """The customer placing the order does not exist."""

    code = "customer_not_found"

    def __init__(self, customer_id: Any) -> None:
        self.customer_id = customer_id
        super().__init__(f"Customer {customer_id} not found.")


class ProductLookupFailed(OrderCreationError):
    """The batch product look-up itself failed (as opposed to finding nothing)."""

    code = "product_lookup_failed"

    def __init__(self) -> None:
        super().__init__("Cannot find products with given ids.")


class ProductNotFound(OrderCreationError):
    """A requested product does not exist in the catalog."""

    code = "product_not_found"

    def __init__(self, product_id: Any) -> None:
        self.product_id = product_id
        super().__init__(f"Could not find product {product_id}.")


class InsufficientStock(OrderCreationError):
    """A line asks for more units than the product has available."""

    code = "insufficient_stock"

    def __init__(self, product_id: Any, requested: int, available: int) -> None:
        self.product_id = product_id
        self.requested = requested
        self.available = available
        super().__init__(
            f"Invalid quantity for product {product_id}: "
            f"requested {requested}, available {available}."
        )
