"""Order and OrderProduct models.

- ``Order`` is the aggregate root: a customer reference plus the
  ``created_at`` timestamp of the purchase.
- ``OrderProduct`` is the ``orders_products`` join record.  ``price`` is a
  snapshot of the catalog price at creation time and never follows later
  catalog changes.
- Both foreign keys of ``OrderProduct`` use ``SET NULL``: deleting an order
  or a product keeps the line item, orphaned, for financial history.
"""

from __future__ import annotations

from decimal import Decimal

from django.db import models

from modules.core.models import BaseModel


class Order(BaseModel):
    """Order aggregate root. Created once, never mutated by order creation."""

    customer: models.ForeignKey = models.ForeignKey(
        "customers.Customer",
        on_delete=models.SET_NULL,
        null=True,
        related_name="orders",
    )

    class Meta:
        db_table = "orders"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["-created_at"], name="orders_created_idx"),
        ]

    @property
    def total(self) -> Decimal:
        """Sum of ``price * quantity`` over the order's line items."""
        return sum(
            (line.price * line.quantity for line in self.order_products.all()),
            Decimal("0.00"),
        )

    def __str__(self) -> str:
        return f"Order {self.id}"


class OrderProduct(BaseModel):
    """Line item linking an Order to a Product (``orders_products``)."""

    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.SET_NULL,
        null=True,
        related_name="order_products",
    )
    product: models.ForeignKey = models.ForeignKey(
        "products.Product",
        on_delete=models.SET_NULL,
        null=True,
        related_name="order_products",
    )
    price: models.DecimalField = models.DecimalField(
        max_digits=10,
        decimal_places=2,
    )
    quantity: models.IntegerField = models.IntegerField()

    class Meta:
        db_table = "orders_products"
        ordering = ["created_at"]

    def __str__(self) -> str:
        return f"{self.product_id} x{self.quantity} (${self.price})"
