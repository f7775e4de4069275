"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.
All write operations are wrapped in ``transaction.atomic()`` to ensure
the Order aggregate (Order + OrderProducts) is persisted atomically.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import prefetch_related_objects

from modules.orders.models import Order, OrderProduct
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    @transaction.atomic
    def create(self, data: Dict[str, Any]) -> Order:
        """Create an order with its line items atomically.

        ``data`` keys:
        - ``customer`` (required): the ``Customer`` placing the order
        - ``products`` (required): list of dicts with ``product_id``,
          ``quantity``, ``price``
        """
        order = Order(customer=data["customer"])
        order.save()

        lines = data.get("products", [])
        OrderProduct.objects.bulk_create(
            [
                OrderProduct(
                    order=order,
                    product_id=line["product_id"],
                    quantity=line["quantity"],
                    price=line["price"],
                )
                for line in lines
            ]
        )

        logger.info("order.persisted", order_id=str(order.id), line_count=len(lines))
        prefetch_related_objects([order], "order_products")
        return order

    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with its customer and line items.

        Uses ``select_related`` for the customer FK and
        ``prefetch_related`` for the line items to prevent N+1.
        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return (
                Order.objects.select_related("customer")
                .prefetch_related("order_products")
                .filter(id=id)
                .first()
            )
        except (ValueError, ValidationError):
            return None

    @transaction.atomic
    def save(self, entity: Order) -> Order:
        """Persist (create or update) an order header."""
        entity.save()
        logger.info("order.saved", order_id=str(entity.id))
        return entity
