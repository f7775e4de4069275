"""Order service layer (Use Cases).

Orchestrates order creation: a linear validate-then-persist sequence over
three injected repositories.  Checks run strictly in this order and the
first failure aborts before anything is written:

1. The customer must exist.
2. The batch product look-up must not fail.
3. Every requested product must exist (first missing id is reported).
4. No line may ask for more than the available quantity (first offender).

Prices and quantities are read once, at look-up time.  Line items are
priced from that snapshot, and the new stock of each product is the
snapshot quantity minus the line's quantity.  Repeated product ids are
not merged: each line is checked and written on its own.

The whole sequence runs in one database transaction, so a failed stock
update also discards the order.  Products are not row-locked: two
concurrent orders on the same product may both pass the stock check.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Dict, List

import structlog
from django.db import transaction

from modules.orders.dtos import CatalogEntryDTO, PricedLineDTO
from modules.orders.exceptions import (
    CustomerNotFound,
    InsufficientStock,
    OrderNotFound,
    ProductLookupFailed,
    ProductNotFound,
)

if TYPE_CHECKING:
    from modules.customers.repositories.interfaces import ICustomerRepository
    from modules.orders.dtos import CreateOrderDTO
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)

ZERO_PRICE = Decimal("0.00")


class OrderService:
    """Application service for Order use-cases.

    Receives repositories via constructor injection (DIP).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        customer_repository: ICustomerRepository,
        product_repository: IProductRepository,
    ) -> None:
        self._order_repo = order_repository
        self._customer_repo = customer_repository
        self._product_repo = product_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_order(self, dto: CreateOrderDTO) -> Order:
        """Validate a purchase request and persist the resulting order.

        Raises:
            CustomerNotFound: the customer does not exist.
            ProductLookupFailed: the product look-up signalled failure.
            ProductNotFound: a requested product is not in the catalog.
            InsufficientStock: a line exceeds the available quantity.
        """
        log = logger.bind(customer_id=dto.customer_id, line_count=len(dto.items))
        log.info("order.creation_started")

        # 1. Customer
        customer = self._customer_repo.get_by_id(dto.customer_id)
        if not customer:
            log.warning("order.customer_not_found")
            raise CustomerNotFound(dto.customer_id)

        # 2. Catalog snapshot
        existent_products = self._product_repo.find_all_by_id(
            [item.product_id for item in dto.items]
        )
        if existent_products is None:
            log.warning("order.product_lookup_failed")
            raise ProductLookupFailed()

        catalog: Dict[str, CatalogEntryDTO] = {}
        for product in existent_products:
            entry = CatalogEntryDTO.from_entity(product)
            catalog[entry.product_id] = entry

        # 3. Existence
        missing = [item for item in dto.items if item.product_id not in catalog]
        if missing:
            log.warning("order.product_not_found", product_id=missing[0].product_id)
            raise ProductNotFound(missing[0].product_id)

        # 4. Stock
        short = [
            item for item in dto.items if catalog[item.product_id].quantity < item.quantity
        ]
        if short:
            first = short[0]
            available = catalog[first.product_id].quantity
            log.warning(
                "order.insufficient_stock",
                product_id=first.product_id,
                requested=first.quantity,
                available=available,
            )
            raise InsufficientStock(first.product_id, first.quantity, available)

        # 5. Price every line from the snapshot
        priced_lines: List[PricedLineDTO] = []
        for item in dto.items:
            entry = catalog.get(item.product_id)
            priced_lines.append(
                PricedLineDTO(
                    product_id=item.product_id,
                    quantity=item.quantity,
                    price=entry.price if entry else ZERO_PRICE,
                )
            )

        # 6. Persist order + line items
        order = self._order_repo.create(
            {
                "customer": customer,
                "products": [line.model_dump() for line in priced_lines],
            }
        )
        log = log.bind(order_id=str(order.id))
        log.info("order.created")

        # 7-8. Decrement stock from the snapshot quantities
        new_quantities = [
            {
                "id": item.product_id,
                "quantity": catalog[item.product_id].quantity - item.quantity,
            }
            for item in dto.items
        ]
        self._product_repo.update_quantity(new_quantities)
        log.info("order.stock_updated", products=len(new_quantities))

        return order

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: str) -> Order:
        """Retrieve a single order by ID.

        Raises:
            OrderNotFound: if the order does not exist.
        """
        order = self._order_repo.get_by_id(order_id)
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")
        return order
