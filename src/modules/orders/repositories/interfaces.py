"""Order repository interface.

Extends ``IRepository[Order]`` with the atomic creation of an order
together with its priced line items.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.models import Order


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root.

    The Order aggregate includes its ``OrderProduct`` line items.
    Creation must be atomic.
    """

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> Order:
        """Create an order with its line items atomically.

        ``data`` must include ``customer`` and ``products`` (list of dicts
        with ``product_id``, ``quantity``, ``price``).  The identifier and
        timestamps are assigned by storage.
        """
