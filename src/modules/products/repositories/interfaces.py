"""Product repository interface.

Extends ``IRepository[Product]`` with the catalog operations consumed by
order creation: a batch look-up by identifiers and a batch overwrite of
available quantities.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def get_by_name(self, name: str) -> Optional[Product]:
        """Retrieve a product by its unique name."""

    @abstractmethod
    def find_all_by_id(self, ids: Sequence[Any]) -> Optional[List[Product]]:
        """Return the existing products among ``ids``.

        Unknown identifiers are simply absent from the result.  ``None``
        signals that the look-up itself failed.
        """

    @abstractmethod
    def update_quantity(self, products: Sequence[Dict[str, Any]]) -> None:
        """Overwrite available quantities.

        ``products`` is a list of dicts with ``id`` and ``quantity``,
        applied in order.
        """
