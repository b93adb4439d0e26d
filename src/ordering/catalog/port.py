"""Catalogue lookup port — read-only view of products for carts and checkout.

Catalogue management lives outside this context. Ordering only needs to know
whether a product exists, what it is called, what it costs right now and
whether it is in stock.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class CatalogEntry:
    """Catalogue data for one product as read at lookup time."""

    product_id: str
    name: str
    unit_price: Decimal
    in_stock: bool


class CatalogLookup(ABC):
    """Abstract interface for catalogue adapters."""

    @abstractmethod
    def find_by_id(self, product_id: str) -> CatalogEntry | None:
        """Return the product, or None when the catalogue does not know it."""
        ...
