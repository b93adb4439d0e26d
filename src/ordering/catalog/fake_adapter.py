"""Deterministic in-memory catalogue for tests and local runs."""

from decimal import Decimal

from ordering.catalog.port import CatalogEntry, CatalogLookup


class InMemoryCatalog(CatalogLookup):
    def __init__(self):
        self._entries: dict[str, CatalogEntry] = {}

    def add(self, product_id, name, unit_price, in_stock=True) -> CatalogEntry:
        entry = CatalogEntry(
            product_id=str(product_id),
            name=name,
            unit_price=Decimal(str(unit_price)),
            in_stock=in_stock,
        )
        self._entries[entry.product_id] = entry
        return entry

    def set_price(self, product_id, unit_price) -> None:
        entry = self._entries[str(product_id)]
        self.add(entry.product_id, entry.name, unit_price, entry.in_stock)

    def set_in_stock(self, product_id, in_stock: bool) -> None:
        entry = self._entries[str(product_id)]
        self.add(entry.product_id, entry.name, entry.unit_price, in_stock)

    def find_by_id(self, product_id: str) -> CatalogEntry | None:
        return self._entries.get(str(product_id))
