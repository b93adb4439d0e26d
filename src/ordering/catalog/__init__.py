"""Catalogue lookup factory.

Provides get_catalog() / set_catalog() to swap implementations:
- ProjectionCatalog reads the ProductCatalogue projection (default)
- InMemoryCatalog for development and testing
"""

import os

from ordering.catalog.port import CatalogEntry, CatalogLookup

_current_catalog: CatalogLookup | None = None


def get_catalog() -> CatalogLookup:
    """Return the configured catalogue adapter (singleton).

    The adapter is chosen with the CATALOG_ADAPTER environment variable.
    """
    global _current_catalog
    if _current_catalog is None:
        adapter = os.environ.get("CATALOG_ADAPTER", "projection")
        if adapter == "projection":
            from ordering.catalog.product_catalogue import ProjectionCatalog

            _current_catalog = ProjectionCatalog()
        elif adapter == "memory":
            from ordering.catalog.fake_adapter import InMemoryCatalog

            _current_catalog = InMemoryCatalog()
        else:
            raise ValueError(f"Unknown catalog adapter: {adapter}")
    return _current_catalog


def set_catalog(catalog: CatalogLookup) -> None:
    """Override the active catalogue adapter (useful for tests)."""
    global _current_catalog
    _current_catalog = catalog


def reset_catalog() -> None:
    """Reset to the configured default adapter."""
    global _current_catalog
    _current_catalog = None


__all__ = ["CatalogEntry", "CatalogLookup", "get_catalog", "reset_catalog", "set_catalog"]
