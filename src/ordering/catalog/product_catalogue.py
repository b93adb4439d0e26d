"""Catalogue projection: the locally stored product table read at checkout."""

from decimal import Decimal

from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, DateTime, Float, Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.catalog.port import CatalogEntry, CatalogLookup
from ordering.domain import ordering


@ordering.projection
class ProductCatalogue:
    product_id = Identifier(identifier=True, required=True)
    name = String(required=True, max_length=255)
    unit_price = Float(required=True, min_value=0.0)
    in_stock = Boolean(default=True)
    category = String(max_length=100)
    sizes = Text()  # JSON array of size labels, empty for sizeless products
    updated_at = DateTime()


class ProjectionCatalog(CatalogLookup):
    """Catalogue adapter backed by the ProductCatalogue projection."""

    def find_by_id(self, product_id: str) -> CatalogEntry | None:
        repo = current_domain.repository_for(ProductCatalogue)
        try:
            record = repo.get(str(product_id))
        except ObjectNotFoundError:
            return None

        return CatalogEntry(
            product_id=str(record.product_id),
            name=record.name,
            unit_price=Decimal(str(record.unit_price)),
            in_stock=bool(record.in_stock),
        )
