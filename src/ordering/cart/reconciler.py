"""Cart reconciliation — merge a client snapshot into the stored cart.

Products the catalogue does not know are skipped with all their sizes, so a
stale entry on the client never blocks the rest of the sync. Quantities are
merged with max-quantity-wins, which makes a retried sync harmless.
"""

import structlog

from ordering.cart.snapshot import sizes_for
from ordering.cart.store import CartStore
from ordering.catalog import CatalogLookup, get_catalog

logger = structlog.get_logger(__name__)


class CartReconciler:
    def __init__(self, store: CartStore | None = None, catalog: CatalogLookup | None = None):
        self.store = store or CartStore()
        self.catalog = catalog or get_catalog()

    def reconcile(self, owner_id, snapshot: dict) -> dict[str, dict[str, int]]:
        """Merge ``snapshot`` into the owner's cart and return the stored result."""
        lines = []
        for product_id, sizes in snapshot.items():
            if self.catalog.find_by_id(str(product_id)) is None:
                logger.debug("Skipping unknown product in cart sync", owner_id=str(owner_id), product_id=str(product_id))
                continue
            lines.extend((str(product_id), size, quantity) for size, quantity in sizes_for(sizes))

        cart = self.store.update(owner_id, lambda stored: stored.merge(lines))

        logger.info(
            "Cart synced",
            owner_id=str(owner_id),
            merged_lines=len(lines),
            stored_lines=len(cart.lines),
        )
        return cart.snapshot()
