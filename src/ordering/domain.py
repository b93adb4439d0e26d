"""Ordering bounded context — shopping carts, checkout and orders.

Carts are stored per customer and reconciled against client-held snapshots.
Checkout prices a cart snapshot against the catalogue and commits an Order
for either an authenticated customer or an anonymous guest.
"""

from protean.domain import Domain

from ordering.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

ordering = Domain(name="ordering")
