"""Cart store — per-owner persistence of cart lines.

Every read and write of a customer's cart goes through the owner's Cart
aggregate, so a sync, save or clear is a single read-modify-write of one
aggregate. A write that loses a race with another write for the same owner
is reloaded and re-applied, up to ``MAX_WRITE_ATTEMPTS`` times. The
repository can be injected; by default the active domain's Cart repository
is used.
"""

from collections.abc import Callable

import structlog
from protean.exceptions import ExpectedVersionError, ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.cart.cart import Cart
from ordering.cart.snapshot import flatten

logger = structlog.get_logger(__name__)

MAX_WRITE_ATTEMPTS = 3


class CartStore:
    def __init__(self, repository=None):
        self._repository = repository

    @property
    def repository(self):
        return self._repository or current_domain.repository_for(Cart)

    # -------------------------------------------------------------------
    # Aggregate access
    # -------------------------------------------------------------------
    def find(self, owner_id) -> Cart | None:
        try:
            return self.repository.get(str(owner_id))
        except ObjectNotFoundError:
            return None

    def load(self, owner_id) -> Cart:
        """The owner's cart, or a new empty one if nothing is stored yet."""
        return self.find(owner_id) or Cart.create(owner_id)

    def persist(self, cart: Cart) -> None:
        self.repository.add(cart)

    def update(self, owner_id, change: Callable[[Cart], None]) -> Cart:
        """Load the owner's cart, apply ``change`` and persist it.

        ``change`` must be safe to apply again to a freshly loaded cart: on a
        version conflict the cart is reloaded and the change re-applied.

        Raises:
            ExpectedVersionError: the cart kept changing underneath for
                ``MAX_WRITE_ATTEMPTS`` attempts.
        """
        for attempt in range(1, MAX_WRITE_ATTEMPTS + 1):
            cart = self.load(owner_id)
            change(cart)
            try:
                self.persist(cart)
                return cart
            except ExpectedVersionError:
                if attempt == MAX_WRITE_ATTEMPTS:
                    logger.warning("Cart write conflict, giving up", owner_id=str(owner_id), attempts=attempt)
                    raise
                logger.info("Cart write conflict, retrying", owner_id=str(owner_id), attempt=attempt)

    # -------------------------------------------------------------------
    # Snapshot contract
    # -------------------------------------------------------------------
    def get(self, owner_id) -> dict[str, dict[str, int]]:
        cart = self.find(owner_id)
        return cart.snapshot() if cart else {}

    def merge_upsert(self, owner_id, product_id, size, quantity) -> None:
        if quantity <= 0:
            return
        self.update(owner_id, lambda cart: cart.merge_line(product_id, size, quantity))

    def replace_all(self, owner_id, snapshot: dict) -> None:
        lines = flatten(snapshot)
        self.update(owner_id, lambda cart: cart.replace_all(lines))

    def clear(self, owner_id) -> bool:
        """Delete all of the owner's lines. Returns False if there was no cart."""
        if self.find(owner_id) is None:
            return False
        self.update(owner_id, lambda cart: cart.clear())
        return True
