"""Cart aggregate — the authoritative, server-held cart of one customer.

A customer has exactly one Cart, identified by the customer's own id, holding
at most one line per (product, size). Clients keep their own copy (possibly
offline and stale) and push it back either as a sync, which merges with a
max-quantity-wins rule, or as a save, which overwrites the stored lines.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String

from ordering.cart.events import CartCleared, CartSaved, CartSynced
from ordering.cart.snapshot import DEFAULT_SIZE, MAX_SIZE_LENGTH, nest
from ordering.domain import ordering


@ordering.entity(part_of="Cart")
class CartLine:
    product_id = Identifier(required=True)
    size = String(required=True, max_length=MAX_SIZE_LENGTH, default=DEFAULT_SIZE)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@ordering.aggregate
class Cart:
    owner_id = Identifier(required=True)
    lines = HasMany(CartLine)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def one_line_per_product_and_size(self):
        keys = [(str(line.product_id), line.size) for line in self.lines]
        if len(keys) != len(set(keys)):
            raise ValidationError({"lines": ["A cart can hold only one line per product and size"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, owner_id):
        """Start an empty cart. The cart id is the owner id, so each owner has one cart."""
        now = datetime.now(UTC)
        return cls(
            id=str(owner_id),
            owner_id=str(owner_id),
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def find_line(self, product_id, size=DEFAULT_SIZE):
        size = size or DEFAULT_SIZE
        return next(
            (line for line in self.lines if str(line.product_id) == str(product_id) and line.size == size),
            None,
        )

    def snapshot(self) -> dict[str, dict[str, int]]:
        """The cart as ``{product_id: {size: quantity}}``."""
        return nest(self.lines)

    # -------------------------------------------------------------------
    # Line merging
    # -------------------------------------------------------------------
    def merge_line(self, product_id, size, quantity):
        """Merge one line: keep ``max(existing, quantity)``, or add the line.

        Non-positive quantities are ignored. Merging the same line twice
        leaves the cart as merging it once.
        """
        if quantity <= 0:
            return

        size = size or DEFAULT_SIZE
        now = datetime.now(UTC)
        existing = self.find_line(product_id, size)
        if existing:
            existing.quantity = max(existing.quantity, quantity)
        else:
            self.add_lines(
                CartLine(
                    product_id=str(product_id),
                    size=size,
                    quantity=quantity,
                    added_at=now,
                )
            )
        self.updated_at = now

    def merge(self, lines):
        """Merge a batch of ``(product_id, size, quantity)`` lines as one sync."""
        merged = 0
        for product_id, size, quantity in lines:
            if quantity > 0:
                self.merge_line(product_id, size, quantity)
                merged += 1

        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            CartSynced(
                cart_id=str(self.id),
                owner_id=str(self.owner_id),
                merged_line_count=merged,
                line_count=len(self.lines),
                synced_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Overwrite and clear
    # -------------------------------------------------------------------
    def _remove_all_lines(self):
        for line in list(self.lines):
            self.remove_lines(line)

    def replace_all(self, lines):
        """Overwrite the cart with the given lines, dropping non-positive quantities."""
        self._remove_all_lines()

        now = datetime.now(UTC)
        for product_id, size, quantity in lines:
            if quantity <= 0:
                continue
            self.add_lines(
                CartLine(
                    product_id=str(product_id),
                    size=size or DEFAULT_SIZE,
                    quantity=quantity,
                    added_at=now,
                )
            )
        self.updated_at = now

        self.raise_(
            CartSaved(
                cart_id=str(self.id),
                owner_id=str(self.owner_id),
                line_count=len(self.lines),
                saved_at=now,
            )
        )

    def clear(self):
        """Remove every line from the cart."""
        self._remove_all_lines()

        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            CartCleared(
                cart_id=str(self.id),
                owner_id=str(self.owner_id),
                cleared_at=now,
            )
        )
