"""Domain events for the Cart aggregate."""

from protean.fields import DateTime, Identifier, Integer

from ordering.domain import ordering


@ordering.event(part_of="Cart")
class CartSynced:
    """A client snapshot was merged into the stored cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    merged_line_count = Integer(required=True)
    line_count = Integer(required=True)
    synced_at = DateTime(required=True)


@ordering.event(part_of="Cart")
class CartSaved:
    """The stored cart was overwritten with a client snapshot."""

    __version__ = 1

    cart_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    line_count = Integer(required=True)
    saved_at = DateTime(required=True)


@ordering.event(part_of="Cart")
class CartCleared:
    """All lines were removed from the cart (explicit clear or after checkout)."""

    __version__ = 1

    cart_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    cleared_at = DateTime(required=True)
