"""Cart snapshot encoding.

Clients exchange carts as ``{product_id: {size: quantity}}``. Internally a
cart is a flat set of ``(product_id, size, quantity)`` lines; these helpers
convert between the two and drop entries that can never be stored.
"""

from typing import Any, NamedTuple

DEFAULT_SIZE = "default"
MAX_SIZE_LENGTH = 50


class SnapshotLine(NamedTuple):
    product_id: str
    size: str
    quantity: int


def _valid_quantity(value: Any) -> bool:
    # bool is an int subclass; True must not count as a quantity of 1
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def sizes_for(sizes: Any) -> list[tuple[str, int]]:
    """Valid ``(size, quantity)`` pairs of one product entry.

    Blank sizes fold into ``"default"``; when two labels land on the same
    size the larger quantity is kept. Labels too long to store are dropped.
    """
    if not isinstance(sizes, dict):
        return []

    merged: dict[str, int] = {}
    for size, quantity in sizes.items():
        if not _valid_quantity(quantity):
            continue
        label = str(size or DEFAULT_SIZE)
        if len(label) > MAX_SIZE_LENGTH:
            continue
        merged[label] = max(merged.get(label, 0), quantity)
    return list(merged.items())


def flatten(snapshot: dict) -> list[SnapshotLine]:
    """Flatten a nested snapshot into one line per (product, size)."""
    return [
        SnapshotLine(str(product_id), size, quantity)
        for product_id, sizes in snapshot.items()
        for size, quantity in sizes_for(sizes)
    ]


def nest(lines) -> dict[str, dict[str, int]]:
    """Build the nested snapshot from anything with product_id/size/quantity."""
    snapshot: dict[str, dict[str, int]] = {}
    for line in lines:
        snapshot.setdefault(str(line.product_id), {})[line.size or DEFAULT_SIZE] = line.quantity
    return snapshot
