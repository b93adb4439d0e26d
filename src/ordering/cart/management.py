"""Cart management — sync, save and clear commands and their handler."""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Text

from ordering.cart.cart import Cart
from ordering.cart.reconciler import CartReconciler
from ordering.cart.store import CartStore
from ordering.domain import ordering

logger = structlog.get_logger(__name__)


def parse_cart_items(raw) -> dict:
    """Decode a submitted snapshot; anything but a JSON object is rejected."""
    try:
        cart_items = json.loads(raw) if isinstance(raw, str) else raw
    except json.JSONDecodeError:
        cart_items = None
    if not isinstance(cart_items, dict):
        raise ValidationError({"cart_items": ["Valid cart data required"]})
    return cart_items


@ordering.command(part_of="Cart")
class SyncCart:
    """Merge a client-held cart into the customer's stored cart."""

    owner_id = Identifier(required=True)
    cart_items = Text(required=True)  # JSON: {product_id: {size: quantity}}


@ordering.command(part_of="Cart")
class SaveCart:
    """Overwrite the customer's stored cart with a client-held cart."""

    owner_id = Identifier(required=True)
    cart_items = Text(required=True)  # JSON: {product_id: {size: quantity}}


@ordering.command(part_of="Cart")
class ClearCart:
    owner_id = Identifier(required=True)


@ordering.command_handler(part_of=Cart)
class ManageCartHandler:
    @handle(SyncCart)
    def sync_cart(self, command):
        cart_items = parse_cart_items(command.cart_items)
        return CartReconciler().reconcile(command.owner_id, cart_items)

    @handle(SaveCart)
    def save_cart(self, command):
        cart_items = parse_cart_items(command.cart_items)
        CartStore().replace_all(command.owner_id, cart_items)
        logger.info("Cart saved", owner_id=str(command.owner_id))

    @handle(ClearCart)
    def clear_cart(self, command):
        cleared = CartStore().clear(command.owner_id)
        logger.info("Cart cleared", owner_id=str(command.owner_id), had_cart=cleared)
