"""Checkout orchestration — guest or customer checkout, then cart cleanup.

Flow:
    1. Validate that the purchaser is a customer or a fully identified guest
    2. PlaceOrder → price, stock-check and commit the order with its items
    3. Customer checkout only: ClearCart on the customer's stored cart

The order is the source of truth once committed. A failure to clear the cart
is logged and does not undo the order; the stored cart is only a staging
area.
"""

import json

import structlog
from protean.utils.globals import current_domain

from ordering.cart.management import ClearCart
from ordering.order.assembly import validate_purchaser
from ordering.order.order import Order
from ordering.order.placement import PlaceOrder

logger = structlog.get_logger(__name__)


def _dumps(value):
    return json.dumps(value) if value is not None else None


def checkout(cart_items, shipping_address, customer_id=None, guest_info=None) -> Order:
    """Place an order from a cart snapshot and return it with its items."""
    validate_purchaser(customer_id, guest_info)

    order_id = current_domain.process(
        PlaceOrder(
            customer_id=customer_id,
            cart_items=json.dumps(cart_items),
            shipping_address=_dumps(shipping_address),
            guest_info=_dumps(guest_info),
        ),
        asynchronous=False,
    )

    if customer_id:
        try:
            current_domain.process(ClearCart(owner_id=customer_id), asynchronous=False)
        except Exception as exc:
            logger.warning(
                "Failed to clear cart after checkout",
                customer_id=str(customer_id),
                order_id=order_id,
                error=str(exc),
            )

    return current_domain.repository_for(Order).get(order_id)
