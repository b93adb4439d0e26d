"""PlaceOrder command and its handler.

The order and all of its items are one aggregate, persisted in the handler's
unit of work: they are stored together or not at all.
"""

import json

import structlog
from protean import handle
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.assembly import OrderAssembler
from ordering.order.order import Order

logger = structlog.get_logger(__name__)


def _loads(value):
    if value is None or not isinstance(value, str):
        return value
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        return None


@ordering.command(part_of="Order")
class PlaceOrder:
    customer_id = Identifier()  # None for guest checkout
    cart_items = Text(required=True)  # JSON: {product_id: {size: quantity}}
    shipping_address = Text()  # JSON: address dict
    guest_info = Text()  # JSON: {name, email, phone}


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        order = OrderAssembler().assemble(
            cart_items=_loads(command.cart_items),
            shipping_address=_loads(command.shipping_address),
            customer_id=command.customer_id,
            guest_info=_loads(command.guest_info),
        )
        current_domain.repository_for(Order).add(order)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            customer_id=str(order.customer_id) if order.customer_id else None,
            guest=order.is_guest_order,
            total_amount=order.total_amount,
            item_count=len(order.items),
        )
        return str(order.id)
