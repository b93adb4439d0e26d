"""Order assembly — price a cart snapshot against the catalogue and build an Order.

Preconditions are checked in a fixed order and the first failure wins:

1. the purchaser is identified: a customer id, or complete guest info
   (name, email and phone). Incomplete guest info is rejected even when a
   customer id is present.
2. the cart is a non-empty mapping.
3. a shipping address with all of its parts is present.

Unknown products are skipped, mirroring the leniency of cart sync. A product
that is out of stock aborts the whole checkout: silently dropping it would
commit an order the purchaser did not ask for.
"""

from decimal import Decimal

import structlog
from protean.exceptions import ValidationError

from ordering.cart.snapshot import sizes_for
from ordering.catalog import CatalogLookup, get_catalog
from ordering.exceptions import EmptyCart, OutOfStock
from ordering.order.order import Order

logger = structlog.get_logger(__name__)

GUEST_FIELDS = ("name", "email", "phone")
ADDRESS_FIELDS = ("home_address", "city", "region_or_state", "country", "zip_code")

CENT = Decimal("0.01")


def _blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_purchaser(customer_id=None, guest_info=None) -> None:
    """Reject a checkout that is neither a customer's nor a fully identified guest's."""
    if not customer_id and not guest_info:
        raise ValidationError(
            {"guest_info": ["Guest information (name, email, phone) is required for guest checkout"]}
        )

    if guest_info is not None:
        if not isinstance(guest_info, dict) or any(_blank(guest_info.get(field)) for field in GUEST_FIELDS):
            raise ValidationError({"guest_info": ["Guest name, email, and phone are required"]})


def validate_cart_items(cart_items) -> None:
    if not isinstance(cart_items, dict) or not cart_items:
        raise ValidationError({"cart_items": ["Cart items are required"]})


def validate_shipping_address(shipping_address) -> None:
    if not isinstance(shipping_address, dict) or any(
        _blank(shipping_address.get(field)) for field in ADDRESS_FIELDS
    ):
        raise ValidationError({"shipping_address": ["Shipping address is required"]})


class OrderAssembler:
    def __init__(self, catalog: CatalogLookup | None = None):
        self.catalog = catalog or get_catalog()

    def price_lines(self, cart_items: dict) -> tuple[list[dict], Decimal]:
        """Resolve every product against the catalogue and freeze its price.

        Returns the item dicts for the order and the order total.

        Raises:
            OutOfStock: a known product is flagged out of stock.
        """
        items_data = []
        total = Decimal("0")

        for product_id, sizes in cart_items.items():
            entry = self.catalog.find_by_id(str(product_id))
            if entry is None:
                logger.debug("Skipping unknown product at checkout", product_id=str(product_id))
                continue

            if not entry.in_stock:
                logger.warning("Checkout rejected, product out of stock", product_id=entry.product_id)
                raise OutOfStock(entry.product_id, entry.name)

            for size, quantity in sizes_for(sizes):
                total += entry.unit_price * quantity
                items_data.append(
                    {
                        "product_id": entry.product_id,
                        "product_name": entry.name,
                        "size": size,
                        "quantity": quantity,
                        "unit_price": float(entry.unit_price),
                    }
                )

        return items_data, total.quantize(CENT)

    def assemble(self, cart_items, shipping_address, customer_id=None, guest_info=None) -> Order:
        """Validate and price the checkout, returning an unsaved Order."""
        validate_purchaser(customer_id, guest_info)
        validate_cart_items(cart_items)
        validate_shipping_address(shipping_address)

        items_data, total = self.price_lines(cart_items)
        if not items_data:
            raise EmptyCart()

        address = {field: shipping_address[field] for field in ADDRESS_FIELDS}
        guest = {field: guest_info[field] for field in GUEST_FIELDS} if guest_info else None

        return Order.place(
            items_data=items_data,
            shipping_address=address,
            total_amount=float(total),
            customer_id=customer_id,
            guest_info=guest,
        )
