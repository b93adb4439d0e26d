"""Order aggregate — a priced, immutable record of a checkout.

An order is created once, together with all of its items, by the checkout
flow. Afterwards only its fulfilment status and payment status change.

Status state machine:
    PENDING → PROCESSING → SHIPPED → DELIVERED
    PENDING, PROCESSING → CANCELLED
    DELIVERED and CANCELLED are terminal.

Payment status (pending, paid, failed) is set independently of the order
status and has no transition rules of its own.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from ordering.cart.snapshot import DEFAULT_SIZE, MAX_SIZE_LENGTH
from ordering.domain import ordering
from ordering.exceptions import EmptyCart
from ordering.order.events import OrderPlaced, OrderStatusChanged, PaymentStatusChanged


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@ordering.value_object(part_of="Order")
class ShippingAddress:
    """Where the order ships, captured as given at checkout.

    Only presence of each part is checked; formats are not validated.
    """

    home_address = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    region_or_state = String(required=True, max_length=100)
    country = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=20)


@ordering.value_object(part_of="Order")
class GuestInfo:
    """Contact details standing in for a customer account on guest orders."""

    name = String(required=True, max_length=255)
    email = String(required=True, max_length=255)
    phone = String(required=True, max_length=50)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderItem:
    """One purchased (product, size) line.

    ``unit_price`` is a copy of the catalogue price at checkout time, so later
    price changes never alter a historical order.
    """

    product_id = Identifier(required=True)
    product_name = String(max_length=255)
    size = String(max_length=MAX_SIZE_LENGTH, default=DEFAULT_SIZE)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    customer_id = Identifier()  # None for guest orders
    guest_info = ValueObject(GuestInfo)
    items = HasMany(OrderItem)
    shipping_address = ValueObject(ShippingAddress, required=True)
    total_amount = Float(required=True, min_value=0.0)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def order_must_belong_to_customer_or_guest(self):
        if not self.customer_id and not self.guest_info:
            raise ValidationError({"guest_info": ["Guest information is required for guest checkout"]})
        if self.customer_id and self.guest_info:
            raise ValidationError({"guest_info": ["Customer orders do not carry guest information"]})

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, items_data, shipping_address, total_amount, customer_id=None, guest_info=None):
        """Create a pending order with all of its items.

        Args:
            items_data: List of dicts with product_id, product_name, size,
                        quantity, unit_price.
            shipping_address: Dict with home_address, city, region_or_state,
                              country, zip_code.
            total_amount: Sum of unit_price * quantity over the items.
            customer_id: Owner of the order; None for a guest.
            guest_info: Dict with name, email, phone. Ignored when a
                        customer_id is given.
        """
        if not items_data:
            raise EmptyCart()

        now = datetime.now(UTC)
        order = cls(
            customer_id=str(customer_id) if customer_id else None,
            guest_info=GuestInfo(**guest_info) if guest_info and not customer_id else None,
            shipping_address=ShippingAddress(**shipping_address),
            total_amount=total_amount,
            status=OrderStatus.PENDING.value,
            payment_status=PaymentStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        for item_data in items_data:
            order.add_items(OrderItem(**item_data))

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=order.customer_id,
                is_guest=order.customer_id is None,
                total_amount=order.total_amount,
                item_count=len(order.items),
                placed_at=now,
            )
        )
        return order

    @property
    def is_guest_order(self) -> bool:
        return self.customer_id is None

    # -------------------------------------------------------------------
    # Status transitions
    # -------------------------------------------------------------------
    def transition_to(self, target_status):
        """Move the order to ``target_status`` if the state machine allows it."""
        try:
            target = OrderStatus(target_status)
        except ValueError:
            raise ValidationError({"status": [f"Invalid status: {target_status}"]}) from None

        current = OrderStatus(self.status)
        if target not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target.value}"]})

        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=current.value,
                new_status=target.value,
                changed_at=now,
            )
        )

    def record_payment_status(self, payment_status):
        """Set the payment status. Any of pending, paid, failed is accepted."""
        try:
            target = PaymentStatus(payment_status)
        except ValueError:
            raise ValidationError({"payment_status": [f"Invalid payment status: {payment_status}"]}) from None

        previous = self.payment_status
        now = datetime.now(UTC)
        self.payment_status = target.value
        self.updated_at = now

        self.raise_(
            PaymentStatusChanged(
                order_id=str(self.id),
                previous_status=previous,
                new_status=target.value,
                changed_at=now,
            )
        )
