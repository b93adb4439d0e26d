"""Tests for Order status transitions and payment status updates."""

import pytest
from ordering.order.events import OrderStatusChanged, PaymentStatusChanged
from ordering.order.order import Order, OrderStatus, PaymentStatus
from protean.exceptions import ValidationError


def _make_order(shipping_address):
    order = Order.place(
        [{"product_id": "1", "product_name": "Linen Shirt", "size": "S", "quantity": 1, "unit_price": 50.0}],
        shipping_address,
        50.0,
        customer_id="cust-001",
    )
    order._events.clear()
    return order


def _order_at_state(shipping_address, target_status):
    order = _make_order(shipping_address)
    path = {
        OrderStatus.PENDING: [],
        OrderStatus.PROCESSING: [OrderStatus.PROCESSING],
        OrderStatus.SHIPPED: [OrderStatus.PROCESSING, OrderStatus.SHIPPED],
        OrderStatus.DELIVERED: [OrderStatus.PROCESSING, OrderStatus.SHIPPED, OrderStatus.DELIVERED],
        OrderStatus.CANCELLED: [OrderStatus.CANCELLED],
    }[target_status]
    for status in path:
        order.transition_to(status.value)
    order._events.clear()
    return order


class TestValidTransitions:
    @pytest.mark.parametrize(
        "start, target",
        [
            (OrderStatus.PENDING, OrderStatus.PROCESSING),
            (OrderStatus.PENDING, OrderStatus.CANCELLED),
            (OrderStatus.PROCESSING, OrderStatus.SHIPPED),
            (OrderStatus.PROCESSING, OrderStatus.CANCELLED),
            (OrderStatus.SHIPPED, OrderStatus.DELIVERED),
        ],
    )
    def test_transition_allowed(self, shipping_address, start, target):
        order = _order_at_state(shipping_address, start)
        order.transition_to(target.value)
        assert order.status == target.value

    def test_transition_raises_event(self, shipping_address):
        order = _make_order(shipping_address)
        order.transition_to("processing")
        event = order._events[-1]
        assert isinstance(event, OrderStatusChanged)
        assert event.previous_status == "pending"
        assert event.new_status == "processing"


class TestInvalidTransitions:
    @pytest.mark.parametrize(
        "start, target",
        [
            (OrderStatus.PENDING, OrderStatus.SHIPPED),
            (OrderStatus.PENDING, OrderStatus.DELIVERED),
            (OrderStatus.SHIPPED, OrderStatus.CANCELLED),
            (OrderStatus.DELIVERED, OrderStatus.CANCELLED),
            (OrderStatus.CANCELLED, OrderStatus.PROCESSING),
        ],
    )
    def test_transition_rejected(self, shipping_address, start, target):
        order = _order_at_state(shipping_address, start)
        with pytest.raises(ValidationError):
            order.transition_to(target.value)
        assert order.status == start.value

    def test_unknown_status_rejected(self, shipping_address):
        order = _make_order(shipping_address)
        with pytest.raises(ValidationError) as exc:
            order.transition_to("teleported")
        assert "status" in exc.value.messages


class TestPaymentStatus:
    @pytest.mark.parametrize("value", [status.value for status in PaymentStatus])
    def test_any_payment_status_accepted(self, shipping_address, value):
        order = _make_order(shipping_address)
        order.record_payment_status(value)
        assert order.payment_status == value

    def test_payment_status_has_no_ordering(self, shipping_address):
        order = _make_order(shipping_address)
        order.record_payment_status("paid")
        order.record_payment_status("failed")
        order.record_payment_status("pending")
        assert order.payment_status == "pending"

    def test_payment_status_independent_of_order_status(self, shipping_address):
        order = _order_at_state(shipping_address, OrderStatus.CANCELLED)
        order.record_payment_status("paid")
        assert order.status == "cancelled"

    def test_raises_event(self, shipping_address):
        order = _make_order(shipping_address)
        order.record_payment_status("paid")
        event = order._events[-1]
        assert isinstance(event, PaymentStatusChanged)
        assert event.new_status == "paid"

    def test_unknown_payment_status_rejected(self, shipping_address):
        order = _make_order(shipping_address)
        with pytest.raises(ValidationError):
            order.record_payment_status("refunded")
