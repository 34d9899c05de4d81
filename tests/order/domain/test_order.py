import pytest
from patisserie.order.events import (
    OrderCancelled,
    OrderInitiated,
    OrderPaymentFailed,
    OrderPaymentVerified,
    OrderPlaced,
    OrderStatusChanged,
)
from patisserie.order.order import Order, generate_order_number
from protean.exceptions import ValidationError

ITEMS = [
    {
        "product_id": "prod-1",
        "product_name": "Belgian Chocolate Brownie",
        "category_name": "Brownies",
        "variant_index": 0,
        "quantity": 2,
        "price": 120.0,
    }
]
SUMMARY = {
    "cart_total": 240.0,
    "discounted_total": 240.0,
    "delivery_charge": 49.0,
    "donation_amount": 0.0,
    "grand_total": 289.0,
}
CUSTOMER = {"user_name": "Asha Menon", "user_email": "asha@example.com", "hostel_name": "Block A"}


def _order(payment_method="cod", **overrides):
    return Order.place(
        user_id="user-1",
        payment_method=payment_method,
        items=overrides.pop("items", ITEMS),
        summary=SUMMARY,
        customer=CUSTOMER,
        gateway_order_id="order_fake_0001" if payment_method == "razorpay" else None,
    )


def _advance(order, *statuses):
    for status in statuses:
        order.change_status(status)
    order._events.clear()
    return order


class TestOrderNumber:
    def test_format(self):
        number = generate_order_number()
        assert number.startswith("ORD")
        assert number[3:].isdigit()
        assert len(number) == 19


class TestPlacement:
    def test_cash_on_delivery_goes_straight_to_the_kitchen(self):
        order = _order()

        assert order.order_status == "placed"
        assert order.payment_status == "pending"
        assert order.grand_total == 289.0
        assert order.estimated_delivery_time is not None
        assert [type(event) for event in order._events] == [OrderPlaced]

    def test_placed_event_carries_the_items(self):
        event = _order()._events[0]

        assert event.items[0]["product_name"] == "Belgian Chocolate Brownie"
        assert event.items[0]["quantity"] == 2
        assert event.hostel_name == "Block A"

    def test_online_order_waits_for_payment(self):
        order = _order(payment_method="razorpay")

        assert order.order_status == "pending"
        assert order.payment_status == "created"
        assert [type(event) for event in order._events] == [OrderInitiated]

    def test_order_needs_items(self):
        with pytest.raises(ValidationError) as exc:
            _order(items=[])
        assert exc.value.messages["items"] == ["Order must contain at least one item"]

    def test_item_subtotal(self):
        assert _order().items[0].subtotal == 240.0


class TestPayment:
    def test_confirm_payment_places_the_order(self):
        order = _order(payment_method="razorpay")
        order._events.clear()

        order.confirm_payment("pay_123")

        assert order.is_paid is True
        assert order.order_status == "placed"
        assert order.gateway_payment_id == "pay_123"
        assert [type(event) for event in order._events] == [OrderPaymentVerified, OrderPlaced]
        assert order._events[1].payment_status == "paid"

    def test_cancelled_order_cannot_be_paid(self):
        order = _order(payment_method="razorpay")
        order.cancel(cancelled_by="admin")

        with pytest.raises(ValidationError) as exc:
            order.confirm_payment("pay_123")
        assert exc.value.messages["order"] == ["Order has been cancelled"]

    def test_fail_payment(self):
        order = _order(payment_method="razorpay")
        order._events.clear()

        order.fail_payment("Invalid payment signature")

        assert order.payment_status == "failed"
        assert order.order_status == "pending"
        assert isinstance(order._events[0], OrderPaymentFailed)

    def test_mark_paid(self):
        order = _order()
        order.mark_paid()
        assert order.is_paid is True


class TestStatusChanges:
    def test_forward_move_raises_event(self):
        order = _advance(_order())

        order.change_status("confirmed")

        assert order.order_status == "confirmed"
        event = order._events[0]
        assert isinstance(event, OrderStatusChanged)
        assert (event.previous_status, event.new_status) == ("placed", "confirmed")

    def test_skipping_ahead_is_allowed(self):
        order = _order()
        order.change_status("ready")
        assert order.order_status == "ready"

    def test_backwards_move_is_rejected(self):
        order = _advance(_order(), "preparing")

        with pytest.raises(ValidationError) as exc:
            order.change_status("confirmed")
        assert exc.value.messages["status"] == ["Cannot change order status from preparing to confirmed"]

    def test_same_status_is_rejected(self):
        with pytest.raises(ValidationError):
            _order().change_status("placed")

    def test_unknown_status(self):
        with pytest.raises(ValidationError) as exc:
            _order().change_status("baking")
        assert exc.value.messages["status"] == ["Invalid status: baking"]

    def test_delivered_orders_are_final(self):
        order = _advance(_order(), "delivered")

        with pytest.raises(ValidationError) as exc:
            order.change_status("cancelled")
        assert exc.value.messages["status"] == ["Order is already delivered"]

    def test_admin_cancellation_through_status(self):
        order = _advance(_order(), "ready")

        order.change_status("cancelled")

        assert order.order_status == "cancelled"
        assert order.cancel_reason == "Cancelled by admin"
        assert isinstance(order._events[-1], OrderCancelled)
        assert order._events[-1].cancelled_by == "admin"


class TestCustomerCancellation:
    @pytest.mark.parametrize("status", ["placed", "confirmed", "preparing"])
    def test_early_stages_can_be_cancelled(self, status):
        order = _order()
        if status != "placed":
            order.change_status(status)
        assert order.can_be_cancelled is True

    def test_cancel(self):
        order = _advance(_order())

        order.cancel(reason="Ordered twice")

        assert order.order_status == "cancelled"
        assert order.cancel_reason == "Ordered twice"
        assert order.cancelled_at is not None
        assert [type(event) for event in order._events] == [OrderStatusChanged, OrderCancelled]

    def test_ready_orders_cannot_be_cancelled(self):
        order = _advance(_order(), "ready")

        assert order.can_be_cancelled is False
        with pytest.raises(ValidationError) as exc:
            order.cancel()
        assert exc.value.messages["order"] == ["Order cannot be cancelled at this stage"]

    def test_pending_online_orders_cannot_be_cancelled_by_the_customer(self):
        assert _order(payment_method="razorpay").can_be_cancelled is False

    def test_paid_orders_go_through_support(self):
        order = _order()
        order.mark_paid()

        with pytest.raises(ValidationError) as exc:
            order.cancel()
        assert exc.value.messages["order"] == ["Paid orders cannot be cancelled. Please contact support"]

    def test_refunded_orders_cannot_be_cancelled(self):
        order = _order()
        order.payment_status = "refunded"
        assert order.can_be_cancelled is False


class TestDispatch:
    def test_placed_orders_go_out_for_delivery(self):
        order = _advance(_order())

        order.dispatch()

        assert order.order_status == "out_for_delivery"
        assert order._events[0].new_status == "out_for_delivery"

    def test_only_placed_orders(self):
        order = _advance(_order(), "confirmed")

        with pytest.raises(ValidationError) as exc:
            order.dispatch()
        assert exc.value.messages["status"] == ["Only placed orders can be dispatched"]
