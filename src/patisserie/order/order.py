"""Order aggregate root with OrderItem entities.

Lifecycle::

    pending (online, awaiting payment) -> placed -> confirmed -> preparing
        -> ready -> out_for_delivery -> delivered

Any state before ``delivered`` may move to ``cancelled``. Admin status
updates may skip ahead along the kitchen flow but never move backwards.
"""

import random
import time
from datetime import UTC, datetime, timedelta
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text

from patisserie.domain import patisserie

DELIVERY_ESTIMATE = timedelta(minutes=45)


class PaymentMethod(Enum):
    RAZORPAY = "razorpay"
    COD = "cod"


class PaymentStatus(Enum):
    PENDING = "pending"
    CREATED = "created"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


class OrderStatus(Enum):
    PENDING = "pending"
    PLACED = "placed"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY = "ready"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


KITCHEN_FLOW = [
    OrderStatus.PENDING.value,
    OrderStatus.PLACED.value,
    OrderStatus.CONFIRMED.value,
    OrderStatus.PREPARING.value,
    OrderStatus.READY.value,
    OrderStatus.OUT_FOR_DELIVERY.value,
    OrderStatus.DELIVERED.value,
]
TERMINAL_STATUSES = {OrderStatus.DELIVERED.value, OrderStatus.CANCELLED.value}
CANCELLABLE_STATUSES = {OrderStatus.PLACED.value, OrderStatus.CONFIRMED.value, OrderStatus.PREPARING.value}


def generate_order_number() -> str:
    """``ORD`` + epoch milliseconds + three random digits."""
    return f"ORD{int(time.time() * 1000)}{random.randint(0, 999):03d}"


@patisserie.entity(part_of="Order")
class OrderItem:
    product_id: Identifier(required=True)
    product_name: String(required=True, max_length=200)
    category_name: String(max_length=100)
    variant_index: Integer(default=0, min_value=0)
    quantity: Integer(required=True, min_value=1)
    price: Float(required=True, min_value=0)

    @property
    def subtotal(self) -> float:
        return round(self.price * self.quantity, 2)


@patisserie.aggregate
class Order:
    order_number: String(required=True, max_length=30, unique=True)
    user_id: Identifier(required=True)
    payment_method: String(choices=PaymentMethod, required=True)
    payment_status: String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    order_status: String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    amount: Float(default=0.0, min_value=0)
    currency: String(max_length=3, default="INR")
    items = HasMany(OrderItem)
    user_name: String(max_length=100)
    user_email: String(max_length=254)
    user_phone: String(max_length=20)
    delivery_location: String(max_length=200)
    hostel_name: String(max_length=100)
    cart_total: Float(default=0.0, min_value=0)
    discounted_total: Float(default=0.0, min_value=0)
    delivery_charge: Float(default=0.0, min_value=0)
    donation_amount: Float(default=0.0, min_value=0)
    grand_total: Float(default=0.0, min_value=0)
    gateway_order_id: String(max_length=64)
    gateway_payment_id: String(max_length=64)
    estimated_delivery_time: DateTime()
    cancel_reason: Text()
    cancelled_at: DateTime()
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def order_must_have_items(self):
        if not self.items:
            raise ValidationError({"items": ["Order must contain at least one item"]})

    # -------------------------------------------------------------------
    # Placement
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, user_id, payment_method, items, summary, customer, order_number=None, gateway_order_id=None):
        """Create an order from priced line items.

        Cash on delivery orders go straight to ``placed``; online orders wait
        in ``pending`` until their payment is verified.
        """
        from patisserie.order.events import OrderInitiated

        now = datetime.now(UTC)
        is_cod = payment_method == PaymentMethod.COD.value

        order = cls(
            order_number=order_number or generate_order_number(),
            user_id=user_id,
            payment_method=payment_method,
            payment_status=PaymentStatus.PENDING.value if is_cod else PaymentStatus.CREATED.value,
            order_status=OrderStatus.PLACED.value if is_cod else OrderStatus.PENDING.value,
            amount=summary["grand_total"],
            items=[OrderItem(**item) for item in items],
            user_name=customer.get("user_name"),
            user_email=customer.get("user_email"),
            user_phone=customer.get("user_phone"),
            delivery_location=customer.get("delivery_location"),
            hostel_name=customer.get("hostel_name"),
            cart_total=summary["cart_total"],
            discounted_total=summary["discounted_total"],
            delivery_charge=summary["delivery_charge"],
            donation_amount=summary.get("donation_amount", 0.0),
            grand_total=summary["grand_total"],
            gateway_order_id=gateway_order_id,
            estimated_delivery_time=now + DELIVERY_ESTIMATE,
            created_at=now,
            updated_at=now,
        )

        if is_cod:
            order._raise_placed(now)
        else:
            order.raise_(
                OrderInitiated(
                    order_id=order.id,
                    order_number=order.order_number,
                    user_id=order.user_id,
                    grand_total=order.grand_total,
                    gateway_order_id=order.gateway_order_id,
                )
            )
        return order

    def _raise_placed(self, placed_at):
        from patisserie.order.events import OrderPlaced

        self.raise_(
            OrderPlaced(
                order_id=self.id,
                order_number=self.order_number,
                user_id=self.user_id,
                payment_method=self.payment_method,
                payment_status=self.payment_status,
                grand_total=self.grand_total,
                donation_amount=self.donation_amount,
                items=[
                    {
                        "product_id": str(item.product_id),
                        "product_name": item.product_name,
                        "category_name": item.category_name,
                        "variant_index": item.variant_index,
                        "quantity": item.quantity,
                        "price": item.price,
                    }
                    for item in self.items
                ],
                user_name=self.user_name,
                user_email=self.user_email,
                user_phone=self.user_phone,
                delivery_location=self.delivery_location,
                hostel_name=self.hostel_name,
                gateway_order_id=self.gateway_order_id,
                gateway_payment_id=self.gateway_payment_id,
                placed_at=placed_at,
            )
        )

    # -------------------------------------------------------------------
    # Payment
    # -------------------------------------------------------------------
    @property
    def is_paid(self) -> bool:
        return self.payment_status == PaymentStatus.PAID.value

    def confirm_payment(self, gateway_payment_id):
        """Record a verified online payment and release the order to the kitchen."""
        from patisserie.order.events import OrderPaymentVerified

        if self.order_status == OrderStatus.CANCELLED.value:
            raise ValidationError({"order": ["Order has been cancelled"]})

        now = datetime.now(UTC)
        self.payment_status = PaymentStatus.PAID.value
        self.gateway_payment_id = gateway_payment_id
        self.order_status = OrderStatus.PLACED.value
        self.estimated_delivery_time = now + DELIVERY_ESTIMATE
        self.updated_at = now

        self.raise_(
            OrderPaymentVerified(
                order_id=self.id,
                order_number=self.order_number,
                gateway_order_id=self.gateway_order_id,
                gateway_payment_id=gateway_payment_id,
                amount=self.grand_total,
                verified_at=now,
            )
        )
        self._raise_placed(now)

    def fail_payment(self, reason):
        from patisserie.order.events import OrderPaymentFailed

        self.payment_status = PaymentStatus.FAILED.value
        self.updated_at = datetime.now(UTC)
        self.raise_(
            OrderPaymentFailed(
                order_id=self.id,
                order_number=self.order_number,
                gateway_order_id=self.gateway_order_id,
                reason=reason,
            )
        )

    def mark_paid(self):
        """Cash collected (or a payment settled out of band)."""
        if not self.is_paid:
            self.payment_status = PaymentStatus.PAID.value
            self.updated_at = datetime.now(UTC)

    # -------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------
    @property
    def can_be_cancelled(self) -> bool:
        return (
            self.order_status in CANCELLABLE_STATUSES
            and self.payment_status != PaymentStatus.REFUNDED.value
        )

    def change_status(self, new_status):
        from patisserie.order.events import OrderStatusChanged

        if new_status not in [status.value for status in OrderStatus]:
            raise ValidationError({"status": [f"Invalid status: {new_status}"]})
        if self.order_status in TERMINAL_STATUSES:
            raise ValidationError({"status": [f"Order is already {self.order_status}"]})

        if new_status == OrderStatus.CANCELLED.value:
            self.cancel(reason="Cancelled by admin", cancelled_by="admin")
            return

        if KITCHEN_FLOW.index(new_status) <= KITCHEN_FLOW.index(self.order_status):
            raise ValidationError(
                {"status": [f"Cannot change order status from {self.order_status} to {new_status}"]}
            )

        now = datetime.now(UTC)
        previous = self.order_status
        self.order_status = new_status
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=self.id,
                order_number=self.order_number,
                user_id=self.user_id,
                user_email=self.user_email,
                user_name=self.user_name,
                previous_status=previous,
                new_status=new_status,
                changed_at=now,
            )
        )

    def cancel(self, reason=None, cancelled_by="customer"):
        from patisserie.order.events import OrderCancelled, OrderStatusChanged

        if cancelled_by == "customer":
            if not self.can_be_cancelled:
                raise ValidationError({"order": ["Order cannot be cancelled at this stage"]})
            if self.is_paid:
                raise ValidationError({"order": ["Paid orders cannot be cancelled. Please contact support"]})
        elif self.order_status in TERMINAL_STATUSES:
            raise ValidationError({"order": [f"Order is already {self.order_status}"]})

        now = datetime.now(UTC)
        previous = self.order_status
        self.order_status = OrderStatus.CANCELLED.value
        self.cancel_reason = reason
        self.cancelled_at = now
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=self.id,
                order_number=self.order_number,
                user_id=self.user_id,
                user_email=self.user_email,
                user_name=self.user_name,
                previous_status=previous,
                new_status=self.order_status,
                changed_at=now,
            )
        )
        self.raise_(
            OrderCancelled(
                order_id=self.id,
                order_number=self.order_number,
                user_id=self.user_id,
                reason=reason,
                cancelled_by=cancelled_by,
                cancelled_at=now,
            )
        )

    def dispatch(self):
        if self.order_status != OrderStatus.PLACED.value:
            raise ValidationError({"status": ["Only placed orders can be dispatched"]})
        self.change_status(OrderStatus.OUT_FOR_DELIVERY.value)
