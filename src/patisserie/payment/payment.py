"""Payment aggregate: the ledger of money collected (or expected) per order."""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, String, Text

from patisserie.domain import patisserie


class PaymentMethod(Enum):
    RAZORPAY = "razorpay"
    COD = "cod"
    UPI = "upi"
    CARD = "card"
    WALLET = "wallet"
    NETBANKING = "netbanking"


class PaymentStatus(Enum):
    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"


@patisserie.aggregate
class Payment:
    user_id: Identifier()
    email: String(max_length=254)
    order_number: String(required=True, max_length=30)
    amount: Float(required=True, min_value=0)
    payment_method: String(choices=PaymentMethod, required=True)
    payment_status: String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    gateway_payment_id: String(max_length=64, unique=True)
    gateway_order_id: String(max_length=64)
    meta: Text(sanitize=False)  # JSON object
    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def record(cls, order_number, amount, payment_method, payment_status=PaymentStatus.PENDING.value, **details):
        from patisserie.payment.events import PaymentRecorded

        now = datetime.now(UTC)
        payment = cls(
            order_number=order_number,
            amount=amount,
            payment_method=payment_method,
            payment_status=payment_status,
            created_at=now,
            updated_at=now,
            **{key: value for key, value in details.items() if value is not None},
        )
        payment.raise_(
            PaymentRecorded(
                payment_id=payment.id,
                order_number=order_number,
                amount=amount,
                payment_method=payment_method,
                payment_status=payment_status,
            )
        )
        return payment

    def mark_succeeded(self):
        from patisserie.payment.events import PaymentSucceeded

        if self.payment_status == PaymentStatus.SUCCESS.value:
            raise ValidationError({"payment_status": ["Payment has already succeeded"]})

        self.payment_status = PaymentStatus.SUCCESS.value
        self.updated_at = datetime.now(UTC)
        self.raise_(PaymentSucceeded(payment_id=self.id, order_number=self.order_number, amount=self.amount))
