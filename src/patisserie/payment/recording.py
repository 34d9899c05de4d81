"""Recording payments, manually and for every placed order."""

import json

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from patisserie.domain import patisserie
from patisserie.order.events import OrderPlaced
from patisserie.payment.payment import Payment, PaymentStatus

logger = structlog.get_logger(__name__)


@patisserie.command(part_of="Payment")
class RecordPayment:
    order_number: String(required=True, max_length=30)
    amount: Float(required=True, min_value=0)
    payment_method: String(required=True, max_length=20)
    payment_status: String(max_length=20, default=PaymentStatus.PENDING.value)
    user_id: Identifier()
    email: String(max_length=254)
    gateway_payment_id: String(max_length=64)
    gateway_order_id: String(max_length=64)
    meta: Text(sanitize=False)


@patisserie.command(part_of="Payment")
class MarkPaymentSucceeded:
    payment_id: Identifier(required=True)


def payment_by_gateway_id(gateway_payment_id) -> Payment | None:
    if not gateway_payment_id:
        return None
    payments = (
        current_domain.repository_for(Payment)._dao.query.filter(gateway_payment_id=gateway_payment_id).all().items
    )
    return payments[0] if payments else None


@patisserie.command_handler(part_of=Payment)
class RecordPaymentHandler:
    @handle(RecordPayment)
    def record_payment(self, command):
        existing = payment_by_gateway_id(command.gateway_payment_id)
        if existing is not None:
            logger.info("Payment already recorded", gateway_payment_id=command.gateway_payment_id)
            return str(existing.id)

        payment = Payment.record(
            order_number=command.order_number,
            amount=command.amount,
            payment_method=command.payment_method,
            payment_status=command.payment_status,
            user_id=command.user_id,
            email=command.email,
            gateway_payment_id=command.gateway_payment_id,
            gateway_order_id=command.gateway_order_id,
            meta=command.meta,
        )
        current_domain.repository_for(Payment).add(payment)
        return str(payment.id)

    @handle(MarkPaymentSucceeded)
    def mark_succeeded(self, command):
        repo = current_domain.repository_for(Payment)
        payment = repo.get_or_none(command.payment_id)
        if payment is None:
            raise ObjectNotFoundError("Payment not found")

        payment.mark_succeeded()
        repo.add(payment)


@patisserie.event_handler(part_of=Payment, stream_category="patisserie::order")
class OrderPaymentRecordHandler:
    """Every placed order gets a payment record: pending for cash, success when paid online."""

    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        is_paid = event.payment_status == "paid"
        current_domain.process(
            RecordPayment(
                order_number=event.order_number,
                amount=event.grand_total,
                payment_method=event.payment_method,
                payment_status=PaymentStatus.SUCCESS.value if is_paid else PaymentStatus.PENDING.value,
                user_id=str(event.user_id),
                email=event.user_email,
                gateway_payment_id=event.gateway_payment_id,
                gateway_order_id=event.gateway_order_id,
                meta=json.dumps({"items": len(event.items), "donation_amount": event.donation_amount}),
            ),
            asynchronous=False,
        )
