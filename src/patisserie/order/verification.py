"""Online payment verification callback.

The handler never raises for a bad signature: the order is marked failed and
persisted, and the outcome is returned so the caller can answer 400 without
rolling that state back.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from patisserie.domain import patisserie
from patisserie.gateway import get_gateway
from patisserie.order.order import Order, PaymentMethod
from patisserie.order.queries import find_order

logger = structlog.get_logger(__name__)


@patisserie.command(part_of="Order")
class VerifyPayment:
    order_number: String(required=True, max_length=30)
    gateway_order_id: String(required=True, max_length=64)
    gateway_payment_id: String(required=True, max_length=64)
    signature: String(required=True, max_length=256)


@patisserie.command_handler(part_of=Order)
class VerifyPaymentHandler:
    @handle(VerifyPayment)
    def verify_payment(self, command):
        order = find_order(command.order_number)

        if order.payment_method != PaymentMethod.RAZORPAY.value:
            raise ValidationError({"order": ["Order is not an online payment order"]})

        outcome = {"order_number": order.order_number, "order_id": str(order.id)}

        if order.is_paid:
            if order.gateway_payment_id == command.gateway_payment_id:
                return {**outcome, "verified": True, "already_verified": True}
            raise ValidationError({"order": ["Order has already been paid"]})

        valid = order.gateway_order_id == command.gateway_order_id and get_gateway().verify_payment_signature(
            command.gateway_order_id, command.gateway_payment_id, command.signature
        )
        if not valid:
            logger.warning(
                "Payment signature verification failed",
                order_number=order.order_number,
                gateway_order_id=command.gateway_order_id,
            )
            order.fail_payment("Invalid payment signature")
            current_domain.repository_for(Order).add(order)
            return {**outcome, "verified": False}

        order.confirm_payment(command.gateway_payment_id)
        current_domain.repository_for(Order).add(order)
        logger.info(
            "Payment verified",
            order_number=order.order_number,
            gateway_payment_id=command.gateway_payment_id,
        )
        return {**outcome, "verified": True, "already_verified": False}
