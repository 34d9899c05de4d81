"""Razorpay adapter built on the official ``razorpay`` SDK."""

import razorpay
import structlog
from razorpay.errors import (
    BadRequestError,
    GatewayError as RazorpayGatewayError,
    ServerError,
    SignatureVerificationError,
)

from patisserie.gateway.port import GatewayError, GatewayOrder, PaymentGateway

logger = structlog.get_logger(__name__)


class RazorpayGateway(PaymentGateway):
    def __init__(self, key_id: str, key_secret: str) -> None:
        self.key_id = key_id
        self.key_secret = key_secret
        self.client = razorpay.Client(auth=(key_id, key_secret))

    def create_order(self, amount: int, currency: str, receipt: str) -> GatewayOrder:
        try:
            response = self.client.order.create({"amount": amount, "currency": currency, "receipt": receipt})
        except (BadRequestError, RazorpayGatewayError, ServerError) as exc:
            logger.error("Razorpay order creation failed", receipt=receipt, amount=amount, error=str(exc))
            raise GatewayError(str(exc)) from exc

        logger.info("Razorpay order created", gateway_order_id=response["id"], receipt=receipt, amount=amount)
        return GatewayOrder(
            id=response["id"],
            amount=response["amount"],
            currency=response["currency"],
            status=response.get("status", "created"),
        )

    def verify_payment_signature(self, order_id: str, payment_id: str, signature: str) -> bool:
        if not (order_id and payment_id and signature):
            return False

        try:
            self.client.utility.verify_payment_signature(
                {
                    "razorpay_order_id": order_id,
                    "razorpay_payment_id": payment_id,
                    "razorpay_signature": signature,
                }
            )
        except SignatureVerificationError:
            logger.warning("Razorpay signature mismatch", gateway_order_id=order_id, gateway_payment_id=payment_id)
            return False
        return True
