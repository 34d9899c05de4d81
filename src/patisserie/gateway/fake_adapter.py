"""Fake payment gateway for development and testing.

Order ids are deterministic (``order_fake_0001``, ...) and signatures follow
Razorpay's scheme (HMAC-SHA256 of ``"order_id|payment_id"`` over the key
secret), so tests can sign payments with :meth:`FakeGateway.sign`.
"""

import hashlib
import hmac

from patisserie.gateway.port import GatewayError, GatewayOrder, PaymentGateway


def compute_signature(secret: str, order_id: str, payment_id: str) -> str:
    message = f"{order_id}|{payment_id}".encode()
    return hmac.new(secret.encode(), message, hashlib.sha256).hexdigest()


class FakeGateway(PaymentGateway):
    def __init__(self, key_id: str = "rzp_test_key", key_secret: str = "test-secret") -> None:
        self.key_id = key_id
        self.key_secret = key_secret
        self.should_succeed: bool = True
        self.failure_reason: str = "Gateway unavailable"
        self.calls: list[dict] = []
        self._sequence = 0

    def configure(self, should_succeed: bool, failure_reason: str = "Gateway unavailable") -> None:
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def create_order(self, amount: int, currency: str, receipt: str) -> GatewayOrder:
        self.calls.append({"method": "create_order", "amount": amount, "currency": currency, "receipt": receipt})

        if not self.should_succeed:
            raise GatewayError(self.failure_reason)

        self._sequence += 1
        return GatewayOrder(id=f"order_fake_{self._sequence:04d}", amount=amount, currency=currency, status="created")

    def verify_payment_signature(self, order_id: str, payment_id: str, signature: str) -> bool:
        if not (order_id and payment_id and signature):
            return False
        return hmac.compare_digest(self.sign(order_id, payment_id), signature)

    def sign(self, order_id: str, payment_id: str) -> str:
        return compute_signature(self.key_secret, order_id, payment_id)
