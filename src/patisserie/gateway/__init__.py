"""Payment gateway factory.

``PAYMENT_GATEWAY`` selects the adapter (``razorpay`` or ``fake``); tests swap
it with :func:`set_gateway`.
"""

from patisserie.config import setting
from patisserie.gateway.port import PaymentGateway

_current_gateway: PaymentGateway | None = None


def _build_gateway() -> PaymentGateway:
    key_id = setting("RAZORPAY_KEY_ID", "rzp_test_key")
    key_secret = setting("RAZORPAY_KEY_SECRET", "test-secret")

    if setting("PAYMENT_GATEWAY", "fake") == "razorpay":
        from patisserie.gateway.razorpay_adapter import RazorpayGateway

        return RazorpayGateway(key_id=key_id, key_secret=key_secret)

    from patisserie.gateway.fake_adapter import FakeGateway

    return FakeGateway(key_id=key_id, key_secret=key_secret)


def get_gateway() -> PaymentGateway:
    global _current_gateway
    if _current_gateway is None:
        _current_gateway = _build_gateway()
    return _current_gateway


def set_gateway(gateway: PaymentGateway) -> None:
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    global _current_gateway
    _current_gateway = None
