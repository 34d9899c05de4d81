"""Payment gateway port (abstract interface).

Checkout creates a gateway order server side, the storefront collects the
payment, and the backend verifies the signature the gateway hands back.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


class GatewayError(Exception):
    """The gateway refused or failed to create an order."""


@dataclass(frozen=True)
class GatewayOrder:
    """An order created on the gateway. ``amount`` is in paise."""

    id: str
    amount: int
    currency: str
    status: str


class PaymentGateway(ABC):
    key_id: str
    key_secret: str

    @abstractmethod
    def create_order(self, amount: int, currency: str, receipt: str) -> GatewayOrder:
        """Create a gateway order for ``amount`` paise."""
        ...

    @abstractmethod
    def verify_payment_signature(self, order_id: str, payment_id: str, signature: str) -> bool:
        """True when ``signature`` is the gateway's HMAC-SHA256 of ``"order_id|payment_id"``."""
        ...
