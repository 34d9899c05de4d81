"""Outbound email port.

Adapters deliver one message to one recipient and report the outcome as a
``DeliveryResult`` rather than raising, so order and contact flows carry on
when the mail relay is down.
"""

from abc import ABC, abstractmethod
from typing import NotRequired, TypedDict


class DeliveryResult(TypedDict):
    message_id: str | None
    status: str  # "sent" | "failed"
    error: NotRequired[str]


class EmailPort(ABC):
    backend = "abstract"

    @abstractmethod
    def send(self, to: str, subject: str, body: str, html_body: str | None = None) -> DeliveryResult:
        """Deliver a plain-text message, with ``html_body`` as the HTML alternative."""
