"""Transactional order emails: confirmation, admin alert and status updates."""

import structlog
from protean import handle

from patisserie.channel import send_email_safely
from patisserie.config import setting
from patisserie.domain import patisserie
from patisserie.order.events import OrderPlaced, OrderStatusChanged
from patisserie.order.order import Order
from patisserie.templates import EmailKind, render

logger = structlog.get_logger(__name__)


def tracking_url(order_number: str) -> str:
    return f"{setting('STOREFRONT_URL', 'https://www.lapatisserie.shop')}/orders/{order_number}"


@patisserie.event_handler(part_of=Order)
class OrderEmailHandler:
    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        from patisserie.identity.queries import admin_recipients

        context = {**event.to_dict(), "tracking_url": tracking_url(event.order_number)}

        if event.user_email:
            email = render(EmailKind.ORDER_CONFIRMATION, context)
            send_email_safely(event.user_email, email["subject"], email["body"], email["html_body"])
        else:
            logger.warning("Order has no customer email", order_number=event.order_number)

        alert = render(EmailKind.NEW_ORDER_ALERT, context)
        for recipient in admin_recipients():
            send_email_safely(recipient, alert["subject"], alert["body"], alert["html_body"])

    @handle(OrderStatusChanged)
    def on_status_changed(self, event: OrderStatusChanged) -> None:
        if not event.user_email:
            return

        email = render(
            EmailKind.ORDER_STATUS,
            {
                "order_number": event.order_number,
                "user_name": event.user_name,
                "status": event.new_status,
                "tracking_url": tracking_url(event.order_number),
            },
        )
        send_email_safely(event.user_email, email["subject"], email["body"], email["html_body"])
