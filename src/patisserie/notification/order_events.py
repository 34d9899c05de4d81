"""In-app notifications for order milestones.

A failure here is logged and never affects the order itself.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from patisserie.domain import patisserie
from patisserie.notification.management import CreateNotification
from patisserie.notification.notification import Notification, NotificationType
from patisserie.order.events import OrderPlaced, OrderStatusChanged
from patisserie.templates import status_label

logger = structlog.get_logger(__name__)

_STATUS_MESSAGES = {
    "confirmed": "Your order #{n} has been confirmed.",
    "preparing": "Our bakers are preparing your order #{n}.",
    "ready": "Your order #{n} is ready.",
    "out_for_delivery": "Your order #{n} is out for delivery!",
    "delivered": "Your order #{n} has been delivered. Enjoy!",
    "cancelled": "Your order #{n} has been cancelled.",
}


def _notify(**details) -> None:
    try:
        current_domain.process(CreateNotification(**details), asynchronous=False)
    except ValidationError as exc:
        logger.error("Could not create notification", order_number=details.get("order_number"), error=str(exc))


@patisserie.event_handler(part_of=Notification, stream_category="patisserie::order")
class OrderNotificationHandler:
    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        _notify(
            user_id=str(event.user_id),
            order_number=event.order_number,
            notification_type=NotificationType.ORDER_PLACED.value,
            title="Order Placed Successfully",
            message=f"Your order #{event.order_number} has been placed and will be prepared shortly.",
        )

    @handle(OrderStatusChanged)
    def on_status_changed(self, event: OrderStatusChanged) -> None:
        template = _STATUS_MESSAGES.get(event.new_status, "Your order #{n} is now " + status_label(event.new_status))
        _notify(
            user_id=str(event.user_id),
            order_number=event.order_number,
            notification_type=NotificationType.ORDER_STATUS.value,
            title=f"Order {status_label(event.new_status)}",
            message=template.format(n=event.order_number),
        )
