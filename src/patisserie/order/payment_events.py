"""Keep an order's payment status in step with its payment record."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from patisserie.domain import patisserie
from patisserie.order.order import Order
from patisserie.order.queries import find_order
from patisserie.payment.events import PaymentSucceeded

logger = structlog.get_logger(__name__)


@patisserie.event_handler(part_of=Order, stream_category="patisserie::payment")
class PaymentOrderHandler:
    @handle(PaymentSucceeded)
    def on_payment_succeeded(self, event: PaymentSucceeded) -> None:
        if not event.order_number:
            return

        try:
            order = find_order(event.order_number)
        except ObjectNotFoundError:
            logger.warning("Payment refers to an unknown order", order_number=event.order_number)
            return

        if order.is_paid:
            return

        order.mark_paid()
        current_domain.repository_for(Order).add(order)
        logger.info("Order marked paid", order_number=order.order_number)
