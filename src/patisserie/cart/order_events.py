"""Empty the customer's cart once their order is placed."""

import structlog
from protean import handle
from protean.utils.globals import current_domain

from patisserie.cart.cart import Cart
from patisserie.cart.management import ClearCart
from patisserie.domain import patisserie
from patisserie.order.events import OrderPlaced

logger = structlog.get_logger(__name__)


@patisserie.event_handler(part_of=Cart, stream_category="patisserie::order")
class OrderCartHandler:
    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        current_domain.process(ClearCart(user_id=str(event.user_id)), asynchronous=False)
        logger.info("Cart cleared after order", user_id=str(event.user_id), order_number=event.order_number)
