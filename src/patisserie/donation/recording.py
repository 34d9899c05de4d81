import structlog
from protean import handle
from protean.utils.globals import current_domain

from patisserie.domain import patisserie
from patisserie.donation.donation import Donation
from patisserie.donation.management import RecordDonation
from patisserie.order.events import OrderPlaced

logger = structlog.get_logger(__name__)


@patisserie.event_handler(part_of=Donation, stream_category="patisserie::order")
class OrderDonationHandler:
    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        if not event.donation_amount:
            return

        current_domain.process(
            RecordDonation(
                order_id=str(event.order_id),
                order_number=event.order_number,
                donation_amount=event.donation_amount,
                payment_method=event.payment_method,
                user_id=str(event.user_id),
                user_email=event.user_email or "unknown",
                user_name=event.user_name or "Customer",
                user_phone=event.user_phone,
                delivery_location=event.delivery_location,
                hostel_name=event.hostel_name,
            ),
            asynchronous=False,
        )
