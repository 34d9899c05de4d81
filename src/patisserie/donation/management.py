"""Recording donations and the admin edits that follow."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from patisserie.domain import patisserie
from patisserie.donation.donation import Donation, DonationStatus

logger = structlog.get_logger(__name__)


@patisserie.command(part_of="Donation")
class RecordDonation:
    order_id: Identifier(required=True)
    order_number: String(required=True, max_length=30)
    donation_amount: Float(required=True, min_value=1)
    payment_method: String(required=True, max_length=20)
    user_id: Identifier()
    user_email: String(required=True, max_length=254)
    user_name: String(required=True, max_length=100)
    user_phone: String(max_length=20)
    delivery_location: String(max_length=200)
    hostel_name: String(max_length=100)


@patisserie.command(part_of="Donation")
class UpdateDonationStatus:
    donation_id: Identifier(required=True)
    payment_status: String(required=True, max_length=20)


@patisserie.command(part_of="Donation")
class UpdateDonationNotes:
    donation_id: Identifier(required=True)
    notes: Text(required=True)


def _donation(donation_id) -> Donation:
    donation = current_domain.repository_for(Donation).get_or_none(donation_id)
    if donation is None:
        raise ObjectNotFoundError("Donation not found")
    return donation


@patisserie.command_handler(part_of=Donation)
class DonationHandler:
    @handle(RecordDonation)
    def record_donation(self, command):
        repo = current_domain.repository_for(Donation)
        existing = repo._dao.query.filter(order_id=str(command.order_id)).all().items
        if existing:
            logger.info("Donation already recorded", order_number=command.order_number)
            return str(existing[0].id)

        donation = Donation.record(
            order_id=command.order_id,
            order_number=command.order_number,
            donation_amount=command.donation_amount,
            payment_method=command.payment_method,
            user_id=command.user_id,
            user_email=command.user_email,
            user_name=command.user_name,
            user_phone=command.user_phone,
            delivery_location=command.delivery_location,
            hostel_name=command.hostel_name,
        )
        repo.add(donation)
        logger.info("Donation recorded", order_number=command.order_number, amount=command.donation_amount)
        return str(donation.id)

    @handle(UpdateDonationStatus)
    def update_status(self, command):
        if command.payment_status not in {status.value for status in DonationStatus}:
            raise ValidationError({"payment_status": ["Invalid payment status"]})

        donation = _donation(command.donation_id)
        donation.change_status(command.payment_status)
        current_domain.repository_for(Donation).add(donation)

    @handle(UpdateDonationNotes)
    def update_notes(self, command):
        donation = _donation(command.donation_id)
        donation.annotate(command.notes)
        current_domain.repository_for(Donation).add(donation)
