"""Donation aggregate: money given to the education initiative at checkout."""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, Float, Identifier, String, Text

from patisserie.domain import patisserie

DEFAULT_INITIATIVE = "Educational Support"
MINIMUM_DONATION = 1


class DonationPaymentMethod(Enum):
    COD = "cod"
    RAZORPAY = "razorpay"


class DonationStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


@patisserie.aggregate
class Donation:
    user_id: Identifier()
    user_email: String(required=True, max_length=254)
    user_name: String(required=True, max_length=100)
    user_phone: String(max_length=20)
    donation_amount: Float(required=True, min_value=MINIMUM_DONATION)
    currency: String(max_length=3, default="INR")
    order_id: Identifier(required=True)
    order_number: String(required=True, max_length=30)
    payment_method: String(choices=DonationPaymentMethod, required=True)
    payment_status: String(choices=DonationStatus, default=DonationStatus.COMPLETED.value)
    initiative_name: String(max_length=200, default=DEFAULT_INITIATIVE)
    delivery_location: String(max_length=200)
    hostel_name: String(max_length=100)
    admin_notes: Text()
    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def record(cls, **details):
        from patisserie.donation.events import DonationRecorded

        now = datetime.now(UTC)
        donation = cls(created_at=now, updated_at=now, **{k: v for k, v in details.items() if v is not None})
        donation.raise_(
            DonationRecorded(
                donation_id=donation.id,
                order_number=donation.order_number,
                donation_amount=donation.donation_amount,
                payment_method=donation.payment_method,
            )
        )
        return donation

    def change_status(self, payment_status: str) -> None:
        self.payment_status = payment_status
        self.updated_at = datetime.now(UTC)

    def annotate(self, notes: str) -> None:
        self.admin_notes = notes
        self.updated_at = datetime.now(UTC)

    def is_visible(self, order_status: str | None) -> bool:
        """Online donations show once paid; cash donations once the order is delivered."""
        if self.payment_status != DonationStatus.COMPLETED.value:
            return False
        if self.payment_method == DonationPaymentMethod.RAZORPAY.value:
            return True
        return order_status == "delivered"
