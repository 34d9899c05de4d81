import pytest
from patisserie.donation.donation import Donation
from patisserie.donation.events import DonationRecorded
from protean.exceptions import ValidationError


def _donation(**overrides):
    details = {
        "user_email": "asha@example.com",
        "user_name": "Asha Menon",
        "donation_amount": 10.0,
        "order_id": "order-1",
        "order_number": "ORD1",
        "payment_method": "razorpay",
        **overrides,
    }
    return Donation.record(**details)


class TestRecord:
    def test_defaults(self):
        donation = _donation()

        assert donation.payment_status == "completed"
        assert donation.initiative_name == "Educational Support"
        assert donation.currency == "INR"
        assert isinstance(donation._events[0], DonationRecorded)

    def test_minimum_amount(self):
        with pytest.raises(ValidationError):
            _donation(donation_amount=0.5)


class TestVisibility:
    def test_online_donations_show_once_completed(self):
        assert _donation().is_visible(order_status=None) is True

    def test_pending_online_donation_is_hidden(self):
        donation = _donation()
        donation.change_status("pending")
        assert donation.is_visible(order_status="delivered") is False

    @pytest.mark.parametrize("status,visible", [("placed", False), ("out_for_delivery", False), ("delivered", True)])
    def test_cash_donations_show_after_delivery(self, status, visible):
        assert _donation(payment_method="cod").is_visible(order_status=status) is visible


class TestAdminEdits:
    def test_annotate(self):
        donation = _donation()
        donation.annotate("Matched by sponsor")
        assert donation.admin_notes == "Matched by sponsor"

    def test_change_status_to_unknown_value(self):
        with pytest.raises(ValidationError):
            _donation().change_status("refunded")
