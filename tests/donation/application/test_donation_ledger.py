import csv
import io
from datetime import UTC, datetime, timedelta

import pytest
from patisserie.donation import ledger
from patisserie.donation.donation import Donation
from patisserie.donation.management import RecordDonation, UpdateDonationNotes, UpdateDonationStatus
from patisserie.order.status import UpdateOrderStatus
from patisserie.order.verification import VerifyPayment
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain


def _record(order_number="ORD1", amount=10.0, payment_method="razorpay", **details):
    return current_domain.process(
        RecordDonation(
            **{
                "order_id": f"order-{order_number}",
                "order_number": order_number,
                "donation_amount": amount,
                "payment_method": payment_method,
                "user_id": "user-1",
                "user_email": "asha@example.com",
                "user_name": "Asha Menon",
                **details,
            }
        ),
        asynchronous=False,
    )


def _get(donation_id):
    return current_domain.repository_for(Donation).get(donation_id)


class TestRecordDonation:
    def test_one_donation_per_order(self):
        first = _record()
        second = _record(amount=25.0)

        assert first == second
        assert _get(first).donation_amount == 10.0

    def test_update_status(self):
        donation_id = _record()

        current_domain.process(
            UpdateDonationStatus(donation_id=donation_id, payment_status="failed"), asynchronous=False
        )

        assert _get(donation_id).payment_status == "failed"

    def test_invalid_status(self):
        donation_id = _record()

        with pytest.raises(ValidationError) as exc:
            current_domain.process(
                UpdateDonationStatus(donation_id=donation_id, payment_status="refunded"), asynchronous=False
            )
        assert exc.value.messages["payment_status"] == ["Invalid payment status"]

    def test_notes(self):
        donation_id = _record()

        current_domain.process(UpdateDonationNotes(donation_id=donation_id, notes="Receipt sent"), asynchronous=False)

        assert _get(donation_id).admin_notes == "Receipt sent"

    def test_unknown_donation(self):
        with pytest.raises(ObjectNotFoundError) as exc:
            current_domain.process(UpdateDonationNotes(donation_id="missing", notes="x"), asynchronous=False)
        assert str(exc.value) == "Donation not found"


class TestDonationsFromOrders:
    def test_cash_donation_appears_after_delivery(self, customer, make_product, place_order):
        result = place_order(customer, make_product(), donation_amount=20.0)

        assert ledger.user_donations(str(customer.id))[2]["totalDonations"] == 0

        current_domain.process(
            UpdateOrderStatus(order_number=result["order_number"], status="delivered"), asynchronous=False
        )

        data, pagination, stats = ledger.user_donations(str(customer.id))
        assert [donation["order_number"] for donation in data] == [result["order_number"]]
        assert stats["totalAmount"] == 20.0
        assert stats["lastDonation"] is not None
        assert pagination["totalItems"] == 1

    def test_online_donation_appears_once_paid(self, customer, make_product, place_order, gateway):
        result = place_order(customer, make_product(), payment_method="razorpay", donation_amount=15.0)
        assert current_domain.repository_for(Donation)._dao.query.all().total == 0

        current_domain.process(
            VerifyPayment(
                order_number=result["order_number"],
                gateway_order_id=result["gateway_order_id"],
                gateway_payment_id="pay_123",
                signature=gateway.sign(result["gateway_order_id"], "pay_123"),
            ),
            asynchronous=False,
        )

        data, _, stats = ledger.user_donations(str(customer.id))
        assert data[0]["payment_method"] == "razorpay"
        assert stats["totalAmount"] == 15.0


class TestUserSummary:
    def test_summary_for_the_current_year(self):
        _record(order_number="ORD1", amount=10.0)
        _record(order_number="ORD2", amount=30.0)

        now = datetime.now(UTC)
        summary = ledger.user_summary("user-1", now=now)

        assert summary["year"] == now.year
        assert summary["totalStats"] == {"totalAmount": 40.0, "totalDonations": 2}
        assert summary["monthlyBreakdown"] == [{"month": now.month, "totalAmount": 40.0, "count": 2}]
        assert [donation["orderNumber"] for donation in summary["recentDonations"]] == ["ORD2", "ORD1"]

    def test_last_years_donations_skip_the_breakdown(self):
        _record()

        summary = ledger.user_summary("user-1", now=datetime.now(UTC) + timedelta(days=400))

        assert summary["monthlyBreakdown"] == []
        assert summary["totalStats"]["totalDonations"] == 1


class TestAdminReports:
    def test_filters_and_search(self):
        _record(order_number="ORD1", payment_method="razorpay")
        _record(order_number="ORD2", payment_method="cod", user_name="Ravi Kumar", user_email="ravi@example.com")

        by_method, _ = ledger.admin_donations(payment_method="cod")
        by_search, _ = ledger.admin_donations(search="ravi")
        by_date, _ = ledger.admin_donations(end=datetime.now(UTC) - timedelta(days=1))

        assert [donation["order_number"] for donation in by_method] == ["ORD2"]
        assert [donation["order_number"] for donation in by_search] == ["ORD2"]
        assert by_date == []

    def test_stats_count_visible_completed_donations(self):
        _record(order_number="ORD1", amount=10.0, delivery_location="Peelamedu")
        _record(order_number="ORD2", amount=30.0, user_id="user-2", user_email="ravi@example.com", user_name="Ravi")
        # cash donation whose order was never delivered
        _record(order_number="ORD3", amount=100.0, payment_method="cod")

        stats = ledger.admin_stats()

        assert stats["overall"] == {
            "totalAmount": 40.0,
            "totalDonations": 2,
            "averageAmount": 20.0,
            "minAmount": 10.0,
            "maxAmount": 30.0,
        }
        assert [method["paymentMethod"] for method in stats["byPaymentMethod"]] == ["razorpay"]
        assert [donor["userName"] for donor in stats["topDonors"]] == ["Ravi", "Asha Menon"]
        assert stats["dailyTrends"][0]["totalAmount"] == 40.0
        assert {entry["location"] for entry in stats["locationStats"]} == {"Peelamedu", "Unknown"}

    def test_empty_stats(self):
        assert ledger.admin_stats()["overall"]["totalDonations"] == 0


class TestExport:
    def test_every_field_is_quoted(self):
        _record(order_number="ORD1", user_phone="9876543210", delivery_location="Peelamedu")

        content = ledger.export_csv()

        header, row = content.strip().split("\n")
        assert header == ",".join(f'"{column}"' for column in ledger.CSV_HEADERS)
        assert row.endswith('"Peelamedu","N/A"')
        assert '"ORD1"' in row

    def test_rows_parse_back(self):
        _record(order_number="ORD1")
        _record(order_number="ORD2", hostel_name="Block A")

        rows = list(csv.DictReader(io.StringIO(ledger.export_csv())))

        assert [row["Order Number"] for row in rows] == ["ORD2", "ORD1"]
        assert rows[0]["Hostel"] == "Block A"
        assert rows[1]["Donation Amount"] == "10.0"
