"""Read side of the donation ledger: donor history, admin reports and CSV export."""

import csv
import io
from collections import defaultdict
from datetime import datetime, timedelta

from protean.utils.globals import current_domain

from patisserie.donation.donation import Donation, DonationStatus
from patisserie.order.order import Order
from patisserie.utils.clock import as_utc, utcnow
from patisserie.utils.pagination import paginate_list
from patisserie.utils.serialization import to_data

CSV_HEADERS = [
    "Date",
    "Order Number",
    "Donor Name",
    "Email",
    "Phone",
    "Donation Amount",
    "Payment Method",
    "Payment Status",
    "Initiative",
    "Location",
    "Hostel",
]


def _all(**filters) -> list[Donation]:
    query = current_domain.repository_for(Donation)._dao.query
    if filters:
        query = query.filter(**filters)
    return query.order_by("-created_at").limit(None).all().items


def _order_status(donation: Donation) -> str | None:
    order = current_domain.repository_for(Order).get_or_none(donation.order_id)
    return order.order_status if order else None


def visible(donations: list[Donation]) -> list[Donation]:
    return [donation for donation in donations if donation.is_visible(_order_status(donation))]


def _in_range(donation: Donation, start: datetime | None, end: datetime | None) -> bool:
    created = as_utc(donation.created_at)
    if start and created < as_utc(start):
        return False
    if end and created > as_utc(end):
        return False
    return True


def _matches(donation: Donation, search: str) -> bool:
    needle = search.lower()
    fields = (donation.user_name, donation.user_email, donation.order_number, donation.user_phone)
    return any(needle in (value or "").lower() for value in fields)


def filtered(
    start: datetime | None = None,
    end: datetime | None = None,
    payment_method: str | None = None,
    payment_status: str | None = None,
    search: str | None = None,
) -> list[Donation]:
    filters = {}
    if payment_method:
        filters["payment_method"] = payment_method
    if payment_status:
        filters["payment_status"] = payment_status

    donations = [donation for donation in _all(**filters) if _in_range(donation, start, end)]
    if search:
        donations = [donation for donation in donations if _matches(donation, search)]
    return donations


def _totals(donations: list[Donation]) -> dict:
    amounts = [donation.donation_amount for donation in donations]
    return {
        "totalAmount": round(sum(amounts), 2),
        "totalDonations": len(amounts),
        "averageAmount": round(sum(amounts) / len(amounts), 2) if amounts else 0,
        "minAmount": min(amounts) if amounts else 0,
        "maxAmount": max(amounts) if amounts else 0,
    }


# ---------------------------------------------------------------------------
# Donor views
# ---------------------------------------------------------------------------
def user_donations(user_id: str, page: int = 1, limit: int = 10) -> tuple[list[dict], dict, dict]:
    donations = visible(_all(user_id=str(user_id)))
    page_items, pagination = paginate_list(donations, page, limit)
    stats = {
        "totalAmount": round(sum(d.donation_amount for d in donations), 2),
        "totalDonations": len(donations),
        "lastDonation": donations[0].created_at if donations else None,
    }
    return [to_data(donation) for donation in page_items], pagination, stats


def user_summary(user_id: str, now: datetime | None = None) -> dict:
    now = now or utcnow()
    donations = visible(_all(user_id=str(user_id)))

    monthly: dict[int, dict] = defaultdict(lambda: {"totalAmount": 0.0, "count": 0})
    for donation in donations:
        created = as_utc(donation.created_at)
        if created.year == now.year:
            monthly[created.month]["totalAmount"] += donation.donation_amount
            monthly[created.month]["count"] += 1

    return {
        "totalStats": {
            "totalAmount": round(sum(d.donation_amount for d in donations), 2),
            "totalDonations": len(donations),
        },
        "monthlyBreakdown": [{"month": month, **monthly[month]} for month in sorted(monthly)],
        "recentDonations": [
            {
                "id": str(donation.id),
                "donationAmount": donation.donation_amount,
                "orderNumber": donation.order_number,
                "initiativeName": donation.initiative_name,
                "createdAt": donation.created_at,
            }
            for donation in donations[:5]
        ],
        "year": now.year,
    }


# ---------------------------------------------------------------------------
# Admin views
# ---------------------------------------------------------------------------
def admin_donations(page: int = 1, limit: int = 20, **filters) -> tuple[list[dict], dict]:
    page_items, pagination = paginate_list(filtered(**filters), page, limit)
    return [to_data(donation) for donation in page_items], pagination


def admin_stats(start: datetime | None = None, end: datetime | None = None, now: datetime | None = None) -> dict:
    now = now or utcnow()
    completed = visible(filtered(start=start, end=end, payment_status=DonationStatus.COMPLETED.value))

    by_method: dict[str, list[Donation]] = defaultdict(list)
    donors: dict[tuple, list[Donation]] = defaultdict(list)
    locations: dict[str, list[Donation]] = defaultdict(list)
    for donation in completed:
        by_method[donation.payment_method].append(donation)
        donors[(donation.user_id, donation.user_email, donation.user_name)].append(donation)
        locations[donation.delivery_location or "Unknown"].append(donation)

    top_donors = sorted(
        (
            {
                "userId": str(user_id) if user_id else None,
                "userEmail": email,
                "userName": name,
                "totalDonations": round(sum(d.donation_amount for d in group), 2),
                "donationCount": len(group),
                "lastDonation": max(as_utc(d.created_at) for d in group),
            }
            for (user_id, email, name), group in donors.items()
        ),
        key=lambda donor: donor["totalDonations"],
        reverse=True,
    )[:10]

    since = now - timedelta(days=30)
    daily: dict[str, dict] = defaultdict(lambda: {"totalAmount": 0.0, "count": 0})
    for donation in completed:
        created = as_utc(donation.created_at)
        if created >= since:
            daily[created.date().isoformat()]["totalAmount"] += donation.donation_amount
            daily[created.date().isoformat()]["count"] += 1

    top_locations = sorted(
        (
            {"location": location, "totalAmount": round(sum(d.donation_amount for d in group), 2), "count": len(group)}
            for location, group in locations.items()
        ),
        key=lambda entry: entry["totalAmount"],
        reverse=True,
    )[:10]

    return {
        "overall": _totals(completed),
        "byPaymentMethod": [
            {"paymentMethod": method, **_totals(group)} for method, group in sorted(by_method.items())
        ],
        "topDonors": top_donors,
        "dailyTrends": [{"date": day, **daily[day]} for day in sorted(daily)],
        "locationStats": top_locations,
    }


def export_csv(**filters) -> str:
    """Every field quoted, rows newest first."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for donation in filtered(**filters):
        writer.writerow(
            [
                as_utc(donation.created_at).date().isoformat(),
                donation.order_number,
                donation.user_name,
                donation.user_email,
                donation.user_phone or "",
                donation.donation_amount,
                donation.payment_method,
                donation.payment_status,
                donation.initiative_name,
                donation.delivery_location or "",
                donation.hostel_name or "N/A",
            ]
        )
    return buffer.getvalue()
