"""Donor history, admin donation reports and CSV export."""

from datetime import datetime

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from protean.utils.globals import current_domain

from patisserie.api.dependencies import Page, admin_user, current_user, page_params
from patisserie.api.responses import envelope
from patisserie.api.schemas import UpdateDonationRequest
from patisserie.donation import ledger
from patisserie.donation.donation import Donation
from patisserie.donation.management import UpdateDonationNotes, UpdateDonationStatus
from patisserie.identity.user import User
from patisserie.utils.serialization import to_data

router = APIRouter(prefix="/api/donations", tags=["donations"])


@router.get("/user")
async def my_donations(user: User = Depends(current_user), paging: Page = Depends(page_params)):
    donations, pagination, stats = ledger.user_donations(str(user.id), page=paging.page, limit=paging.limit)
    return envelope({"donations": donations, "stats": stats}, pagination=pagination)


@router.get("/user/summary")
async def my_summary(user: User = Depends(current_user)):
    return envelope(ledger.user_summary(str(user.id)))


# --- Admin ---


@router.get("/admin/all", dependencies=[Depends(admin_user)])
async def all_donations(
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    payment_method: str | None = None,
    payment_status: str | None = None,
    search: str | None = None,
    paging: Page = Depends(page_params),
):
    donations, pagination = ledger.admin_donations(
        page=paging.page,
        limit=paging.limit,
        start=start_date,
        end=end_date,
        payment_method=payment_method,
        payment_status=payment_status,
        search=search,
    )
    return envelope(donations, pagination=pagination)


@router.get("/admin/stats", dependencies=[Depends(admin_user)])
async def stats(start_date: datetime | None = None, end_date: datetime | None = None):
    return envelope(ledger.admin_stats(start=start_date, end=end_date))


@router.get("/admin/export", dependencies=[Depends(admin_user)])
async def export(
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    payment_method: str | None = None,
    payment_status: str | None = None,
):
    content = ledger.export_csv(
        start=start_date,
        end=end_date,
        payment_method=payment_method,
        payment_status=payment_status,
    )
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=donations-export.csv"},
    )


@router.patch("/admin/{donation_id}", dependencies=[Depends(admin_user)])
async def update_donation(donation_id: str, body: UpdateDonationRequest):
    if body.payment_status:
        command = UpdateDonationStatus(donation_id=donation_id, payment_status=body.payment_status)
        current_domain.process(command, asynchronous=False)
    if body.notes:
        current_domain.process(UpdateDonationNotes(donation_id=donation_id, notes=body.notes), asynchronous=False)

    donation = current_domain.repository_for(Donation).get(donation_id)
    return envelope(to_data(donation), "Donation updated successfully")
