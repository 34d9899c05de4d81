"""Payment records for customers and admins."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from patisserie.api.dependencies import Page, admin_user, current_user, page_params
from patisserie.api.responses import envelope
from patisserie.identity.user import User
from patisserie.payment.payment import Payment
from patisserie.payment.queries import list_payments, list_user_payments
from patisserie.payment.recording import MarkPaymentSucceeded
from patisserie.utils.serialization import to_data

router = APIRouter(prefix="/api/payments", tags=["payments"])


@router.get("", dependencies=[Depends(admin_user)])
async def payments(status: str | None = None, method: str | None = None, paging: Page = Depends(page_params)):
    data, pagination = list_payments(status=status, method=method, page=paging.page, limit=paging.limit)
    return envelope(data, pagination=pagination)


@router.get("/user/payments")
async def my_payments(user: User = Depends(current_user), paging: Page = Depends(page_params)):
    data, pagination = list_user_payments(str(user.id), page=paging.page, limit=paging.limit)
    return envelope(data, pagination=pagination)


@router.get("/{payment_id}", dependencies=[Depends(admin_user)])
async def payment_detail(payment_id: str):
    return envelope(to_data(current_domain.repository_for(Payment).get(payment_id)))


@router.patch("/{payment_id}/succeeded", dependencies=[Depends(admin_user)])
async def mark_succeeded(payment_id: str):
    current_domain.process(MarkPaymentSucceeded(payment_id=payment_id), asynchronous=False)
    return envelope(
        to_data(current_domain.repository_for(Payment).get(payment_id)),
        "Payment marked as successful",
    )
