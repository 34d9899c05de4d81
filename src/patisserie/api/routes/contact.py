"""Contact form submissions and the admin inbox."""

import json

from fastapi import APIRouter, Depends, Request
from protean.utils.globals import current_domain

from patisserie.api.dependencies import Page, admin_user, client_ip, page_params
from patisserie.api.responses import envelope
from patisserie.api.schemas import BulkContactsRequest, ContactRequest, ReplyContactRequest, UpdateContactRequest
from patisserie.contact.contact import USER_AGENT_MAX_LENGTH, Contact
from patisserie.contact.management import (
    BulkUpdateContacts,
    DeleteContact,
    ReplyToContact,
    SubmitContact,
    UpdateContactStatus,
)
from patisserie.contact.queries import contact_data, contact_stats, contacts_by_email, list_contacts
from patisserie.identity.user import User
from patisserie.utils.ratelimit import contact_rate_limit
from patisserie.utils.serialization import compact

router = APIRouter(prefix="/api/contact", tags=["contact"])


def _contact(contact_id: str) -> dict:
    return contact_data(current_domain.repository_for(Contact).get(contact_id))


@router.post("", status_code=201)
async def submit_contact(body: ContactRequest, request: Request):
    ip_address = client_ip(request)
    contact_rate_limit.hit(ip_address)

    command = SubmitContact(
        **compact(
            name=body.name,
            email=body.email,
            phone=body.phone,
            subject=body.subject,
            message=body.message,
            user_agent=(request.headers.get("user-agent") or "")[:USER_AGENT_MAX_LENGTH] or None,
            ip_address=ip_address,
        )
    )
    contact_id = current_domain.process(command, asynchronous=False)
    return envelope(
        {"id": contact_id},
        "Thank you for your message! We'll get back to you soon.",
        status_code=201,
    )


# --- Admin ---


@router.get("", dependencies=[Depends(admin_user)])
async def contacts(
    status: str | None = None,
    search: str | None = None,
    sort: str = "created_at",
    order: str = "desc",
    paging: Page = Depends(page_params),
):
    data, pagination, stats = list_contacts(
        status=status, search=search, sort=sort, order=order, page=paging.page, limit=paging.limit
    )
    return envelope(data, pagination=pagination, stats=stats)


@router.get("/stats", dependencies=[Depends(admin_user)])
async def stats():
    return envelope(contact_stats())


@router.get("/user/{email}", dependencies=[Depends(admin_user)])
async def contacts_for_email(email: str):
    return envelope(contacts_by_email(email))


@router.post("/bulk-update", dependencies=[Depends(admin_user)])
async def bulk_update(body: BulkContactsRequest):
    command = BulkUpdateContacts(**compact(contact_ids=body.contact_ids, action=body.action, status=body.status))
    affected = current_domain.process(command, asynchronous=False)
    return envelope({"affected": affected}, f"{affected} contacts updated")


@router.get("/{contact_id}", dependencies=[Depends(admin_user)])
async def contact_detail(contact_id: str):
    return envelope(_contact(contact_id))


@router.put("/{contact_id}/status", dependencies=[Depends(admin_user)])
async def update_status(contact_id: str, body: UpdateContactRequest):
    command = UpdateContactStatus(
        **compact(
            contact_id=contact_id,
            status=body.status,
            is_important=body.is_important,
            tags=json.dumps(body.tags) if body.tags is not None else None,
        )
    )
    current_domain.process(command, asynchronous=False)
    return envelope(_contact(contact_id), "Contact updated successfully")


@router.post("/{contact_id}/reply")
async def reply(contact_id: str, body: ReplyContactRequest, admin: User = Depends(admin_user)):
    command = ReplyToContact(
        **compact(
            contact_id=contact_id,
            reply=body.reply,
            replied_by=str(admin.id),
            mark_as_resolved=body.mark_as_resolved,
        )
    )
    current_domain.process(command, asynchronous=False)
    return envelope(_contact(contact_id), "Reply sent successfully")


@router.delete("/{contact_id}", dependencies=[Depends(admin_user)])
async def delete_contact(contact_id: str):
    current_domain.process(DeleteContact(contact_id=contact_id), asynchronous=False)
    return envelope(message="Contact deleted successfully")
