"""Read-side helpers for the contact inbox."""

from datetime import timedelta

from protean import Q
from protean.utils.globals import current_domain

from patisserie.contact.contact import Contact, ContactStatus
from patisserie.utils.clock import as_utc, utcnow
from patisserie.utils.pagination import paginate
from patisserie.utils.serialization import to_data

SORTABLE_FIELDS = {"created_at", "updated_at", "name", "email", "subject", "status"}


def contact_data(contact: Contact) -> dict:
    return to_data(contact, message_preview=contact.message_preview)


def _query():
    return current_domain.repository_for(Contact)._dao.query


def contact_counts() -> dict:
    counts = {"total": _query().count()}
    for status in ContactStatus:
        counts[status.value] = _query().filter(status=status.value).count()
    return counts


def list_contacts(
    status: str | None = None,
    search: str | None = None,
    sort: str = "created_at",
    order: str = "desc",
    page: int = 1,
    limit: int = 20,
) -> tuple[list[dict], dict, dict]:
    query = _query()
    if status:
        query = query.filter(status=status)
    if search:
        query = query.filter(
            Q(name__icontains=search)
            | Q(email__icontains=search)
            | Q(subject__icontains=search)
            | Q(message__icontains=search)
        )

    sort_field = sort if sort in SORTABLE_FIELDS else "created_at"
    query = query.order_by(sort_field if order == "asc" else f"-{sort_field}")

    contacts, pagination = paginate(query, page, limit)
    return [contact_data(contact) for contact in contacts], pagination, contact_counts()


def contact_stats() -> dict:
    now = utcnow()
    week_ago = now - timedelta(days=7)
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)

    created = [as_utc(contact.created_at) for contact in _query().limit(None).all().items]
    return {
        **contact_counts(),
        "recent": sum(1 for stamp in created if stamp and stamp >= week_ago),
        "today": sum(1 for stamp in created if stamp and stamp >= midnight),
    }


def contacts_by_email(email: str) -> list[dict]:
    contacts = _query().filter(email=email.strip().lower()).order_by("-created_at").limit(10).all().items
    return [contact_data(contact) for contact in contacts]
