"""Read-side helpers for users."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from patisserie.config import admin_emails
from patisserie.identity.user import Role, User
from patisserie.utils.pagination import paginate
from patisserie.utils.serialization import to_data


def user_data(user: User) -> dict:
    return to_data(user)


def get_user(user_id: str) -> User:
    user = current_domain.repository_for(User).get_or_none(user_id)
    if user is None:
        raise ObjectNotFoundError("User not found")
    return user


def list_users(role: str | None = None, page: int = 1, limit: int = 10) -> tuple[list[dict], dict]:
    query = current_domain.repository_for(User)._dao.query
    if role:
        query = query.filter(role=role)
    users, pagination = paginate(query.order_by("-created_at"), page, limit)
    return [user_data(user) for user in users], pagination


def admin_recipients() -> list[str]:
    """Emails of active admins, or ``ADMIN_EMAILS`` when no admin has an email on file."""
    admins = (
        current_domain.repository_for(User)
        ._dao.query.filter(role=Role.ADMIN.value, is_active=True)
        .limit(None)
        .all()
        .items
    )
    emails = sorted({admin.email for admin in admins if admin.email})
    return emails or admin_emails()
