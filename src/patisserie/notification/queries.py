"""Read-side helpers for notifications."""

from protean.utils.globals import current_domain

from patisserie.notification.notification import Notification
from patisserie.utils.pagination import paginate
from patisserie.utils.serialization import to_data


def list_notifications(
    user_id: str, unread_only: bool = False, page: int = 1, limit: int = 10
) -> tuple[list[dict], dict, int]:
    """The user's notifications (newest first), their page, and the unread count."""
    base = current_domain.repository_for(Notification)._dao.query.filter(user_id=str(user_id))
    query = base.filter(read=False) if unread_only else base
    notifications, pagination = paginate(query.order_by("-created_at"), page, limit)
    return [to_data(item) for item in notifications], pagination, base.filter(read=False).count()
