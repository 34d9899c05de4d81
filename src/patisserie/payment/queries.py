"""Read-side helpers for payments."""

from protean.utils.globals import current_domain

from patisserie.payment.payment import Payment
from patisserie.utils.pagination import paginate
from patisserie.utils.serialization import to_data


def list_payments(
    status: str | None = None,
    method: str | None = None,
    page: int = 1,
    limit: int = 10,
) -> tuple[list[dict], dict]:
    query = current_domain.repository_for(Payment)._dao.query
    if status:
        query = query.filter(payment_status=status)
    if method:
        query = query.filter(payment_method=method)
    payments, pagination = paginate(query.order_by("-created_at"), page, limit)
    return [to_data(payment) for payment in payments], pagination


def list_user_payments(user_id: str, page: int = 1, limit: int = 10) -> tuple[list[dict], dict]:
    query = current_domain.repository_for(Payment)._dao.query.filter(user_id=str(user_id)).order_by("-created_at")
    payments, pagination = paginate(query, page, limit)
    return [to_data(payment) for payment in payments], pagination
