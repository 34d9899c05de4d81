"""Read-side helpers for the subscriber list."""

from collections import Counter
from datetime import timedelta

from protean.utils.globals import current_domain

from patisserie.newsletter.subscriber import Subscriber, SubscriberStatus
from patisserie.utils.clock import as_utc, utcnow
from patisserie.utils.pagination import paginate
from patisserie.utils.serialization import to_data


def _counts() -> dict:
    query = current_domain.repository_for(Subscriber)._dao.query
    return {
        "total": query.count(),
        "active": query.filter(status=SubscriberStatus.ACTIVE.value).count(),
        "unsubscribed": query.filter(status=SubscriberStatus.UNSUBSCRIBED.value).count(),
    }


def list_subscribers(status: str | None = None, page: int = 1, limit: int = 10) -> tuple[list[dict], dict, dict]:
    query = current_domain.repository_for(Subscriber)._dao.query
    if status:
        query = query.filter(status=status)
    subscribers, pagination = paginate(query.order_by("-subscribed_at"), page, limit)
    return [to_data(subscriber) for subscriber in subscribers], pagination, _counts()


def subscriber_stats() -> dict:
    active = (
        current_domain.repository_for(Subscriber)
        ._dao.query.filter(status=SubscriberStatus.ACTIVE.value)
        .limit(None)
        .all()
        .items
    )
    cutoff = utcnow() - timedelta(days=30)
    by_source = Counter(subscriber.source for subscriber in active)

    return {
        **_counts(),
        "recentSubscriptions": sum(
            1 for subscriber in active if subscriber.subscribed_at and as_utc(subscriber.subscribed_at) >= cutoff
        ),
        "bySource": [{"source": source, "count": count} for source, count in by_source.most_common()],
    }
