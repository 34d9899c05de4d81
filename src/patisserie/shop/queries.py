"""Read-side helpers for the shop schedule."""

from datetime import UTC, datetime

from protean.utils.globals import current_domain

from patisserie.config import setting
from patisserie.shop.schedule import DEFAULT_TIMEZONE, ShopSchedule
from patisserie.utils.cache import cache
from patisserie.utils.serialization import to_data

SHOP_STATUS_KEY = "shop:status"
SHOP_STATUS_TTL = 60


def current_schedule() -> ShopSchedule:
    """Return the stored schedule, creating the default one on first use."""
    repo = current_domain.repository_for(ShopSchedule)
    schedules = repo._dao.query.order_by("created_at").limit(1).all().items
    if schedules:
        return schedules[0]

    schedule = ShopSchedule.default(timezone=setting("SHOP_TIMEZONE", DEFAULT_TIMEZONE))
    repo.add(schedule)
    return schedule


def schedule_data(schedule: ShopSchedule) -> dict:
    return to_data(schedule)


def shop_status(now: datetime | None = None) -> dict:
    """Public open/closed status; cached briefly unless an explicit clock is given."""

    def _load():
        schedule = current_schedule()
        local = schedule.local_now(now)
        is_open = schedule.is_open(now)
        return {
            "isOpen": is_open,
            "nextOpenTime": None if is_open else schedule.next_opening(now),
            "currentTime": local.strftime("%H:%M"),
            "timezone": schedule.timezone,
        }

    if now is not None:
        return _load()
    return cache.get_or_set(SHOP_STATUS_KEY, _load, ttl=SHOP_STATUS_TTL)


def is_shop_open(now: datetime | None = None) -> bool:
    return current_schedule().is_open(now or datetime.now(UTC))
