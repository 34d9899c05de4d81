"""Timezone helpers shared by queries that compare stored timestamps."""

from datetime import UTC, datetime


def utcnow() -> datetime:
    return datetime.now(UTC)


def as_utc(value: datetime | str | None) -> datetime | None:
    """Coerce a stored timestamp to an aware UTC datetime.

    Relational providers may hand back naive datetimes or ISO strings; both
    are read as UTC.
    """
    if value is None:
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)
