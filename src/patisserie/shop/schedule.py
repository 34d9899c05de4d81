"""Shop opening hours: the ShopSchedule singleton.

Times are ``HH:MM`` strings in the schedule's own timezone and are compared
lexically, which is exact for zero-padded 24h clock values. A range whose end
is earlier than its start wraps past midnight.
"""

import re
from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, Date, DateTime, HasMany, String, ValueObject

from patisserie.domain import patisserie

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")
DEFAULT_TIMEZONE = "Asia/Kolkata"
_DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


def _check_time(field, value):
    if value and not TIME_PATTERN.match(value):
        raise ValidationError({field: [f"Invalid time '{value}'. Use HH:MM (24 hour)"]})


def in_range(current: str, start: str, end: str) -> bool:
    """Inclusive ``start <= current <= end``; identical bounds cover the whole day."""
    if start == end:
        return True
    if start < end:
        return start <= current <= end
    return current >= start or current <= end


@patisserie.value_object(part_of="ShopSchedule")
class OpeningHours:
    start_time: String(max_length=5, default="09:00")
    end_time: String(max_length=5, default="21:00")
    is_active: Boolean(default=True)

    @invariant.post
    def times_must_be_clock_values(self):
        _check_time("start_time", self.start_time)
        _check_time("end_time", self.end_time)

    def covers(self, current: str) -> bool:
        return in_range(current, self.start_time, self.end_time)


@patisserie.entity(part_of="ShopSchedule")
class SpecialDay:
    """A holiday or event day that overrides the regular hours."""

    date: Date(required=True)
    is_closed: Boolean(default=True)
    start_time: String(max_length=5)
    end_time: String(max_length=5)
    description: String(max_length=200)

    @invariant.post
    def times_must_be_clock_values(self):
        _check_time("start_time", self.start_time)
        _check_time("end_time", self.end_time)


@patisserie.entity(part_of="ShopSchedule")
class PauseWindow:
    """A daily break (e.g. a kitchen changeover) during which orders are refused."""

    start_time: String(required=True, max_length=5)
    end_time: String(required=True, max_length=5)
    description: String(max_length=200)

    @invariant.post
    def times_must_be_clock_values(self):
        _check_time("start_time", self.start_time)
        _check_time("end_time", self.end_time)


@patisserie.aggregate
class ShopSchedule:
    weekday: ValueObject(OpeningHours)
    weekend: ValueObject(OpeningHours)
    timezone: String(max_length=64, default=DEFAULT_TIMEZONE)
    special_days = HasMany(SpecialDay)
    pause_windows = HasMany(PauseWindow)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def timezone_must_be_known(self):
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValidationError({"timezone": [f"Unknown timezone '{self.timezone}'"]}) from None

    @classmethod
    def default(cls, timezone=DEFAULT_TIMEZONE):
        now = datetime.now(UTC)
        return cls(
            weekday=OpeningHours(),
            weekend=OpeningHours(),
            timezone=timezone,
            created_at=now,
            updated_at=now,
        )

    # Clock helpers

    def local_now(self, now: datetime | None = None) -> datetime:
        now = now or datetime.now(UTC)
        if now.tzinfo is None:
            now = now.replace(tzinfo=UTC)
        return now.astimezone(ZoneInfo(self.timezone))

    def special_day_for(self, day: date) -> SpecialDay | None:
        for special_day in self.special_days:
            if special_day.date == day:
                return special_day
        return None

    def hours_for(self, local: datetime) -> OpeningHours:
        is_weekend = local.weekday() >= 5
        return (self.weekend if is_weekend else self.weekday) or OpeningHours()

    def active_pause(self, current: str) -> PauseWindow | None:
        for window in self.pause_windows:
            if in_range(current, window.start_time, window.end_time):
                return window
        return None

    # Queries

    def is_open(self, now: datetime | None = None) -> bool:
        local = self.local_now(now)
        current = local.strftime("%H:%M")

        special_day = self.special_day_for(local.date())
        if special_day is not None:
            if special_day.is_closed:
                return False
            if special_day.start_time and special_day.end_time:
                return special_day.start_time <= current <= special_day.end_time

        hours = self.hours_for(local)
        if not hours.is_active:
            return False
        if not hours.covers(current):
            return False
        return self.active_pause(current) is None

    def next_opening(self, now: datetime | None = None) -> str:
        """Human readable hint of when ordering reopens."""
        local = self.local_now(now)
        current = local.strftime("%H:%M")
        hours = self.hours_for(local)

        special_day = self.special_day_for(local.date())
        if special_day is not None and not special_day.is_closed:
            return f"Today at {special_day.start_time or hours.start_time}"

        if hours.is_active:
            pause = self.active_pause(current)
            if pause is not None:
                return f"Today at {pause.end_time}"
            return f"{_DAY_NAMES[local.weekday()]} at {hours.start_time}"

        weekday_start = self.weekday.start_time if self.weekday else OpeningHours().start_time
        return f"Monday at {weekday_start}"

    # Mutations

    def update_hours(self, weekday=None, weekend=None, timezone=None, pause_windows=None):
        from patisserie.shop.events import ShopScheduleUpdated

        if weekday is not None:
            self.weekday = self.weekday.replace(**weekday)
        if weekend is not None:
            self.weekend = self.weekend.replace(**weekend)
        if timezone is not None:
            self.timezone = timezone
        if pause_windows is not None:
            for window in list(self.pause_windows):
                self.remove_pause_windows(window)
            for window in pause_windows:
                self.add_pause_windows(
                    PauseWindow(
                        start_time=window.get("start_time"),
                        end_time=window.get("end_time"),
                        description=window.get("description"),
                    )
                )

        self.updated_at = datetime.now(UTC)
        self.raise_(ShopScheduleUpdated(schedule_id=self.id, updated_at=self.updated_at))

    def add_special_day(self, day, is_closed=True, start_time=None, end_time=None, description=None):
        """Add an override for ``day``, replacing any existing one for the same date."""
        from patisserie.shop.events import ShopScheduleUpdated

        existing = self.special_day_for(day)
        if existing is not None:
            self.remove_special_days(existing)

        self.add_special_days(
            SpecialDay(
                date=day,
                is_closed=is_closed,
                start_time=start_time,
                end_time=end_time,
                description=description,
            )
        )
        self.updated_at = datetime.now(UTC)
        self.raise_(ShopScheduleUpdated(schedule_id=self.id, updated_at=self.updated_at))

    def remove_special_day(self, day):
        from patisserie.shop.events import ShopScheduleUpdated

        existing = self.special_day_for(day)
        if existing is None:
            return False

        self.remove_special_days(existing)
        self.updated_at = datetime.now(UTC)
        self.raise_(ShopScheduleUpdated(schedule_id=self.id, updated_at=self.updated_at))
        return True
