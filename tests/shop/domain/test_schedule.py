from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo

import pytest
from patisserie.shop.events import ShopScheduleUpdated
from patisserie.shop.schedule import ShopSchedule, in_range
from protean.exceptions import ValidationError

KOLKATA = ZoneInfo("Asia/Kolkata")
MONDAY = date(2026, 10, 19)
SATURDAY = date(2026, 10, 24)


def at(day, hour, minute=0):
    return datetime(day.year, day.month, day.day, hour, minute, tzinfo=KOLKATA)


class TestInRange:
    def test_inclusive_bounds(self):
        assert in_range("09:00", "09:00", "21:00")
        assert in_range("21:00", "09:00", "21:00")
        assert not in_range("21:01", "09:00", "21:00")

    def test_identical_bounds_cover_the_day(self):
        assert in_range("03:15", "00:00", "00:00")

    def test_wraps_past_midnight(self):
        assert in_range("23:30", "18:00", "02:00")
        assert in_range("01:00", "18:00", "02:00")
        assert not in_range("03:00", "18:00", "02:00")


class TestRegularHours:
    def test_default_hours(self):
        schedule = ShopSchedule.default()

        assert schedule.is_open(at(MONDAY, 10)) is True
        assert schedule.is_open(at(MONDAY, 8, 59)) is False
        assert schedule.is_open(at(MONDAY, 22)) is False

    def test_utc_clock_is_converted(self):
        schedule = ShopSchedule.default()
        # 04:00 UTC is 09:30 in Kolkata
        assert schedule.is_open(datetime(2026, 10, 19, 4, 0, tzinfo=UTC)) is True

    def test_weekend_uses_weekend_hours(self):
        schedule = ShopSchedule.default()
        schedule.update_hours(weekend={"start_time": "11:00", "end_time": "23:00"})

        assert schedule.is_open(at(SATURDAY, 10)) is False
        assert schedule.is_open(at(SATURDAY, 22)) is True
        assert schedule.is_open(at(MONDAY, 22)) is False

    def test_inactive_weekend(self):
        schedule = ShopSchedule.default()
        schedule.update_hours(weekend={"is_active": False})

        assert schedule.is_open(at(SATURDAY, 12)) is False
        assert schedule.next_opening(at(SATURDAY, 12)) == "Monday at 09:00"

    def test_overnight_hours(self):
        schedule = ShopSchedule.default()
        schedule.update_hours(weekday={"start_time": "18:00", "end_time": "02:00"})

        assert schedule.is_open(at(MONDAY, 1)) is True
        assert schedule.is_open(at(MONDAY, 3)) is False

    def test_next_opening_outside_hours(self):
        schedule = ShopSchedule.default()
        assert schedule.next_opening(at(MONDAY, 7)) == "Monday at 09:00"


class TestPauseWindows:
    def test_pause_closes_the_shop(self):
        schedule = ShopSchedule.default()
        schedule.update_hours(pause_windows=[{"start_time": "14:00", "end_time": "15:00", "description": "Oven clean"}])

        assert schedule.is_open(at(MONDAY, 14, 30)) is False
        assert schedule.is_open(at(MONDAY, 15, 1)) is True
        assert schedule.next_opening(at(MONDAY, 14, 30)) == "Today at 15:00"

    def test_pause_windows_are_replaced(self):
        schedule = ShopSchedule.default()
        schedule.update_hours(pause_windows=[{"start_time": "14:00", "end_time": "15:00"}])
        schedule.update_hours(pause_windows=[])

        assert schedule.is_open(at(MONDAY, 14, 30)) is True


class TestSpecialDays:
    def test_closed_day(self):
        schedule = ShopSchedule.default()
        schedule.add_special_day(MONDAY, is_closed=True, description="Diwali")

        assert schedule.is_open(at(MONDAY, 12)) is False

    def test_special_hours(self):
        schedule = ShopSchedule.default()
        schedule.add_special_day(MONDAY, is_closed=False, start_time="11:00", end_time="13:00")

        assert schedule.is_open(at(MONDAY, 12)) is True
        assert schedule.is_open(at(MONDAY, 14)) is False
        assert schedule.next_opening(at(MONDAY, 14)) == "Today at 11:00"

    def test_adding_the_same_date_replaces_it(self):
        schedule = ShopSchedule.default()
        schedule.add_special_day(MONDAY, is_closed=True)
        schedule.add_special_day(MONDAY, is_closed=False, start_time="10:00", end_time="12:00")

        assert len(schedule.special_days) == 1
        assert schedule.is_open(at(MONDAY, 11)) is True

    def test_remove(self):
        schedule = ShopSchedule.default()
        schedule.add_special_day(MONDAY)

        assert schedule.remove_special_day(MONDAY) is True
        assert schedule.remove_special_day(MONDAY) is False
        assert schedule.is_open(at(MONDAY, 12)) is True


class TestValidation:
    def test_times_must_be_hh_mm(self):
        schedule = ShopSchedule.default()
        with pytest.raises(ValidationError) as exc:
            schedule.update_hours(weekday={"start_time": "9am"})
        assert exc.value.messages["start_time"] == ["Invalid time '9am'. Use HH:MM (24 hour)"]

    def test_unknown_timezone(self):
        with pytest.raises(ValidationError):
            ShopSchedule.default(timezone="Mars/Olympus_Mons")

    def test_changes_raise_event(self):
        schedule = ShopSchedule.default()
        schedule.update_hours(timezone="Asia/Dubai")

        assert schedule.timezone == "Asia/Dubai"
        assert isinstance(schedule._events[-1], ShopScheduleUpdated)
