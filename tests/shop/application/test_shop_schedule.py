from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest
from patisserie.shop.management import AddSpecialDay, RemoveSpecialDay, UpdateShopSchedule
from patisserie.shop.queries import current_schedule, is_shop_open, shop_status
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

MONDAY_NOON = datetime(2026, 10, 19, 12, 0, tzinfo=ZoneInfo("Asia/Kolkata"))


class TestCurrentSchedule:
    def test_default_is_created_once(self):
        first = current_schedule()
        second = current_schedule()

        assert first.id == second.id
        assert first.timezone == "Asia/Kolkata"
        assert first.weekday.start_time == "09:00"


class TestUpdateShopSchedule:
    def test_update_hours_and_pauses(self):
        current_domain.process(
            UpdateShopSchedule(
                weekday={"start_time": "10:00", "end_time": "20:00"},
                pause_windows='[{"start_time": "11:30", "end_time": "12:30"}]',
            ),
            asynchronous=False,
        )

        schedule = current_schedule()
        assert schedule.weekday.start_time == "10:00"
        assert schedule.weekday.end_time == "20:00"
        assert len(schedule.pause_windows) == 1
        assert is_shop_open(MONDAY_NOON) is False

    def test_unknown_keys_are_ignored(self):
        current_domain.process(
            UpdateShopSchedule(weekday={"start_time": "08:00", "colour": "pink"}), asynchronous=False
        )
        assert current_schedule().weekday.start_time == "08:00"


class TestSpecialDays:
    def test_add_and_remove(self):
        current_domain.process(AddSpecialDay(date=date(2026, 10, 19), description="Diwali"), asynchronous=False)
        assert is_shop_open(MONDAY_NOON) is False

        current_domain.process(RemoveSpecialDay(date=date(2026, 10, 19)), asynchronous=False)
        assert is_shop_open(MONDAY_NOON) is True

    def test_remove_unknown(self):
        with pytest.raises(ObjectNotFoundError) as exc:
            current_domain.process(RemoveSpecialDay(date=date(2026, 12, 25)), asynchronous=False)
        assert str(exc.value) == "Special day not found"


class TestShopStatus:
    def test_status_for_a_given_clock(self):
        status = shop_status(MONDAY_NOON)

        assert status == {
            "isOpen": True,
            "nextOpenTime": None,
            "currentTime": "12:00",
            "timezone": "Asia/Kolkata",
        }

    def test_next_opening_while_closed(self):
        early = MONDAY_NOON.replace(hour=7)

        status = shop_status(early)

        assert status["isOpen"] is False
        assert status["nextOpenTime"] == "Monday at 09:00"

    def test_cached_status_is_dropped_when_hours_change(self, open_shop):
        assert shop_status()["isOpen"] is True

        closed = {"is_active": False}
        current_domain.process(UpdateShopSchedule(weekday=closed, weekend=closed), asynchronous=False)

        assert shop_status()["isOpen"] is False
