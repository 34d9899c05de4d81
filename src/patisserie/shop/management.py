"""Admin changes to opening hours, special days and pause windows."""

import json

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, Date, Dict, String, Text
from protean.utils.globals import current_domain

from patisserie.domain import patisserie
from patisserie.shop.queries import current_schedule
from patisserie.shop.schedule import ShopSchedule


@patisserie.command(part_of="ShopSchedule")
class UpdateShopSchedule:
    weekday: Dict()
    weekend: Dict()
    timezone: String(max_length=64)
    pause_windows: Text(sanitize=False)  # JSON array, omitted when unchanged


@patisserie.command(part_of="ShopSchedule")
class AddSpecialDay:
    date: Date(required=True)
    is_closed: Boolean(default=True)
    start_time: String(max_length=5)
    end_time: String(max_length=5)
    description: String(max_length=200)


@patisserie.command(part_of="ShopSchedule")
class RemoveSpecialDay:
    date: Date(required=True)


_HOURS_KEYS = ("start_time", "end_time", "is_active")


def _hours(values):
    if not values:
        return None
    return {key: value for key, value in values.items() if key in _HOURS_KEYS and value is not None}


@patisserie.command_handler(part_of=ShopSchedule)
class ShopScheduleHandler:
    @handle(UpdateShopSchedule)
    def update_schedule(self, command):
        schedule = current_schedule()
        schedule.update_hours(
            weekday=_hours(command.weekday),
            weekend=_hours(command.weekend),
            timezone=command.timezone,
            pause_windows=json.loads(command.pause_windows) if command.pause_windows else None,
        )
        current_domain.repository_for(ShopSchedule).add(schedule)

    @handle(AddSpecialDay)
    def add_special_day(self, command):
        schedule = current_schedule()
        schedule.add_special_day(
            command.date,
            is_closed=command.is_closed,
            start_time=command.start_time,
            end_time=command.end_time,
            description=command.description,
        )
        current_domain.repository_for(ShopSchedule).add(schedule)

    @handle(RemoveSpecialDay)
    def remove_special_day(self, command):
        schedule = current_schedule()
        if not schedule.remove_special_day(command.date):
            raise ObjectNotFoundError("Special day not found")
        current_domain.repository_for(ShopSchedule).add(schedule)
