"""Domain events for the shop schedule."""

from protean.fields import DateTime, Identifier

from patisserie.domain import patisserie


@patisserie.event(part_of="ShopSchedule")
class ShopScheduleUpdated:
    __version__ = 1

    schedule_id: Identifier(required=True)
    updated_at: DateTime(required=True)
