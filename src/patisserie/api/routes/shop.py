"""Opening hours, special days and the open or closed status."""

import json

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from patisserie.api.dependencies import admin_user
from patisserie.api.responses import envelope
from patisserie.api.schemas import SpecialDayRequest, UpdateScheduleRequest
from patisserie.shop.management import AddSpecialDay, RemoveSpecialDay, UpdateShopSchedule
from patisserie.shop.queries import current_schedule, schedule_data, shop_status
from patisserie.utils.serialization import compact

router = APIRouter(prefix="/api/time-settings", tags=["time-settings"])


@router.get("/status")
async def status():
    return envelope(shop_status())


@router.get("", dependencies=[Depends(admin_user)])
async def settings():
    return envelope(schedule_data(current_schedule()))


@router.put("", dependencies=[Depends(admin_user)])
async def update_settings(body: UpdateScheduleRequest):
    pause_windows = None
    if body.pause_windows is not None:
        pause_windows = json.dumps([window.model_dump(exclude_none=True) for window in body.pause_windows])

    command = UpdateShopSchedule(
        **compact(
            weekday=body.weekday.model_dump(exclude_none=True) if body.weekday else None,
            weekend=body.weekend.model_dump(exclude_none=True) if body.weekend else None,
            timezone=body.timezone,
            pause_windows=pause_windows,
        )
    )
    current_domain.process(command, asynchronous=False)
    return envelope(schedule_data(current_schedule()), "Time settings updated successfully")


@router.post("/special-day", dependencies=[Depends(admin_user)])
async def add_special_day(body: SpecialDayRequest):
    command = AddSpecialDay(
        **compact(
            date=body.date,
            is_closed=body.is_closed,
            start_time=body.start_time,
            end_time=body.end_time,
            description=body.description,
        )
    )
    current_domain.process(command, asynchronous=False)
    return envelope(schedule_data(current_schedule()), "Special day added successfully")


@router.delete("/special-day/{day}", dependencies=[Depends(admin_user)])
async def remove_special_day(day: str):
    current_domain.process(RemoveSpecialDay(date=day), asynchronous=False)
    return envelope(schedule_data(current_schedule()), "Special day removed successfully")
