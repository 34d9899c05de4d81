"""Delivery locations and the hostels inside them."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from patisserie.api.dependencies import admin_user
from patisserie.api.responses import envelope
from patisserie.api.schemas import (
    CreateHostelRequest,
    CreateLocationRequest,
    UpdateHostelRequest,
    UpdateLocationRequest,
)
from patisserie.location.location import Hostel, Location
from patisserie.location.management import (
    CreateHostel,
    CreateLocation,
    DeleteHostel,
    ToggleHostel,
    ToggleLocation,
    UpdateHostel,
    UpdateLocation,
)
from patisserie.location.queries import list_hostels, list_locations, location_data
from patisserie.utils.serialization import compact, to_data

location_router = APIRouter(prefix="/api/locations", tags=["locations"])
hostel_router = APIRouter(prefix="/api/hostels", tags=["hostels"])


def _location(location_id: str) -> dict:
    return location_data(current_domain.repository_for(Location).get(location_id))


def _hostel(hostel_id: str) -> dict:
    return to_data(current_domain.repository_for(Hostel).get(hostel_id))


# --- Locations ---


@location_router.get("")
async def locations():
    return envelope(list_locations())


@location_router.get("/admin/all", dependencies=[Depends(admin_user)])
async def all_locations():
    return envelope(list_locations(include_inactive=True))


@location_router.post("", status_code=201, dependencies=[Depends(admin_user)])
async def create_location(body: CreateLocationRequest):
    command = CreateLocation(
        **compact(city=body.city, area=body.area, pincode=body.pincode, delivery_charge=body.delivery_charge)
    )
    location_id = current_domain.process(command, asynchronous=False)
    return envelope(_location(location_id), "Location created successfully", status_code=201)


@location_router.put("/{location_id}", dependencies=[Depends(admin_user)])
async def update_location(location_id: str, body: UpdateLocationRequest):
    command = UpdateLocation(**compact(location_id=location_id, **body.model_dump()))
    current_domain.process(command, asynchronous=False)
    return envelope(_location(location_id), "Location updated successfully")


@location_router.patch("/{location_id}/toggle", dependencies=[Depends(admin_user)])
async def toggle_location(location_id: str):
    is_active = current_domain.process(ToggleLocation(location_id=location_id), asynchronous=False)
    return envelope(_location(location_id), f"Location {'activated' if is_active else 'deactivated'} successfully")


# --- Hostels ---


@hostel_router.get("")
async def hostels(location_id: str | None = None):
    return envelope(list_hostels(location_id=location_id))


@hostel_router.get("/location/{location_id}")
async def hostels_of_location(location_id: str):
    return envelope(list_hostels(location_id=location_id))


@hostel_router.get("/location/{location_id}/admin", dependencies=[Depends(admin_user)])
async def all_hostels_of_location(location_id: str):
    return envelope(list_hostels(location_id=location_id, include_inactive=True))


@hostel_router.post("", status_code=201, dependencies=[Depends(admin_user)])
async def create_hostel(body: CreateHostelRequest):
    command = CreateHostel(**compact(name=body.name, location_id=body.location_id, address=body.address))
    hostel_id = current_domain.process(command, asynchronous=False)
    return envelope(_hostel(hostel_id), "Hostel created successfully", status_code=201)


@hostel_router.put("/{hostel_id}", dependencies=[Depends(admin_user)])
async def update_hostel(hostel_id: str, body: UpdateHostelRequest):
    command = UpdateHostel(**compact(hostel_id=hostel_id, **body.model_dump()))
    current_domain.process(command, asynchronous=False)
    return envelope(_hostel(hostel_id), "Hostel updated successfully")


@hostel_router.patch("/{hostel_id}/toggle", dependencies=[Depends(admin_user)])
async def toggle_hostel(hostel_id: str):
    is_active = current_domain.process(ToggleHostel(hostel_id=hostel_id), asynchronous=False)
    return envelope(_hostel(hostel_id), f"Hostel {'activated' if is_active else 'deactivated'} successfully")


@hostel_router.delete("/{hostel_id}", dependencies=[Depends(admin_user)])
async def delete_hostel(hostel_id: str):
    current_domain.process(DeleteHostel(hostel_id=hostel_id), asynchronous=False)
    return envelope(message="Hostel deleted successfully")
