"""Read-side helpers for locations and hostels."""

from protean.utils.globals import current_domain

from patisserie.location.location import Hostel, Location
from patisserie.utils.serialization import to_data


def location_data(location: Location) -> dict:
    return to_data(location, full_address=location.full_address)


def list_locations(include_inactive: bool = False) -> list[dict]:
    query = current_domain.repository_for(Location)._dao.query
    if not include_inactive:
        query = query.filter(is_active=True)
    return [location_data(location) for location in query.order_by("city").limit(None).all().items]


def list_hostels(location_id: str | None = None, include_inactive: bool = False) -> list[dict]:
    query = current_domain.repository_for(Hostel)._dao.query
    if location_id:
        query = query.filter(location_id=location_id)
    if not include_inactive:
        query = query.filter(is_active=True)
    return [to_data(hostel) for hostel in query.order_by("name").limit(None).all().items]


def delivery_charge_for(location_id: str | None, default: float) -> float:
    """Delivery charge of an active location, or ``default`` when it is unknown."""
    if not location_id:
        return default
    location = current_domain.repository_for(Location).get_or_none(location_id)
    if location is None or not location.is_active:
        return default
    return location.delivery_charge
