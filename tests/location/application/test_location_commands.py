import pytest
from patisserie.location.management import (
    CreateHostel,
    CreateLocation,
    DeleteHostel,
    ToggleHostel,
    ToggleLocation,
    UpdateHostel,
    UpdateLocation,
)
from patisserie.location.queries import delivery_charge_for, list_hostels, list_locations
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain


def _location(city="Coimbatore", area="Peelamedu", **details):
    return current_domain.process(
        CreateLocation(city=city, area=area, pincode="641004", **details), asynchronous=False
    )


def _hostel(name, location_id):
    return current_domain.process(CreateHostel(name=name, location_id=location_id), asynchronous=False)


class TestLocations:
    def test_list_is_sorted_by_city_and_hides_inactive(self):
        _location(city="Madurai")
        _location(city="Coimbatore")
        closed = _location(city="Chennai")
        current_domain.process(ToggleLocation(location_id=closed), asynchronous=False)

        assert [location["city"] for location in list_locations()] == ["Coimbatore", "Madurai"]
        assert len(list_locations(include_inactive=True)) == 3

    def test_update_charge(self):
        location_id = _location()

        current_domain.process(UpdateLocation(location_id=location_id, delivery_charge=25.0), asynchronous=False)

        assert delivery_charge_for(location_id, default=49.0) == 25.0

    def test_toggle_returns_new_state(self):
        location_id = _location()
        assert current_domain.process(ToggleLocation(location_id=location_id), asynchronous=False) is False

    def test_unknown_location(self):
        with pytest.raises(ObjectNotFoundError) as exc:
            current_domain.process(ToggleLocation(location_id="missing"), asynchronous=False)
        assert str(exc.value) == "Location not found"


class TestDeliveryCharge:
    def test_without_location(self):
        assert delivery_charge_for(None, default=49.0) == 49.0

    def test_inactive_location_falls_back(self):
        location_id = _location(delivery_charge=20.0)
        current_domain.process(ToggleLocation(location_id=location_id), asynchronous=False)

        assert delivery_charge_for(location_id, default=49.0) == 49.0


class TestHostels:
    def test_names_are_unique_within_a_location(self):
        location_id = _location()
        _hostel("Block A", location_id)

        with pytest.raises(ValidationError) as exc:
            _hostel("block a", location_id)
        assert exc.value.messages["name"] == ["A hostel with this name already exists in this location"]

    def test_same_name_in_another_location(self):
        _hostel("Block A", _location(area="Peelamedu"))
        _hostel("Block A", _location(area="Saravanampatti"))

        assert len(list_hostels()) == 2

    def test_hostel_needs_an_existing_location(self):
        with pytest.raises(ObjectNotFoundError):
            _hostel("Block A", "missing")

    def test_rename_to_own_name(self):
        location_id = _location()
        hostel_id = _hostel("Block A", location_id)

        current_domain.process(UpdateHostel(hostel_id=hostel_id, name="Block A", address="Gate 2"), asynchronous=False)

        assert list_hostels(location_id)[0]["address"] == "Gate 2"

    def test_toggle_and_delete(self):
        location_id = _location()
        first = _hostel("Block A", location_id)
        second = _hostel("Block B", location_id)

        current_domain.process(ToggleHostel(hostel_id=first), asynchronous=False)
        current_domain.process(DeleteHostel(hostel_id=second), asynchronous=False)

        assert list_hostels(location_id) == []
        assert [hostel["name"] for hostel in list_hostels(location_id, include_inactive=True)] == ["Block A"]
