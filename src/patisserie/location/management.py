"""Admin maintenance of delivery locations and hostels."""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, Float, Identifier, String
from protean.utils.globals import current_domain

from patisserie.domain import patisserie
from patisserie.location.location import Hostel, Location


@patisserie.command(part_of="Location")
class CreateLocation:
    city: String(required=True, max_length=100)
    area: String(required=True, max_length=100)
    pincode: String(required=True, max_length=10)
    delivery_charge: Float(min_value=0)


@patisserie.command(part_of="Location")
class UpdateLocation:
    location_id: Identifier(required=True)
    city: String(max_length=100)
    area: String(max_length=100)
    pincode: String(max_length=10)
    delivery_charge: Float(min_value=0)
    is_active: Boolean()


@patisserie.command(part_of="Location")
class ToggleLocation:
    location_id: Identifier(required=True)


@patisserie.command(part_of="Hostel")
class CreateHostel:
    name: String(required=True, max_length=100)
    location_id: Identifier(required=True)
    address: String(max_length=255)


@patisserie.command(part_of="Hostel")
class UpdateHostel:
    hostel_id: Identifier(required=True)
    name: String(max_length=100)
    location_id: Identifier()
    address: String(max_length=255)


@patisserie.command(part_of="Hostel")
class ToggleHostel:
    hostel_id: Identifier(required=True)


@patisserie.command(part_of="Hostel")
class DeleteHostel:
    hostel_id: Identifier(required=True)


def _location_or_404(location_id) -> Location:
    location = current_domain.repository_for(Location).get_or_none(location_id)
    if location is None:
        raise ObjectNotFoundError("Location not found")
    return location


def _hostel_or_404(hostel_id) -> Hostel:
    hostel = current_domain.repository_for(Hostel).get_or_none(hostel_id)
    if hostel is None:
        raise ObjectNotFoundError("Hostel not found")
    return hostel


def _ensure_unique_hostel(name, location_id, exclude_id=None):
    matches = (
        current_domain.repository_for(Hostel)
        ._dao.query.filter(name__iexact=name.strip(), location_id=str(location_id))
        .all()
        .items
    )
    if any(str(match.id) != str(exclude_id) for match in matches):
        raise ValidationError({"name": ["A hostel with this name already exists in this location"]})


@patisserie.command_handler(part_of=Location)
class ManageLocationHandler:
    @handle(CreateLocation)
    def create_location(self, command):
        location = Location.create(
            city=command.city,
            area=command.area,
            pincode=command.pincode,
            delivery_charge=command.delivery_charge,
        )
        current_domain.repository_for(Location).add(location)
        return str(location.id)

    @handle(UpdateLocation)
    def update_location(self, command):
        location = _location_or_404(command.location_id)
        location.update_details(
            city=command.city,
            area=command.area,
            pincode=command.pincode,
            delivery_charge=command.delivery_charge,
            is_active=command.is_active,
        )
        current_domain.repository_for(Location).add(location)

    @handle(ToggleLocation)
    def toggle_location(self, command):
        location = _location_or_404(command.location_id)
        location.toggle()
        current_domain.repository_for(Location).add(location)
        return location.is_active


@patisserie.command_handler(part_of=Hostel)
class ManageHostelHandler:
    @handle(CreateHostel)
    def create_hostel(self, command):
        _location_or_404(command.location_id)
        _ensure_unique_hostel(command.name, command.location_id)

        hostel = Hostel.create(name=command.name, location_id=command.location_id, address=command.address)
        current_domain.repository_for(Hostel).add(hostel)
        return str(hostel.id)

    @handle(UpdateHostel)
    def update_hostel(self, command):
        hostel = _hostel_or_404(command.hostel_id)

        if command.location_id and str(command.location_id) != str(hostel.location_id):
            _location_or_404(command.location_id)
        if command.name:
            _ensure_unique_hostel(command.name, command.location_id or hostel.location_id, exclude_id=hostel.id)

        hostel.update_details(name=command.name, location_id=command.location_id, address=command.address)
        current_domain.repository_for(Hostel).add(hostel)

    @handle(ToggleHostel)
    def toggle_hostel(self, command):
        hostel = _hostel_or_404(command.hostel_id)
        hostel.toggle()
        current_domain.repository_for(Hostel).add(hostel)
        return hostel.is_active

    @handle(DeleteHostel)
    def delete_hostel(self, command):
        hostel = _hostel_or_404(command.hostel_id)
        current_domain.repository_for(Hostel)._dao.delete(hostel)
