"""Delivery locations (campus areas) and the hostels inside them."""

from datetime import UTC, datetime

from protean.fields import Boolean, DateTime, Float, Identifier, String

from patisserie.domain import patisserie

DEFAULT_DELIVERY_CHARGE = 49.0


@patisserie.aggregate
class Location:
    city: String(required=True, max_length=100)
    area: String(required=True, max_length=100)
    pincode: String(required=True, max_length=10)
    delivery_charge: Float(default=DEFAULT_DELIVERY_CHARGE, min_value=0)
    is_active: Boolean(default=True)
    created_at: DateTime()
    updated_at: DateTime()

    @property
    def full_address(self) -> str:
        return f"{self.area}, {self.city} - {self.pincode}"

    @classmethod
    def create(cls, city, area, pincode, delivery_charge=None):
        now = datetime.now(UTC)
        details = {"delivery_charge": delivery_charge} if delivery_charge is not None else {}
        return cls(
            city=city.strip(),
            area=area.strip(),
            pincode=pincode.strip(),
            created_at=now,
            updated_at=now,
            **details,
        )

    def update_details(self, **details):
        for field, value in details.items():
            if value is not None:
                setattr(self, field, value)
        self.updated_at = datetime.now(UTC)

    def toggle(self):
        self.is_active = not self.is_active
        self.updated_at = datetime.now(UTC)


@patisserie.aggregate
class Hostel:
    name: String(required=True, max_length=100)
    location_id: Identifier(required=True)
    address: String(max_length=255)
    is_active: Boolean(default=True)
    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def create(cls, name, location_id, address=None):
        now = datetime.now(UTC)
        return cls(
            name=name.strip(),
            location_id=location_id,
            address=address,
            created_at=now,
            updated_at=now,
        )

    def update_details(self, name=None, location_id=None, address=None):
        if name is not None:
            self.name = name.strip()
        if location_id is not None:
            self.location_id = location_id
        if address is not None:
            self.address = address
        self.updated_at = datetime.now(UTC)

    def toggle(self):
        self.is_active = not self.is_active
        self.updated_at = datetime.now(UTC)
