"""Domain events for the User aggregate."""

from protean.fields import Identifier, String

from patisserie.domain import patisserie


@patisserie.event(part_of="User")
class UserRegistered:
    """First login of a new identity-provider account."""

    __version__ = 1

    user_id: Identifier(required=True)
    uid: String(required=True)
    email: String()
    name: String()


@patisserie.event(part_of="User")
class UserProfileUpdated:
    __version__ = 1

    user_id: Identifier(required=True)
    name: String()
    phone: String()
    location_id: Identifier()
    hostel_name: String()
