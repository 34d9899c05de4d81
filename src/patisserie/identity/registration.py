"""Login upsert and profile maintenance."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from patisserie.domain import patisserie
from patisserie.identity.user import Role, User


@patisserie.command(part_of="User")
class RegisterUser:
    uid: String(required=True, max_length=128)
    email: String(max_length=254)
    name: String(max_length=100)
    phone: String(max_length=20)


@patisserie.command(part_of="User")
class UpdateProfile:
    user_id: Identifier(required=True)
    name: String(max_length=100)
    phone: String(max_length=20)
    location_id: Identifier()
    hostel_name: String(max_length=100)


@patisserie.command(part_of="User")
class ChangeUserRole:
    user_id: Identifier(required=True)
    role: String(required=True, max_length=10)


def find_by_uid(uid: str) -> User | None:
    matches = current_domain.repository_for(User)._dao.query.filter(uid=uid).all().items
    return matches[0] if matches else None


@patisserie.command_handler(part_of=User)
class RegistrationHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)

        user = find_by_uid(command.uid)
        if user is None:
            user = User.register(
                uid=command.uid,
                email=command.email,
                name=command.name,
                phone=command.phone,
            )
        else:
            user.record_login(email=command.email, name=command.name)

        repo.add(user)
        return str(user.id)

    @handle(UpdateProfile)
    def update_profile(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)

        if command.location_id:
            from patisserie.location.location import Location

            if current_domain.repository_for(Location).get_or_none(command.location_id) is None:
                raise ValidationError({"location_id": ["Location not found"]})

        user.update_profile(
            name=command.name,
            phone=command.phone,
            location_id=command.location_id,
            hostel_name=command.hostel_name,
        )
        repo.add(user)

    @handle(ChangeUserRole)
    def change_role(self, command):
        if command.role not in [role.value for role in Role]:
            raise ValidationError({"role": ["Invalid role. Must be: user or admin"]})

        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.change_role(command.role)
        repo.add(user)
