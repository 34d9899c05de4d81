"""User aggregate: a storefront account keyed by its identity-provider uid."""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import Boolean, DateTime, Identifier, String

from patisserie.domain import patisserie


class Role(Enum):
    USER = "user"
    ADMIN = "admin"


@patisserie.aggregate
class User:
    uid: String(required=True, max_length=128, unique=True)
    name: String(max_length=100)
    email: String(max_length=254)
    phone: String(max_length=20)
    role: String(choices=Role, default=Role.USER.value)
    location_id: Identifier()
    hostel_name: String(max_length=100)
    is_active: Boolean(default=True)
    last_login_at: DateTime()
    created_at: DateTime()
    updated_at: DateTime()

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value

    @classmethod
    def register(cls, uid, email=None, name=None, phone=None):
        from patisserie.identity.events import UserRegistered

        now = datetime.now(UTC)
        user = cls(
            uid=uid,
            email=email.strip().lower() if email else None,
            name=name,
            phone=phone,
            last_login_at=now,
            created_at=now,
            updated_at=now,
        )
        user.raise_(UserRegistered(user_id=user.id, uid=user.uid, email=user.email, name=user.name))
        return user

    def record_login(self, email=None, name=None):
        """Refresh claims the identity provider may have changed since the last login."""
        now = datetime.now(UTC)
        if email:
            self.email = email.strip().lower()
        if name and not self.name:
            self.name = name
        self.last_login_at = now
        self.updated_at = now

    def update_profile(self, name=None, phone=None, location_id=None, hostel_name=None):
        from patisserie.identity.events import UserProfileUpdated

        if name is not None:
            self.name = name.strip()
        if phone is not None:
            self.phone = phone.strip()
        if location_id is not None:
            self.location_id = location_id
        if hostel_name is not None:
            self.hostel_name = hostel_name.strip()
        self.updated_at = datetime.now(UTC)

        self.raise_(
            UserProfileUpdated(
                user_id=self.id,
                name=self.name,
                phone=self.phone,
                location_id=self.location_id,
                hostel_name=self.hostel_name,
            )
        )

    def change_role(self, role):
        self.role = role
        self.updated_at = datetime.now(UTC)
