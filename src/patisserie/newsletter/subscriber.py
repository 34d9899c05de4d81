"""Newsletter Subscriber aggregate."""

import re
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, String

from patisserie.domain import patisserie

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class SubscriberStatus(Enum):
    ACTIVE = "active"
    UNSUBSCRIBED = "unsubscribed"


class SubscriptionSource(Enum):
    FOOTER = "footer"
    ADMIN = "admin"
    CHECKOUT = "checkout"
    OTHER = "other"


@patisserie.aggregate
class Subscriber:
    email: String(required=True, max_length=254, unique=True)
    status: String(choices=SubscriberStatus, default=SubscriberStatus.ACTIVE.value)
    source: String(choices=SubscriptionSource, default=SubscriptionSource.FOOTER.value)
    subscribed_at: DateTime()
    unsubscribed_at: DateTime()
    last_email_sent: DateTime()

    @invariant.post
    def email_must_be_valid(self):
        if self.email and not EMAIL_PATTERN.match(self.email):
            raise ValidationError({"email": ["Please enter a valid email address"]})

    @property
    def is_active(self) -> bool:
        return self.status == SubscriberStatus.ACTIVE.value

    @classmethod
    def subscribe(cls, email, source=SubscriptionSource.FOOTER.value):
        from patisserie.newsletter.events import Subscribed

        subscriber = cls(email=email.strip().lower(), source=source, subscribed_at=datetime.now(UTC))
        subscriber.raise_(Subscribed(subscriber_id=subscriber.id, email=subscriber.email, source=subscriber.source))
        return subscriber

    def resubscribe(self):
        from patisserie.newsletter.events import Subscribed

        self.status = SubscriberStatus.ACTIVE.value
        self.subscribed_at = datetime.now(UTC)
        self.unsubscribed_at = None
        self.raise_(Subscribed(subscriber_id=self.id, email=self.email, source=self.source))

    def unsubscribe(self):
        from patisserie.newsletter.events import Unsubscribed

        self.status = SubscriberStatus.UNSUBSCRIBED.value
        self.unsubscribed_at = datetime.now(UTC)
        self.raise_(Unsubscribed(subscriber_id=self.id, email=self.email))

    def change_email(self, email):
        self.email = email.strip().lower()

    def mark_emailed(self):
        self.last_email_sent = datetime.now(UTC)
