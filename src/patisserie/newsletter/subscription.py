"""Public subscribe/unsubscribe flow.

Both handlers return a small outcome dict so the API can pick the right
status code: a brand new subscription is ``created``, a returning subscriber
is ``resubscribed``.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from patisserie.domain import patisserie
from patisserie.newsletter.subscriber import Subscriber, SubscriptionSource


@patisserie.command(part_of="Subscriber")
class Subscribe:
    email: String(max_length=254)
    source: String(max_length=20, default=SubscriptionSource.FOOTER.value)


@patisserie.command(part_of="Subscriber")
class Unsubscribe:
    email: String(max_length=254)


def find_by_email(email: str) -> Subscriber | None:
    matches = (
        current_domain.repository_for(Subscriber)._dao.query.filter(email=email.strip().lower()).all().items
    )
    return matches[0] if matches else None


def _require_email(email):
    if not email or not email.strip():
        raise ValidationError({"email": ["Email is required"]})


@patisserie.command_handler(part_of=Subscriber)
class SubscriptionHandler:
    @handle(Subscribe)
    def subscribe(self, command):
        _require_email(command.email)
        repo = current_domain.repository_for(Subscriber)

        subscriber = find_by_email(command.email)
        if subscriber is None:
            subscriber = Subscriber.subscribe(command.email, source=command.source)
            repo.add(subscriber)
            return {"outcome": "created", "subscriber_id": str(subscriber.id)}

        if subscriber.is_active:
            raise ValidationError({"email": ["Email is already subscribed"]})

        subscriber.resubscribe()
        repo.add(subscriber)
        return {"outcome": "resubscribed", "subscriber_id": str(subscriber.id)}

    @handle(Unsubscribe)
    def unsubscribe(self, command):
        _require_email(command.email)

        subscriber = find_by_email(command.email)
        if subscriber is None:
            raise ObjectNotFoundError("Email not found in our subscriber list")
        if not subscriber.is_active:
            raise ValidationError({"email": ["This email is already unsubscribed"]})

        subscriber.unsubscribe()
        current_domain.repository_for(Subscriber).add(subscriber)
