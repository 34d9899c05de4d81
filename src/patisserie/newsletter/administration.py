"""Admin maintenance of the subscriber list."""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from patisserie.domain import patisserie
from patisserie.newsletter.subscriber import Subscriber, SubscriberStatus, SubscriptionSource
from patisserie.newsletter.subscription import find_by_email


@patisserie.command(part_of="Subscriber")
class AddSubscriber:
    email: String(max_length=254)


@patisserie.command(part_of="Subscriber")
class UpdateSubscriber:
    subscriber_id: Identifier(required=True)
    email: String(max_length=254)
    status: String(max_length=20)


@patisserie.command(part_of="Subscriber")
class DeleteSubscriber:
    subscriber_id: Identifier(required=True)


def _subscriber_or_404(subscriber_id) -> Subscriber:
    subscriber = current_domain.repository_for(Subscriber).get_or_none(subscriber_id)
    if subscriber is None:
        raise ObjectNotFoundError("Subscriber not found")
    return subscriber


@patisserie.command_handler(part_of=Subscriber)
class SubscriberAdminHandler:
    @handle(AddSubscriber)
    def add_subscriber(self, command):
        if not command.email or not command.email.strip():
            raise ValidationError({"email": ["Email is required"]})

        repo = current_domain.repository_for(Subscriber)
        subscriber = find_by_email(command.email)
        if subscriber is None:
            subscriber = Subscriber.subscribe(command.email, source=SubscriptionSource.ADMIN.value)
            repo.add(subscriber)
            return {"outcome": "created", "subscriber_id": str(subscriber.id)}

        if subscriber.is_active:
            raise ValidationError({"email": ["This email is already an active subscriber"]})

        subscriber.resubscribe()
        repo.add(subscriber)
        return {"outcome": "resubscribed", "subscriber_id": str(subscriber.id)}

    @handle(UpdateSubscriber)
    def update_subscriber(self, command):
        subscriber = _subscriber_or_404(command.subscriber_id)

        if command.status and command.status not in [status.value for status in SubscriberStatus]:
            raise ValidationError({"status": ["Invalid status. Must be: active or unsubscribed"]})

        if command.email:
            existing = find_by_email(command.email)
            if existing is not None and str(existing.id) != str(subscriber.id):
                raise ValidationError({"email": ["Email is already subscribed"]})
            subscriber.change_email(command.email)

        if command.status == SubscriberStatus.UNSUBSCRIBED.value and subscriber.is_active:
            subscriber.unsubscribe()
        elif command.status == SubscriberStatus.ACTIVE.value and not subscriber.is_active:
            subscriber.resubscribe()

        current_domain.repository_for(Subscriber).add(subscriber)

    @handle(DeleteSubscriber)
    def delete_subscriber(self, command):
        subscriber = _subscriber_or_404(command.subscriber_id)
        current_domain.repository_for(Subscriber)._dao.delete(subscriber)
