"""Domain events for newsletter subscribers."""

from protean.fields import Identifier, String

from patisserie.domain import patisserie


@patisserie.event(part_of="Subscriber")
class Subscribed:
    __version__ = 1

    subscriber_id: Identifier(required=True)
    email: String(required=True)
    source: String()


@patisserie.event(part_of="Subscriber")
class Unsubscribed:
    __version__ = 1

    subscriber_id: Identifier(required=True)
    email: String(required=True)
