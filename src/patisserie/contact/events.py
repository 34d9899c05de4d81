"""Domain events for the Contact aggregate."""

from protean.fields import DateTime, Identifier, String, Text

from patisserie.domain import patisserie


@patisserie.event(part_of="Contact")
class ContactSubmitted:
    """A visitor sent a message through the contact form."""

    __version__ = 1

    contact_id: Identifier(required=True)
    name: String(required=True)
    email: String(required=True)
    phone: String()
    subject: String(required=True)
    message: Text(required=True)
    submitted_at: DateTime(required=True)


@patisserie.event(part_of="Contact")
class ContactReplied:
    """An admin answered a contact message."""

    __version__ = 1

    contact_id: Identifier(required=True)
    name: String(required=True)
    email: String(required=True)
    subject: String(required=True)
    message: Text()
    reply: Text(required=True)
    replied_by: Identifier()
    replied_at: DateTime(required=True)
