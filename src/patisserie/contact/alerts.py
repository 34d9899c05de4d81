"""Email side effects of the contact form.

Delivery is fire and forget: a failed email is logged and never undoes the
submission or the reply.
"""

import structlog
from protean import handle

from patisserie.channel import send_email_safely
from patisserie.contact.contact import Contact
from patisserie.contact.events import ContactReplied, ContactSubmitted
from patisserie.domain import patisserie
from patisserie.templates import EmailKind, render

logger = structlog.get_logger(__name__)


@patisserie.event_handler(part_of=Contact)
class ContactEmailHandler:
    @handle(ContactSubmitted)
    def alert_admins(self, event: ContactSubmitted) -> None:
        from patisserie.identity.queries import admin_recipients

        recipients = admin_recipients()
        if not recipients:
            logger.warning("No admin recipients for contact alert", contact_id=str(event.contact_id))
            return

        email = render(EmailKind.CONTACT_ALERT, event.to_dict())
        for recipient in recipients:
            send_email_safely(recipient, email["subject"], email["body"], email["html_body"])

    @handle(ContactReplied)
    def send_reply(self, event: ContactReplied) -> None:
        email = render(EmailKind.CONTACT_REPLY, event.to_dict())
        send_email_safely(event.email, email["subject"], email["body"], email["html_body"])
