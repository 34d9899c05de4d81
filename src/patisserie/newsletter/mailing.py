"""Newsletter broadcast to every active subscriber."""

from urllib.parse import urlencode

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String, Text
from protean.utils.globals import current_domain

from patisserie.channel import send_email_safely
from patisserie.config import setting
from patisserie.domain import patisserie
from patisserie.newsletter.subscriber import Subscriber, SubscriberStatus
from patisserie.templates import EmailKind, render

logger = structlog.get_logger(__name__)


@patisserie.command(part_of="Subscriber")
class SendNewsletter:
    subject: String(max_length=200)
    body: Text()


@patisserie.command_handler(part_of=Subscriber)
class NewsletterMailingHandler:
    @handle(SendNewsletter)
    def send_newsletter(self, command):
        errors = {}
        if not command.subject or not command.subject.strip():
            errors["subject"] = ["Subject is required"]
        if not command.body or not command.body.strip():
            errors["body"] = ["Body is required"]
        if errors:
            raise ValidationError(errors)

        repo = current_domain.repository_for(Subscriber)
        subscribers = repo._dao.query.filter(status=SubscriberStatus.ACTIVE.value).limit(None).all().items
        storefront = setting("STOREFRONT_URL", "https://www.lapatisserie.shop")

        sent, failed = 0, 0
        for subscriber in subscribers:
            email = render(
                EmailKind.NEWSLETTER,
                {
                    "subject": command.subject,
                    "body": command.body,
                    "unsubscribe_url": f"{storefront}/newsletter?{urlencode({'unsubscribe': subscriber.email})}",
                },
            )
            result = send_email_safely(subscriber.email, email["subject"], email["body"], email["html_body"])
            if result.get("status") == "sent":
                sent += 1
                subscriber.mark_emailed()
                repo.add(subscriber)
            else:
                failed += 1

        logger.info("Newsletter sent", subject=command.subject, sent=sent, failed=failed)
        return {"sent": sent, "failed": failed, "totalSubscribers": len(subscribers)}
