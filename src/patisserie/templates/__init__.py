"""Template registry: maps an email kind to the class that renders it.

Each template renders ``{"subject", "body", "html_body"}`` from a context dict.
"""

from enum import Enum

from patisserie.templates.common import status_label
from patisserie.templates.contact_alert import ContactAlertTemplate
from patisserie.templates.contact_reply import ContactReplyTemplate
from patisserie.templates.new_order_alert import NewOrderAlertTemplate
from patisserie.templates.newsletter import NewsletterTemplate
from patisserie.templates.order_confirmation import OrderConfirmationTemplate
from patisserie.templates.order_status import OrderStatusTemplate


class EmailKind(Enum):
    ORDER_CONFIRMATION = "order_confirmation"
    NEW_ORDER_ALERT = "new_order_alert"
    ORDER_STATUS = "order_status"
    CONTACT_ALERT = "contact_alert"
    CONTACT_REPLY = "contact_reply"
    NEWSLETTER = "newsletter"


TEMPLATE_REGISTRY: dict[str, type] = {
    EmailKind.ORDER_CONFIRMATION.value: OrderConfirmationTemplate,
    EmailKind.NEW_ORDER_ALERT.value: NewOrderAlertTemplate,
    EmailKind.ORDER_STATUS.value: OrderStatusTemplate,
    EmailKind.CONTACT_ALERT.value: ContactAlertTemplate,
    EmailKind.CONTACT_REPLY.value: ContactReplyTemplate,
    EmailKind.NEWSLETTER.value: NewsletterTemplate,
}


def render(kind: EmailKind | str, context: dict) -> dict:
    key = kind.value if isinstance(kind, EmailKind) else kind
    template_cls = TEMPLATE_REGISTRY.get(key)
    if template_cls is None:
        raise ValueError(f"No template registered for email kind: {key}")
    return template_cls.render(context)


__all__ = ["EmailKind", "TEMPLATE_REGISTRY", "render", "status_label"]
