"""Newsletter: admin-authored broadcast with an unsubscribe footer."""

from html import escape

from patisserie.templates.common import BRAND, layout


class NewsletterTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        unsubscribe_url = context.get("unsubscribe_url", "")
        content = context.get("body", "")

        body = f"{content}\n\n--\n{BRAND}\nUnsubscribe: {unsubscribe_url}"
        html_body = layout(
            context.get("subject", BRAND),
            f"<div>{escape(content)}</div>"
            f"<p style=\"font-size: 12px;\"><a href=\"{escape(unsubscribe_url)}\">Unsubscribe</a></p>",
        )
        return {"subject": context.get("subject", BRAND), "body": body, "html_body": html_body}
