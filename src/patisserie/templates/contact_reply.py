"""Contact reply: the admin's answer, sent back to the visitor."""

from html import escape

from patisserie.templates.common import BRAND, layout


class ContactReplyTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        subject = context.get("subject", "")
        reply = context.get("reply", "")
        original = context.get("message", "")

        body = (
            f"Hi {context.get('name', '')},\n\n{reply}\n\n"
            f"--- Your message ---\n{original}\n\n{BRAND}"
        )
        html_body = layout(
            f"Re: {subject}",
            f"<p>Hi {escape(context.get('name', ''))},</p><p>{escape(reply)}</p>"
            f"<hr><p style=\"color: #666;\">{escape(original)}</p>",
        )
        return {"subject": f"Re: {subject} - {BRAND}", "body": body, "html_body": html_body}
