"""Contact alert: tells the admins a new contact message arrived."""

from html import escape

from patisserie.templates.common import layout


class ContactAlertTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        subject = context.get("subject", "")
        sender = f"{context.get('name', '')} <{context.get('email', '')}>"
        message = context.get("message", "")

        body = f"From: {sender}\nPhone: {context.get('phone') or '-'}\nSubject: {subject}\n\n{message}"
        html_body = layout(
            "New Contact Message",
            f"<p><strong>From:</strong> {escape(sender)}<br><strong>Subject:</strong> {escape(subject)}</p>"
            f"<blockquote>{escape(message)}</blockquote>",
        )
        return {"subject": f"New Contact Message - {subject}", "body": body, "html_body": html_body}
