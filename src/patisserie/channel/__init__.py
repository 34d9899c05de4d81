"""Email channel registry.

``EMAIL_BACKEND`` picks the adapter: ``smtp`` for real delivery, anything else
for the in-memory fake. The adapter is created once and reused.
"""

import structlog

from patisserie.channel.email_port import DeliveryResult, EmailPort
from patisserie.config import bool_setting, int_setting, setting

logger = structlog.get_logger(__name__)

_email_channel: EmailPort | None = None


def _build_email_channel() -> EmailPort:
    if setting("EMAIL_BACKEND", "fake") == "smtp":
        from patisserie.channel.smtp_email import SmtpEmailAdapter

        return SmtpEmailAdapter(
            host=setting("SMTP_HOST", "smtp.gmail.com"),
            port=int_setting("SMTP_PORT", 587),
            username=setting("SMTP_USER"),
            password=setting("SMTP_PASS"),
            sender=setting("EMAIL_FROM", setting("SMTP_USER")),
            use_ssl=bool_setting("SMTP_SECURE"),
        )

    from patisserie.channel.fake_email import FakeEmailAdapter

    return FakeEmailAdapter()


def get_email_channel() -> EmailPort:
    global _email_channel
    if _email_channel is None:
        _email_channel = _build_email_channel()
    return _email_channel


def set_email_channel(channel: EmailPort) -> None:
    global _email_channel
    _email_channel = channel


def reset_channels() -> None:
    global _email_channel
    _email_channel = None


def send_email_safely(to: str, subject: str, body: str, html_body: str | None = None) -> DeliveryResult:
    """Send an email without ever raising; failures are logged and reported."""
    channel = get_email_channel()
    try:
        result = channel.send(to=to, subject=subject, body=body, html_body=html_body)
    except Exception as exc:
        logger.exception("Email dispatch raised", backend=channel.backend, to=to, subject=subject)
        return {"message_id": None, "status": "failed", "error": str(exc)}

    if result.get("status") != "sent":
        logger.warning(
            "Email not delivered", backend=channel.backend, to=to, subject=subject, error=result.get("error")
        )
    else:
        logger.info("Email sent", to=to, subject=subject, message_id=result.get("message_id"))
    return result
