"""SMTP email adapter (Gmail and any STARTTLS/SSL relay) built on ``aiosmtplib``.

Order and contact handlers are synchronous, so :meth:`SmtpEmailAdapter.send`
drives the async client to completion itself. Inside a running event loop
(a FastAPI request) the delivery runs on a short-lived worker thread.
"""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import make_msgid

import aiosmtplib
import structlog

from patisserie.channel.email_port import DeliveryResult, EmailPort

logger = structlog.get_logger(__name__)


def _run(coroutine):
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coroutine)

    with ThreadPoolExecutor(max_workers=1) as executor:
        return executor.submit(asyncio.run, coroutine).result()


class SmtpEmailAdapter(EmailPort):
    backend = "smtp"

    def __init__(
        self,
        host: str,
        port: int,
        username: str | None,
        password: str | None,
        sender: str,
        use_ssl: bool = False,
        timeout: int = 30,
    ) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender
        self.use_ssl = use_ssl
        self.timeout = timeout

    def _client(self) -> aiosmtplib.SMTP:
        # Implicit TLS on the SSL port, STARTTLS upgrade everywhere else
        return aiosmtplib.SMTP(
            hostname=self.host,
            port=self.port,
            timeout=self.timeout,
            use_tls=self.use_ssl,
            start_tls=not self.use_ssl,
        )

    async def _deliver(self, message: MIMEMultipart) -> None:
        async with self._client() as client:
            if self.username and self.password:
                await client.login(self.username, self.password)
            await client.send_message(message)

    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
    ) -> DeliveryResult:
        message = MIMEMultipart("alternative")
        message["Subject"] = subject
        message["From"] = self.sender
        message["To"] = to
        message["Message-ID"] = make_msgid(domain=self.host)
        message.attach(MIMEText(body, "plain", "utf-8"))
        if html_body:
            message.attach(MIMEText(html_body, "html", "utf-8"))

        try:
            _run(self._deliver(message))
        except (aiosmtplib.SMTPException, OSError) as exc:
            logger.error("SMTP delivery failed", to=to, subject=subject, error=str(exc))
            return {"message_id": None, "status": "failed", "error": str(exc)}

        return {"message_id": message["Message-ID"], "status": "sent"}
