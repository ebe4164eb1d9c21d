"""Mail transports.

``SmtpMailTransport`` delivers through an SMTP relay, one connection per
message.  ``ConsoleMailTransport`` only logs and keeps what it was given,
for local and test environments.  Neither retries.
"""
from __future__ import annotations

import logging
import smtplib
from collections import deque
from email.message import EmailMessage
from typing import Protocol

from legalconsult.core.settings import Settings
from legalconsult.notification.errors import TransportError

logger = logging.getLogger(__name__)


class MailMessage:
    """An outgoing email with an HTML body."""

    def __init__(self, sender: str | None = None) -> None:
        self._message = EmailMessage()
        if sender:
            self._message["From"] = sender

    @property
    def to(self) -> str | None:
        value = self._message["To"]
        return str(value) if value is not None else None

    @property
    def subject(self) -> str | None:
        value = self._message["Subject"]
        return str(value) if value is not None else None

    @property
    def html_body(self) -> str | None:
        body = self._message.get_body(preferencelist=("html",))
        return body.get_content() if body is not None else None

    def set_from(self, address: str) -> None:
        del self._message["From"]
        self._message["From"] = address

    def set_to(self, address: str) -> None:
        del self._message["To"]
        self._message["To"] = address

    def set_subject(self, subject: str) -> None:
        del self._message["Subject"]
        self._message["Subject"] = subject

    def set_html_body(self, html: str) -> None:
        self._message.set_content(html, subtype="html")

    def as_email_message(self) -> EmailMessage:
        return self._message


class MailTransport(Protocol):
    def create_message(self) -> MailMessage: ...

    def send(self, message: MailMessage) -> None: ...


class SmtpMailTransport:
    """Send messages via an SMTP relay."""

    def __init__(
        self,
        host: str,
        port: int = 587,
        sender: str | None = None,
        username: str | None = None,
        password: str | None = None,
        use_tls: bool = True,
        timeout: float = 30.0,
    ) -> None:
        self.host = host
        self.port = port
        self.sender = sender
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    def create_message(self) -> MailMessage:
        return MailMessage(sender=self.sender)

    def send(self, message: MailMessage) -> None:
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                if self.use_tls:
                    server.starttls()
                if self.username:
                    server.login(self.username, self.password or "")
                server.send_message(message.as_email_message())
        except (smtplib.SMTPException, OSError) as exc:
            raise TransportError(f"SMTP delivery via {self.host}:{self.port} failed: {exc}") from exc
        logger.debug("Delivered message via %s:%d", self.host, self.port)


class ConsoleMailTransport:
    """Log messages instead of sending them.

    The last *outbox_size* messages stay in ``outbox`` for inspection.
    """

    def __init__(self, sender: str | None = None, outbox_size: int = 100) -> None:
        self.sender = sender
        self.outbox: deque[MailMessage] = deque(maxlen=outbox_size)

    def create_message(self) -> MailMessage:
        return MailMessage(sender=self.sender)

    def send(self, message: MailMessage) -> None:
        self.outbox.append(message)
        logger.info("Console mail to %s: %s", message.to, message.subject)


def build_transport(settings: Settings) -> MailTransport:
    if settings.mail_backend == "smtp":
        return SmtpMailTransport(
            host=settings.smtp_host,
            port=settings.smtp_port,
            sender=settings.mail_from,
            username=settings.smtp_username,
            password=settings.smtp_password,
            use_tls=settings.smtp_use_tls,
            timeout=settings.smtp_timeout_seconds,
        )
    return ConsoleMailTransport(sender=settings.mail_from)
