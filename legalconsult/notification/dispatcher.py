"""Notification dispatcher: registration and document-assigned emails.

One localized HTML email is rendered and sent per recipient.  A failure
for one recipient (missing template, render error, SMTP error) is logged
and recorded as a ``FAILED`` outcome; it never stops delivery to the
others.  Once every recipient has been attempted, any failures are raised
together as a single ``DeliveryFailedError``.

Sends run on a bounded thread pool.  ``executor.map`` returns outcomes in
input order and only after every send has finished.

There is no idempotency token: calling again after a partial failure
re-sends to recipients that already received the email.
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal

from legalconsult.core.exceptions import DeliveryFailedError
from legalconsult.core.settings import MailConfig
from legalconsult.i18n.translator import Translator
from legalconsult.notification.templates import TemplateRenderer
from legalconsult.notification.transport import MailTransport

logger = logging.getLogger(__name__)

TEMPLATE_EXTENSION = "html"
USERNAME_SEPARATOR = " "


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------

class NotificationKind(str, Enum):
    REGISTRATION = "register"
    DOCUMENT_ASSIGNED = "document-assigned"

    @property
    def subject_key(self) -> str:
        return _SUBJECT_KEYS[self]


_SUBJECT_KEYS: dict[NotificationKind, str] = {
    NotificationKind.REGISTRATION: "register.User.confirmation.subject",
    NotificationKind.DOCUMENT_ASSIGNED: "email.documentAssigned.subject",
}


@dataclass(frozen=True)
class Recipient:
    """A user addressed by a notification."""

    email: str
    first_name: str | None = None
    last_name: str | None = None

    @classmethod
    def from_user(cls, user: Any) -> Recipient:
        return cls(email=user.email, first_name=user.first_name, last_name=user.last_name)


@dataclass(frozen=True)
class DeliveryOutcome:
    """Result of one delivery attempt."""

    email: str
    status: Literal["SENT", "FAILED"]
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.status == "FAILED"


# ---------------------------------------------------------------------------
# Model and name construction
# ---------------------------------------------------------------------------

def build_username(first_name: str | None, last_name: str | None) -> str:
    """Join the non-blank name parts with a single space."""
    parts = [part for part in (first_name, last_name) if part and part.strip()]
    return USERNAME_SEPARATOR.join(parts)


def build_signup_url(base_url: str, email: str) -> str:
    return f"{base_url}/{email}"


def build_document_url(base_url: str, document_id: object) -> str:
    return f"{base_url}/{document_id}"


def template_name(kind: NotificationKind, locale: str, extension: str = TEMPLATE_EXTENSION) -> str:
    """Return e.g. ``register-email-ro.html``."""
    return f"{kind.value}-email-{locale}.{extension}"


def registration_model(recipient: Recipient, config: MailConfig) -> dict[str, str]:
    return {
        "username": build_username(recipient.first_name, recipient.last_name),
        "signupurl": build_signup_url(config.signup_url, recipient.email),
    }


def document_assigned_model(document: Any, recipient: Recipient, config: MailConfig) -> dict[str, str]:
    return {
        "username": build_username(recipient.first_name, recipient.last_name),
        "documenturl": build_document_url(config.document_url, document.id),
    }


# ---------------------------------------------------------------------------
# NotificationDispatcher
# ---------------------------------------------------------------------------

class NotificationDispatcher:
    """Send one templated, localized email per recipient."""

    def __init__(
        self,
        transport: MailTransport,
        translator: Translator,
        renderer: TemplateRenderer,
        config: MailConfig,
        max_workers: int = 4,
    ) -> None:
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        self.transport = transport
        self.translator = translator
        self.renderer = renderer
        self.config = config
        self.max_workers = max_workers

    # -- public operations --------------------------------------------------

    def send_registration_notifications(self, recipients: Iterable[Recipient]) -> None:
        """Send the sign-up invitation to every recipient.

        Raises ``DeliveryFailedError`` listing every address that failed.
        """
        self._dispatch(
            NotificationKind.REGISTRATION,
            recipients,
            lambda recipient: registration_model(recipient, self.config),
        )

    def send_document_assigned_notifications(
        self,
        document: Any,
        recipients: Iterable[Recipient],
    ) -> None:
        """Tell every recipient that *document* (a ``DocumentMetadata``) was assigned to them.

        Raises ``DeliveryFailedError`` listing every address that failed.
        """
        self._dispatch(
            NotificationKind.DOCUMENT_ASSIGNED,
            recipients,
            lambda recipient: document_assigned_model(document, recipient, self.config),
        )

    # -- batch --------------------------------------------------------------

    def _dispatch(
        self,
        kind: NotificationKind,
        recipients: Iterable[Recipient],
        build_model: Callable[[Recipient], Mapping[str, str]],
    ) -> list[DeliveryOutcome]:
        recipients = list(recipients)
        if not recipients:
            return []

        subject = self.translator.translate(kind.subject_key)
        name = template_name(kind, self.config.locale)

        # Models are built here, not in the workers, so ORM attributes are
        # only read on the calling thread.
        models = [build_model(recipient) for recipient in recipients]

        def attempt(recipient: Recipient, model: Mapping[str, str]) -> DeliveryOutcome:
            return self._deliver(subject, name, recipient.email, model)

        workers = min(self.max_workers, len(recipients))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            outcomes = list(executor.map(attempt, recipients, models))

        failed_emails = [outcome.email for outcome in outcomes if outcome.failed]
        logger.info(
            "Sent %d of %d %s emails",
            len(outcomes) - len(failed_emails),
            len(outcomes),
            kind.value,
        )
        if failed_emails:
            raise DeliveryFailedError(failed_emails)
        return outcomes

    # -- single send --------------------------------------------------------

    def _deliver(
        self,
        subject: str,
        name: str,
        email: str,
        model: Mapping[str, str],
    ) -> DeliveryOutcome:
        try:
            message = self.transport.create_message()
            message.set_to(email)
            message.set_subject(subject)
            template = self.renderer.get_template(name)
            message.set_html_body(self.renderer.render(template, model))
            self.transport.send(message)
        except Exception as exc:
            logger.error(
                "Problem preparing or sending email to user with address %s",
                email,
                exc_info=exc,
            )
            return DeliveryOutcome(email=email, status="FAILED", error=str(exc))
        return DeliveryOutcome(email=email, status="SENT")
