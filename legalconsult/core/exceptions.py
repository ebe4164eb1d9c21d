"""Application errors carried up to the HTTP layer.

``LegalValidationError`` holds a message key and its arguments rather than
a rendered message; the API translates the key with the configured locale
when building the response.
"""
from __future__ import annotations

from collections.abc import Iterable


class LegalValidationError(Exception):
    """Client error identified by an i18n message key."""

    def __init__(
        self,
        i18n_key: str,
        i18n_args: Iterable[str] | None = None,
        status_code: int = 400,
    ) -> None:
        self.i18n_key = i18n_key
        self.i18n_args = list(i18n_args or [])
        self.status_code = status_code
        super().__init__(f"{i18n_key}: {self.i18n_args}" if self.i18n_args else i18n_key)


class DeliveryFailedError(LegalValidationError):
    """Raised once per batch when at least one email could not be delivered."""

    def __init__(self, failed_emails: Iterable[str]) -> None:
        super().__init__("user.Email.send.failed", failed_emails, status_code=400)

    @property
    def failed_emails(self) -> list[str]:
        return self.i18n_args


class NotFoundError(LookupError):
    """Raised when a single-entity lookup finds nothing."""

    def __init__(self, entity: str, identifier: object) -> None:
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} {identifier} not found")
