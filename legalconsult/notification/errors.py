"""Failures raised while preparing or sending a single email.

The dispatcher demotes all of them to a failed delivery for that one
recipient.
"""


class NotificationError(Exception):
    """Base class for per-recipient notification failures."""


class TemplateResolutionError(NotificationError):
    """Raised when a template cannot be found or parsed."""


class RenderError(NotificationError):
    """Raised when a template fails to render with the given model."""


class TransportError(NotificationError):
    """Raised when the mail transport rejects or cannot send a message."""
