# ABOUTME: Exceptions for notification and email delivery.
# ABOUTME: These never reach ledger callers; the dispatcher logs and drops them.

from event_connect.errors import EventConnectError


class NotificationError(EventConnectError):
    """Base exception for notification failures."""

    pass


class EmailDeliveryError(NotificationError):
    """Raised when the email provider rejects or cannot receive a message."""

    pass
