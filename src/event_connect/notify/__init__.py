# ABOUTME: Notification package for in-app notifications and transactional email.
# ABOUTME: Exports the Notifier, its Dispatcher, the EmailClient, and the inbox reader.

from event_connect.notify.dispatcher import Dispatcher
from event_connect.notify.exceptions import EmailDeliveryError, NotificationError
from event_connect.notify.inbox import InboxEntry, NotificationInbox
from event_connect.notify.mailer import EmailClient
from event_connect.notify.service import Notifier
from event_connect.notify.templates import EmailKind, render_email

__all__ = [
    "Dispatcher",
    "EmailClient",
    "EmailDeliveryError",
    "EmailKind",
    "InboxEntry",
    "NotificationError",
    "NotificationInbox",
    "Notifier",
    "render_email",
]
