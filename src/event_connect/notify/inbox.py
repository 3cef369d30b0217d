# ABOUTME: Read side of in-app notifications for the notification bell.
# ABOUTME: Lists recent notifications with their actors and marks them read.

from dataclasses import dataclass

from event_connect.database import DatabaseService
from event_connect.models import Notification, Profile


@dataclass
class InboxEntry:
    """A notification paired with the profile of whoever caused it."""

    notification: Notification
    actor: Profile | None


class NotificationInbox:
    """Per-user view over stored notifications."""

    DEFAULT_LIMIT = 10

    def __init__(self, db_service: DatabaseService) -> None:
        self._db_service = db_service

    def list_entries(self, user_id: str, limit: int = DEFAULT_LIMIT) -> list[InboxEntry]:
        """Return the latest notifications, unread first, with actor profiles attached."""
        notifications = self._db_service.get_notifications(user_id, limit=limit)
        actors = self._db_service.get_profiles(
            sorted({notification.actor_id for notification in notifications})
        )
        return [
            InboxEntry(notification=notification, actor=actors.get(notification.actor_id))
            for notification in notifications
        ]

    def unread_count(self, user_id: str) -> int:
        return self._db_service.count_unread_notifications(user_id)

    def mark_read(self, user_id: str, notification_id: str) -> bool:
        """Mark one notification read; returns False if it is not the user's."""
        return self._db_service.mark_notification_read(user_id, notification_id)

    def mark_all_read(self, user_id: str) -> int:
        return self._db_service.mark_all_notifications_read(user_id)
