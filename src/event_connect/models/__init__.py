# ABOUTME: Models package for event-connect data structures.
# ABOUTME: Exports the SQLModel tables and their status enums.

from event_connect.models.connection import (
    Connection,
    ConnectionRequest,
    RequestStatus,
    canonical_pair,
)
from event_connect.models.invitation import Invitation, InvitationStatus
from event_connect.models.note import ConnectionNote
from event_connect.models.notification import Notification, NotificationType
from event_connect.models.profile import Profile
from event_connect.models.scan import Scan, ScanSource

__all__ = [
    "Connection",
    "ConnectionRequest",
    "ConnectionNote",
    "Invitation",
    "InvitationStatus",
    "Notification",
    "NotificationType",
    "Profile",
    "RequestStatus",
    "Scan",
    "ScanSource",
    "canonical_pair",
]
