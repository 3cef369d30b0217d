# ABOUTME: SQLModel for in-app notifications delivered to attendees.
# ABOUTME: Each notification points back at the connection request that caused it.

from datetime import datetime
from enum import Enum

from sqlmodel import Field, SQLModel

from event_connect.models.common import new_id, utcnow


class NotificationType(str, Enum):
    """Kinds of in-app notifications."""

    CONNECTION_REQUEST = "connection_request"
    CONNECTION_ACCEPTED = "connection_accepted"


class Notification(SQLModel, table=True):
    """An in-app notification for a single recipient."""

    __tablename__ = "notifications"

    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(index=True)
    actor_id: str
    type: NotificationType
    reference_id: str | None = None
    read: bool = Field(default=False, index=True)
    created_at: datetime = Field(default_factory=utcnow)
