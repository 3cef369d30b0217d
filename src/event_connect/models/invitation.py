# ABOUTME: SQLModel for tokenised event invitations sent by email.
# ABOUTME: Invitations expire after a configurable number of days.

from datetime import UTC, datetime
from enum import Enum

from sqlmodel import Field, SQLModel

from event_connect.models.common import new_id, utcnow


class InvitationStatus(str, Enum):
    """Lifecycle states of an invitation."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    EXPIRED = "expired"


class Invitation(SQLModel, table=True):
    """An invitation for an email address to join an event."""

    __tablename__ = "invitations"

    id: str = Field(default_factory=new_id, primary_key=True)
    event_id: str = Field(index=True)
    email: str = Field(index=True)
    invited_by: str
    token: str = Field(unique=True, index=True)
    status: InvitationStatus = InvitationStatus.PENDING
    expires_at: datetime
    accepted_at: datetime | None = None
    created_at: datetime = Field(default_factory=utcnow)

    def is_expired(self, now: datetime | None = None) -> bool:
        """Return True if the invitation's expiry time has passed."""
        now = now or datetime.now(UTC)
        expires_at = self.expires_at
        # SQLite drops timezone info on the way back out
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=UTC)
        return expires_at <= now
