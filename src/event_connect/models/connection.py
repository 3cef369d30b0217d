# ABOUTME: SQLModels for connection requests and confirmed connections.
# ABOUTME: Uniqueness constraints here are what keeps the connection ledger idempotent.

from datetime import datetime
from enum import Enum

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from event_connect.models.common import new_id, utcnow


class RequestStatus(str, Enum):
    """Lifecycle states of a connection request."""

    PENDING = "pending"
    APPROVED = "approved"
    DECLINED = "declined"


class ConnectionRequest(SQLModel, table=True):
    """A one-directional request from requester to recipient within an event."""

    __tablename__ = "connection_requests"
    __table_args__ = (
        UniqueConstraint("event_id", "requester_id", "recipient_id", name="uq_request_direction"),
    )

    id: str = Field(default_factory=new_id, primary_key=True)
    event_id: str = Field(index=True)
    requester_id: str = Field(index=True)
    recipient_id: str = Field(index=True)
    status: RequestStatus = RequestStatus.PENDING
    created_at: datetime = Field(default_factory=utcnow)


class Connection(SQLModel, table=True):
    """A confirmed, undirected connection stored under its canonical pair."""

    __tablename__ = "connections"
    __table_args__ = (
        UniqueConstraint("event_id", "user_low_id", "user_high_id", name="uq_connection_pair"),
    )

    id: str = Field(default_factory=new_id, primary_key=True)
    event_id: str = Field(index=True)
    user_low_id: str = Field(index=True)
    user_high_id: str = Field(index=True)
    created_at: datetime = Field(default_factory=utcnow)

    def peer_of(self, user_id: str) -> str:
        """Return the other side of the connection for the given user."""
        return self.user_high_id if user_id == self.user_low_id else self.user_low_id


def canonical_pair(user_a: str, user_b: str) -> tuple[str, str]:
    """Return the two ids ordered so either direction maps to the same pair.

    Args:
        user_a: One side of the pair.
        user_b: The other side of the pair.

    Returns:
        Tuple of (lowest id, highest id).
    """
    return (user_a, user_b) if user_a <= user_b else (user_b, user_a)
