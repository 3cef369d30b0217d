# ABOUTME: SQLModel for an attendee's private note about one of their contacts.
# ABOUTME: Each author keeps at most one note and tag list per peer within an event.

from datetime import datetime

from sqlalchemy import JSON, Column, UniqueConstraint
from sqlmodel import Field, SQLModel

from event_connect.models.common import new_id, utcnow


class ConnectionNote(SQLModel, table=True):
    """A private note the author keeps about a peer. Only the author sees it."""

    __tablename__ = "connection_notes"
    __table_args__ = (
        UniqueConstraint("event_id", "author_id", "peer_id", name="uq_note_author_peer"),
    )

    id: str = Field(default_factory=new_id, primary_key=True)
    event_id: str = Field(index=True)
    author_id: str = Field(index=True)
    peer_id: str = Field(index=True)
    note: str | None = None
    tags: list[str] | None = Field(default=None, sa_column=Column(JSON))
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
