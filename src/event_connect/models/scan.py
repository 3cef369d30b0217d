# ABOUTME: SQLModel for contact events logged when someone opens a profile.
# ABOUTME: Records who looked at whom, and whether it came from a QR code, directory, or link.

from datetime import datetime
from enum import Enum

from sqlmodel import Field, SQLModel

from event_connect.models.common import new_id, utcnow


class ScanSource(str, Enum):
    """Where a scan originated."""

    QR = "qr"
    DIRECTORY = "directory"
    LINK = "link"


class Scan(SQLModel, table=True):
    """A logged contact event."""

    __tablename__ = "scans"

    id: str = Field(default_factory=new_id, primary_key=True)
    event_id: str = Field(index=True)
    profile_id: str = Field(index=True)
    by_user_id: str = Field(index=True)
    source: ScanSource
    created_at: datetime = Field(default_factory=utcnow)
