# ABOUTME: Shared helpers for model identifiers and timestamps.
# ABOUTME: Keeps id and clock defaults consistent across all table models.

from datetime import UTC, datetime
from uuid import uuid4


def new_id() -> str:
    """Return a new opaque identifier."""
    return uuid4().hex


def utcnow() -> datetime:
    """Return the current time in UTC."""
    return datetime.now(UTC)
