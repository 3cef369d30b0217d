# ABOUTME: Database package for event-connect persistence layer.
# ABOUTME: Provides DatabaseService for SQLite operations using SQLModel.

from event_connect.database.exceptions import (
    DatabaseError,
    DuplicateRecordError,
    InvalidTransitionError,
    RecordNotFoundError,
)
from event_connect.database.service import Approval, DatabaseService

__all__ = [
    "Approval",
    "DatabaseError",
    "DatabaseService",
    "DuplicateRecordError",
    "InvalidTransitionError",
    "RecordNotFoundError",
]
