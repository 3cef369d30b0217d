# ABOUTME: Exceptions raised by the database service.
# ABOUTME: Lets callers tell constraint violations and bad transitions apart from outages.

from event_connect.errors import EventConnectError


class DatabaseError(EventConnectError):
    """Base exception for persistence errors."""

    pass


class DuplicateRecordError(DatabaseError):
    """Raised when an insert violates a uniqueness constraint."""

    pass


class RecordNotFoundError(DatabaseError):
    """Raised when a record addressed by id does not exist."""

    pass


class InvalidTransitionError(DatabaseError):
    """Raised when a status change is not allowed from the record's current state."""

    pass
