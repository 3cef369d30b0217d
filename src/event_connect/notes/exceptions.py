# ABOUTME: Exceptions for private connection notes.
# ABOUTME: Covers missing peers and notes that are too long to store.

from event_connect.errors import EventConnectError


class NoteError(EventConnectError):
    """Raised when a note cannot be saved."""

    pass


class NotePeerNotFoundError(NoteError):
    """Raised when the note's peer is not an attendee of the event."""

    pass
