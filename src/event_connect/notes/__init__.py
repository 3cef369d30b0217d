# ABOUTME: Notes package for private notes about connections.
# ABOUTME: Exports NoteService, the tag parser, and note exceptions.

from event_connect.notes.exceptions import NoteError, NotePeerNotFoundError
from event_connect.notes.service import NoteService, parse_tags

__all__ = ["NoteError", "NotePeerNotFoundError", "NoteService", "parse_tags"]
