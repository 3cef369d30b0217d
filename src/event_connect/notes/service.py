# ABOUTME: Note service for the private notes and tags an attendee keeps about contacts.
# ABOUTME: Saving an empty note with no tags removes the note instead.

import logging

from event_connect.config import Settings
from event_connect.database import DatabaseService
from event_connect.models import ConnectionNote
from event_connect.notes.exceptions import NoteError, NotePeerNotFoundError

logger = logging.getLogger(__name__)

MAX_NOTE_LENGTH = 1000


def parse_tags(tags: str | list[str] | None) -> list[str]:
    """Split comma-separated tags, dropping blanks and surrounding spaces.

    Args:
        tags: A string like "design, hiring" or an already split list.

    Returns:
        The non-empty tags in the order given.
    """
    if not tags:
        return []
    parts = tags.split(",") if isinstance(tags, str) else tags
    return [tag.strip() for tag in parts if tag.strip()]


class NoteService:
    """Reads and writes the author's notes about other attendees."""

    def __init__(self, db_service: DatabaseService, settings: Settings) -> None:
        self._db_service = db_service
        self._settings = settings

    def save_note(
        self,
        author_id: str,
        peer_id: str,
        note: str | None = None,
        tags: str | list[str] | None = None,
    ) -> ConnectionNote | None:
        """Save the author's note and tags about a peer.

        Args:
            author_id: Identity writing the note.
            peer_id: Attendee the note is about.
            note: Free text; blank means no text.
            tags: Comma-separated tags or a list of tags.

        Returns:
            The stored note, or None when the note was empty and was removed.

        Raises:
            NoteError: If the peer is missing or the note is too long.
            NotePeerNotFoundError: If the peer is not an attendee of the event.
            EventNotConfiguredError: If no event id is configured.
        """
        if not peer_id:
            raise NoteError("Choose who the note is about.")

        text = (note or "").strip()
        tag_list = parse_tags(tags)
        if len(text) > MAX_NOTE_LENGTH:
            raise NoteError(f"Notes are limited to {MAX_NOTE_LENGTH} characters.")

        event_id = self._settings.require_event_id()

        if not text and not tag_list:
            self._db_service.delete_connection_note(event_id, author_id, peer_id)
            return None

        peer = self._db_service.get_profile(peer_id)
        if peer is None or peer.event_id != event_id:
            raise NotePeerNotFoundError("That attendee is not part of this event.")

        logger.info("Saving note by %s about %s", author_id, peer_id)
        return self._db_service.save_connection_note(
            event_id, author_id, peer_id, text or None, tag_list or None
        )

    def delete_note(self, author_id: str, peer_id: str) -> bool:
        """Remove the author's note about a peer. Returns True if one existed."""
        event_id = self._settings.require_event_id()
        return self._db_service.delete_connection_note(event_id, author_id, peer_id)

    def get_note(self, author_id: str, peer_id: str) -> ConnectionNote | None:
        event_id = self._settings.require_event_id()
        return self._db_service.get_connection_note(event_id, author_id, peer_id)

    def notes_by_peer(self, author_id: str) -> dict[str, ConnectionNote]:
        """Return the author's notes keyed by peer id."""
        event_id = self._settings.require_event_id()
        return self._db_service.get_connection_notes(event_id, author_id)
