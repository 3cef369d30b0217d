# ABOUTME: Administrator checks based on the configured email allowlist, and admin listings.
# ABOUTME: Admin commands in the CLI call require_admin before doing anything.

from dataclasses import dataclass
from datetime import datetime

from event_connect.config import Settings
from event_connect.database import DatabaseService
from event_connect.errors import EventConnectError
from event_connect.models import Profile


class NotAuthorizedError(EventConnectError):
    """Raised when a non-admin tries to use an admin operation."""

    pass


@dataclass
class ConnectionRow:
    """One event connection with both attendees' names resolved."""

    connection_id: str
    user_a_id: str
    user_a_name: str
    user_b_id: str
    user_b_name: str
    created_at: datetime


def is_admin(email: str | None, settings: Settings) -> bool:
    """Return True if the email is in the admin allowlist, ignoring case."""
    if not email:
        return False
    return email.strip().lower() in {admin.lower() for admin in settings.admin_email_list}


def require_admin(email: str | None, settings: Settings) -> None:
    """Raise NotAuthorizedError unless the email belongs to an admin."""
    if not is_admin(email, settings):
        raise NotAuthorizedError("Not authorized.")


def list_attendees(db_service: DatabaseService, event_id: str) -> list[Profile]:
    """Return the event's attendees, most recently joined first."""
    return db_service.list_event_profiles(event_id)


def list_connection_rows(db_service: DatabaseService, event_id: str) -> list[ConnectionRow]:
    """Return the event's connections, newest first, with attendee names.

    Attendees without a profile are shown by id.
    """
    connections = db_service.list_event_connections(event_id)
    ids = {c.user_low_id for c in connections} | {c.user_high_id for c in connections}
    profiles = db_service.get_profiles(sorted(ids))

    def name_of(user_id: str) -> str:
        profile = profiles.get(user_id)
        return profile.name if profile is not None else user_id

    return [
        ConnectionRow(
            connection_id=connection.id,
            user_a_id=connection.user_low_id,
            user_a_name=name_of(connection.user_low_id),
            user_b_id=connection.user_high_id,
            user_b_name=name_of(connection.user_high_id),
            created_at=connection.created_at,
        )
        for connection in connections
    ]
