# ABOUTME: Database service for managing SQLite connections and CRUD operations.
# ABOUTME: Owns the uniqueness handling and the atomic approve-and-connect routine.

import logging
from collections.abc import Generator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

from sqlalchemy import or_, update
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, SQLModel, col, create_engine, func, select

from event_connect.database.exceptions import (
    DuplicateRecordError,
    InvalidTransitionError,
    RecordNotFoundError,
)
from event_connect.models import (
    Connection,
    ConnectionNote,
    ConnectionRequest,
    Invitation,
    InvitationStatus,
    Notification,
    Profile,
    RequestStatus,
    Scan,
    canonical_pair,
)
from event_connect.models.common import utcnow

logger = logging.getLogger(__name__)


@dataclass
class Approval:
    """Outcome of approving a connection request."""

    connection: Connection
    approved_now: bool


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so the text matches literally."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class DatabaseService:
    """Service for managing database connections and operations."""

    DEFAULT_DB_PATH = Path.home() / ".event-connect" / "data.db"

    def __init__(self, db_path: Path | None = None) -> None:
        """Initialize the database service.

        Args:
            db_path: Path to the SQLite database file. Defaults to ~/.event-connect/data.db
        """
        self.db_path = db_path if db_path is not None else self.DEFAULT_DB_PATH
        self._engine = create_engine(
            f"sqlite:///{self.db_path}",
            echo=False,
            connect_args={"check_same_thread": False, "timeout": 30},
        )

    def init_db(self) -> None:
        """Initialize the database by creating tables and parent directories."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        SQLModel.metadata.create_all(self._engine)

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """Get a database session as a context manager.

        Yields:
            SQLModel Session for database operations.
        """
        with Session(self._engine) as session:
            yield session

    def _insert(self, record: SQLModel) -> SQLModel:
        with self.get_session() as session:
            session.add(record)
            try:
                session.commit()
            except IntegrityError as e:
                session.rollback()
                raise DuplicateRecordError(
                    f"{type(record).__name__} already exists: {e.orig}"
                ) from e
            session.refresh(record)
            return record

    # Profiles

    def save_profile(self, profile: Profile) -> Profile:
        """Insert or update a profile.

        Args:
            profile: The Profile to save.

        Returns:
            The saved Profile with database state refreshed.
        """
        with self.get_session() as session:
            merged = session.merge(profile)
            session.commit()
            session.refresh(merged)
            return merged

    def get_profile(self, profile_id: str) -> Profile | None:
        """Retrieve a profile by identity id."""
        with self.get_session() as session:
            return session.get(Profile, profile_id)

    def get_profile_by_slug(self, slug: str) -> Profile | None:
        """Retrieve a profile by its public slug."""
        with self.get_session() as session:
            statement = select(Profile).where(Profile.slug == slug)
            return session.exec(statement).first()

    def get_profile_by_account_email(self, email: str) -> Profile | None:
        """Retrieve a profile by the identity's login email, ignoring case."""
        with self.get_session() as session:
            statement = select(Profile).where(
                func.lower(Profile.account_email) == email.lower()
            )
            return session.exec(statement).first()

    def get_profiles(self, profile_ids: list[str]) -> dict[str, Profile]:
        """Retrieve several profiles at once, keyed by id."""
        if not profile_ids:
            return {}
        with self.get_session() as session:
            statement = select(Profile).where(col(Profile.id).in_(profile_ids))
            return {profile.id: profile for profile in session.exec(statement).all()}

    def search_profiles(
        self,
        event_id: str,
        query: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Profile]:
        """Search the event directory.

        Args:
            event_id: Event whose attendees are searched.
            query: Optional text matched case-insensitively against name,
                headline, company, and job title.
            limit: Maximum number of profiles to return.
            offset: Number of profiles to skip.

        Returns:
            List of matching profiles ordered by name.
        """
        with self.get_session() as session:
            statement = select(Profile).where(Profile.event_id == event_id)
            if query and query.strip():
                pattern = f"%{escape_like(query.strip())}%"
                statement = statement.where(
                    or_(
                        col(Profile.name).ilike(pattern, escape="\\"),
                        col(Profile.headline).ilike(pattern, escape="\\"),
                        col(Profile.company).ilike(pattern, escape="\\"),
                        col(Profile.job_title).ilike(pattern, escape="\\"),
                    )
                )
            statement = statement.order_by(col(Profile.name)).offset(offset).limit(limit)
            return list(session.exec(statement).all())

    def list_event_profiles(self, event_id: str) -> list[Profile]:
        """List every attendee of the event, most recently joined first."""
        with self.get_session() as session:
            statement = (
                select(Profile)
                .where(Profile.event_id == event_id)
                .order_by(col(Profile.joined_event_at).desc(), col(Profile.name))
            )
            return list(session.exec(statement).all())

    # Connection requests

    def get_request(self, request_id: str) -> ConnectionRequest | None:
        """Retrieve a connection request by id."""
        with self.get_session() as session:
            return session.get(ConnectionRequest, request_id)

    def find_request(
        self, event_id: str, requester_id: str, recipient_id: str
    ) -> ConnectionRequest | None:
        """Look up the request for one direction of a pair."""
        with self.get_session() as session:
            statement = select(ConnectionRequest).where(
                ConnectionRequest.event_id == event_id,
                ConnectionRequest.requester_id == requester_id,
                ConnectionRequest.recipient_id == recipient_id,
            )
            return session.exec(statement).first()

    def find_requests_between(
        self, event_id: str, user_a: str, user_b: str
    ) -> list[ConnectionRequest]:
        """Return the requests in both directions between two users."""
        with self.get_session() as session:
            statement = select(ConnectionRequest).where(
                ConnectionRequest.event_id == event_id,
                or_(
                    (ConnectionRequest.requester_id == user_a)
                    & (ConnectionRequest.recipient_id == user_b),
                    (ConnectionRequest.requester_id == user_b)
                    & (ConnectionRequest.recipient_id == user_a),
                ),
            )
            return list(session.exec(statement).all())

    def list_requests(
        self,
        event_id: str,
        recipient_id: str | None = None,
        requester_id: str | None = None,
        status: RequestStatus | None = None,
    ) -> list[ConnectionRequest]:
        """List requests filtered by direction and status, newest first."""
        with self.get_session() as session:
            statement = select(ConnectionRequest).where(ConnectionRequest.event_id == event_id)
            if recipient_id is not None:
                statement = statement.where(ConnectionRequest.recipient_id == recipient_id)
            if requester_id is not None:
                statement = statement.where(ConnectionRequest.requester_id == requester_id)
            if status is not None:
                statement = statement.where(ConnectionRequest.status == status)
            statement = statement.order_by(col(ConnectionRequest.created_at).desc())
            return list(session.exec(statement).all())

    def insert_request(self, request: ConnectionRequest) -> ConnectionRequest:
        """Insert a new connection request.

        Raises:
            DuplicateRecordError: If a request for the same direction already exists.
        """
        return self._insert(request)  # type: ignore[return-value]

    def decline_request(self, request_id: str) -> bool:
        """Move a pending request to declined.

        Returns:
            True if the request was pending and is now declined, False otherwise.
        """
        with self.get_session() as session:
            statement = (
                update(ConnectionRequest)
                .where(
                    col(ConnectionRequest.id) == request_id,
                    col(ConnectionRequest.status) == RequestStatus.PENDING,
                )
                .values(status=RequestStatus.DECLINED)
            )
            result = session.exec(statement)  # type: ignore[call-overload]
            session.commit()
            return result.rowcount == 1

    def approve_request_atomic(self, request_id: str) -> Approval:
        """Approve a request and create its connection in one transaction.

        The pair is derived from the request row. Approving an already
        approved request returns the existing connection with
        ``approved_now`` set to False.

        Args:
            request_id: Id of the request to approve.

        Returns:
            The connection for the request's pair, and whether this call moved
            the request out of pending.

        Raises:
            RecordNotFoundError: If the request does not exist.
            InvalidTransitionError: If the request was declined.
        """
        for attempt in range(2):
            with self.get_session() as session:
                request = session.get(ConnectionRequest, request_id)
                if request is None:
                    raise RecordNotFoundError(f"Connection request {request_id} not found")

                flip = (
                    update(ConnectionRequest)
                    .where(
                        col(ConnectionRequest.id) == request_id,
                        col(ConnectionRequest.status) == RequestStatus.PENDING,
                    )
                    .values(status=RequestStatus.APPROVED)
                )
                approved_now = session.exec(flip).rowcount == 1  # type: ignore[call-overload]
                if not approved_now:
                    current = session.exec(
                        select(ConnectionRequest.status).where(
                            ConnectionRequest.id == request_id
                        )
                    ).one()
                    if current != RequestStatus.APPROVED:
                        session.rollback()
                        raise InvalidTransitionError(
                            f"Connection request {request_id} was declined "
                            "and cannot be approved"
                        )

                low, high = canonical_pair(request.requester_id, request.recipient_id)
                connection = self._find_connection(session, request.event_id, low, high)
                if connection is None:
                    connection = Connection(
                        event_id=request.event_id, user_low_id=low, user_high_id=high
                    )
                    session.add(connection)

                try:
                    session.commit()
                except IntegrityError:
                    # Another writer created the pair between our read and commit
                    session.rollback()
                    if attempt:
                        raise
                    logger.debug("Retrying approval of %s after pair conflict", request_id)
                    continue

                session.refresh(connection)
                return Approval(connection=connection, approved_now=approved_now)

        raise RecordNotFoundError(f"Connection request {request_id} not found")

    # Connections

    @staticmethod
    def _find_connection(
        session: Session, event_id: str, low: str, high: str
    ) -> Connection | None:
        statement = select(Connection).where(
            Connection.event_id == event_id,
            Connection.user_low_id == low,
            Connection.user_high_id == high,
        )
        return session.exec(statement).first()

    def get_connection(self, event_id: str, user_a: str, user_b: str) -> Connection | None:
        """Look up the connection between two users, in either order."""
        low, high = canonical_pair(user_a, user_b)
        with self.get_session() as session:
            return self._find_connection(session, event_id, low, high)

    def upsert_connection(self, event_id: str, user_a: str, user_b: str) -> Connection:
        """Create the canonical connection for a pair, or return the existing one."""
        low, high = canonical_pair(user_a, user_b)
        try:
            return self._insert(  # type: ignore[return-value]
                Connection(event_id=event_id, user_low_id=low, user_high_id=high)
            )
        except DuplicateRecordError:
            existing = self.get_connection(event_id, low, high)
            if existing is None:
                raise
            return existing

    def list_connections(self, event_id: str, user_id: str) -> list[Connection]:
        """List every connection the user is part of, newest first."""
        with self.get_session() as session:
            statement = (
                select(Connection)
                .where(
                    Connection.event_id == event_id,
                    or_(Connection.user_low_id == user_id, Connection.user_high_id == user_id),
                )
                .order_by(col(Connection.created_at).desc())
            )
            return list(session.exec(statement).all())

    def list_event_connections(self, event_id: str) -> list[Connection]:
        """List every connection of the event, newest first."""
        with self.get_session() as session:
            statement = (
                select(Connection)
                .where(Connection.event_id == event_id)
                .order_by(col(Connection.created_at).desc())
            )
            return list(session.exec(statement).all())

    # Connection notes

    @staticmethod
    def _find_note(
        session: Session, event_id: str, author_id: str, peer_id: str
    ) -> ConnectionNote | None:
        statement = select(ConnectionNote).where(
            ConnectionNote.event_id == event_id,
            ConnectionNote.author_id == author_id,
            ConnectionNote.peer_id == peer_id,
        )
        return session.exec(statement).first()

    def get_connection_note(
        self, event_id: str, author_id: str, peer_id: str
    ) -> ConnectionNote | None:
        """Return the author's note about a peer, if any."""
        with self.get_session() as session:
            return self._find_note(session, event_id, author_id, peer_id)

    def get_connection_notes(self, event_id: str, author_id: str) -> dict[str, ConnectionNote]:
        """Return all of the author's notes, keyed by peer id."""
        with self.get_session() as session:
            statement = select(ConnectionNote).where(
                ConnectionNote.event_id == event_id,
                ConnectionNote.author_id == author_id,
            )
            return {note.peer_id: note for note in session.exec(statement).all()}

    def save_connection_note(
        self,
        event_id: str,
        author_id: str,
        peer_id: str,
        note: str | None,
        tags: list[str] | None,
    ) -> ConnectionNote:
        """Create or replace the author's note about a peer.

        Returns:
            The stored note.
        """
        for attempt in range(2):
            with self.get_session() as session:
                record = self._find_note(session, event_id, author_id, peer_id)
                if record is None:
                    record = ConnectionNote(
                        event_id=event_id, author_id=author_id, peer_id=peer_id
                    )
                record.note = note
                record.tags = tags
                record.updated_at = utcnow()
                session.add(record)

                try:
                    session.commit()
                except IntegrityError:
                    # A concurrent save inserted the row first; update it instead
                    session.rollback()
                    if attempt:
                        raise
                    continue

                session.refresh(record)
                return record

        raise DuplicateRecordError(f"Note by {author_id} about {peer_id} could not be saved")

    def delete_connection_note(self, event_id: str, author_id: str, peer_id: str) -> bool:
        """Delete the author's note about a peer.

        Returns:
            True if a note was deleted.
        """
        with self.get_session() as session:
            record = self._find_note(session, event_id, author_id, peer_id)
            if record is None:
                return False
            session.delete(record)
            session.commit()
            return True

    # Notifications

    def save_notification(self, notification: Notification) -> Notification:
        """Insert a notification."""
        return self._insert(notification)  # type: ignore[return-value]

    def get_notifications(self, user_id: str, limit: int = 10) -> list[Notification]:
        """Return a user's notifications, unread first and newest first."""
        with self.get_session() as session:
            statement = (
                select(Notification)
                .where(Notification.user_id == user_id)
                .order_by(col(Notification.read).asc(), col(Notification.created_at).desc())
                .limit(limit)
            )
            return list(session.exec(statement).all())

    def count_unread_notifications(self, user_id: str) -> int:
        """Count a user's unread notifications."""
        with self.get_session() as session:
            statement = (
                select(func.count())
                .select_from(Notification)
                .where(Notification.user_id == user_id, col(Notification.read).is_(False))
            )
            return session.exec(statement).one()

    def mark_notification_read(self, user_id: str, notification_id: str) -> bool:
        """Mark one of the user's notifications as read.

        Returns:
            True if a notification owned by the user was found.
        """
        with self.get_session() as session:
            notification = session.get(Notification, notification_id)
            if notification is None or notification.user_id != user_id:
                return False
            notification.read = True
            session.add(notification)
            session.commit()
            return True

    def mark_all_notifications_read(self, user_id: str) -> int:
        """Mark every unread notification of the user as read.

        Returns:
            Number of notifications updated.
        """
        with self.get_session() as session:
            statement = (
                update(Notification)
                .where(col(Notification.user_id) == user_id, col(Notification.read).is_(False))
                .values(read=True)
            )
            result = session.exec(statement)  # type: ignore[call-overload]
            session.commit()
            return result.rowcount

    # Scans

    def save_scan(self, scan: Scan) -> Scan:
        """Insert a scan record."""
        return self._insert(scan)  # type: ignore[return-value]

    # Invitations

    def save_invitation(self, invitation: Invitation) -> Invitation:
        """Insert or update an invitation."""
        with self.get_session() as session:
            merged = session.merge(invitation)
            session.commit()
            session.refresh(merged)
            return merged

    def get_invitation_by_token(self, token: str) -> Invitation | None:
        """Retrieve an invitation by its token."""
        with self.get_session() as session:
            statement = select(Invitation).where(Invitation.token == token)
            return session.exec(statement).first()

    def find_pending_invitation(self, event_id: str, email: str) -> Invitation | None:
        """Return the pending invitation for an address within an event, if any."""
        with self.get_session() as session:
            statement = select(Invitation).where(
                Invitation.event_id == event_id,
                Invitation.email == email,
                Invitation.status == InvitationStatus.PENDING,
            )
            return session.exec(statement).first()
