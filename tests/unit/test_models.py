# ABOUTME: Unit tests for data models (Profile, ConnectionRequest, Connection, Invitation).
# ABOUTME: Tests defaults, the canonical pair ordering, completion scores, and expiry checks.

from datetime import UTC, datetime, timedelta

import pytest

from event_connect.ledger import ConnectionState
from event_connect.models import (
    Connection,
    ConnectionRequest,
    Invitation,
    InvitationStatus,
    Notification,
    NotificationType,
    Profile,
    RequestStatus,
    canonical_pair,
)


class TestCanonicalPair:
    """Tests for canonical_pair."""

    @pytest.mark.parametrize(
        ("a", "b", "expected"),
        [
            ("alice", "bob", ("alice", "bob")),
            ("bob", "alice", ("alice", "bob")),
            ("u-2", "u-10", ("u-10", "u-2")),
            ("same", "same", ("same", "same")),
        ],
    )
    def test_orders_ids(self, a: str, b: str, expected: tuple[str, str]) -> None:
        """Test that the pair is ordered by plain string comparison."""
        assert canonical_pair(a, b) == expected

    def test_symmetric(self) -> None:
        assert canonical_pair("x", "y") == canonical_pair("y", "x")


class TestConnectionRequest:
    """Tests for ConnectionRequest SQLModel."""

    def test_defaults(self) -> None:
        request = ConnectionRequest(event_id="e", requester_id="a", recipient_id="b")

        assert request.status == RequestStatus.PENDING
        assert request.id
        assert request.created_at.tzinfo is not None

    def test_ids_are_unique(self) -> None:
        first = ConnectionRequest(event_id="e", requester_id="a", recipient_id="b")
        second = ConnectionRequest(event_id="e", requester_id="a", recipient_id="b")

        assert first.id != second.id


class TestConnection:
    """Tests for Connection SQLModel."""

    def test_peer_of(self) -> None:
        connection = Connection(event_id="e", user_low_id="alice", user_high_id="bob")

        assert connection.peer_of("alice") == "bob"
        assert connection.peer_of("bob") == "alice"


class TestProfile:
    """Tests for Profile SQLModel."""

    def test_defaults(self) -> None:
        profile = Profile(id="p1", event_id="e", name="Ada")

        assert profile.slug
        assert profile.completion_score == 0
        assert profile.hide_phone_until_connected is True
        assert profile.hide_email_until_connected is True
        assert profile.website is None
        assert profile.joined_event_at is None

    def test_completion_score_counts_filled_fields(self) -> None:
        profile = Profile(
            id="p1",
            event_id="e",
            name="Ada",
            headline="Analyst",
            company="Engine Co",
            social_twitter="   ",
        )

        assert profile.compute_completion_score() == 25

    def test_completion_score_full(self) -> None:
        profile = Profile(
            id="p1",
            event_id="e",
            name="Ada",
            headline="Analyst",
            company="Engine Co",
            job_title="Programmer",
            bio="Wrote the first program.",
            location="London",
            phone="+44 20 0000",
            email_public="ada@example.com",
            social_linkedin="in/ada",
            social_twitter="@ada",
            social_instagram="ada",
            social_facebook="ada",
        )

        assert profile.compute_completion_score() == 100


class TestNotification:
    def test_defaults(self) -> None:
        notification = Notification(
            user_id="bob", actor_id="alice", type=NotificationType.CONNECTION_REQUEST
        )

        assert notification.read is False
        assert notification.reference_id is None


class TestInvitation:
    """Tests for Invitation SQLModel."""

    def _invitation(self, expires_at: datetime) -> Invitation:
        return Invitation(
            event_id="e",
            email="guest@example.com",
            invited_by="alice",
            token="tok",
            expires_at=expires_at,
        )

    def test_defaults(self) -> None:
        invitation = self._invitation(datetime.now(UTC) + timedelta(days=7))

        assert invitation.status == InvitationStatus.PENDING
        assert invitation.accepted_at is None
        assert not invitation.is_expired()

    def test_expired(self) -> None:
        assert self._invitation(datetime.now(UTC) - timedelta(seconds=1)).is_expired()

    def test_naive_expiry_is_treated_as_utc(self) -> None:
        """Test that naive timestamps read back from SQLite compare as UTC."""
        now = datetime(2025, 11, 8, 12, 0, tzinfo=UTC)
        invitation = self._invitation(datetime(2025, 11, 8, 13, 0))

        assert not invitation.is_expired(now=now)
        assert invitation.is_expired(now=now + timedelta(hours=2))


class TestConnectionState:
    """Tests for ConnectionState."""

    @pytest.mark.parametrize(
        ("state", "reveals"),
        [
            (ConnectionState.SELF, True),
            (ConnectionState.CONNECTED, True),
            (ConnectionState.PENDING, False),
            (ConnectionState.IDLE, False),
        ],
    )
    def test_reveals_contact(self, state: ConnectionState, reveals: bool) -> None:
        assert state.reveals_contact is reveals

    def test_values(self) -> None:
        assert {state.value for state in ConnectionState} == {
            "self",
            "connected",
            "pending",
            "idle",
        }
