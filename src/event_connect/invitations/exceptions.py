# ABOUTME: Exceptions for sending and accepting event invitations.
# ABOUTME: Each maps to a distinct message shown to the inviter or invitee.

from event_connect.errors import EventConnectError


class InvitationError(EventConnectError):
    """Base exception for invitation operations."""

    pass


class InvalidInvitationError(InvitationError):
    """Raised when an invitation token or email is not usable."""

    pass


class InvitationExpiredError(InvitationError):
    """Raised when accepting an invitation past its expiry."""

    pass


class DuplicateInvitationError(InvitationError):
    """Raised when the address already has an account or a pending invitation."""

    pass
