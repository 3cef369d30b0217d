# ABOUTME: Invitations package for inviting attendees by email.
# ABOUTME: Exports InvitationService, batch results, and invitation exceptions.

from event_connect.invitations.exceptions import (
    DuplicateInvitationError,
    InvalidInvitationError,
    InvitationError,
    InvitationExpiredError,
)
from event_connect.invitations.service import BatchResult, InvitationService, normalize_email

__all__ = [
    "BatchResult",
    "DuplicateInvitationError",
    "InvalidInvitationError",
    "InvitationError",
    "InvitationExpiredError",
    "InvitationService",
    "normalize_email",
]
