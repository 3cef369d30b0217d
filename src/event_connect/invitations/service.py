# ABOUTME: Invitation service for inviting attendees by email and accepting invitations.
# ABOUTME: Tokens are random hex strings that expire after the configured number of days.

import logging
import secrets
from dataclasses import dataclass, field
from datetime import timedelta

from event_connect.config import Settings
from event_connect.database import DatabaseService
from event_connect.invitations.exceptions import (
    DuplicateInvitationError,
    InvalidInvitationError,
    InvitationError,
    InvitationExpiredError,
)
from event_connect.models import Invitation, InvitationStatus, Profile
from event_connect.models.common import utcnow
from event_connect.notify.service import Notifier
from event_connect.notify.templates import EmailKind

logger = logging.getLogger(__name__)

MAX_BATCH_SIZE = 500


@dataclass
class BatchResult:
    """Outcome of inviting several addresses at once."""

    sent: list[str] = field(default_factory=list)
    skipped: dict[str, str] = field(default_factory=dict)
    failed: dict[str, str] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return len(self.sent) + len(self.skipped) + len(self.failed)


def normalize_email(email: str | None) -> str:
    """Lower-case and trim an email address."""
    return (email or "").strip().lower()


class InvitationService:
    """Creates and redeems invitations for the configured event."""

    def __init__(
        self,
        db_service: DatabaseService,
        settings: Settings,
        notifier: Notifier | None = None,
    ) -> None:
        """Initialize the invitation service.

        Args:
            db_service: Database service for invitations and profiles.
            settings: Settings with the event, domain, and invitation lifetime.
            notifier: Optional notifier used to email the invitation link.
        """
        self._db_service = db_service
        self._settings = settings
        self._notifier = notifier

    def invite(self, email: str, invited_by: str) -> Invitation:
        """Invite an email address to the event.

        Args:
            email: Address to invite.
            invited_by: Identity id of the inviter.

        Returns:
            The new pending Invitation.

        Raises:
            InvalidInvitationError: If the address is not an email.
            DuplicateInvitationError: If the address already has an account or
                a live pending invitation.
        """
        normalized = normalize_email(email)
        if "@" not in normalized:
            raise InvalidInvitationError("Invalid email address.")

        event_id = self._settings.require_event_id()

        if self._db_service.get_profile_by_account_email(normalized) is not None:
            raise DuplicateInvitationError("This person already has an account.")

        existing = self._db_service.find_pending_invitation(event_id, normalized)
        if existing is not None:
            if not existing.is_expired():
                raise DuplicateInvitationError(
                    "There is already a pending invitation for this email."
                )
            existing.status = InvitationStatus.EXPIRED
            self._db_service.save_invitation(existing)

        invitation = self._db_service.save_invitation(
            Invitation(
                event_id=event_id,
                email=normalized,
                invited_by=invited_by,
                token=secrets.token_hex(32),
                expires_at=utcnow() + timedelta(days=self._settings.invitation_ttl_days),
            )
        )
        logger.info("Created invitation %s for %s", invitation.id, normalized)

        self._send_invitation_email(invitation)
        return invitation

    def invite_many(self, emails: list[str], invited_by: str) -> BatchResult:
        """Invite several addresses, collecting a result for each one.

        Raises:
            InvalidInvitationError: If the batch is empty or too large.
        """
        if not emails:
            raise InvalidInvitationError("At least one email is required.")
        if len(emails) > MAX_BATCH_SIZE:
            raise InvalidInvitationError(f"At most {MAX_BATCH_SIZE} emails per batch.")

        result = BatchResult()
        for email in emails:
            try:
                self.invite(email, invited_by)
            except DuplicateInvitationError as e:
                result.skipped[email] = str(e)
            except InvitationError as e:
                result.failed[email] = str(e)
            else:
                result.sent.append(email)
        return result

    def accept(self, token: str, identity_id: str, name: str | None = None) -> Profile:
        """Redeem an invitation and make sure the identity has a profile.

        Accepting an already accepted invitation returns the profile again.

        Args:
            token: Invitation token from the email link.
            identity_id: Identity accepting the invitation.
            name: Optional display name for a newly created profile.

        Returns:
            The identity's profile.

        Raises:
            InvalidInvitationError: If the token is unknown.
            InvitationExpiredError: If the invitation has expired.
        """
        if not token:
            raise InvalidInvitationError("Invitation token is required.")

        invitation = self._db_service.get_invitation_by_token(token)
        if invitation is None:
            raise InvalidInvitationError("This invitation is not valid.")

        if invitation.status == InvitationStatus.EXPIRED or (
            invitation.status == InvitationStatus.PENDING and invitation.is_expired()
        ):
            if invitation.status != InvitationStatus.EXPIRED:
                invitation.status = InvitationStatus.EXPIRED
                self._db_service.save_invitation(invitation)
            raise InvitationExpiredError("This invitation has expired.")

        if invitation.status == InvitationStatus.PENDING:
            invitation.status = InvitationStatus.ACCEPTED
            invitation.accepted_at = utcnow()
            self._db_service.save_invitation(invitation)

        profile = self._db_service.get_profile(identity_id)
        if profile is None:
            fallback = (name or "").strip() or invitation.email.split("@")[0]
            profile = Profile(
                id=identity_id,
                event_id=invitation.event_id,
                name=fallback or "Attendee",
                account_email=invitation.email,
                joined_event_at=utcnow(),
            )
            profile.completion_score = profile.compute_completion_score()
            profile = self._db_service.save_profile(profile)
        return profile

    def invitation_url(self, invitation: Invitation) -> str:
        """Return the link an invitee follows to accept."""
        return f"https://{self._settings.app_domain}/invitation/{invitation.token}"

    def _send_invitation_email(self, invitation: Invitation) -> None:
        if self._notifier is None:
            return
        inviter = self._db_service.get_profile(invitation.invited_by)
        self._notifier.send_email(
            EmailKind.INVITATION,
            invitation.email,
            {
                "inviter_name": inviter.name if inviter is not None else "The organizers",
                "invitation_url": self.invitation_url(invitation),
                "ttl_days": self._settings.invitation_ttl_days,
            },
        )
