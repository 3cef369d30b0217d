# ABOUTME: Profile service for joining the event, editing profiles, and the directory.
# ABOUTME: Keeps the completion score in sync with every profile write.

import logging
from dataclasses import dataclass

from pydantic import ValidationError

from event_connect.config import Settings
from event_connect.database import DatabaseService
from event_connect.ledger.states import ConnectionState
from event_connect.models import Profile
from event_connect.models.common import utcnow
from event_connect.models.profile import SOCIAL_FIELDS
from event_connect.profiles.exceptions import (
    InvalidEventCodeError,
    ProfileNotFoundError,
    ProfileValidationError,
)
from event_connect.profiles.validation import ProfileUpdate

logger = logging.getLogger(__name__)

FALLBACK_NAME = "Attendee"


def normalize_code(code: str | None) -> str:
    """Normalize an event code for comparison."""
    return (code or "").strip().upper()


@dataclass
class VisibleContact:
    """Contact fields a viewer is allowed to see on a profile."""

    phone: str | None
    email: str | None
    socials: dict[str, str]


def visible_contact_fields(profile: Profile, state: ConnectionState) -> VisibleContact:
    """Apply the profile's hide-until-connected flags for a viewer.

    Args:
        profile: The profile being viewed.
        state: The viewer's connection state with the profile owner.

    Returns:
        The contact fields the viewer may see.
    """
    reveal = state.reveals_contact
    show_phone = reveal or not profile.hide_phone_until_connected
    show_email = reveal or not profile.hide_email_until_connected
    show_socials = reveal or not profile.hide_socials_until_connected

    socials: dict[str, str] = {}
    if show_socials:
        for field in SOCIAL_FIELDS:
            value = getattr(profile, field)
            if value:
                socials[field.removeprefix("social_")] = value

    return VisibleContact(
        phone=profile.phone if show_phone else None,
        email=profile.email_public if show_email else None,
        socials=socials,
    )


class ProfileService:
    """Service for attendee profiles within the configured event."""

    def __init__(self, db_service: DatabaseService, settings: Settings) -> None:
        """Initialize the profile service.

        Args:
            db_service: Database service for profile persistence.
            settings: Settings with the event id and event code.
        """
        self._db_service = db_service
        self._settings = settings

    def join_event(
        self,
        identity_id: str,
        code: str,
        name: str | None = None,
        account_email: str | None = None,
    ) -> Profile:
        """Join the event with its code, creating the profile on first join.

        Joining again is harmless: existing profiles only get missing
        join fields filled in.

        Args:
            identity_id: Identity id from the identity provider.
            code: Event code entered by the attendee.
            name: Optional display name for a new profile.
            account_email: Optional login email, used for transactional email.

        Returns:
            The attendee's profile.

        Raises:
            InvalidEventCodeError: If the code is empty or does not match.
            EventNotConfiguredError: If no event id is configured.
        """
        submitted = normalize_code(code)
        if not submitted:
            raise InvalidEventCodeError("Enter the event code.")

        expected = normalize_code(self._settings.event_code)
        if not expected or submitted != expected:
            raise InvalidEventCodeError("Wrong code. Check it and try again.")

        event_id = self._settings.require_event_id()
        now = utcnow()

        profile = self._db_service.get_profile(identity_id)
        if profile is None:
            fallback = (name or "").strip()
            if not fallback and account_email:
                fallback = account_email.split("@")[0]
            profile = Profile(
                id=identity_id,
                event_id=event_id,
                name=fallback or FALLBACK_NAME,
                account_email=account_email,
                joined_event_at=now,
            )
            profile.completion_score = profile.compute_completion_score()
            logger.info("Created profile for %s in event %s", identity_id, event_id)
            return self._db_service.save_profile(profile)

        changed = False
        if profile.joined_event_at is None:
            profile.joined_event_at = now
            changed = True
        if not profile.event_id:
            profile.event_id = event_id
            changed = True
        if account_email and not profile.account_email:
            profile.account_email = account_email
            changed = True

        return self._db_service.save_profile(profile) if changed else profile

    def get_profile(self, profile_id: str) -> Profile:
        """Return a profile by id.

        Raises:
            ProfileNotFoundError: If no profile has that id.
        """
        profile = self._db_service.get_profile(profile_id)
        if profile is None:
            raise ProfileNotFoundError(f"Profile '{profile_id}' not found.")
        return profile

    def get_by_slug(self, slug: str) -> Profile:
        """Return a profile by its public slug.

        Raises:
            ProfileNotFoundError: If no profile has that slug.
        """
        profile = self._db_service.get_profile_by_slug(slug)
        if profile is None:
            raise ProfileNotFoundError(f"Profile '{slug}' not found.")
        return profile

    def resolve(self, identifier: str) -> Profile:
        """Return a profile by slug, falling back to id."""
        profile = self._db_service.get_profile_by_slug(identifier)
        if profile is None:
            profile = self._db_service.get_profile(identifier)
        if profile is None:
            raise ProfileNotFoundError(f"Profile '{identifier}' not found.")
        return profile

    def update_profile(self, identity_id: str, **fields: object) -> Profile:
        """Validate and apply edits to the owner's profile.

        Args:
            identity_id: Owner of the profile.
            **fields: Profile fields to change.

        Returns:
            The updated profile with a recomputed completion score.

        Raises:
            ProfileNotFoundError: If the owner has no profile yet.
            ProfileValidationError: If any field is invalid.
        """
        try:
            update = ProfileUpdate(**fields)
        except ValidationError as e:
            errors = {
                ".".join(str(part) for part in error["loc"]): error["msg"]
                for error in e.errors()
            }
            raise ProfileValidationError("Profile has invalid fields.", errors) from e

        profile = self.get_profile(identity_id)
        for field, value in update.changes().items():
            setattr(profile, field, value)
        profile.completion_score = profile.compute_completion_score()
        return self._db_service.save_profile(profile)

    def search_directory(
        self, query: str | None = None, limit: int = 50, offset: int = 0
    ) -> list[Profile]:
        """Search attendees of the configured event."""
        event_id = self._settings.require_event_id()
        return self._db_service.search_profiles(event_id, query=query, limit=limit, offset=offset)
