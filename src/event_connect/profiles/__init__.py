# ABOUTME: Profiles package for event membership, profile edits, and the directory.
# ABOUTME: Exports ProfileService, contact visibility helpers, and profile exceptions.

from event_connect.profiles.exceptions import (
    InvalidEventCodeError,
    ProfileError,
    ProfileNotFoundError,
    ProfileValidationError,
)
from event_connect.profiles.service import (
    ProfileService,
    VisibleContact,
    normalize_code,
    visible_contact_fields,
)
from event_connect.profiles.validation import ProfileUpdate

__all__ = [
    "InvalidEventCodeError",
    "ProfileError",
    "ProfileNotFoundError",
    "ProfileService",
    "ProfileUpdate",
    "ProfileValidationError",
    "VisibleContact",
    "normalize_code",
    "visible_contact_fields",
]
