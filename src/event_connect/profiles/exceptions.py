# ABOUTME: Exceptions for joining the event and editing profiles.
# ABOUTME: Raised by ProfileService and rendered by the CLI error display.

from event_connect.errors import EventConnectError


class ProfileError(EventConnectError):
    """Base exception for profile operations."""

    pass


class ProfileNotFoundError(ProfileError):
    """Raised when a profile cannot be found by id or slug."""

    pass


class ProfileValidationError(ProfileError):
    """Raised when submitted profile fields fail validation.

    Attributes:
        errors: Mapping of field name to error message.
    """

    def __init__(self, message: str, errors: dict[str, str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or {}


class InvalidEventCodeError(ProfileError):
    """Raised when the submitted event code is missing or wrong."""

    pass
