# ABOUTME: Base exception class for event-connect application errors.
# ABOUTME: Provides a common base for all custom exceptions in the application.


class EventConnectError(Exception):
    """Base exception for all event-connect errors.

    This is the root exception class for the application. All custom
    exceptions inherit from this class so the CLI can handle them in
    one place.
    """

    pass


class EventNotConfiguredError(EventConnectError):
    """Raised when an operation needs an event id and none is configured."""

    pass
