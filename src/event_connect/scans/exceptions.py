# ABOUTME: Exceptions for recording scans.
# ABOUTME: Covers bad scan sources and unknown scan targets.

from event_connect.errors import EventConnectError


class ScanError(EventConnectError):
    """Raised when a scan request is invalid."""

    pass


class ScanTargetNotFoundError(ScanError):
    """Raised when the scanned profile does not exist."""

    pass
