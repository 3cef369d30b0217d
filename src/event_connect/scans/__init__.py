# ABOUTME: Scans package for logging contact events.
# ABOUTME: Exports ScanService and its exceptions.

from event_connect.scans.exceptions import ScanError, ScanTargetNotFoundError
from event_connect.scans.service import ScanService

__all__ = ["ScanError", "ScanService", "ScanTargetNotFoundError"]
