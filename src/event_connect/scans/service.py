# ABOUTME: Scan service that logs contact events from QR codes, the directory, or links.
# ABOUTME: Resolves the scanned profile by id or slug before recording.

import logging

from event_connect.config import Settings
from event_connect.database import DatabaseService
from event_connect.models import Scan, ScanSource
from event_connect.scans.exceptions import ScanError, ScanTargetNotFoundError

logger = logging.getLogger(__name__)


class ScanService:
    """Records who opened whose profile, and how."""

    def __init__(self, db_service: DatabaseService, settings: Settings) -> None:
        self._db_service = db_service
        self._settings = settings

    def record_scan(
        self,
        by_user_id: str,
        source: ScanSource | str,
        profile_id: str | None = None,
        slug: str | None = None,
    ) -> Scan:
        """Log a scan of another attendee's profile.

        Args:
            by_user_id: Identity doing the scanning.
            source: One of "qr", "directory", or "link".
            profile_id: Id of the scanned profile.
            slug: Slug of the scanned profile, used when no id is given.

        Returns:
            The recorded Scan.

        Raises:
            ScanError: If the source is missing or unknown.
            ScanTargetNotFoundError: If the scanned profile cannot be resolved.
            EventNotConfiguredError: If no event id is configured.
        """
        if not source:
            raise ScanError("Scan source is required.")
        try:
            scan_source = ScanSource(source)
        except ValueError as e:
            allowed = ", ".join(member.value for member in ScanSource)
            raise ScanError(f"Unknown scan source '{source}'. Use one of: {allowed}.") from e

        event_id = self._settings.require_event_id()

        profile = None
        if profile_id:
            profile = self._db_service.get_profile(profile_id)
        elif slug:
            profile = self._db_service.get_profile_by_slug(slug)
        if profile is None or profile.event_id != event_id:
            raise ScanTargetNotFoundError("Scanned profile not found.")

        scan = Scan(
            event_id=event_id,
            profile_id=profile.id,
            by_user_id=by_user_id,
            source=scan_source,
        )
        logger.info("Recording %s scan of %s by %s", scan_source.value, profile.id, by_user_id)
        return self._db_service.save_scan(scan)
