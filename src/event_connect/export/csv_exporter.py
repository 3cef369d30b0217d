# ABOUTME: CSV exporter for the admin attendee and connection lists.
# ABOUTME: Writes a metadata row, a header row, and one row per record.

import csv
from datetime import UTC, datetime
from pathlib import Path

from event_connect.admin import ConnectionRow
from event_connect.models import Profile


class CSVExporter:
    """Exports event attendees and connections to CSV files."""

    ATTENDEE_HEADERS = [
        "name",
        "email",
        "company",
        "job_title",
        "completion_pct",
        "joined_at",
    ]

    CONNECTION_HEADERS = [
        "user_a",
        "user_b",
        "connected_at",
    ]

    def export_attendees(
        self,
        profiles: list[Profile],
        output_path: Path,
        event_name: str | None = None,
    ) -> Path:
        """Export attendee profiles to a CSV file.

        Args:
            profiles: Attendees to export.
            output_path: Path to the output CSV file.
            event_name: Optional event name to include in metadata.

        Returns:
            Path to the created CSV file.
        """
        rows = [self._attendee_to_row(profile) for profile in profiles]
        return self._write(output_path, self.ATTENDEE_HEADERS, rows, event_name)

    def export_connections(
        self,
        connections: list[ConnectionRow],
        output_path: Path,
        event_name: str | None = None,
    ) -> Path:
        """Export event connections to a CSV file.

        Args:
            connections: Connections with resolved attendee names.
            output_path: Path to the output CSV file.
            event_name: Optional event name to include in metadata.

        Returns:
            Path to the created CSV file.
        """
        rows = [
            [row.user_a_name, row.user_b_name, self._format_date(row.created_at)]
            for row in connections
        ]
        return self._write(output_path, self.CONNECTION_HEADERS, rows, event_name)

    def _write(
        self,
        output_path: Path,
        headers: list[str],
        rows: list[list[str]],
        event_name: str | None,
    ) -> Path:
        with open(output_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(self._create_metadata_row(len(rows), event_name))
            writer.writerow(headers)
            writer.writerows(rows)

        return output_path

    def _create_metadata_row(self, count: int, event_name: str | None) -> list[str]:
        """Create a metadata row with export information.

        Args:
            count: Number of records being exported.
            event_name: Optional event name to include.

        Returns:
            List with a single metadata cell.
        """
        timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S UTC")
        metadata_parts = [f"# Exported at: {timestamp}", f"Records: {count}"]

        if event_name:
            metadata_parts.append(f"Event: {event_name}")

        # Single cell so spreadsheet tools don't split it into columns
        return [" | ".join(metadata_parts)]

    def _attendee_to_row(self, profile: Profile) -> list[str]:
        return [
            profile.name,
            profile.email_public or "",
            profile.company or "",
            profile.job_title or "",
            str(profile.completion_score),
            self._format_date(profile.joined_event_at),
        ]

    @staticmethod
    def _format_date(value: datetime | None) -> str:
        return value.strftime("%Y-%m-%d") if value else ""
