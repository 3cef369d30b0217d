# ABOUTME: Export module for writing admin lists to files.
# ABOUTME: Provides CSV export of attendees and connections.

from event_connect.export.csv_exporter import CSVExporter

__all__ = ["CSVExporter"]
