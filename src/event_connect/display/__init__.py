# ABOUTME: Display module for Rich terminal output formatting.
# ABOUTME: Exports table, panel, and error renderers used by the CLI.

from event_connect.display.errors import display_error, display_store_failure
from event_connect.display.panels import render_metrics_panel, render_profile_panel
from event_connect.display.tables import (
    DirectoryTable,
    render_attendees_table,
    render_connection_rows_table,
    render_connections_table,
    render_notifications_table,
    render_requests_table,
    styled_state,
    truncate,
)

__all__ = [
    "DirectoryTable",
    "display_error",
    "display_store_failure",
    "render_attendees_table",
    "render_connection_rows_table",
    "render_connections_table",
    "render_metrics_panel",
    "render_notifications_table",
    "render_profile_panel",
    "render_requests_table",
    "styled_state",
    "truncate",
]
