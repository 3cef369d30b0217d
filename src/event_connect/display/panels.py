# ABOUTME: Rich panels for a single profile and for the admin metrics summary.
# ABOUTME: Profile panels only show contact details the viewer is allowed to see.

from typing import Any

from rich.panel import Panel
from rich.table import Table

from event_connect.display.tables import styled_state
from event_connect.ledger.states import ConnectionState
from event_connect.models import Profile
from event_connect.profiles.service import visible_contact_fields


def render_profile_panel(profile: Profile, state: ConnectionState) -> Panel:
    """Render a profile as seen by a viewer in the given connection state."""
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("Label", style="dim")
    table.add_column("Value")

    for label, value in (
        ("Headline:", profile.headline),
        ("Company:", profile.company),
        ("Title:", profile.job_title),
        ("Location:", profile.location),
        ("Bio:", profile.bio),
        ("Website:", profile.website),
    ):
        if value:
            table.add_row(label, value)

    contact = visible_contact_fields(profile, state)
    if contact.phone:
        table.add_row("Phone:", contact.phone)
    if contact.email:
        table.add_row("Email:", contact.email)
    for network, handle in contact.socials.items():
        table.add_row(f"{network.capitalize()}:", handle)

    table.add_row("Slug:", f"[dim]{profile.slug}[/dim]")
    table.add_row("Complete:", f"{profile.completion_score}%")
    table.add_row("Connection:", styled_state(state))

    return Panel(
        table,
        title=profile.name,
        border_style="cyan",
        padding=(1, 2),
    )


def render_metrics_panel(metrics: dict[str, Any], event_name: str) -> Panel:
    """Render event metrics as a Rich Panel.

    Args:
        metrics: Dictionary of metrics from get_event_metrics.
        event_name: Event name for the panel title.

    Returns:
        Rich Panel containing formatted metrics.
    """
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("Label", style="dim")
    table.add_column("Value")

    table.add_row("Attendees:", f"[cyan]{metrics.get('total_attendees', 0)}[/cyan]")
    table.add_row(
        "Avg. Profile Completion:", f"[cyan]{metrics.get('avg_profile_completion', 0)}%[/cyan]"
    )
    table.add_row("Connections:", f"[cyan]{metrics.get('total_connections', 0)}[/cyan]")
    table.add_row("Pending Requests:", f"[cyan]{metrics.get('pending_requests', 0)}[/cyan]")
    table.add_row("Scans:", f"[cyan]{metrics.get('total_scans', 0)}[/cyan]")

    breakdown = metrics.get("scan_source_breakdown", {})
    if breakdown and isinstance(breakdown, dict):
        parts = [f"{source}: {count}" for source, count in sorted(breakdown.items())]
        table.add_row("By Source:", ", ".join(parts))

    return Panel(
        table,
        title=f"{event_name} Metrics",
        border_style="blue",
        padding=(1, 2),
    )
