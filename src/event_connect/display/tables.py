# ABOUTME: Rich table rendering for the directory, connections, requests, and admin lists.
# ABOUTME: Truncates long text and colour-codes connection and request states.

from rich.table import Table

from event_connect.admin import ConnectionRow
from event_connect.ledger.states import ConnectionState
from event_connect.models import ConnectionNote, ConnectionRequest, Profile, RequestStatus
from event_connect.notify.inbox import InboxEntry

MAX_NOTE_LENGTH = 40


def truncate(text: str | None, max_length: int) -> str:
    """Truncate text to max length with ellipsis.

    Args:
        text: The text to truncate, or None.
        max_length: Maximum length before truncation.

    Returns:
        Truncated text with ellipsis, or empty string if None.
    """
    if text is None:
        return ""
    if len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..."


STATE_COLORS: dict[ConnectionState, str] = {
    ConnectionState.CONNECTED: "green",
    ConnectionState.PENDING: "yellow",
    ConnectionState.IDLE: "dim",
    ConnectionState.SELF: "cyan",
}

STATUS_COLORS: dict[RequestStatus, str] = {
    RequestStatus.APPROVED: "green",
    RequestStatus.PENDING: "yellow",
    RequestStatus.DECLINED: "red",
}


def styled_state(state: ConnectionState) -> str:
    """Return the state value wrapped in its Rich colour markup."""
    color = STATE_COLORS.get(state, "white")
    return f"[{color}]{state.value}[/{color}]"


class DirectoryTable:
    """Renders attendee profiles as a directory listing."""

    MAX_HEADLINE_LENGTH = 40
    MAX_COMPANY_LENGTH = 25

    def render(
        self,
        profiles: list[Profile],
        states: dict[str, ConnectionState] | None = None,
        title: str | None = None,
    ) -> Table:
        """Render profiles as a Rich Table.

        Args:
            profiles: Profiles to display.
            states: Optional viewer connection state per profile id.
            title: Optional title for the table.

        Returns:
            Rich Table with one row per profile.
        """
        table = Table(title=title, show_lines=False)

        table.add_column("#", style="dim", width=4)
        table.add_column("Name", style="cyan", no_wrap=True)
        table.add_column("Headline", style="white", max_width=self.MAX_HEADLINE_LENGTH)
        table.add_column("Company", style="magenta", max_width=self.MAX_COMPANY_LENGTH)
        table.add_column("Slug", style="dim")
        table.add_column("Complete", justify="right")
        if states is not None:
            table.add_column("State")

        for idx, profile in enumerate(profiles, 1):
            score = profile.completion_score
            score_color = "green" if score >= 80 else "yellow" if score >= 50 else "red"
            row = [
                str(idx),
                profile.name,
                truncate(profile.headline, self.MAX_HEADLINE_LENGTH),
                truncate(profile.company, self.MAX_COMPANY_LENGTH),
                profile.slug,
                f"[{score_color}]{score}%[/{score_color}]",
            ]
            if states is not None:
                row.append(styled_state(states.get(profile.id, ConnectionState.IDLE)))
            table.add_row(*row)

        return table


def render_requests_table(
    requests: list[ConnectionRequest],
    profiles: dict[str, Profile],
    incoming: bool = True,
) -> Table:
    """Render connection requests with the other party's name.

    Args:
        requests: Requests to display.
        profiles: Profiles keyed by id, used to show names.
        incoming: True to show requesters, False to show recipients.

    Returns:
        Rich Table of requests.
    """
    table = Table(title="Incoming Requests" if incoming else "Sent Requests")
    table.add_column("Request", style="dim")
    table.add_column("From" if incoming else "To", style="cyan")
    table.add_column("Status")
    table.add_column("Sent", style="dim")

    for request in requests:
        other_id = request.requester_id if incoming else request.recipient_id
        other = profiles.get(other_id)
        color = STATUS_COLORS.get(request.status, "white")
        table.add_row(
            request.id,
            other.name if other is not None else other_id,
            f"[{color}]{request.status.value}[/{color}]",
            request.created_at.strftime("%Y-%m-%d %H:%M"),
        )

    return table


NOTIFICATION_TEXT = {
    "connection_request": "wants to connect with you",
    "connection_accepted": "accepted your connection request",
}


def render_notifications_table(entries: list[InboxEntry], unread_count: int) -> Table:
    """Render inbox entries, marking unread ones."""
    table = Table(title=f"Notifications ({unread_count} unread)")
    table.add_column("", width=2)
    table.add_column("Id", style="dim")
    table.add_column("Message")
    table.add_column("When", style="dim")

    for entry in entries:
        notification = entry.notification
        actor = entry.actor.name if entry.actor is not None else "Someone"
        text = NOTIFICATION_TEXT.get(notification.type.value, notification.type.value)
        table.add_row(
            "" if notification.read else "[bold blue]•[/bold blue]",
            notification.id,
            f"[bold]{actor}[/bold] {text}",
            notification.created_at.strftime("%Y-%m-%d %H:%M"),
        )

    return table


def render_connections_table(
    profiles: list[Profile], notes: dict[str, ConnectionNote] | None = None
) -> Table:
    """Render the viewer's connections with their private notes and tags."""
    notes = notes or {}
    table = Table(title="Connections")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Headline", max_width=DirectoryTable.MAX_HEADLINE_LENGTH)
    table.add_column("Company", style="magenta", max_width=DirectoryTable.MAX_COMPANY_LENGTH)
    table.add_column("Slug", style="dim")
    table.add_column("Note", max_width=MAX_NOTE_LENGTH)
    table.add_column("Tags", style="green")

    for profile in profiles:
        note = notes.get(profile.id)
        table.add_row(
            profile.name,
            truncate(profile.headline, DirectoryTable.MAX_HEADLINE_LENGTH),
            truncate(profile.company, DirectoryTable.MAX_COMPANY_LENGTH),
            profile.slug,
            truncate(note.note, MAX_NOTE_LENGTH) if note is not None else "",
            ", ".join(note.tags or []) if note is not None else "",
        )

    return table


def render_attendees_table(profiles: list[Profile]) -> Table:
    """Render the admin attendee list."""
    table = Table(title=f"Attendees ({len(profiles)})")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Email")
    table.add_column("Company", style="magenta", max_width=DirectoryTable.MAX_COMPANY_LENGTH)
    table.add_column("Title", max_width=DirectoryTable.MAX_COMPANY_LENGTH)
    table.add_column("Complete", justify="right")
    table.add_column("Joined", style="dim")

    for profile in profiles:
        table.add_row(
            profile.name,
            profile.email_public or "",
            truncate(profile.company, DirectoryTable.MAX_COMPANY_LENGTH),
            truncate(profile.job_title, DirectoryTable.MAX_COMPANY_LENGTH),
            f"{profile.completion_score}%",
            profile.joined_event_at.strftime("%Y-%m-%d") if profile.joined_event_at else "",
        )

    return table


def render_connection_rows_table(rows: list[ConnectionRow]) -> Table:
    """Render the admin list of every connection in the event."""
    table = Table(title=f"Connections ({len(rows)})")
    table.add_column("User A", style="cyan")
    table.add_column("User B", style="cyan")
    table.add_column("Connected", style="dim")

    for row in rows:
        table.add_row(row.user_a_name, row.user_b_name, row.created_at.strftime("%Y-%m-%d %H:%M"))

    return table
