# ABOUTME: Command-line interface for event networking using Typer.
# ABOUTME: Provides join, profile, directory, connection, scan, notification, and admin commands.

from collections.abc import Generator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from event_connect.admin import list_attendees, list_connection_rows, require_admin
from event_connect.config import Settings, get_settings
from event_connect.database import DatabaseService
from event_connect.database.stats import get_event_metrics
from event_connect.display import (
    DirectoryTable,
    display_error,
    display_store_failure,
    render_attendees_table,
    render_connection_rows_table,
    render_connections_table,
    render_metrics_panel,
    render_notifications_table,
    render_profile_panel,
    render_requests_table,
    styled_state,
)
from event_connect.errors import EventConnectError
from event_connect.export import CSVExporter
from event_connect.invitations import InvitationService
from event_connect.ledger import ConnectionLedger, ConnectionState, LedgerError
from event_connect.logging_config import configure_logging
from event_connect.models import RequestStatus
from event_connect.notes import NoteService
from event_connect.notify import Dispatcher, EmailClient, NotificationInbox, Notifier
from event_connect.profiles import ProfileService
from event_connect.scans import ScanService

app = typer.Typer(
    name="event-connect",
    help="Meet people at the event: profiles, connections, scans, and notifications.",
    add_completion=False,
)
profile_app = typer.Typer(help="View and edit attendee profiles.")
notifications_app = typer.Typer(help="Read and clear your notifications.")
admin_app = typer.Typer(help="Event administration: metrics and attendee lists.")
app.add_typer(profile_app, name="profile")
app.add_typer(notifications_app, name="notifications")
app.add_typer(admin_app, name="admin")

console = Console()

IdentityOption = Annotated[
    str,
    typer.Option(
        "--as",
        help="Identity id of the attendee performing the action.",
        envvar="EVENT_CONNECT_IDENTITY",
    ),
]

STATE_MESSAGES = {
    ConnectionState.CONNECTED: "[green]You are connected.[/green]",
    ConnectionState.PENDING: "[yellow]Request pending approval.[/yellow]",
    ConnectionState.IDLE: "[dim]Not connected yet.[/dim]",
    ConnectionState.SELF: "[cyan]This is your own profile.[/cyan]",
}


@dataclass
class Services:
    """Everything a command needs, wired from the current settings."""

    settings: Settings
    db_service: DatabaseService
    dispatcher: Dispatcher
    email_client: EmailClient | None
    notifier: Notifier
    ledger: ConnectionLedger
    profiles: ProfileService
    scans: ScanService
    invitations: InvitationService
    notes: NoteService
    inbox: NotificationInbox

    def close(self) -> None:
        """Wait for queued notifications and release the HTTP client."""
        self.dispatcher.shutdown(wait=True)
        if self.email_client is not None:
            self.email_client.close()


def _build_services() -> Services:
    settings = get_settings()
    db_service = DatabaseService(db_path=settings.db_path)
    db_service.init_db()
    dispatcher = Dispatcher(max_workers=settings.notify_workers)
    email_client = EmailClient(settings) if settings.email_api_key else None
    notifier = Notifier(db_service, settings, dispatcher, email_client)
    return Services(
        settings=settings,
        db_service=db_service,
        dispatcher=dispatcher,
        email_client=email_client,
        notifier=notifier,
        ledger=ConnectionLedger(db_service, settings, notifier),
        profiles=ProfileService(db_service, settings),
        scans=ScanService(db_service, settings),
        invitations=InvitationService(db_service, settings, notifier),
        inbox=NotificationInbox(db_service),
        notes=NoteService(db_service, settings),
    )


@contextmanager
def _services() -> Generator[Services, None, None]:
    """Build services and turn application errors into exit code 1."""
    services = _build_services()
    try:
        yield services
    except LedgerError as e:
        console.print(display_store_failure(e))
        raise typer.Exit(code=1) from None
    except EventConnectError as e:
        console.print(display_error(e))
        raise typer.Exit(code=1) from None
    finally:
        services.close()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Override the configured logging level."),
    ] = None,
) -> None:
    """Event networking CLI.

    Join the event, fill in your profile, browse the directory, and
    connect with other attendees.
    """
    configure_logging(log_level or get_settings().log_level)
    if ctx.invoked_subcommand is None:
        console.print("[dim]Use --help to see available commands.[/dim]")


@app.command()
def join(
    identity: IdentityOption,
    code: Annotated[str, typer.Option("--code", "-c", help="Event code.")],
    name: Annotated[
        str | None, typer.Option("--name", "-n", help="Display name for a new profile.")
    ] = None,
    email: Annotated[
        str | None, typer.Option("--email", "-e", help="Your login email.")
    ] = None,
) -> None:
    """Join the event with its code."""
    with _services() as services:
        profile = services.profiles.join_event(identity, code, name=name, account_email=email)
        console.print(
            f"[green]Welcome to {services.settings.event_name}, "
            f"[bold]{profile.name}[/bold]![/green]"
        )
        console.print(f"[dim]Your profile slug: {profile.slug}[/dim]")


@profile_app.command("show")
def profile_show(
    identity: IdentityOption,
    target: Annotated[
        str | None, typer.Argument(help="Slug or id of the profile; defaults to your own.")
    ] = None,
) -> None:
    """Show a profile with the contact details you are allowed to see."""
    with _services() as services:
        event_id = services.settings.require_event_id()
        profile = services.profiles.resolve(target or identity)
        state = services.ledger.query_state(event_id, identity, profile.id)
        console.print(render_profile_panel(profile, state))


@profile_app.command("edit")
def profile_edit(
    identity: IdentityOption,
    name: Annotated[str | None, typer.Option("--name")] = None,
    headline: Annotated[str | None, typer.Option("--headline")] = None,
    company: Annotated[str | None, typer.Option("--company")] = None,
    job_title: Annotated[str | None, typer.Option("--job-title")] = None,
    bio: Annotated[str | None, typer.Option("--bio")] = None,
    location: Annotated[str | None, typer.Option("--location")] = None,
    phone: Annotated[str | None, typer.Option("--phone")] = None,
    email_public: Annotated[str | None, typer.Option("--public-email")] = None,
    linkedin: Annotated[str | None, typer.Option("--linkedin")] = None,
    twitter: Annotated[str | None, typer.Option("--twitter")] = None,
    instagram: Annotated[str | None, typer.Option("--instagram")] = None,
    facebook: Annotated[str | None, typer.Option("--facebook")] = None,
    website: Annotated[str | None, typer.Option("--website")] = None,
    hide_phone: Annotated[
        bool | None,
        typer.Option("--hide-phone/--show-phone", help="Hide phone until connected."),
    ] = None,
    hide_email: Annotated[
        bool | None,
        typer.Option("--hide-email/--show-email", help="Hide public email until connected."),
    ] = None,
    hide_socials: Annotated[
        bool | None,
        typer.Option("--hide-socials/--show-socials", help="Hide socials until connected."),
    ] = None,
) -> None:
    """Edit your profile. Only the options you pass are changed."""
    submitted = {
        "name": name,
        "headline": headline,
        "company": company,
        "job_title": job_title,
        "bio": bio,
        "location": location,
        "phone": phone,
        "email_public": email_public,
        "social_linkedin": linkedin,
        "social_twitter": twitter,
        "social_instagram": instagram,
        "social_facebook": facebook,
        "website": website,
        "hide_phone_until_connected": hide_phone,
        "hide_email_until_connected": hide_email,
        "hide_socials_until_connected": hide_socials,
    }
    fields = {key: value for key, value in submitted.items() if value is not None}
    if not fields:
        console.print("[yellow]Nothing to change.[/yellow]")
        return

    with _services() as services:
        profile = services.profiles.update_profile(identity, **fields)
        console.print(
            f"[green]Profile saved.[/green] Completion: [cyan]{profile.completion_score}%[/cyan]"
        )


@app.command()
def directory(
    identity: IdentityOption,
    query: Annotated[
        str | None, typer.Option("--query", "-q", help="Search name, headline, or company.")
    ] = None,
    limit: Annotated[int, typer.Option("--limit", help="Maximum profiles to show.")] = 50,
    offset: Annotated[int, typer.Option("--offset", help="Profiles to skip.")] = 0,
) -> None:
    """Browse the attendee directory."""
    with _services() as services:
        event_id = services.settings.require_event_id()
        profiles = services.profiles.search_directory(query=query, limit=limit, offset=offset)
        if not profiles:
            console.print("[yellow]No attendees found.[/yellow]")
            return
        states = {
            profile.id: services.ledger.query_state(event_id, identity, profile.id)
            for profile in profiles
        }
        console.print(DirectoryTable().render(profiles, states=states, title="Directory"))


@app.command()
def connect(
    identity: IdentityOption,
    target: Annotated[str, typer.Argument(help="Slug or id of the attendee.")],
) -> None:
    """Request a connection with another attendee."""
    with _services() as services:
        event_id = services.settings.require_event_id()
        profile = services.profiles.resolve(target)
        state = services.ledger.request_connection(event_id, identity, profile.id)
        console.print(STATE_MESSAGES[state])


@app.command()
def approve(
    identity: IdentityOption,
    request_id: Annotated[str, typer.Argument(help="Id of the request to approve.")],
) -> None:
    """Approve a connection request sent to you."""
    with _services() as services:
        event_id = services.settings.require_event_id()
        services.ledger.approve_request(event_id, request_id, identity)
        console.print("[green]Request approved. You are now connected.[/green]")


@app.command()
def decline(
    identity: IdentityOption,
    request_id: Annotated[str, typer.Argument(help="Id of the request to decline.")],
) -> None:
    """Decline a connection request sent to you."""
    with _services() as services:
        event_id = services.settings.require_event_id()
        services.ledger.decline_request(event_id, request_id, identity)
        console.print("[yellow]Request declined.[/yellow]")


@app.command()
def state(
    identity: IdentityOption,
    target: Annotated[str, typer.Argument(help="Slug or id of the attendee.")],
) -> None:
    """Show your connection state with another attendee."""
    with _services() as services:
        event_id = services.settings.require_event_id()
        profile = services.profiles.resolve(target)
        current = services.ledger.query_state(event_id, identity, profile.id)
        console.print(f"{profile.name}: {styled_state(current)}")


@app.command()
def requests(
    identity: IdentityOption,
    sent: Annotated[
        bool, typer.Option("--sent", help="Show requests you sent instead of received.")
    ] = False,
    show_all: Annotated[
        bool, typer.Option("--all", help="Include approved and declined requests.")
    ] = False,
) -> None:
    """List pending connection requests."""
    with _services() as services:
        event_id = services.settings.require_event_id()
        status = None if show_all else RequestStatus.PENDING
        if sent:
            rows = services.db_service.list_requests(
                event_id, requester_id=identity, status=status
            )
        else:
            rows = services.db_service.list_requests(
                event_id, recipient_id=identity, status=status
            )
        if not rows:
            console.print("[dim]No requests.[/dim]")
            return
        other_ids = [row.recipient_id if sent else row.requester_id for row in rows]
        profiles = services.db_service.get_profiles(other_ids)
        console.print(render_requests_table(rows, profiles, incoming=not sent))


@app.command()
def connections(identity: IdentityOption) -> None:
    """List the attendees you are connected with, with your notes."""
    with _services() as services:
        event_id = services.settings.require_event_id()
        rows = services.db_service.list_connections(event_id, identity)
        if not rows:
            console.print("[dim]No connections yet.[/dim]")
            return
        peers = services.db_service.get_profiles([row.peer_of(identity) for row in rows])
        profiles = [peers[row.peer_of(identity)] for row in rows if row.peer_of(identity) in peers]
        notes = services.notes.notes_by_peer(identity)
        console.print(render_connections_table(profiles, notes))


@app.command()
def note(
    identity: IdentityOption,
    target: Annotated[str, typer.Argument(help="Slug or id of the attendee.")],
    text: Annotated[str | None, typer.Option("--text", "-t", help="Note text.")] = None,
    tags: Annotated[
        str | None, typer.Option("--tags", help="Comma-separated tags, e.g. 'design, hiring'.")
    ] = None,
    clear: Annotated[bool, typer.Option("--clear", help="Delete the note.")] = False,
) -> None:
    """Keep a private note and tags about another attendee."""
    with _services() as services:
        profile = services.profiles.resolve(target)
        if clear:
            services.notes.delete_note(identity, profile.id)
            console.print(f"[green]Note about {profile.name} deleted.[/green]")
            return
        if text is None and tags is None:
            current = services.notes.get_note(identity, profile.id)
            if current is None:
                console.print(f"[dim]No note about {profile.name}.[/dim]")
                return
            console.print(f"[bold]{profile.name}[/bold]: {current.note or ''}")
            if current.tags:
                console.print(f"[green]Tags: {', '.join(current.tags)}[/green]")
            return

        saved = services.notes.save_note(identity, profile.id, text, tags)
        if saved is None:
            console.print(f"[green]Note about {profile.name} deleted.[/green]")
        else:
            console.print(f"[green]Note about {profile.name} saved.[/green]")


@app.command()
def scan(
    identity: IdentityOption,
    target: Annotated[str, typer.Argument(help="Slug of the scanned profile.")],
    source: Annotated[
        str, typer.Option("--source", "-s", help="Where the scan came from: qr, directory, link.")
    ] = "qr",
) -> None:
    """Log that you scanned another attendee's profile."""
    with _services() as services:
        services.scans.record_scan(identity, source, slug=target)
        console.print("[green]Scan recorded.[/green]")


@notifications_app.command("list")
def notifications_list(
    identity: IdentityOption,
    limit: Annotated[int, typer.Option("--limit", help="Maximum notifications.")] = 10,
) -> None:
    """Show your latest notifications, unread first."""
    with _services() as services:
        entries = services.inbox.list_entries(identity, limit=limit)
        unread = services.inbox.unread_count(identity)
        if not entries:
            console.print("[dim]No notifications.[/dim]")
            return
        console.print(render_notifications_table(entries, unread))


@notifications_app.command("read")
def notifications_read(
    identity: IdentityOption,
    notification_id: Annotated[
        str | None, typer.Argument(help="Notification to mark read; omit with --all.")
    ] = None,
    mark_all: Annotated[bool, typer.Option("--all", help="Mark every notification read.")] = False,
) -> None:
    """Mark notifications as read."""
    if not mark_all and notification_id is None:
        console.print("[red]Error: pass a notification id or --all.[/red]")
        raise typer.Exit(code=1)

    with _services() as services:
        if mark_all:
            count = services.inbox.mark_all_read(identity)
            console.print(f"[green]Marked {count} notification(s) as read.[/green]")
            return
        if not services.inbox.mark_read(identity, notification_id or ""):
            console.print("[red]Error: notification not found.[/red]")
            raise typer.Exit(code=1)
        console.print("[green]Notification marked as read.[/green]")


@app.command()
def invite(
    identity: IdentityOption,
    emails: Annotated[list[str], typer.Argument(help="Email addresses to invite.")],
) -> None:
    """Invite people to the event by email."""
    with _services() as services:
        if len(emails) == 1:
            invitation = services.invitations.invite(emails[0], identity)
            console.print(f"[green]Invitation sent to {invitation.email}.[/green]")
            console.print(f"[dim]{services.invitations.invitation_url(invitation)}[/dim]")
            return

        result = services.invitations.invite_many(emails, identity)
        console.print(
            f"[green]Sent: {len(result.sent)}[/green]  "
            f"[yellow]Skipped: {len(result.skipped)}[/yellow]  "
            f"[red]Failed: {len(result.failed)}[/red]"
        )
        for email, reason in {**result.skipped, **result.failed}.items():
            console.print(f"  [dim]{email}: {reason}[/dim]")


@app.command("accept-invite")
def accept_invite(
    identity: IdentityOption,
    token: Annotated[str, typer.Argument(help="Token from the invitation link.")],
    name: Annotated[
        str | None, typer.Option("--name", "-n", help="Display name for a new profile.")
    ] = None,
) -> None:
    """Accept an invitation and create your profile."""
    with _services() as services:
        profile = services.invitations.accept(token, identity, name=name)
        console.print(f"[green]Invitation accepted. Welcome, {profile.name}![/green]")


AdminEmailOption = Annotated[
    str,
    typer.Option(
        "--email",
        "-e",
        help="Administrator email.",
        envvar="EVENT_CONNECT_ADMIN_EMAIL",
    ),
]

ExportOption = Annotated[
    Path | None,
    typer.Option("--export", help="Also write the list to this CSV file."),
]


@admin_app.command("metrics")
def admin_metrics(email: AdminEmailOption) -> None:
    """Show aggregate event metrics."""
    with _services() as services:
        require_admin(email, services.settings)
        event_id = services.settings.require_event_id()
        stats = get_event_metrics(services.db_service, event_id)
        console.print(render_metrics_panel(stats, services.settings.event_name))


@admin_app.command("attendees")
def admin_attendees(email: AdminEmailOption, export: ExportOption = None) -> None:
    """List every attendee of the event."""
    with _services() as services:
        require_admin(email, services.settings)
        event_id = services.settings.require_event_id()
        profiles = list_attendees(services.db_service, event_id)
        console.print(render_attendees_table(profiles))
        if export is not None:
            path = CSVExporter().export_attendees(
                profiles, export, services.settings.event_name
            )
            console.print(f"[green]Exported {len(profiles)} attendees to {path}[/green]")


@admin_app.command("connections")
def admin_connections(email: AdminEmailOption, export: ExportOption = None) -> None:
    """List every connection made at the event."""
    with _services() as services:
        require_admin(email, services.settings)
        event_id = services.settings.require_event_id()
        rows = list_connection_rows(services.db_service, event_id)
        console.print(render_connection_rows_table(rows))
        if export is not None:
            path = CSVExporter().export_connections(rows, export, services.settings.event_name)
            console.print(f"[green]Exported {len(rows)} connections to {path}[/green]")


if __name__ == "__main__":
    app()
