# ABOUTME: Notifier that records in-app notifications and sends transactional email.
# ABOUTME: Every side effect goes through the Dispatcher, so callers never wait or fail on it.

import logging

from event_connect.config import Settings
from event_connect.database import DatabaseService
from event_connect.models import ConnectionRequest, Notification, NotificationType, Profile
from event_connect.notify.dispatcher import Dispatcher
from event_connect.notify.mailer import EmailClient
from event_connect.notify.templates import EmailKind

logger = logging.getLogger(__name__)


def _subtitle(profile: Profile) -> str:
    return " • ".join(part for part in (profile.headline, profile.company) if part)


class Notifier:
    """Best-effort delivery of notifications and email."""

    def __init__(
        self,
        db_service: DatabaseService,
        settings: Settings,
        dispatcher: Dispatcher,
        email_client: EmailClient | None = None,
    ) -> None:
        """Initialize the notifier.

        Args:
            db_service: Database service for notification rows and profile lookups.
            settings: Settings used to build links in emails.
            dispatcher: Dispatcher that runs the side effects.
            email_client: Optional email client; email is skipped without one.
        """
        self._db_service = db_service
        self._settings = settings
        self._dispatcher = dispatcher
        self._email_client = email_client

    def notify(
        self,
        actor_id: str,
        recipient_id: str,
        kind: NotificationType,
        reference_id: str | None,
    ) -> None:
        """Record an in-app notification in the background."""
        self._dispatcher.submit(
            self._write_notification, actor_id, recipient_id, kind, reference_id
        )

    def send_email(self, kind: EmailKind, recipient: str, template_data: dict) -> None:
        """Send an email in the background."""
        if self._email_client is None:
            logger.debug("No email client configured, dropping %s email", kind.value)
            return
        self._dispatcher.submit(self._email_client.send, kind, recipient, template_data)

    def connection_requested(self, request: ConnectionRequest) -> None:
        """Tell a recipient that someone wants to connect."""
        self.notify(
            request.requester_id,
            request.recipient_id,
            NotificationType.CONNECTION_REQUEST,
            request.id,
        )
        self._dispatcher.submit(self._email_about_request, request)

    def connection_accepted(self, request: ConnectionRequest) -> None:
        """Tell a requester that their request was approved."""
        self.notify(
            request.recipient_id,
            request.requester_id,
            NotificationType.CONNECTION_ACCEPTED,
            request.id,
        )
        self._dispatcher.submit(self._email_about_acceptance, request)

    def _write_notification(
        self,
        actor_id: str,
        recipient_id: str,
        kind: NotificationType,
        reference_id: str | None,
    ) -> None:
        self._db_service.save_notification(
            Notification(
                user_id=recipient_id,
                actor_id=actor_id,
                type=kind,
                reference_id=reference_id,
            )
        )

    def _profile_url(self, profile: Profile) -> str:
        return f"https://{self._settings.app_domain}/profile/{profile.slug}"

    def _email_about_request(self, request: ConnectionRequest) -> None:
        if self._email_client is None:
            return
        requester = self._db_service.get_profile(request.requester_id)
        recipient = self._db_service.get_profile(request.recipient_id)
        if requester is None or recipient is None or not recipient.account_email:
            logger.info("Skipping request email for %s: no recipient email", request.id)
            return

        self._email_client.send(
            EmailKind.CONNECTION_REQUEST,
            recipient.account_email,
            {
                "requester_name": requester.name or "Someone",
                "subtitle": _subtitle(requester),
                "profile_url": self._profile_url(requester),
                "connections_url": f"https://{self._settings.app_domain}/connections?tab=pending",
            },
        )

    def _email_about_acceptance(self, request: ConnectionRequest) -> None:
        if self._email_client is None:
            return
        requester = self._db_service.get_profile(request.requester_id)
        accepter = self._db_service.get_profile(request.recipient_id)
        if requester is None or accepter is None or not requester.account_email:
            logger.info("Skipping acceptance email for %s: no requester email", request.id)
            return

        self._email_client.send(
            EmailKind.CONNECTION_ACCEPTED,
            requester.account_email,
            {
                "accepter_name": accepter.name or "Someone",
                "subtitle": _subtitle(accepter),
                "profile_url": self._profile_url(accepter),
            },
        )
