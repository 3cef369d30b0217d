# ABOUTME: Email client that sends transactional mail through the provider's HTTP API.
# ABOUTME: Skips sending when no API key is configured.

import logging

import httpx

from event_connect.config import Settings
from event_connect.notify.exceptions import EmailDeliveryError
from event_connect.notify.templates import EmailKind, render_email

logger = logging.getLogger(__name__)


class EmailClient:
    """Sends rendered emails to the configured provider."""

    def __init__(self, settings: Settings, http_client: httpx.Client | None = None) -> None:
        """Initialize the email client.

        Args:
            settings: Settings with the provider URL, API key, and sender.
            http_client: Optional httpx client; one is created when omitted.
        """
        self._settings = settings
        self._http_client = http_client or httpx.Client(
            timeout=httpx.Timeout(settings.email_timeout_seconds)
        )

    @property
    def is_configured(self) -> bool:
        """Return True if an API key is available."""
        return bool(self._settings.email_api_key)

    def send(self, kind: EmailKind, recipient: str, template_data: dict) -> bool:
        """Render and send one email.

        Args:
            kind: Which email to send.
            recipient: Destination address.
            template_data: Values for the templates.

        Returns:
            True if the provider accepted the email, False if sending was skipped.

        Raises:
            EmailDeliveryError: If the provider cannot be reached or rejects the email.
        """
        if not self.is_configured:
            logger.warning("Email API key not configured, skipping %s email", kind.value)
            return False

        data = {"event_name": self._settings.event_name, **template_data}
        subject, html = render_email(kind, data)

        logger.info("Sending %s email to %s", kind.value, recipient)
        try:
            response = self._http_client.post(
                self._settings.email_api_url,
                headers={"Authorization": f"Bearer {self._settings.email_api_key}"},
                json={
                    "from": self._settings.email_from,
                    "to": recipient,
                    "subject": subject,
                    "html": html,
                    "tags": [{"name": "kind", "value": kind.value}],
                },
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise EmailDeliveryError(
                f"Email provider rejected {kind.value} email: "
                f"{e.response.status_code} {e.response.text}"
            ) from e
        except httpx.HTTPError as e:
            raise EmailDeliveryError(f"Could not reach email provider: {e}") from e

        return True

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._http_client.close()
