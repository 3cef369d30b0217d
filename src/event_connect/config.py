# ABOUTME: Configuration module for application settings.
# ABOUTME: Uses pydantic-settings for environment variable overrides and provides cached access.

from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from event_connect.errors import EventNotConfiguredError

# Values that switch the approval policy off. Anything else switches it on.
APPROVAL_OFF_VALUES = frozenset({"false", "0", "off", "no"})

PLACEHOLDER_EVENT_ID = "00000000-0000-0000-0000-000000000000"


class Settings(BaseSettings):
    """Application settings with environment variable support.

    All settings can be overridden via environment variables with the
    EVENT_CONNECT_ prefix (e.g., EVENT_CONNECT_DB_PATH).
    """

    model_config = SettingsConfigDict(
        env_prefix="EVENT_CONNECT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    db_path: Annotated[Path, Field(description="Path to SQLite database file")] = (
        Path.home() / ".event-connect" / "data.db"
    )

    event_id: Annotated[str, Field(description="Identifier of the event being run")] = ""

    event_name: Annotated[str, Field(description="Display name of the event")] = "DevFest"

    event_code: Annotated[str, Field(description="Code attendees enter to join the event")] = ""

    connections_require_approval: Annotated[
        bool, Field(description="Whether connection requests need recipient approval")
    ] = False

    admin_emails: Annotated[
        str, Field(description="Comma-separated list of administrator emails")
    ] = ""

    app_domain: Annotated[str, Field(description="Public domain used in email links")] = (
        "localhost:3000"
    )

    email_api_key: Annotated[
        str | None, Field(description="API key for the transactional email provider")
    ] = None

    email_api_url: Annotated[str, Field(description="Email provider send endpoint")] = (
        "https://api.resend.com/emails"
    )

    email_from: Annotated[str, Field(description="Sender address for outgoing email")] = (
        "notifications@event-connect.local"
    )

    email_timeout_seconds: Annotated[
        float, Field(description="Timeout for email provider requests", gt=0)
    ] = 10.0

    notify_workers: Annotated[
        int, Field(description="Background workers for notifications; 0 runs them inline", ge=0)
    ] = 2

    invitation_ttl_days: Annotated[
        int, Field(description="Days an invitation stays valid", ge=1)
    ] = 7

    log_level: Annotated[str, Field(description="Logging level for the CLI")] = "WARNING"

    @field_validator("connections_require_approval", mode="before")
    @classmethod
    def _parse_approval_flag(cls, value: Any) -> Any:
        if value is None:
            return False
        if isinstance(value, str):
            raw = value.strip().lower()
            if not raw:
                return False
            return raw not in APPROVAL_OFF_VALUES
        return value

    @property
    def admin_email_list(self) -> list[str]:
        """Return the configured admin emails, trimmed and without blanks."""
        return [email.strip() for email in self.admin_emails.split(",") if email.strip()]

    @property
    def has_event(self) -> bool:
        """Return True if a real event id is configured."""
        return bool(self.event_id) and self.event_id != PLACEHOLDER_EVENT_ID

    def require_event_id(self) -> str:
        """Return the configured event id.

        Raises:
            EventNotConfiguredError: If no event id is configured.
        """
        if not self.has_event:
            raise EventNotConfiguredError(
                "Event is not configured. Set EVENT_CONNECT_EVENT_ID first."
            )
        return self.event_id


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings.

    Returns a cached Settings instance. Use get_settings.cache_clear()
    to clear the cache if needed.

    Returns:
        Cached Settings instance.
    """
    return Settings()

