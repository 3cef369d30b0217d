# ABOUTME: Tests for the configuration module.
# ABOUTME: Covers Settings defaults, environment overrides, the approval flag, and event checks.

import os
import tempfile
from pathlib import Path
from unittest import mock

import pytest

from event_connect.config import PLACEHOLDER_EVENT_ID, Settings, get_settings
from event_connect.errors import EventConnectError, EventNotConfiguredError


class TestSettingsDefaults:
    """Tests for Settings class default values."""

    def test_db_path_default(self) -> None:
        """Test that db_path defaults to ~/.event-connect/data.db."""
        settings = Settings()
        assert settings.db_path == Path.home() / ".event-connect" / "data.db"

    def test_approval_not_required_by_default(self) -> None:
        """Test that connections do not need approval unless configured."""
        settings = Settings()
        assert settings.connections_require_approval is False

    def test_invitation_ttl_default(self) -> None:
        """Test that invitations last seven days."""
        assert Settings().invitation_ttl_days == 7

    def test_email_key_default(self) -> None:
        """Test that no email API key is configured by default."""
        assert Settings().email_api_key is None


class TestSettingsEnvironmentOverrides:
    """Tests for environment variable overrides."""

    def test_db_path_from_env(self) -> None:
        """Test that db_path can be overridden via environment variable."""
        with tempfile.TemporaryDirectory() as tmpdir:
            custom_path = Path(tmpdir) / "custom.db"
            with mock.patch.dict(os.environ, {"EVENT_CONNECT_DB_PATH": str(custom_path)}):
                settings = Settings()
                assert settings.db_path == custom_path

    def test_event_id_from_env(self) -> None:
        """Test that the event id can be set via environment variable."""
        with mock.patch.dict(os.environ, {"EVENT_CONNECT_EVENT_ID": "gdg-2025"}):
            assert Settings().event_id == "gdg-2025"

    def test_notify_workers_from_env(self) -> None:
        """Test that the worker count can be set via environment variable."""
        with mock.patch.dict(os.environ, {"EVENT_CONNECT_NOTIFY_WORKERS": "0"}):
            assert Settings().notify_workers == 0

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("true", True),
            ("TRUE", True),
            ("1", True),
            ("yes", True),
            ("anything", True),
            ("false", False),
            ("False", False),
            ("0", False),
            ("off", False),
            ("no", False),
            ("", False),
            ("   ", False),
        ],
    )
    def test_approval_flag_from_env(self, raw: str, expected: bool) -> None:
        """Test that only explicit off values disable approval."""
        with mock.patch.dict(
            os.environ, {"EVENT_CONNECT_CONNECTIONS_REQUIRE_APPROVAL": raw}
        ):
            assert Settings().connections_require_approval is expected

    def test_approval_flag_accepts_bool(self) -> None:
        """Test that a real bool passes through unchanged."""
        assert Settings(connections_require_approval=True).connections_require_approval is True
        assert Settings(connections_require_approval=None).connections_require_approval is False


class TestAdminEmailList:
    """Tests for the admin_email_list property."""

    def test_splits_and_trims(self) -> None:
        """Test that the comma-separated list is split and trimmed."""
        settings = Settings(admin_emails=" a@example.com ,b@example.com,, ")
        assert settings.admin_email_list == ["a@example.com", "b@example.com"]

    def test_empty(self) -> None:
        """Test that no admins are configured by default."""
        assert Settings(admin_emails="").admin_email_list == []


class TestRequireEventId:
    """Tests for the event configuration checks."""

    def test_returns_configured_event(self) -> None:
        """Test that a configured event id is returned."""
        settings = Settings(event_id="gdg-2025")
        assert settings.has_event is True
        assert settings.require_event_id() == "gdg-2025"

    @pytest.mark.parametrize("event_id", ["", PLACEHOLDER_EVENT_ID])
    def test_missing_event_raises(self, event_id: str) -> None:
        """Test that an empty or placeholder event id is rejected."""
        settings = Settings(event_id=event_id)
        assert settings.has_event is False
        with pytest.raises(EventNotConfiguredError):
            settings.require_event_id()

    def test_error_is_application_error(self) -> None:
        """Test that the configuration error shares the application base class."""
        assert issubclass(EventNotConfiguredError, EventConnectError)


class TestGetSettings:
    """Tests for get_settings function."""

    def test_get_settings_returns_cached_instance(self) -> None:
        """Test that get_settings returns the same cached instance."""
        get_settings.cache_clear()

        settings1 = get_settings()
        settings2 = get_settings()
        assert settings1 is settings2

    def test_get_settings_cache_can_be_cleared(self) -> None:
        """Test that the cache can be cleared to get a fresh instance."""
        settings1 = get_settings()
        get_settings.cache_clear()
        settings2 = get_settings()
        assert settings1 is not settings2
        assert settings1.db_path == settings2.db_path

