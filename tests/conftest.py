# ABOUTME: Shared pytest fixtures for event-connect tests.
# ABOUTME: Provides settings, a temporary database, services, and sample profiles.

import logging
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from event_connect.config import Settings
from event_connect.database import DatabaseService
from event_connect.models import Profile

EVENT_ID = "devfest-2025"
OTHER_EVENT_ID = "other-event"


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
def db_service(temp_db_path: Path) -> DatabaseService:
    """Create a DatabaseService with a temporary database."""
    service = DatabaseService(db_path=temp_db_path)
    service.init_db()
    return service


@pytest.fixture
def settings(temp_db_path: Path) -> Settings:
    """Create Settings with approval required and inline notifications."""
    return Settings(
        db_path=temp_db_path,
        event_id=EVENT_ID,
        event_name="DevFest Test",
        event_code="DEVFEST",
        connections_require_approval=True,
        admin_emails="admin@example.com, Ops@Example.com",
        app_domain="event.test",
        email_api_key=None,
        notify_workers=0,
    )


@pytest.fixture
def open_settings(settings: Settings) -> Settings:
    """Create Settings where connections do not need approval."""
    return settings.model_copy(update={"connections_require_approval": False})


@pytest.fixture
def make_profile(db_service: DatabaseService) -> Callable[..., Profile]:
    """Return a factory that stores a profile and returns it."""

    def _make(
        profile_id: str,
        event_id: str = EVENT_ID,
        name: str | None = None,
        **fields: object,
    ) -> Profile:
        profile = Profile(
            id=profile_id,
            event_id=event_id,
            name=name or profile_id.capitalize(),
            account_email=f"{profile_id}@example.com",
            **fields,
        )
        profile.completion_score = profile.compute_completion_score()
        return db_service.save_profile(profile)

    return _make


@pytest.fixture
def attendees(make_profile: Callable[..., Profile]) -> dict[str, Profile]:
    """Store three attendees of the test event and one outsider."""
    return {
        "alice": make_profile("alice", headline="Backend engineer", company="Acme"),
        "bob": make_profile("bob", headline="Designer", company="Globex"),
        "carol": make_profile("carol", headline="Product manager", company="Initech"),
        "mallory": make_profile("mallory", event_id=OTHER_EVENT_ID),
    }


@pytest.fixture(autouse=True)
def reset_package_logger() -> Iterator[None]:
    """Undo CLI logging setup so caplog sees package records in every test."""
    yield
    logger = logging.getLogger("event_connect")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
