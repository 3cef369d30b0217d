# ABOUTME: Tests for the profiles package: joining, editing, directory, and contact visibility.
# ABOUTME: Uses a temporary database and the shared attendee fixtures.

from collections.abc import Callable

import pytest

from event_connect.config import Settings
from event_connect.database import DatabaseService
from event_connect.errors import EventNotConfiguredError
from event_connect.ledger import ConnectionState
from event_connect.models import Profile
from event_connect.profiles import (
    InvalidEventCodeError,
    ProfileNotFoundError,
    ProfileService,
    ProfileUpdate,
    ProfileValidationError,
    normalize_code,
    visible_contact_fields,
)
from tests.conftest import EVENT_ID


@pytest.fixture
def profile_service(db_service: DatabaseService, settings: Settings) -> ProfileService:
    """Create a ProfileService for the test event."""
    return ProfileService(db_service, settings)


class TestJoinEvent:
    """Tests for join_event."""

    def test_join_creates_profile(self, profile_service: ProfileService) -> None:
        """Test that the first join creates a profile in the event."""
        profile = profile_service.join_event("u1", " devfest ", name="Grace Hopper")

        assert profile.event_id == EVENT_ID
        assert profile.name == "Grace Hopper"
        assert profile.joined_event_at is not None
        assert profile.slug
        assert profile.completion_score == round(100 / 12)

    def test_join_falls_back_to_email_name(self, profile_service: ProfileService) -> None:
        """Test that a missing name falls back to the email local part."""
        profile = profile_service.join_event("u1", "DEVFEST", account_email="grace@navy.mil")

        assert profile.name == "grace"
        assert profile.account_email == "grace@navy.mil"

    def test_join_without_name_or_email(self, profile_service: ProfileService) -> None:
        """Test the generic fallback name."""
        assert profile_service.join_event("u1", "DEVFEST").name == "Attendee"

    def test_join_again_keeps_profile(
        self, profile_service: ProfileService, db_service: DatabaseService
    ) -> None:
        """Test that joining twice does not overwrite the profile."""
        first = profile_service.join_event("u1", "DEVFEST", name="Grace")
        profile_service.update_profile("u1", headline="Rear admiral")

        second = profile_service.join_event("u1", "DEVFEST", name="Someone Else")

        assert second.id == first.id
        assert second.slug == first.slug
        assert db_service.get_profile("u1").headline == "Rear admiral"
        assert db_service.get_profile("u1").name == "Grace"

    def test_join_keeps_existing_email(
        self, profile_service: ProfileService, make_profile: Callable[..., Profile]
    ) -> None:
        """Test that a later join never replaces the stored login email."""
        existing = make_profile("u2")
        existing_email = existing.account_email

        profile = profile_service.join_event("u2", "DEVFEST", account_email="new@example.com")

        assert profile.account_email == existing_email
        assert profile.joined_event_at is not None

    @pytest.mark.parametrize("code", ["", "   ", "WRONG"])
    def test_bad_code_rejected(self, profile_service: ProfileService, code: str) -> None:
        """Test that empty or wrong codes are rejected."""
        with pytest.raises(InvalidEventCodeError):
            profile_service.join_event("u1", code)

    def test_unconfigured_code_rejects_everything(
        self, db_service: DatabaseService, settings: Settings
    ) -> None:
        """Test that no code matches when the event has none configured."""
        service = ProfileService(db_service, settings.model_copy(update={"event_code": ""}))

        with pytest.raises(InvalidEventCodeError):
            service.join_event("u1", "DEVFEST")

    def test_unconfigured_event(self, db_service: DatabaseService, settings: Settings) -> None:
        """Test that joining needs a configured event."""
        service = ProfileService(db_service, settings.model_copy(update={"event_id": ""}))

        with pytest.raises(EventNotConfiguredError):
            service.join_event("u1", "DEVFEST")

    def test_normalize_code(self) -> None:
        assert normalize_code("  gdg25 ") == "GDG25"
        assert normalize_code(None) == ""


class TestLookups:
    """Tests for get_profile, get_by_slug, and resolve."""

    def test_get_missing_raises(self, profile_service: ProfileService) -> None:
        with pytest.raises(ProfileNotFoundError):
            profile_service.get_profile("nobody")

    def test_get_by_slug(
        self, profile_service: ProfileService, attendees: dict[str, Profile]
    ) -> None:
        slug = attendees["bob"].slug
        assert profile_service.get_by_slug(slug).id == "bob"
        with pytest.raises(ProfileNotFoundError):
            profile_service.get_by_slug("no-such-slug")

    def test_resolve_accepts_slug_or_id(
        self, profile_service: ProfileService, attendees: dict[str, Profile]
    ) -> None:
        """Test that resolve tries the slug first and then the id."""
        assert profile_service.resolve(attendees["carol"].slug).id == "carol"
        assert profile_service.resolve("carol").id == "carol"
        with pytest.raises(ProfileNotFoundError):
            profile_service.resolve("nobody")


class TestUpdateProfile:
    """Tests for update_profile."""

    def test_update_recomputes_completion(
        self, profile_service: ProfileService, make_profile: Callable[..., Profile]
    ) -> None:
        """Test that edits are saved and the completion score follows."""
        make_profile("u1")

        profile = profile_service.update_profile(
            "u1",
            headline="Compiler pioneer",
            company="Navy",
            job_title="Rear Admiral",
            location="Arlington",
            bio="Invented the first compiler.",
        )

        assert profile.headline == "Compiler pioneer"
        assert profile.completion_score == 50

    def test_update_strips_whitespace(
        self, profile_service: ProfileService, make_profile: Callable[..., Profile]
    ) -> None:
        make_profile("u1")

        profile = profile_service.update_profile("u1", company="  Acme Corp  ")

        assert profile.company == "Acme Corp"

    def test_blank_optional_fields_clear_values(
        self, profile_service: ProfileService, make_profile: Callable[..., Profile]
    ) -> None:
        """Test that blank optional contact fields are stored as None."""
        make_profile("u1", phone="+1 555 0100", social_twitter="@grace")

        profile = profile_service.update_profile("u1", phone="", social_twitter="   ")

        assert profile.phone is None
        assert profile.social_twitter is None

    def test_website_saved_and_cleared(
        self, profile_service: ProfileService, make_profile: Callable[..., Profile]
    ) -> None:
        make_profile("u1")

        saved = profile_service.update_profile("u1", website=" https://ada.dev ")
        cleared = profile_service.update_profile("u1", website="")

        assert saved.website == "https://ada.dev"
        assert cleared.website is None

    def test_cleared_name_keeps_stored_value(
        self, profile_service: ProfileService, make_profile: Callable[..., Profile]
    ) -> None:
        """Test that clearing the name is a validation error, not a store failure."""
        make_profile("u1", name="Ada Lovelace")

        with pytest.raises(ProfileValidationError) as exc_info:
            profile_service.update_profile("u1", name=None)

        assert "name" in exc_info.value.errors
        assert profile_service.get_profile("u1").name == "Ada Lovelace"

    def test_visibility_flags_update(
        self, profile_service: ProfileService, make_profile: Callable[..., Profile]
    ) -> None:
        make_profile("u1")

        profile = profile_service.update_profile("u1", hide_phone_until_connected=False)

        assert profile.hide_phone_until_connected is False
        assert profile.hide_email_until_connected is True

    @pytest.mark.parametrize(
        ("fields", "bad_field"),
        [
            ({"name": "A"}, "name"),
            ({"bio": "short"}, "bio"),
            ({"phone": "call me"}, "phone"),
            ({"email_public": "not-an-email"}, "email_public"),
            ({"headline": "x" * 161}, "headline"),
            ({"name": None}, "name"),
            ({"hide_email_until_connected": None}, "hide_email_until_connected"),
            ({"website": "example dot com"}, "website"),
        ],
    )
    def test_invalid_fields_rejected(
        self,
        profile_service: ProfileService,
        make_profile: Callable[..., Profile],
        fields: dict[str, object],
        bad_field: str,
    ) -> None:
        """Test that validation errors are reported per field and nothing is saved."""
        make_profile("u1", headline="Original")

        with pytest.raises(ProfileValidationError) as exc_info:
            profile_service.update_profile("u1", **fields)

        assert bad_field in exc_info.value.errors
        assert profile_service.get_profile("u1").headline == "Original"

    def test_unknown_field_rejected(
        self, profile_service: ProfileService, make_profile: Callable[..., Profile]
    ) -> None:
        """Test that fields outside the editable set are refused."""
        make_profile("u1")

        with pytest.raises(ProfileValidationError):
            profile_service.update_profile("u1", event_id="other-event")

    def test_update_missing_profile(self, profile_service: ProfileService) -> None:
        with pytest.raises(ProfileNotFoundError):
            profile_service.update_profile("nobody", headline="Hello there")

    def test_profile_update_changes_only_provided(self) -> None:
        """Test that unset fields are not part of the change set."""
        update = ProfileUpdate(headline="Engineer", job_title="")

        assert update.changes() == {"headline": "Engineer", "job_title": None}


class TestSearchDirectory:
    """Tests for search_directory."""

    def test_lists_event_attendees(
        self, profile_service: ProfileService, attendees: dict[str, Profile]
    ) -> None:
        ids = [profile.id for profile in profile_service.search_directory()]
        assert ids == ["alice", "bob", "carol"]

    def test_query_filters(
        self, profile_service: ProfileService, attendees: dict[str, Profile]
    ) -> None:
        ids = [profile.id for profile in profile_service.search_directory(query="globex")]
        assert ids == ["bob"]


class TestVisibleContactFields:
    """Tests for hide-until-connected contact visibility."""

    @pytest.fixture
    def private_profile(self) -> Profile:
        return Profile(
            id="p1",
            event_id=EVENT_ID,
            name="Private Person",
            phone="+1 555 0100",
            email_public="p@example.com",
            social_linkedin="in/private",
            social_twitter="@private",
            hide_phone_until_connected=True,
            hide_email_until_connected=True,
            hide_socials_until_connected=True,
        )

    @pytest.mark.parametrize("state", [ConnectionState.IDLE, ConnectionState.PENDING])
    def test_hidden_until_connected(
        self, private_profile: Profile, state: ConnectionState
    ) -> None:
        contact = visible_contact_fields(private_profile, state)

        assert contact.phone is None
        assert contact.email is None
        assert contact.socials == {}

    @pytest.mark.parametrize("state", [ConnectionState.CONNECTED, ConnectionState.SELF])
    def test_revealed_when_connected(
        self, private_profile: Profile, state: ConnectionState
    ) -> None:
        contact = visible_contact_fields(private_profile, state)

        assert contact.phone == "+1 555 0100"
        assert contact.email == "p@example.com"
        assert contact.socials == {"linkedin": "in/private", "twitter": "@private"}

    def test_unhidden_fields_always_visible(self, private_profile: Profile) -> None:
        """Test that each flag only hides its own field."""
        private_profile.hide_phone_until_connected = False

        contact = visible_contact_fields(private_profile, ConnectionState.IDLE)

        assert contact.phone == "+1 555 0100"
        assert contact.email is None
