# ABOUTME: SQLModel for an attendee's profile within an event.
# ABOUTME: Holds display fields, contact visibility flags, and the derived completion score.

from datetime import datetime
from typing import Annotated

from sqlmodel import Field, SQLModel

from event_connect.models.common import new_id

# Fields that count towards the completion score, in display order.
COMPLETION_FIELDS: tuple[str, ...] = (
    "name",
    "headline",
    "company",
    "job_title",
    "bio",
    "location",
    "phone",
    "email_public",
    "social_linkedin",
    "social_twitter",
    "social_instagram",
    "social_facebook",
)

SOCIAL_FIELDS: tuple[str, ...] = (
    "social_linkedin",
    "social_twitter",
    "social_instagram",
    "social_facebook",
)


class Profile(SQLModel, table=True):
    """Represents one attendee identity within one event."""

    __tablename__ = "profiles"

    id: str = Field(primary_key=True, description="Identity id from the identity provider")
    event_id: Annotated[str, Field(index=True, description="Event this profile belongs to")]
    slug: str = Field(default_factory=new_id, unique=True, index=True)
    account_email: str | None = Field(
        default=None, index=True, description="Login email of the identity"
    )

    name: str
    headline: str | None = None
    company: str | None = None
    job_title: str | None = None
    bio: str | None = None
    location: str | None = None
    website: str | None = None
    avatar_url: str | None = None

    phone: str | None = None
    email_public: str | None = None
    social_linkedin: str | None = None
    social_twitter: str | None = None
    social_instagram: str | None = None
    social_facebook: str | None = None

    hide_phone_until_connected: bool = True
    hide_email_until_connected: bool = True
    hide_socials_until_connected: bool = True

    completion_score: int = Field(default=0, ge=0, le=100)
    joined_event_at: datetime | None = None

    def compute_completion_score(self) -> int:
        """Return the percentage of completion fields that are filled in."""
        filled = sum(1 for field in COMPLETION_FIELDS if (getattr(self, field) or "").strip())
        return round(filled * 100 / len(COMPLETION_FIELDS))
