# ABOUTME: Pydantic model validating profile edits before they are saved.
# ABOUTME: Trims text, turns blanks into None, and enforces length and format rules.

import re
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

URL_PATTERN = re.compile(r"^https?://[^\s/$.?#].[^\s]*$", re.IGNORECASE)
PHONE_PATTERN = re.compile(r"^[0-9+\-()\s]*$")
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

OPTIONAL_TEXT_FIELDS = (
    "job_title",
    "phone",
    "email_public",
    "social_linkedin",
    "social_twitter",
    "social_instagram",
    "social_facebook",
    "website",
)


class ProfileUpdate(BaseModel):
    """Fields an attendee may change on their own profile.

    Fields that are not passed are not changed.
    """

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    name: Annotated[str | None, Field(min_length=2, max_length=120)] = None
    headline: Annotated[str | None, Field(min_length=2, max_length=160)] = None
    company: Annotated[str | None, Field(min_length=2, max_length=120)] = None
    job_title: Annotated[str | None, Field(max_length=120)] = None
    bio: Annotated[str | None, Field(min_length=10, max_length=400)] = None
    location: Annotated[str | None, Field(min_length=2, max_length=120)] = None
    phone: Annotated[str | None, Field(max_length=30)] = None
    email_public: Annotated[str | None, Field(max_length=120)] = None
    social_linkedin: Annotated[str | None, Field(max_length=200)] = None
    social_twitter: Annotated[str | None, Field(max_length=200)] = None
    social_instagram: Annotated[str | None, Field(max_length=200)] = None
    social_facebook: Annotated[str | None, Field(max_length=200)] = None
    website: Annotated[str | None, Field(max_length=200)] = None

    hide_phone_until_connected: bool | None = None
    hide_email_until_connected: bool | None = None
    hide_socials_until_connected: bool | None = None

    @field_validator(
        "name",
        "hide_phone_until_connected",
        "hide_email_until_connected",
        "hide_socials_until_connected",
    )
    @classmethod
    def _check_required(cls, value: object) -> object:
        if value is None:
            raise ValueError("This field cannot be cleared")
        return value

    @field_validator("phone")
    @classmethod
    def _check_phone(cls, value: str | None) -> str | None:
        if value and not PHONE_PATTERN.match(value):
            raise ValueError("Use only digits and the symbols + - ( )")
        return value

    @field_validator("email_public")
    @classmethod
    def _check_email(cls, value: str | None) -> str | None:
        if value and not EMAIL_PATTERN.match(value):
            raise ValueError("Must be a valid email address")
        return value

    @field_validator("website")
    @classmethod
    def _check_website(cls, value: str | None) -> str | None:
        if value and not URL_PATTERN.match(value):
            raise ValueError("Must be a valid URL")
        return value

    def changes(self) -> dict[str, object]:
        """Return the fields that were provided.

        Optional text fields submitted as empty strings are returned as None
        so they clear the stored value.
        """
        provided = self.model_dump(exclude_unset=True)
        for field in OPTIONAL_TEXT_FIELDS:
            if field in provided and provided[field] == "":
                provided[field] = None
        return provided
