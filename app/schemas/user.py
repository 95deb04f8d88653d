"""Pydantic schemas for profile and notification preference endpoints."""

from pydantic import Field, field_validator

from app.schemas.common import CamelModel
from app.services.coaching import COACHES


class NotificationPreferences(CamelModel):
    email_notifications: bool
    marketing_emails: bool
    weekly_digest: bool
    coaching_reminders: bool


class NotificationPreferencesResponse(CamelModel):
    message: str
    preferences: NotificationPreferences


class ProfileUpdate(CamelModel):
    current_role: str | None = Field(default=None, min_length=1)
    industry: str | None = Field(default=None, min_length=1)
    career_stage: str | None = Field(default=None, min_length=1)
    five_year_goal: str | None = Field(default=None, min_length=1)
    biggest_challenge: str | None = Field(default=None, min_length=1)
    work_environment: str | None = Field(default=None, min_length=1)
    primary_coaches: list[str] | None = Field(default=None, max_length=2)

    @field_validator("primary_coaches")
    @classmethod
    def known_coaches(cls, value: list[str] | None) -> list[str] | None:
        if value is None:
            return value
        unknown = [c for c in value if c not in COACHES]
        if unknown:
            raise ValueError(f"Unknown coach: {', '.join(unknown)}")
        return value


class Profile(CamelModel):
    current_role: str | None = None
    industry: str | None = None
    career_stage: str | None = None
    five_year_goal: str | None = None
    biggest_challenge: str | None = None
    work_environment: str | None = None
    primary_coaches: list[str] | None = None
    is_onboarding_complete: bool = False


class ProfileResponse(CamelModel):
    message: str
    profile: Profile
