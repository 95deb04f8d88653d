"""Profile and notification preference endpoints."""

from fastapi import APIRouter, Depends

from app.dependencies import get_current_user, get_storage
from app.models.user import User
from app.schemas.user import (
    NotificationPreferences,
    NotificationPreferencesResponse,
    Profile,
    ProfileResponse,
    ProfileUpdate,
)
from app.storage import Storage

router = APIRouter(prefix="/api/user", tags=["User"])


def _profile(user: User) -> Profile:
    return Profile(
        current_role=user.current_role,
        industry=user.industry,
        career_stage=user.career_stage,
        five_year_goal=user.five_year_goal,
        biggest_challenge=user.biggest_challenge,
        work_environment=user.work_environment,
        primary_coaches=user.primary_coaches,
        is_onboarding_complete=user.onboarding_complete,
    )


@router.get("/notifications", response_model=NotificationPreferences)
def get_notifications(user: User = Depends(get_current_user)) -> NotificationPreferences:
    return NotificationPreferences.model_validate(user)


@router.put("/notifications", response_model=NotificationPreferencesResponse)
def update_notifications(
    body: NotificationPreferences,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
) -> NotificationPreferencesResponse:
    """Replace all four notification preferences."""
    user = storage.update_user(user, **body.model_dump())
    return NotificationPreferencesResponse(
        message="Notification preferences updated successfully",
        preferences=NotificationPreferences.model_validate(user),
    )


@router.get("/profile", response_model=Profile)
def get_profile(user: User = Depends(get_current_user)) -> Profile:
    return _profile(user)


@router.put("/profile", response_model=ProfileResponse)
def update_profile(
    body: ProfileUpdate,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
) -> ProfileResponse:
    """Save the onboarding answers. Any save marks onboarding as complete."""
    updates = body.model_dump(exclude_unset=True)
    user = storage.update_user(user, onboarding_complete=True, **updates)
    return ProfileResponse(message="Profile updated successfully", profile=_profile(user))
