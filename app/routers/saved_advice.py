"""Saved (hearted) advice endpoints."""

from fastapi import APIRouter, Depends, status

from app.dependencies import get_current_user, get_storage
from app.errors import Forbidden, NotFound
from app.models.user import User
from app.schemas.coaching import SavedAdviceCreate, SavedAdviceResponse
from app.storage import Storage

router = APIRouter(prefix="/api/saved-advice", tags=["Saved Advice"])


@router.post("", response_model=SavedAdviceResponse, status_code=status.HTTP_201_CREATED)
def save_advice(
    body: SavedAdviceCreate,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
) -> SavedAdviceResponse:
    """Save a coach message from one of the user's own sessions."""
    session = storage.get_coaching_session(body.session_id)
    if session is None or session.user_id != user.id:
        raise Forbidden("Session not found or access denied")

    advice = storage.create_saved_advice(
        user_id=user.id,
        session_id=session.id,
        message_content=body.message_content,
        coach_type=body.coach_type,
    )
    return SavedAdviceResponse.model_validate(advice)


@router.get("", response_model=list[SavedAdviceResponse])
def list_saved_advice(
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
) -> list[SavedAdviceResponse]:
    return [SavedAdviceResponse.model_validate(a) for a in storage.get_user_saved_advice(user.id)]


@router.delete("/{advice_id}")
def delete_saved_advice(
    advice_id: int,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
) -> dict:
    advice = storage.get_saved_advice(advice_id)
    if advice is None or advice.user_id != user.id:
        raise NotFound("Saved advice not found")
    storage.delete_saved_advice(advice)
    return {"success": True}
