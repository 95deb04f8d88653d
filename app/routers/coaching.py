"""Coaching session and AI chat endpoints."""

from fastapi import APIRouter, Depends, Request, status

from app.dependencies import get_coaching_service, get_current_user, get_storage
from app.errors import NotFound, ValidationError
from app.models.coaching import CoachingSession
from app.models.user import User
from app.rate_limit import ai_limit
from app.schemas.coaching import (
    ChatMessage,
    ChatRequest,
    ChatResponse,
    CoachingSessionCreate,
    CoachingSessionResponse,
    CoachingSessionUpdate,
    SummaryResponse,
)
from app.services.coaching import CoachingService, SessionAnalysis
from app.storage import Storage

router = APIRouter(prefix="/api/coaching-sessions", tags=["Coaching"])


def get_owned_session(session_id: int, user: User, storage: Storage) -> CoachingSession:
    """Load a coaching session, reporting other users' sessions as missing."""
    session = storage.get_coaching_session(session_id)
    if session is None or session.user_id != user.id:
        raise NotFound("Coaching session not found")
    return session


def _dump_messages(messages: list[ChatMessage]) -> list[dict]:
    return [m.model_dump(mode="json", by_alias=True) for m in messages]


@router.post("", response_model=CoachingSessionResponse, status_code=status.HTTP_201_CREATED)
def create_session(
    body: CoachingSessionCreate,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
) -> CoachingSessionResponse:
    session = storage.create_coaching_session(
        user.id,
        body.coach_type,
        messages=_dump_messages(body.messages),
        summary=body.summary,
        hearted=body.hearted,
    )
    return CoachingSessionResponse.model_validate(session)


@router.get("", response_model=list[CoachingSessionResponse])
def list_sessions(
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
) -> list[CoachingSessionResponse]:
    """List the user's coaching sessions, most recently active first."""
    return [CoachingSessionResponse.model_validate(s) for s in storage.get_user_coaching_sessions(user.id)]


@router.get("/{session_id}", response_model=CoachingSessionResponse)
def get_session(
    session_id: int,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
) -> CoachingSessionResponse:
    return CoachingSessionResponse.model_validate(get_owned_session(session_id, user, storage))


@router.patch("/{session_id}", response_model=CoachingSessionResponse)
def update_session(
    session_id: int,
    body: CoachingSessionUpdate,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
) -> CoachingSessionResponse:
    """Update the summary, heart flag or message list."""
    session = get_owned_session(session_id, user, storage)
    updates = body.model_dump(exclude_unset=True, exclude={"messages"})
    if body.messages is not None:
        updates["messages"] = _dump_messages(body.messages)
    if updates:
        session = storage.update_coaching_session(session, **updates)
    return CoachingSessionResponse.model_validate(session)


@router.post("/{session_id}/chat", response_model=ChatResponse)
@ai_limit
def chat(
    request: Request,
    session_id: int,
    body: ChatRequest,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
    coaching: CoachingService = Depends(get_coaching_service),
) -> ChatResponse:
    """Send a message to the session's coach and get the reply."""
    session = get_owned_session(session_id, user, storage)
    turn = coaching.chat(session, user, body.message)
    return ChatResponse(
        user_message=ChatMessage.model_validate(turn.user_message),
        coach_message=ChatMessage.model_validate(turn.coach_message),
        session=CoachingSessionResponse.model_validate(turn.session),
    )


@router.post("/{session_id}/generate-summary", response_model=SummaryResponse)
@ai_limit
def generate_summary(
    request: Request,
    session_id: int,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
    coaching: CoachingService = Depends(get_coaching_service),
) -> SummaryResponse:
    session = get_owned_session(session_id, user, storage)
    if not session.messages:
        raise ValidationError("No messages to summarize")
    session = coaching.summarize(session)
    return SummaryResponse(summary=session.summary, session=CoachingSessionResponse.model_validate(session))


@router.post("/{session_id}/detailed-analysis", response_model=SessionAnalysis)
@ai_limit
def detailed_analysis(
    request: Request,
    session_id: int,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
    coaching: CoachingService = Depends(get_coaching_service),
) -> SessionAnalysis:
    session = get_owned_session(session_id, user, storage)
    if not session.messages:
        raise ValidationError("No messages to analyze")
    return coaching.analyze(session)
