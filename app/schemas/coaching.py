"""Pydantic schemas for coaching sessions, chat and saved advice."""

from datetime import datetime
from typing import Annotated, Literal

from pydantic import Field, StringConstraints

from app.schemas.common import CamelModel

CoachType = Literal["leadership", "performance", "career", "hipo", "life", "empathear"]


class ChatMessage(CamelModel):
    id: str
    content: str
    is_user: bool
    timestamp: datetime


class CoachingSessionCreate(CamelModel):
    coach_type: CoachType
    messages: list[ChatMessage] = []
    summary: str | None = None
    hearted: bool = False


class CoachingSessionUpdate(CamelModel):
    summary: str | None = None
    hearted: bool | None = None
    messages: list[ChatMessage] | None = None


class CoachingSessionResponse(CamelModel):
    id: int
    user_id: int
    coach_type: str
    messages: list[ChatMessage]
    summary: str | None
    hearted: bool
    created_at: datetime
    updated_at: datetime


class ChatRequest(CamelModel):
    message: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=4000)]


class ChatResponse(CamelModel):
    success: bool = True
    user_message: ChatMessage
    coach_message: ChatMessage
    session: CoachingSessionResponse


class SummaryResponse(CamelModel):
    summary: str
    session: CoachingSessionResponse


class SavedAdviceCreate(CamelModel):
    session_id: int
    message_content: str = Field(min_length=1)
    coach_type: CoachType


class SavedAdviceResponse(CamelModel):
    id: int
    user_id: int
    session_id: int
    message_content: str
    coach_type: str
    created_at: datetime
