"""Coaching conversation and saved advice models."""

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, String, Text

from app.clock import utcnow
from app.database import Base


class CoachingSession(Base):
    """A conversation between a user and one AI coach."""

    __tablename__ = "coaching_session"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    coach_type = Column(String(32), nullable=False)
    messages = Column(JSON, nullable=False, default=list)  # [{id, content, isUser, timestamp}]
    summary = Column(Text, nullable=True)
    hearted = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)


class SavedAdvice(Base):
    """A coach message the user hearted."""

    __tablename__ = "saved_advice"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    session_id = Column(Integer, ForeignKey("coaching_session.id"), nullable=False, index=True)
    message_content = Column(Text, nullable=False)
    coach_type = Column(String(32), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
