"""Login session model."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from app.clock import utcnow
from app.database import Base


class UserSession(Base):
    """Opaque bearer session issued at sign-in."""

    __tablename__ = "user_session"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    session_token = Column(String(128), unique=True, nullable=False, index=True)
    device_info = Column(String(256), nullable=True)
    ip_address = Column(String(64), nullable=True)
    last_active = Column(DateTime, nullable=False, default=utcnow)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    expires_at = Column(DateTime, nullable=False)
