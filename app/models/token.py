"""Single-purpose email verification and password reset tokens."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String

from app.clock import utcnow
from app.database import Base


class EmailVerificationToken(Base):
    """Proves ownership of an email address. Deleted once used."""

    __tablename__ = "email_verification_token"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(256), nullable=False, index=True)
    token = Column(String(128), unique=True, nullable=False, index=True)
    expires_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)


class PasswordResetToken(Base):
    """Authorizes one password reset. Marked used rather than deleted."""

    __tablename__ = "password_reset_token"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    token = Column(String(128), unique=True, nullable=False, index=True)
    used = Column(Boolean, nullable=False, default=False)
    expires_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
