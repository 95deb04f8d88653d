"""User model."""

from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String, Text

from app.clock import utcnow
from app.database import Base


class User(Base):
    """Application user with authentication state, consents, preferences and coaching profile."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(256), unique=True, nullable=False, index=True)
    password_hash = Column(String(256), nullable=True)
    first_name = Column(String(128), nullable=True)
    last_name = Column(String(128), nullable=True)
    profile_image_url = Column(String(512), nullable=True)

    # Email verification
    email_verified = Column(Boolean, nullable=False, default=False)
    email_verification_token = Column(String(128), nullable=True)
    email_verification_expires_at = Column(DateTime, nullable=True)

    # Account security
    failed_login_attempts = Column(Integer, nullable=False, default=0)
    account_locked_until = Column(DateTime, nullable=True)
    mfa_enabled = Column(Boolean, nullable=False, default=False)
    mfa_secret = Column(String(128), nullable=True)

    # Consents
    terms_accepted = Column(Boolean, nullable=False, default=False)
    terms_accepted_at = Column(DateTime, nullable=True)
    privacy_accepted = Column(Boolean, nullable=False, default=False)
    privacy_accepted_at = Column(DateTime, nullable=True)

    is_active = Column(Boolean, nullable=False, default=True)
    last_login_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    # Coaching profile
    current_role = Column(Text, nullable=True)
    industry = Column(Text, nullable=True)
    career_stage = Column(Text, nullable=True)
    five_year_goal = Column(Text, nullable=True)
    biggest_challenge = Column(Text, nullable=True)
    work_environment = Column(Text, nullable=True)
    primary_coaches = Column(JSON, nullable=True)  # at most two coach ids
    onboarding_complete = Column(Boolean, nullable=False, default=False)

    # Notification preferences
    email_notifications = Column(Boolean, nullable=False, default=True)
    marketing_emails = Column(Boolean, nullable=False, default=False)
    weekly_digest = Column(Boolean, nullable=False, default=True)
    coaching_reminders = Column(Boolean, nullable=False, default=True)
