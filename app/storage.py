"""Thin CRUD layer over the SQLAlchemy session.

Services depend on ``Storage`` rather than on queries, so the persistence
backend can be swapped without touching business rules. Every mutating method
commits before returning.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from app.models.coaching import CoachingSession, SavedAdvice
from app.models.contact import ContactMessage, EmailLog
from app.models.session import UserSession
from app.models.token import EmailVerificationToken, PasswordResetToken
from app.models.user import User


class Storage:
    """Persistence operations used by the services and routers."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def _update(self, obj: Any, updates: dict[str, Any]) -> Any:
        for key, value in updates.items():
            setattr(obj, key, value)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    # --- Users ---

    def get_user(self, user_id: int) -> User | None:
        return self.db.get(User, user_id)

    def get_user_by_email(self, email: str) -> User | None:
        return self.db.scalars(select(User).where(User.email == email.strip().lower())).first()

    def create_user(self, **fields: Any) -> User:
        fields["email"] = fields["email"].strip().lower()
        user = User(**fields)
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def update_user(self, user: User, **updates: Any) -> User:
        return self._update(user, updates)

    def increment_failed_login_attempts(self, user: User) -> int:
        """Add one to the user's failure counter in the database and return the new count."""
        attempts = self.db.execute(
            update(User)
            .where(User.id == user.id)
            .values(failed_login_attempts=User.failed_login_attempts + 1)
            .returning(User.failed_login_attempts)
            .execution_options(synchronize_session=False)
        ).scalar_one()
        self.db.commit()
        self.db.refresh(user)
        return attempts

    def delete_user(self, user: User) -> None:
        """Delete a user together with everything the user owns."""
        user_id = user.id
        self.db.execute(delete(UserSession).where(UserSession.user_id == user_id))
        self.db.execute(delete(PasswordResetToken).where(PasswordResetToken.user_id == user_id))
        self.db.execute(delete(EmailVerificationToken).where(EmailVerificationToken.email == user.email))
        self.db.execute(delete(SavedAdvice).where(SavedAdvice.user_id == user_id))
        self.db.execute(delete(CoachingSession).where(CoachingSession.user_id == user_id))
        self.db.execute(update(ContactMessage).where(ContactMessage.user_id == user_id).values(user_id=None))
        self.db.delete(user)
        self.db.commit()

    # --- Email verification tokens ---

    def create_email_verification_token(self, email: str, token: str, expires_at: datetime) -> EmailVerificationToken:
        record = EmailVerificationToken(email=email, token=token, expires_at=expires_at)
        self.db.add(record)
        self.db.commit()
        return record

    def get_email_verification_token(self, token: str) -> EmailVerificationToken | None:
        return self.db.scalars(select(EmailVerificationToken).where(EmailVerificationToken.token == token)).first()

    def delete_email_verification_token(self, record: EmailVerificationToken) -> None:
        self.db.delete(record)
        self.db.commit()

    # --- Password reset tokens ---

    def create_password_reset_token(self, user_id: int, token: str, expires_at: datetime) -> PasswordResetToken:
        record = PasswordResetToken(user_id=user_id, token=token, used=False, expires_at=expires_at)
        self.db.add(record)
        self.db.commit()
        return record

    def get_password_reset_token(self, token: str) -> PasswordResetToken | None:
        return self.db.scalars(select(PasswordResetToken).where(PasswordResetToken.token == token)).first()

    def mark_password_reset_token_used(self, record: PasswordResetToken) -> None:
        record.used = True
        self.db.commit()

    # --- Login sessions ---

    def create_user_session(
        self,
        user_id: int,
        session_token: str,
        expires_at: datetime,
        device_info: str | None = None,
        ip_address: str | None = None,
    ) -> UserSession:
        record = UserSession(
            user_id=user_id,
            session_token=session_token,
            device_info=device_info,
            ip_address=ip_address,
            expires_at=expires_at,
        )
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        return record

    def get_user_session(self, session_token: str) -> UserSession | None:
        return self.db.scalars(select(UserSession).where(UserSession.session_token == session_token)).first()

    def get_user_session_by_id(self, session_id: int) -> UserSession | None:
        return self.db.get(UserSession, session_id)

    def touch_user_session(self, record: UserSession, last_active: datetime) -> None:
        record.last_active = last_active
        self.db.commit()

    def delete_user_session(self, record: UserSession) -> None:
        self.db.delete(record)
        self.db.commit()

    def delete_user_session_by_token(self, session_token: str) -> bool:
        result = self.db.execute(delete(UserSession).where(UserSession.session_token == session_token))
        self.db.commit()
        return result.rowcount > 0

    def delete_all_user_sessions(self, user_id: int) -> int:
        result = self.db.execute(delete(UserSession).where(UserSession.user_id == user_id))
        self.db.commit()
        return result.rowcount

    def get_user_sessions(self, user_id: int) -> list[UserSession]:
        stmt = select(UserSession).where(UserSession.user_id == user_id).order_by(UserSession.last_active.desc())
        return list(self.db.scalars(stmt))

    # --- Coaching sessions ---

    def create_coaching_session(self, user_id: int, coach_type: str, **fields: Any) -> CoachingSession:
        record = CoachingSession(user_id=user_id, coach_type=coach_type, **fields)
        if record.messages is None:
            record.messages = []
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        return record

    def get_coaching_session(self, session_id: int) -> CoachingSession | None:
        return self.db.get(CoachingSession, session_id)

    def get_user_coaching_sessions(self, user_id: int) -> list[CoachingSession]:
        stmt = (
            select(CoachingSession)
            .where(CoachingSession.user_id == user_id)
            .order_by(CoachingSession.updated_at.desc(), CoachingSession.id.desc())
        )
        return list(self.db.scalars(stmt))

    def update_coaching_session(self, record: CoachingSession, **updates: Any) -> CoachingSession:
        if "messages" in updates:
            # JSON columns only detect reassignment, never in-place mutation
            updates["messages"] = list(updates["messages"])
        return self._update(record, updates)

    # --- Saved advice ---

    def create_saved_advice(self, user_id: int, session_id: int, message_content: str, coach_type: str) -> SavedAdvice:
        record = SavedAdvice(
            user_id=user_id,
            session_id=session_id,
            message_content=message_content,
            coach_type=coach_type,
        )
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        return record

    def get_user_saved_advice(self, user_id: int) -> list[SavedAdvice]:
        stmt = select(SavedAdvice).where(SavedAdvice.user_id == user_id).order_by(SavedAdvice.created_at.desc())
        return list(self.db.scalars(stmt))

    def get_saved_advice(self, advice_id: int) -> SavedAdvice | None:
        return self.db.get(SavedAdvice, advice_id)

    def delete_saved_advice(self, record: SavedAdvice) -> None:
        self.db.delete(record)
        self.db.commit()

    # --- Contact messages ---

    def create_contact_message(self, **fields: Any) -> ContactMessage:
        record = ContactMessage(**fields)
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        return record

    def get_contact_message(self, message_id: int) -> ContactMessage | None:
        return self.db.get(ContactMessage, message_id)

    # --- Email log ---

    def create_email_log(self, **fields: Any) -> EmailLog:
        record = EmailLog(**fields)
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        return record

    def update_email_log(self, record: EmailLog, **updates: Any) -> EmailLog:
        return self._update(record, updates)

    def get_email_logs_by_recipient(self, email: str) -> list[EmailLog]:
        stmt = select(EmailLog).where(EmailLog.to_email == email).order_by(EmailLog.id)
        return list(self.db.scalars(stmt))
