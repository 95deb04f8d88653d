"""Authentication service."""

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from app.clock import Clock, utcnow
from app.config import Settings, get_settings
from app.errors import AccountLocked, DuplicateAccount, InvalidCredentials, InvalidToken
from app.models.user import User
from app.security import dummy_password_hash, generate_token, hash_password, verify_password
from app.services.lockout import LockoutTracker
from app.services.sessions import SessionInfo, SessionStore
from app.storage import Storage

logger = logging.getLogger("hipo_coach")


@dataclass
class SignUpResult:
    """Newly created account and the token that verifies its email."""

    user: User
    verification_token: str


@dataclass
class SignInResult:
    """Authenticated user and the session token to hand back as a cookie."""

    user: User
    session_token: str


class AuthService:
    """Handles sign-up, sign-in, password flows, email verification, sessions and account deletion."""

    def __init__(self, storage: Storage, clock: Clock = utcnow, settings: Settings | None = None) -> None:
        settings = settings or get_settings()
        self.storage = storage
        self.clock = clock
        self.bcrypt_rounds = settings.BCRYPT_ROUNDS
        self.email_token_ttl = timedelta(hours=settings.EMAIL_TOKEN_EXPIRE_HOURS)
        self.reset_token_ttl = timedelta(minutes=settings.RESET_TOKEN_EXPIRE_MINUTES)
        self.sessions = SessionStore(
            storage,
            lifetime=timedelta(days=settings.SESSION_DAYS),
            remember_lifetime=timedelta(days=settings.REMEMBER_ME_DAYS),
            clock=clock,
        )
        self.lockout = LockoutTracker(
            storage,
            threshold=settings.LOCKOUT_THRESHOLD,
            duration=timedelta(minutes=settings.LOCKOUT_MINUTES),
            clock=clock,
        )

    def _hash(self, password: str) -> str:
        return hash_password(password, rounds=self.bcrypt_rounds)

    # --- Registration and verification ---

    def sign_up(
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        terms_accepted: bool,
        privacy_accepted: bool,
    ) -> SignUpResult:
        """Create an unverified account and its email verification token."""
        if self.storage.get_user_by_email(email):
            raise DuplicateAccount()

        now = self.clock()
        token = generate_token()
        expires_at = now + self.email_token_ttl
        user = self.storage.create_user(
            email=email,
            password_hash=self._hash(password),
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            email_verified=False,
            email_verification_token=token,
            email_verification_expires_at=expires_at,
            terms_accepted=terms_accepted,
            terms_accepted_at=now if terms_accepted else None,
            privacy_accepted=privacy_accepted,
            privacy_accepted_at=now if privacy_accepted else None,
            is_active=True,
        )
        self.storage.create_email_verification_token(user.email, token, expires_at)
        logger.info("Account created for user %s", user.id)
        return SignUpResult(user=user, verification_token=token)

    def verify_email(self, token: str) -> str:
        """Mark the token's email as verified and consume the token. Returns the email."""
        record = self.storage.get_email_verification_token(token)
        if record is None or self.clock() > record.expires_at:
            raise InvalidToken("Invalid or expired verification token")

        user = self.storage.get_user_by_email(record.email)
        if user is None:
            raise InvalidToken("Invalid or expired verification token")

        self.storage.update_user(
            user,
            email_verified=True,
            email_verification_token=None,
            email_verification_expires_at=None,
        )
        email = record.email
        self.storage.delete_email_verification_token(record)
        return email

    # --- Sign in ---

    def sign_in(
        self,
        email: str,
        password: str,
        remember_me: bool = False,
        device_info: str | None = None,
        ip_address: str | None = None,
    ) -> SignInResult:
        """Authenticate by email and password and open a new session.

        Unknown emails and wrong passwords raise the same error. A locked account
        is refused before the password is checked, and the failure counter is not
        touched while the lock holds.
        """
        user = self.storage.get_user_by_email(email)
        if user is None:
            verify_password(password, dummy_password_hash(self.bcrypt_rounds))
            raise InvalidCredentials()

        if self.lockout.is_locked(user):
            raise AccountLocked()

        if not verify_password(password, user.password_hash):
            self.lockout.record_failure(user)
            raise InvalidCredentials()

        if not user.is_active:
            raise InvalidCredentials()

        if not user.email_verified:
            logger.warning("User %s signing in with unverified email", user.id)

        self.lockout.record_success(user)
        session_token = self.sessions.create(user.id, remember_me, device_info, ip_address)
        return SignInResult(user=user, session_token=session_token)

    # --- Password flows ---

    def request_password_reset(self, email: str) -> str | None:
        """Generate a password reset token for the given email.

        Returns the token if user exists, None otherwise.
        Caller should not reveal whether the user was found.
        """
        user = self.storage.get_user_by_email(email)
        if user is None:
            return None

        token = generate_token()
        self.storage.create_password_reset_token(user.id, token, self.clock() + self.reset_token_ttl)
        return token

    def reset_password(self, token: str, new_password: str) -> User:
        """Set a new password with a valid reset token. The token is marked used, never reusable."""
        record = self.storage.get_password_reset_token(token)
        if record is None or record.used or self.clock() > record.expires_at:
            raise InvalidToken("Invalid or expired reset token")

        user = self.storage.get_user(record.user_id)
        if user is None:
            raise InvalidToken("Invalid or expired reset token")

        self.storage.mark_password_reset_token_used(record)
        self.storage.update_user(
            user,
            password_hash=self._hash(new_password),
            failed_login_attempts=0,
            account_locked_until=None,
        )
        self.sessions.revoke_all(user.id)
        return user

    def change_password(self, user: User, current_password: str, new_password: str) -> None:
        """Change the password of a signed-in user and sign them out everywhere."""
        if not verify_password(current_password, user.password_hash):
            raise InvalidCredentials("Current password is incorrect")

        self.storage.update_user(user, password_hash=self._hash(new_password))
        revoked = self.sessions.revoke_all(user.id)
        logger.info("Password changed for user %s, %d sessions revoked", user.id, revoked)

    # --- Sessions ---

    def validate_session(self, token: str) -> User | None:
        return self.sessions.validate(token)

    def sign_out(self, token: str) -> None:
        self.sessions.revoke(token)

    def list_sessions(self, user: User, current_token: str | None) -> list[SessionInfo]:
        return self.sessions.list_for_user(user.id, current_token)

    def revoke_session(self, user: User, session_id: int) -> bool:
        return self.sessions.revoke_by_id(user.id, session_id)

    # --- Account deletion ---

    def delete_account(self, user: User) -> dict[str, Any]:
        """Remove the user and everything they own. Returns a snapshot of their data."""
        coaching_sessions = self.storage.get_user_coaching_sessions(user.id)
        saved_advice = self.storage.get_user_saved_advice(user.id)

        export_data = {
            "user": {
                "email": user.email,
                "firstName": user.first_name,
                "lastName": user.last_name,
                "currentRole": user.current_role,
                "industry": user.industry,
                "careerStage": user.career_stage,
                "createdAt": user.created_at.isoformat() if user.created_at else None,
            },
            "coachingSessions": [
                {
                    "id": s.id,
                    "coachType": s.coach_type,
                    "messages": s.messages or [],
                    "summary": s.summary,
                    "hearted": s.hearted,
                    "createdAt": s.created_at.isoformat() if s.created_at else None,
                }
                for s in coaching_sessions
            ],
            "savedAdvice": [
                {
                    "id": a.id,
                    "sessionId": a.session_id,
                    "messageContent": a.message_content,
                    "coachType": a.coach_type,
                    "createdAt": a.created_at.isoformat() if a.created_at else None,
                }
                for a in saved_advice
            ],
            "exportedAt": self.clock().isoformat(),
        }

        user_id = user.id
        self.storage.delete_user(user)
        logger.info("Account %s deleted", user_id)
        return export_data
