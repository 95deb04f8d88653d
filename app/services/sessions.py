"""Login session lifecycle: issue, validate, list and revoke opaque session tokens."""

from dataclasses import dataclass
from datetime import datetime, timedelta

from app.clock import Clock, utcnow
from app.models.user import User
from app.security import generate_token
from app.storage import Storage

DEVICE_INFO_MAX_LENGTH = 200


@dataclass
class SessionInfo:
    """Session metadata safe to show on a "manage your devices" screen."""

    id: int
    device_info: str | None
    ip_address: str | None
    last_active: datetime
    created_at: datetime
    expires_at: datetime
    is_current: bool


class SessionStore:
    """Maps session tokens to users with a fixed lifetime per token."""

    def __init__(
        self,
        storage: Storage,
        lifetime: timedelta = timedelta(days=7),
        remember_lifetime: timedelta = timedelta(days=30),
        clock: Clock = utcnow,
    ) -> None:
        self.storage = storage
        self.lifetime = lifetime
        self.remember_lifetime = remember_lifetime
        self.clock = clock

    def create(self, user_id: int, remember: bool = False, device_info: str | None = None, ip_address: str | None = None) -> str:
        """Issue a new session token for the user."""
        token = generate_token()
        duration = self.remember_lifetime if remember else self.lifetime
        self.storage.create_user_session(
            user_id=user_id,
            session_token=token,
            expires_at=self.clock() + duration,
            device_info=(device_info or "Unknown device")[:DEVICE_INFO_MAX_LENGTH],
            ip_address=ip_address,
        )
        return token

    def validate(self, token: str) -> User | None:
        """Resolve a token to its user, purging it if it has expired."""
        record = self.storage.get_user_session(token)
        if record is None:
            return None

        now = self.clock()
        if now > record.expires_at:
            self.storage.delete_user_session(record)
            return None

        user = self.storage.get_user(record.user_id)
        if user is None:
            self.storage.delete_user_session(record)
            return None

        self.storage.touch_user_session(record, now)
        return user

    def revoke(self, token: str) -> bool:
        return self.storage.delete_user_session_by_token(token)

    def revoke_all(self, user_id: int) -> int:
        return self.storage.delete_all_user_sessions(user_id)

    def revoke_by_id(self, user_id: int, session_id: int) -> bool:
        """Revoke one of the user's sessions. Returns False if it does not exist or is not theirs."""
        record = self.storage.get_user_session_by_id(session_id)
        if record is None or record.user_id != user_id:
            return False
        self.storage.delete_user_session(record)
        return True

    def list_for_user(self, user_id: int, current_token: str | None = None) -> list[SessionInfo]:
        return [
            SessionInfo(
                id=record.id,
                device_info=record.device_info,
                ip_address=record.ip_address,
                last_active=record.last_active,
                created_at=record.created_at,
                expires_at=record.expires_at,
                is_current=current_token is not None and record.session_token == current_token,
            )
            for record in self.storage.get_user_sessions(user_id)
        ]
