"""Account lockout after repeated failed sign-ins."""

from datetime import timedelta

from app.clock import Clock, utcnow
from app.models.user import User
from app.storage import Storage


class LockoutTracker:
    """Counts consecutive failed logins per user and locks the account for a fixed window.

    Expiry is lazy: an elapsed window is cleared, together with the counter, the
    next time the account is checked.
    """

    def __init__(self, storage: Storage, threshold: int = 5, duration: timedelta = timedelta(minutes=30), clock: Clock = utcnow) -> None:
        self.storage = storage
        self.threshold = threshold
        self.duration = duration
        self.clock = clock

    def is_locked(self, user: User) -> bool:
        if user.account_locked_until is None:
            return False
        if self.clock() < user.account_locked_until:
            return True
        self.storage.update_user(user, failed_login_attempts=0, account_locked_until=None)
        return False

    def record_failure(self, user: User) -> None:
        # Incremented in SQL so concurrent failures are never lost
        attempts = self.storage.increment_failed_login_attempts(user)
        if attempts >= self.threshold:
            self.storage.update_user(user, account_locked_until=self.clock() + self.duration)

    def record_success(self, user: User) -> None:
        self.storage.update_user(user, failed_login_attempts=0, account_locked_until=None, last_login_at=self.clock())
