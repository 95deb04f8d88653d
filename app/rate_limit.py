"""Fixed-window rate limiting.

Counters live in the storage named by ``RATE_LIMIT_STORAGE_URI``: ``memory://``
keeps them in process, ``redis://host:port`` shares them across workers.
Windows start at the first hit and reset once elapsed; nothing is swept.
"""

from datetime import UTC, datetime

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from app.config import get_settings

settings = get_settings()


def client_ip_key(request: Request) -> str:
    return get_remote_address(request) or "unknown"


def user_key(request: Request) -> str:
    """Key AI usage by the signed-in user, falling back to the client address."""
    user = getattr(request.state, "user", None)
    if user is not None:
        return f"user:{user.id}"
    return client_ip_key(request)


limiter = Limiter(
    key_func=client_ip_key,
    strategy="fixed-window",
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
)

# Chat turns, summaries and analyses draw from one per-user budget
ai_limit = limiter.shared_limit(lambda: get_settings().AI_RATE_LIMIT, scope="ai", key_func=user_key)


def window_reset_time(request: Request) -> datetime | None:
    """When the window that rejected this request resets, if known."""
    current = getattr(request.state, "view_rate_limit", None)
    if not current:
        return None
    item, args = current
    reset_at, _remaining = limiter.limiter.get_window_stats(item, *args)
    return datetime.fromtimestamp(reset_at, UTC)
