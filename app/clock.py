"""Wall-clock helpers.

Timestamps are stored as naive UTC datetimes. Services take a ``Clock`` so tests
can move time forward without sleeping.
"""

from collections.abc import Callable
from datetime import UTC, datetime

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    """Current UTC time without tzinfo."""
    return datetime.now(UTC).replace(tzinfo=None)
