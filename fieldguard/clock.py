"""Time helpers shared by stores and the workflow."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return current UTC time."""
    return datetime.now(UTC)


def to_timedelta(value: timedelta | float | int | None) -> timedelta | None:
    """Normalize an expiry given as a timedelta or in seconds."""
    if value is None or isinstance(value, timedelta):
        return value
    return timedelta(seconds=value)
