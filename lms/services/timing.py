"""Quiz countdown arithmetic.

Every function takes the current time as an optional ``now`` argument so a
single call never samples the clock more than once and tests can pin time.
All timestamps are naive UTC.
"""
import math
from datetime import datetime, timedelta
from numbers import Real
from typing import Optional

from lms.domain.clock import utcnow
from lms.domain.errors import ValidationError


def _validate_time_limit(time_limit_minutes) -> int:
    if (
        isinstance(time_limit_minutes, bool)
        or not isinstance(time_limit_minutes, Real)
        or not float(time_limit_minutes).is_integer()
        or time_limit_minutes <= 0
    ):
        raise ValidationError("Time limit must be a positive integer (in minutes)")
    return int(time_limit_minutes)


def calculate_remaining_time(
    started_at: Optional[datetime],
    time_limit_minutes: int,
    now: Optional[datetime] = None,
) -> int:
    limit = _validate_time_limit(time_limit_minutes)
    total_seconds = limit * 60
    if started_at is None:
        return total_seconds

    now = now or utcnow()
    elapsed_seconds = math.floor((now - started_at).total_seconds())
    return max(0, total_seconds - elapsed_seconds)


def is_expired(
    started_at: Optional[datetime],
    time_limit_minutes: int,
    now: Optional[datetime] = None,
) -> bool:
    limit = _validate_time_limit(time_limit_minutes)
    if started_at is None:
        return False

    now = now or utcnow()
    return (now - started_at).total_seconds() >= limit * 60


def calculate_expiration_time(
    started_at: Optional[datetime],
    time_limit_minutes: int,
    now: Optional[datetime] = None,
) -> Optional[datetime]:
    # ``now`` is unused; accepted so all timing helpers share one signature.
    limit = _validate_time_limit(time_limit_minutes)
    if started_at is None:
        return None
    return started_at + timedelta(minutes=limit)


def format_time(total_seconds: int) -> str:
    """Render seconds as ``MM:SS``; minutes are not capped at 59."""
    total_seconds = max(0, int(total_seconds))
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes:02d}:{seconds:02d}"
