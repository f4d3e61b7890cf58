from __future__ import annotations

from datetime import time

from ..core.constants import LATE_GRACE_MINUTES


def late_limit(start: time, grace_minutes: int = LATE_GRACE_MINUTES) -> time:
    """Start time plus grace, carried over the hour (08:50 + 15 -> 09:05)."""
    total = start.hour * 60 + start.minute + grace_minutes
    total = min(total, 23 * 60 + 59)
    return time(hour=total // 60, minute=total % 60)


def is_late(check_in: time, start: time, grace_minutes: int = LATE_GRACE_MINUTES) -> bool:
    limit = late_limit(start, grace_minutes)
    return (check_in.hour, check_in.minute) > (limit.hour, limit.minute)
