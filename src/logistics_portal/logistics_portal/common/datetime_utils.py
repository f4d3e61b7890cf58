from __future__ import annotations

import calendar
import re
from datetime import date, datetime, time
from typing import Iterator, Optional

from ..core.exceptions import ValidationError

_HHMM_RE = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_optional_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return parse_iso_date(str(value).strip()[:10])
    except ValueError:
        raise ValidationError(f"Ngày không hợp lệ: {value!r}")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def match_hhmm(value: object) -> Optional[time]:
    """Strict HH:MM match used by imports; anything else yields None."""
    if value is None:
        return None
    m = _HHMM_RE.match(str(value).strip())
    if not m:
        return None
    return time(hour=int(m.group(1)), minute=int(m.group(2)))


def parse_hhmm(value: Optional[str]) -> Optional[time]:
    v = (value or "").strip()
    if not v:
        return None
    t = match_hhmm(v)
    if t is None:
        raise ValidationError("Giờ không hợp lệ (HH:MM)")
    return t


def format_hhmm(value: Optional[time]) -> Optional[str]:
    return value.strftime("%H:%M") if value else None


def format_vn_date(value: date) -> str:
    return value.strftime("%d/%m/%Y")


def format_vn_long_date(value: date) -> str:
    return f"ngày {value.day} tháng {value.month} năm {value.year}"


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def iter_month(year: int, month: int) -> Iterator[date]:
    for d in range(1, days_in_month(year, month) + 1):
        yield date(year, month, d)


def is_weekday(value: date) -> bool:
    return value.weekday() < 5
