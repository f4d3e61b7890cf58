from __future__ import annotations

import re
from typing import Any, Iterable, Mapping

from ..common.datetime_utils import parse_optional_date
from ..core.constants import HOLIDAY_TITLE_PATTERN
from ..core.exceptions import ValidationError
from .model import HolidayWindow

_HOLIDAY_RE = re.compile(HOLIDAY_TITLE_PATTERN, re.IGNORECASE)


def is_holiday_title(title: str) -> bool:
    return bool(_HOLIDAY_RE.search(title or ""))


def holiday_windows_from_notifications(notifications: Iterable[Mapping[str, Any]]) -> list[HolidayWindow]:
    """Company notifications announcing a public holiday become holiday windows.

    Only titles about holidays count, and both ``startDate`` and ``expiryDate``
    must be set. Entries with unreadable dates are ignored.
    """
    out: list[HolidayWindow] = []
    for n in notifications:
        title = str(n.get("title") or "")
        if not is_holiday_title(title):
            continue
        try:
            start = parse_optional_date(n.get("startDate"))
            end = parse_optional_date(n.get("expiryDate"))
        except ValidationError:
            continue
        if start and end and start <= end:
            out.append(HolidayWindow(title=title, start=start, end=end))
    return out
