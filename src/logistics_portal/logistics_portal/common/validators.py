from __future__ import annotations

import math
from typing import Any

from ..core.exceptions import ValidationError


def require_month(year: Any, month: Any) -> tuple[int, int]:
    try:
        y, m = int(year), int(month)
    except (TypeError, ValueError):
        raise ValidationError("Tháng/năm không hợp lệ")
    if not 1 <= m <= 12 or y < 1900:
        raise ValidationError("Tháng/năm không hợp lệ")
    return y, m


def to_amount(value: Any) -> int:
    """Money input as typed in forms: keep digits and minus sign, fallback 0."""
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return 0 if isinstance(value, float) and not math.isfinite(value) else int(value)
    digits = "".join(ch for ch in str(value) if ch.isdigit() or ch == "-")
    try:
        return int(digits)
    except ValueError:
        return 0


def require_int(value: Any, field_name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} không hợp lệ")
