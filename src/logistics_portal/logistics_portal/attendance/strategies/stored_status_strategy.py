from __future__ import annotations

from ...core.enums import AttendanceStatus, DayStatus
from ..model import DayClassification
from .base import DayContext, DayStatusStrategy

_SYMBOLS = {
    AttendanceStatus.PRESENT: (DayStatus.PRESENT, "+"),
    AttendanceStatus.LATE: (DayStatus.LATE, "M"),
    AttendanceStatus.ON_LEAVE: (DayStatus.ON_LEAVE, "P"),
    AttendanceStatus.UNPAID_LEAVE: (DayStatus.UNPAID_LEAVE, "KP"),
    AttendanceStatus.ABSENT: (DayStatus.ABSENT, "V"),
}


class StoredStatusStrategy(DayStatusStrategy):
    """Any other record: show the stored status as is."""

    def applies(self, ctx: DayContext) -> bool:
        return ctx.record is not None

    def decide(self, ctx: DayContext) -> DayClassification:
        r = ctx.record
        status, symbol = _SYMBOLS[r.status]
        leave_days = unpaid_days = 0.0
        if r.status == AttendanceStatus.ON_LEAVE:
            leave_days = r.leave_days
        elif r.status in (AttendanceStatus.UNPAID_LEAVE, AttendanceStatus.ABSENT):
            unpaid_days = r.leave_days
        return DayClassification(
            status=status,
            symbol=symbol,
            title=r.note,
            leave_days=leave_days,
            unpaid_days=unpaid_days,
        )
