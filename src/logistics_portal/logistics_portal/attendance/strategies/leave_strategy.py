from __future__ import annotations

from ...core.enums import AttendanceStatus, DayStatus, LeavePeriod
from ..model import DayClassification
from .base import DayContext, DayStatusStrategy


class HalfDayLeaveStrategy(DayStatusStrategy):
    """P(S), P(C), KP(S), KP(C): S = buổi sáng, C = buổi chiều."""

    def applies(self, ctx: DayContext) -> bool:
        r = ctx.record
        return r is not None and r.status.is_leave and r.leave is not None and r.leave.is_half_day

    def decide(self, ctx: DayContext) -> DayClassification:
        r = ctx.record
        paid = r.status == AttendanceStatus.ON_LEAVE
        half = "S" if r.leave.period == LeavePeriod.MORNING else "C"
        return DayClassification(
            status=DayStatus.ON_LEAVE if paid else DayStatus.UNPAID_LEAVE,
            symbol=f"{'P' if paid else 'KP'}({half})",
            period=r.leave.period,
            title=r.note or r.leave.reason,
            leave_days=0.5 if paid else 0,
            unpaid_days=0 if paid else 0.5,
        )
