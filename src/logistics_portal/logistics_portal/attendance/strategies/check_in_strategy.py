from __future__ import annotations

from ...core.enums import DayStatus
from ..lateness import is_late
from ..model import DayClassification
from .base import DayContext, DayStatusStrategy


class CheckInStrategy(DayStatusStrategy):
    """Re-derive Present/Late from the check-in against the current start time.

    The stored status is ignored, so a config change is reflected in past months.
    """

    def applies(self, ctx: DayContext) -> bool:
        r = ctx.record
        return r is not None and r.check_in is not None and not r.status.is_leave

    def decide(self, ctx: DayContext) -> DayClassification:
        start = ctx.config.start_time_for(ctx.role)
        if is_late(ctx.record.check_in, start):
            return DayClassification(status=DayStatus.LATE, symbol="M", title=ctx.record.note)
        return DayClassification(status=DayStatus.PRESENT, symbol="+", title=ctx.record.note)
