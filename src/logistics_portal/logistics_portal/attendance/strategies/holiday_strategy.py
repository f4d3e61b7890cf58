from __future__ import annotations

from ...core.enums import DayStatus
from ..model import DayClassification
from .base import DayContext, DayStatusStrategy


class HolidayStrategy(DayStatusStrategy):
    """Public holiday with no record for the day."""

    def applies(self, ctx: DayContext) -> bool:
        return ctx.record is None and ctx.holiday() is not None

    def decide(self, ctx: DayContext) -> DayClassification:
        return DayClassification(status=DayStatus.HOLIDAY, symbol="Lễ", editable=False, title="Nghỉ Lễ")
