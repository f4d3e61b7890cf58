from __future__ import annotations

from ...common.datetime_utils import is_weekday
from ...core.enums import DayStatus
from ..model import DayClassification
from .base import DayContext, DayStatusStrategy


class ExemptStrategy(DayStatusStrategy):
    """Exempt users are present every weekday without recording anything."""

    def applies(self, ctx: DayContext) -> bool:
        return ctx.record is None and ctx.config.is_exempt(ctx.user_id)

    def decide(self, ctx: DayContext) -> DayClassification:
        if is_weekday(ctx.day):
            return DayClassification(status=DayStatus.PRESENT, symbol="+", title="Miễn chấm công")
        return DayClassification(status=DayStatus.BLANK)


class NoDataStrategy(DayStatusStrategy):
    def applies(self, ctx: DayContext) -> bool:
        return True

    def decide(self, ctx: DayContext) -> DayClassification:
        return DayClassification(status=DayStatus.NO_DATA)
