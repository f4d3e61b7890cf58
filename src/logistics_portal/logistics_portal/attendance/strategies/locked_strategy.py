from __future__ import annotations

from ...core.enums import DayStatus
from ..model import DayClassification
from .base import DayContext, DayStatusStrategy


class LockedStrategy(DayStatusStrategy):
    """Resigned or on maternity leave: the cell is greyed out and not counted."""

    def applies(self, ctx: DayContext) -> bool:
        return ctx.employment.locks(ctx.day)

    def decide(self, ctx: DayContext) -> DayClassification:
        return DayClassification(status=DayStatus.LOCKED, editable=False, title=ctx.employment.lock_title)
