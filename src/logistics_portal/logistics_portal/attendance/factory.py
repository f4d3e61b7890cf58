from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from .strategies.base import DayContext, DayStatusStrategy
from .strategies.check_in_strategy import CheckInStrategy
from .strategies.holiday_strategy import HolidayStrategy
from .strategies.leave_strategy import HalfDayLeaveStrategy
from .strategies.locked_strategy import LockedStrategy
from .strategies.no_record_strategy import ExemptStrategy, NoDataStrategy
from .strategies.stored_status_strategy import StoredStatusStrategy


def default_strategies() -> tuple[DayStatusStrategy, ...]:
    # Order is the precedence: first match wins.
    return (
        LockedStrategy(),
        HolidayStrategy(),
        HalfDayLeaveStrategy(),
        CheckInStrategy(),
        StoredStatusStrategy(),
        ExemptStrategy(),
        NoDataStrategy(),
    )


@dataclass
class DayStatusStrategyFactory:
    """Factory Pattern: choose the strategy that classifies a day."""

    strategies: Sequence[DayStatusStrategy] = field(default_factory=default_strategies)

    def for_day(self, ctx: DayContext) -> DayStatusStrategy:
        for s in self.strategies:
            if s.applies(ctx):
                return s
        return NoDataStrategy()
