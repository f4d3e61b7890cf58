from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from ...users.employment import EmploymentStatus
from ..model import AttendanceConfig, AttendanceRecord, DayClassification, HolidayWindow


@dataclass(frozen=True)
class DayContext:
    """Mọi dữ liệu cần để phân loại một ô (nhân viên, ngày)."""

    user_id: int
    role: Optional[str]
    day: date
    record: Optional[AttendanceRecord]
    config: AttendanceConfig
    holidays: Sequence[HolidayWindow]
    employment: EmploymentStatus

    def holiday(self) -> Optional[HolidayWindow]:
        for h in self.holidays:
            if h.covers(self.day):
                return h
        return None


class DayStatusStrategy(ABC):
    """Strategy Pattern: one rule of the day classification precedence."""

    @abstractmethod
    def applies(self, ctx: DayContext) -> bool:
        raise NotImplementedError

    @abstractmethod
    def decide(self, ctx: DayContext) -> DayClassification:
        raise NotImplementedError
