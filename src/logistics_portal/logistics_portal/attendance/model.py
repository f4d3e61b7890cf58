from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_hhmm
from ..core.constants import DEFAULT_START_TIME
from ..core.enums import AttendanceStatus, DayStatus, LeavePeriod
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class LeaveDetails:
    """Thông tin nghỉ phép, chỉ hợp lệ trên bản ghi On Leave / Unpaid Leave."""

    reason: Optional[str] = None
    file: Optional[str] = None
    duration: float = 1
    period: LeavePeriod = LeavePeriod.ALL_DAY

    def __post_init__(self):
        if self.duration not in (0.5, 1):
            raise ValidationError("Thời lượng nghỉ chỉ có thể là 0.5 hoặc 1 ngày")
        if self.duration == 0.5 and self.period == LeavePeriod.ALL_DAY:
            raise ValidationError("Nghỉ nửa ngày phải chọn buổi Sáng hoặc Chiều")
        if self.duration == 1 and self.period != LeavePeriod.ALL_DAY:
            raise ValidationError("Nghỉ cả ngày không chọn buổi")

    @property
    def is_half_day(self) -> bool:
        return self.duration == 0.5


@dataclass(frozen=True)
class AttendanceRecord:
    """Thực thể miền (domain): Bản ghi chấm công, tối đa một bản ghi / (nhân viên, ngày)."""

    record_id: int
    user_id: int
    work_date: date
    status: AttendanceStatus
    check_in: Optional[time] = None
    check_out: Optional[time] = None
    leave: Optional[LeaveDetails] = None
    note: Optional[str] = None
    user_name: Optional[str] = None

    def __post_init__(self):
        if self.leave is not None and not self.status.is_leave:
            raise ValidationError(f"Bản ghi {self.status.value} không được mang thông tin nghỉ phép")

    @property
    def key(self) -> tuple[int, date]:
        return self.user_id, self.work_date

    @property
    def leave_days(self) -> float:
        if self.leave is not None:
            return self.leave.duration
        return 1.0


@dataclass(frozen=True)
class AttendanceConfig:
    """Cấu hình chấm công toàn cục: giờ bắt đầu theo vai trò + danh sách miễn chấm công."""

    start_times: Mapping[str, time] = field(default_factory=dict)
    exempt_user_ids: frozenset[int] = frozenset()

    def start_time_for(self, role: Optional[str]) -> time:
        if role and role in self.start_times:
            return self.start_times[role]
        return DEFAULT_START_TIME

    def is_exempt(self, user_id: int) -> bool:
        return user_id in self.exempt_user_ids

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AttendanceConfig":
        """Parse ``{"startTimes": {role: "HH:MM"}, "exemptUserIds": [...]}``."""
        start_times = {}
        for role, value in (data.get("startTimes") or {}).items():
            t = parse_hhmm(str(value))
            if t is not None:
                start_times[str(role)] = t
        try:
            exempt = frozenset(int(u) for u in data.get("exemptUserIds") or [])
        except (TypeError, ValueError):
            raise ValidationError("Danh sách miễn chấm công không hợp lệ")
        return cls(start_times=start_times, exempt_user_ids=exempt)

    def to_dict(self) -> dict:
        return {
            "startTimes": {role: t.strftime("%H:%M") for role, t in self.start_times.items()},
            "exemptUserIds": sorted(self.exempt_user_ids),
        }


@dataclass(frozen=True)
class HolidayWindow:
    title: str
    start: date
    end: date

    def covers(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True)
class DayClassification:
    """Kết quả phân loại một ô (nhân viên, ngày) để hiển thị và tổng hợp."""

    status: DayStatus
    symbol: str = ""
    editable: bool = True
    period: Optional[LeavePeriod] = None
    title: Optional[str] = None
    leave_days: float = 0
    unpaid_days: float = 0

    @property
    def counts_as_work_day(self) -> bool:
        return self.status in (DayStatus.PRESENT, DayStatus.LATE)

    @property
    def is_half_day(self) -> bool:
        return self.period in (LeavePeriod.MORNING, LeavePeriod.AFTERNOON)
