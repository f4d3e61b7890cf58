from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional

from ..common.datetime_utils import format_vn_date, parse_optional_date
from ..core.enums import EmploymentType
from ..core.exceptions import ValidationError


class EmploymentStatus(ABC):
    """Tình trạng làm việc; quyết định ngày nào bị khoá chấm công."""

    type: EmploymentType

    @abstractmethod
    def locks(self, day: date) -> bool:
        raise NotImplementedError

    @property
    def note(self) -> str:
        return ""

    @property
    def lock_title(self) -> str:
        return ""

    def to_dict(self) -> dict:
        return {"type": self.type.value}


@dataclass(frozen=True)
class Normal(EmploymentStatus):
    type = EmploymentType.NORMAL

    def locks(self, day: date) -> bool:
        return False


@dataclass(frozen=True)
class Maternity(EmploymentStatus):
    start_date: date
    end_date: Optional[date] = None

    type = EmploymentType.MATERNITY

    def __post_init__(self):
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValidationError("Ngày kết thúc thai sản phải sau ngày bắt đầu")

    def locks(self, day: date) -> bool:
        return day >= self.start_date and (self.end_date is None or day <= self.end_date)

    @property
    def note(self) -> str:
        return "Nghỉ thai sản"

    @property
    def lock_title(self) -> str:
        return "Nghỉ thai sản"

    def to_dict(self) -> dict:
        out = {"type": self.type.value, "startDate": self.start_date.isoformat(), "note": self.note}
        if self.end_date:
            out["endDate"] = self.end_date.isoformat()
        return out


@dataclass(frozen=True)
class Resignation(EmploymentStatus):
    start_date: date

    type = EmploymentType.RESIGNATION

    def locks(self, day: date) -> bool:
        return day >= self.start_date

    @property
    def note(self) -> str:
        return f"Nghỉ việc từ ngày {format_vn_date(self.start_date)}"

    @property
    def lock_title(self) -> str:
        return "Đã nghỉ việc"

    def to_dict(self) -> dict:
        return {"type": self.type.value, "startDate": self.start_date.isoformat(), "note": self.note}


NORMAL = Normal()


def employment_from_dict(data: Optional[Mapping[str, Any]]) -> EmploymentStatus:
    """Parse the stored ``employmentStatus`` object.

    A Maternity/Resignation entry without a start date locks nothing, same as Normal.
    """
    if not data:
        return NORMAL
    try:
        kind = EmploymentType(data.get("type") or EmploymentType.NORMAL.value)
    except ValueError:
        raise ValidationError(f"Tình trạng làm việc không hợp lệ: {data.get('type')!r}")

    start = parse_optional_date(data.get("startDate"))
    if kind == EmploymentType.NORMAL or start is None:
        return NORMAL
    if kind == EmploymentType.MATERNITY:
        return Maternity(start_date=start, end_date=parse_optional_date(data.get("endDate")))
    return Resignation(start_date=start)
