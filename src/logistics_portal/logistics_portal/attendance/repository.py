from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Protocol, Sequence

from .model import AttendanceConfig, AttendanceRecord, HolidayWindow


class AttendanceRepository(Protocol):
    def list_all(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_month(self, year: int, month: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def next_id(self) -> int:
        raise NotImplementedError

    def upsert_many(self, records: Iterable[AttendanceRecord], *, changed_by: str = "") -> None:
        """Insert or replace by (user_id, work_date)."""

        raise NotImplementedError

    def replace_month(
        self,
        *,
        user_ids: Iterable[int],
        year: int,
        month: int,
        records: Iterable[AttendanceRecord],
        changed_by: str = "",
    ) -> None:
        """Drop every record of ``user_ids`` in the month, then add ``records``, in one write."""

        raise NotImplementedError


class AttendanceConfigRepository(Protocol):
    def get(self) -> AttendanceConfig:
        raise NotImplementedError

    def save(self, config: AttendanceConfig, *, changed_by: str = "") -> None:
        raise NotImplementedError


class HolidayRepository(Protocol):
    def list_windows(self) -> Sequence[HolidayWindow]:
        raise NotImplementedError
