"""Repositories over the JSON store.

Stored objects that fail to parse are skipped on read (with a warning) but
kept verbatim on write, so a bad entry is never silently dropped from disk.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Callable, Iterable, Optional, Sequence, TypeVar

from ..attendance.holidays import holiday_windows_from_notifications
from ..attendance.model import AttendanceConfig, AttendanceRecord, HolidayWindow
from ..core.exceptions import ValidationError
from ..payroll.model import MoneyPreset
from ..users.employment import EmploymentStatus
from ..users.model import Employee
from .json_store import JsonDataStore
from .serializers import (
    employee_from_dict,
    preset_from_dict,
    preset_to_dict,
    record_from_dict,
    record_to_dict,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _parse_all(items: Iterable[Any], parse: Callable[[Any], T], what: str) -> list[T]:
    out = []
    for item in items or []:
        if not isinstance(item, dict):
            logger.warning("Skipping %s entry that is not an object: %r", what, item)
            continue
        try:
            out.append(parse(item))
        except ValidationError as e:
            logger.warning("Skipping invalid %s entry: %s", what, e)
    return out


def _raw_key(item: Any) -> Optional[tuple[int, str]]:
    try:
        return int(item.get("userId")), str(item.get("date") or "")[:10]
    except (AttributeError, TypeError, ValueError):
        return None


class JsonAttendanceRepository:
    COLLECTION = "attendanceRecords"

    def __init__(self, store: JsonDataStore):
        self._store = store

    def _raw(self) -> list:
        return list(self._store.read_collection(self.COLLECTION) or [])

    def list_all(self) -> Sequence[AttendanceRecord]:
        return _parse_all(self._raw(), record_from_dict, "attendance")

    def list_for_month(self, year: int, month: int) -> Sequence[AttendanceRecord]:
        return [r for r in self.list_all() if r.work_date.year == year and r.work_date.month == month]

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        for r in self.list_all():
            if r.user_id == user_id and r.work_date == work_date:
                return r
        return None

    def next_id(self) -> int:
        ids = []
        for item in self._raw():
            try:
                ids.append(int(item.get("id") or 0))
            except (AttributeError, TypeError, ValueError):
                continue
        return max(ids, default=0) + 1

    def upsert_many(self, records: Iterable[AttendanceRecord], *, changed_by: str = "") -> None:
        new = [record_to_dict(r) for r in records]
        keys = {(r["userId"], r["date"]) for r in new}
        kept = [item for item in self._raw() if _raw_key(item) not in keys]
        self._store.replace_collection(self.COLLECTION, kept + new, changed_by)

    def replace_month(
        self,
        *,
        user_ids: Iterable[int],
        year: int,
        month: int,
        records: Iterable[AttendanceRecord],
        changed_by: str = "",
    ) -> None:
        users = {int(u) for u in user_ids}
        prefix = f"{year:04d}-{month:02d}-"

        def dropped(item: Any) -> bool:
            key = _raw_key(item)
            return key is not None and key[0] in users and key[1].startswith(prefix)

        kept = [item for item in self._raw() if not dropped(item)]
        new = [record_to_dict(r) for r in records]
        self._store.replace_collection(self.COLLECTION, kept + new, changed_by)


class JsonAttendanceConfigRepository:
    COLLECTION = "attendanceConfig"

    def __init__(self, store: JsonDataStore):
        self._store = store

    def get(self) -> AttendanceConfig:
        data = self._store.read_collection(self.COLLECTION)
        if not isinstance(data, dict):
            return AttendanceConfig()
        try:
            return AttendanceConfig.from_dict(data)
        except ValidationError as e:
            logger.warning("Invalid attendance config in store, using defaults: %s", e)
            return AttendanceConfig()

    def save(self, config: AttendanceConfig, *, changed_by: str = "") -> None:
        self._store.replace_collection(self.COLLECTION, config.to_dict(), changed_by)


class JsonEmployeeRepository:
    COLLECTION = "users"

    def __init__(self, store: JsonDataStore):
        self._store = store

    def list_all(self) -> Sequence[Employee]:
        return _parse_all(self._store.read_collection(self.COLLECTION), employee_from_dict, "user")

    def get_by_id(self, user_id: int) -> Optional[Employee]:
        for e in self.list_all():
            if e.user_id == user_id:
                return e
        return None

    def set_employment(self, user_id: int, employment: EmploymentStatus, *, changed_by: str = "") -> bool:
        users = list(self._store.read_collection(self.COLLECTION) or [])
        found = False
        for item in users:
            if isinstance(item, dict) and str(item.get("id")) == str(user_id):
                item["employmentStatus"] = employment.to_dict()
                found = True
        if found:
            self._store.replace_collection(self.COLLECTION, users, changed_by)
        return found


class JsonHolidayRepository:
    def __init__(self, store: JsonDataStore):
        self._store = store

    def list_windows(self) -> Sequence[HolidayWindow]:
        items = [n for n in self._store.read_collection("notifications") or [] if isinstance(n, dict)]
        return holiday_windows_from_notifications(items)


class JsonMoneyPresetRepository:
    COLLECTION = "moneyConfigs"

    def __init__(self, store: JsonDataStore):
        self._store = store

    def list_all(self) -> Sequence[MoneyPreset]:
        return _parse_all(self._store.read_collection(self.COLLECTION), preset_from_dict, "money preset")

    def save_all(self, presets: Sequence[MoneyPreset], *, changed_by: str = "") -> None:
        self._store.replace_collection(self.COLLECTION, [preset_to_dict(p) for p in presets], changed_by)
