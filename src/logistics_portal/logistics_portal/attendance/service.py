from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date, timedelta
from typing import Any, BinaryIO, Optional, Sequence, Union

from ..common.datetime_utils import iter_month, parse_iso_date
from ..core.constants import ANNUAL_LEAVE_DAYS
from ..core.enums import AttendanceStatus, LeavePeriod, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..users.employment import EmploymentStatus
from ..users.model import Employee
from ..users.repository import EmployeeRepository
from .factory import DayStatusStrategyFactory
from .importer import AttendanceImporter, ImportResult, read_grid
from .model import AttendanceConfig, AttendanceRecord, DayClassification, HolidayWindow, LeaveDetails
from .repository import AttendanceConfigRepository, AttendanceRepository, HolidayRepository
from .strategies.base import DayContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GridCell:
    day: date
    classification: DayClassification
    record: Optional[AttendanceRecord] = None

    def to_dict(self) -> dict:
        c = self.classification
        return {
            "date": self.day.isoformat(),
            "status": c.status.value,
            "symbol": c.symbol,
            "editable": c.editable,
            "title": c.title or "",
            "recordId": self.record.record_id if self.record else None,
        }


@dataclass(frozen=True)
class GridRow:
    employee: Employee
    cells: tuple[GridCell, ...]

    @property
    def total_present(self) -> int:
        return sum(1 for c in self.cells if c.classification.counts_as_work_day)

    @property
    def total_leave(self) -> float:
        return sum(c.classification.leave_days for c in self.cells)

    @property
    def total_unpaid(self) -> float:
        return sum(c.classification.unpaid_days for c in self.cells)

    def to_dict(self) -> dict:
        return {
            "userId": self.employee.user_id,
            "name": self.employee.name,
            "role": self.employee.role,
            "note": self.employee.employment.note,
            "cells": [c.to_dict() for c in self.cells],
            "totalPresent": self.total_present,
            "totalLeave": self.total_leave,
            "totalUnpaid": self.total_unpaid,
        }


def _require_admin(current_role: Optional[str]) -> None:
    if (current_role or "").lower() != Role.ADMIN.value:
        raise AuthorizationError("Chỉ quản trị viên mới có quyền thực hiện thao tác này")


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        configs: AttendanceConfigRepository,
        holidays: HolidayRepository,
        *,
        strategy_factory: DayStatusStrategyFactory | None = None,
        importer: AttendanceImporter | None = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._configs = configs
        self._holidays = holidays
        self._factory = strategy_factory or DayStatusStrategyFactory()
        self._importer = importer or AttendanceImporter()

    # --- classification -------------------------------------------------

    def classify_day(
        self,
        employee: Employee,
        day: date,
        record: Optional[AttendanceRecord],
        config: AttendanceConfig,
        holidays: Sequence[HolidayWindow] = (),
        employment: Optional[EmploymentStatus] = None,
    ) -> DayClassification:
        ctx = DayContext(
            user_id=employee.user_id,
            role=employee.role,
            day=day,
            record=record,
            config=config,
            holidays=holidays,
            employment=employment or employee.employment,
        )
        return self._factory.for_day(ctx).decide(ctx)

    def _get_employee(self, user_id: int) -> Employee:
        emp = self._employees.get_by_id(int(user_id))
        if not emp:
            raise NotFoundError("Nhân viên không tồn tại")
        return emp

    def _month_index(self, year: int, month: int) -> dict[tuple[int, date], AttendanceRecord]:
        return {r.key: r for r in self._attendance.list_for_month(year, month)}

    def _row(self, emp, year, month, records, config, holidays) -> GridRow:
        cells = []
        for day in iter_month(year, month):
            rec = records.get((emp.user_id, day))
            cells.append(GridCell(day=day, classification=self.classify_day(emp, day, rec, config, holidays), record=rec))
        return GridRow(employee=emp, cells=tuple(cells))

    def month_grid(self, year: int, month: int, *, search: str = "") -> list[GridRow]:
        """Bảng chấm công tháng: mọi nhân viên (trừ khách hàng), lọc theo tên hoặc vai trò."""
        config = self._configs.get()
        holidays = list(self._holidays.list_windows())
        records = self._month_index(year, month)
        term = (search or "").strip().lower()

        rows = []
        for emp in self._employees.list_all():
            if emp.is_customer:
                continue
            if term and term not in emp.name.lower() and term not in emp.role.lower():
                continue
            rows.append(self._row(emp, year, month, records, config, holidays))
        return rows

    def calculate_work_days(self, user_id: int, month: int, year: int) -> int:
        emp = self._get_employee(user_id)
        row = self._row(
            emp,
            year,
            month,
            self._month_index(year, month),
            self._configs.get(),
            list(self._holidays.list_windows()),
        )
        return row.total_present

    # --- manual edits ----------------------------------------------------

    def save_cell(
        self,
        *,
        user_id: int,
        work_date: date,
        status: AttendanceStatus | str,
        reason: Optional[str] = None,
        file: Optional[str] = None,
        changed_by: str = "",
    ) -> AttendanceRecord:
        """Manual edit of one grid cell: replaces the status, keeps times and note."""
        emp = self._get_employee(user_id)
        try:
            status = AttendanceStatus(status)
        except ValueError:
            raise ValidationError(f"Trạng thái không hợp lệ: {status}")
        if emp.employment.locks(work_date):
            raise ValidationError("Ngày này đã bị khoá chấm công")

        existing = self._attendance.get_for_user_and_date(emp.user_id, work_date)
        leave = None
        if status == AttendanceStatus.ON_LEAVE:
            leave = LeaveDetails(reason=reason or None, file=file or None)
        elif status == AttendanceStatus.UNPAID_LEAVE:
            leave = LeaveDetails()

        record = AttendanceRecord(
            record_id=existing.record_id if existing else self._attendance.next_id(),
            user_id=emp.user_id,
            user_name=emp.name,
            work_date=work_date,
            status=status,
            check_in=existing.check_in if existing else None,
            check_out=existing.check_out if existing else None,
            note=existing.note if existing else None,
            leave=leave,
        )
        self._attendance.upsert_many([record], changed_by=changed_by)
        return record

    def book_leave(
        self,
        *,
        user_id: int,
        start: date,
        end: Optional[date] = None,
        paid: bool = True,
        duration: float = 1,
        period: LeavePeriod | str = LeavePeriod.ALL_DAY,
        reason: Optional[str] = None,
        file: Optional[str] = None,
        changed_by: str = "",
    ) -> list[AttendanceRecord]:
        """Đăng ký nghỉ phép: một ngày (cả ngày / nửa ngày) hoặc nhiều ngày liên tiếp.

        Nghỉ nhiều ngày luôn tính cả ngày. Nghỉ có lương bị giới hạn bởi số phép còn lại.
        """
        emp = self._get_employee(user_id)
        end = end or start
        if end < start:
            raise ValidationError("Ngày kết thúc phải sau ngày bắt đầu")

        days = [start + timedelta(days=i) for i in range((end - start).days + 1)]
        if len(days) > 1:
            duration, period = 1, LeavePeriod.ALL_DAY
        try:
            period = LeavePeriod(period)
        except ValueError:
            raise ValidationError(f"Buổi nghỉ không hợp lệ: {period}")
        leave = LeaveDetails(reason=reason or None, file=file or None, duration=float(duration), period=period)

        if any(emp.employment.locks(d) for d in days):
            raise ValidationError("Khoảng nghỉ trùng ngày đã bị khoá chấm công")
        existing = {d: self._attendance.get_for_user_and_date(emp.user_id, d) for d in days}
        if paid:
            # Paid leave already on these days is released by the re-booking.
            released = sum(
                r.leave_days
                for d, r in existing.items()
                if r is not None and r.status == AttendanceStatus.ON_LEAVE and d.year == start.year
            )
            balance = self.leave_balance(emp.user_id, start.year) + released
            requested = leave.duration * len(days)
            if requested > balance:
                raise ValidationError(f"Không đủ ngày phép (còn {balance:g}, yêu cầu {requested:g})")

        status = AttendanceStatus.ON_LEAVE if paid else AttendanceStatus.UNPAID_LEAVE
        next_id = self._attendance.next_id()
        records = []
        for i, d in enumerate(days):
            current = existing[d]
            records.append(
                AttendanceRecord(
                    record_id=current.record_id if current else next_id + i,
                    user_id=emp.user_id,
                    user_name=emp.name,
                    work_date=d,
                    status=status,
                    leave=leave,
                    note=reason or None,
                )
            )
        self._attendance.upsert_many(records, changed_by=changed_by)
        logger.info("Leave booked for user %s: %s..%s (%s)", emp.user_id, start, end, status.value)
        return records

    def leave_balance(self, user_id: int, year: int) -> float:
        used = sum(
            r.leave_days
            for r in self._attendance.list_all()
            if r.user_id == int(user_id) and r.work_date.year == int(year) and r.status == AttendanceStatus.ON_LEAVE
        )
        return max(0.0, ANNUAL_LEAVE_DAYS - used)

    # --- admin -----------------------------------------------------------

    def set_employment_status(
        self,
        *,
        current_role: Optional[str],
        user_id: int,
        employment: EmploymentStatus,
        changed_by: str = "",
    ) -> Employee:
        _require_admin(current_role)
        emp = self._get_employee(user_id)
        self._employees.set_employment(emp.user_id, employment, changed_by=changed_by)
        logger.info("Employment status of user %s set to %s", emp.user_id, employment.type.value)
        return replace(emp, employment=employment)

    def get_config(self) -> AttendanceConfig:
        return self._configs.get()

    def save_config(self, current_role: Optional[str], config: AttendanceConfig, *, changed_by: str = "") -> AttendanceConfig:
        _require_admin(current_role)
        self._configs.save(config, changed_by=changed_by)
        logger.info(
            "Attendance config saved by %s: %d role start times, %d exempt users",
            changed_by or "SYSTEM",
            len(config.start_times),
            len(config.exempt_user_ids),
        )
        return config

    # --- bulk import -----------------------------------------------------

    def import_month(
        self,
        *,
        year: int,
        month: int,
        rows: Optional[Sequence[Sequence[Any]]] = None,
        source: Union[BinaryIO, bytes, None] = None,
        filename: Optional[str] = None,
        changed_by: str = "",
    ) -> ImportResult:
        """Replace a month of attendance for every employee found in the sheet.

        Parsing completes before anything is written; on error the store is untouched.
        """
        if rows is None:
            if source is None:
                raise ValidationError("Thiếu file chấm công")
            rows = read_grid(source, filename)

        result = self._importer.parse(
            rows,
            list(self._employees.list_all()),
            year=year,
            month=month,
            config=self._configs.get(),
            first_id=self._attendance.next_id(),
        )
        self._attendance.replace_month(
            user_ids=result.matched_user_ids,
            year=year,
            month=month,
            records=result.records,
            changed_by=changed_by,
        )
        logger.info(
            "Imported attendance %02d/%d by %s: %d employees, %d records",
            month,
            year,
            changed_by or "SYSTEM",
            len(result.matched_user_ids),
            result.record_count,
        )
        return result


def parse_work_date(value: Any) -> date:
    try:
        return parse_iso_date(str(value or "").strip())
    except ValueError:
        raise ValidationError(f"Ngày không hợp lệ: {value!r}")
