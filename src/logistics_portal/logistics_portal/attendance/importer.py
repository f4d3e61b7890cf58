"""Reconcile a timekeeping-machine spreadsheet with the employee list.

The machine export is a loose grid: somewhere near the top there is a row of
day numbers, and each employee occupies one or more rows below it with the
check-in time under the day column and the check-out time in the cell right
after it.
"""

from __future__ import annotations

import io
import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, time
from pathlib import Path
from typing import Any, BinaryIO, Optional, Sequence, Union

import pandas as pd

from ..common.datetime_utils import days_in_month, match_hhmm
from ..common.text import names_match, normalize_name
from ..core.constants import IMPORT_MIN_DAY_COLUMNS, IMPORT_MIN_ROWS
from ..core.enums import AttendanceStatus
from ..core.exceptions import SpreadsheetImportError
from ..users.model import Employee
from .lateness import is_late
from .model import AttendanceConfig, AttendanceRecord

logger = logging.getLogger(__name__)

Grid = Sequence[Sequence[Any]]


@dataclass(frozen=True)
class ImportResult:
    year: int
    month: int
    matched_user_ids: tuple[int, ...]
    records: tuple[AttendanceRecord, ...]

    @property
    def record_count(self) -> int:
        return len(self.records)


def cell_text(value: Any) -> str:
    """Spreadsheet cell as text: times as HH:MM, whole floats without ".0", blanks as ""."""
    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
    if isinstance(value, datetime):
        return value.strftime("%H:%M")
    if isinstance(value, time):
        return value.strftime("%H:%M")
    return str(value).strip()


def _read_csv(data: bytes) -> pd.DataFrame:
    text = data.decode("utf-8-sig")
    # Machine exports are ragged; size the frame on the widest line.
    width = max((line.count(",") + 1 for line in text.splitlines()), default=1)
    return pd.read_csv(
        io.StringIO(text),
        header=None,
        names=list(range(width)),
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=False,
    )


def read_grid(source: Union[str, Path, BinaryIO, bytes], filename: Optional[str] = None) -> list[list[str]]:
    """Read every cell of the first sheet (or CSV) as text, with no header row."""
    name = (filename or (str(source) if isinstance(source, (str, Path)) else "")).lower()
    try:
        if isinstance(source, (str, Path)):
            data = Path(source).read_bytes()
        elif isinstance(source, bytes):
            data = source
        else:
            data = source.read()
        if name.endswith(".csv"):
            df = _read_csv(data)
        else:
            df = pd.read_excel(io.BytesIO(data), header=None)
    except Exception as e:
        logger.warning("Cannot read attendance spreadsheet %s: %s", filename or name, e)
        raise SpreadsheetImportError(f"Không đọc được file chấm công: {e}") from e
    return [[cell_text(v) for v in row] for row in df.itertuples(index=False, name=None)]


def _day_number(text: str, max_day: int) -> Optional[int]:
    try:
        n = int(text)
    except ValueError:
        return None
    return n if 1 <= n <= max_day else None


def find_day_columns(rows: Grid, max_day: int) -> tuple[int, dict[int, int]]:
    """Locate the header row; return its index and the day -> column map."""
    for idx, row in enumerate(rows):
        columns: dict[int, int] = {}
        for col, value in enumerate(row):
            day = _day_number(cell_text(value), max_day)
            if day is not None and day not in columns:
                columns[day] = col
        if len(columns) >= IMPORT_MIN_DAY_COLUMNS:
            return idx, columns
    raise SpreadsheetImportError(
        f"Không tìm thấy dòng tiêu đề ngày (cần ít nhất {IMPORT_MIN_DAY_COLUMNS} cột ngày 1..{max_day})"
    )


def _match_employee(row: Sequence[Any], first_day_col: int, employees: Sequence[Employee]) -> Optional[Employee]:
    names = [cell_text(v) for v in row[:first_day_col]]
    names = [n for n in names if normalize_name(n)]
    if not names:
        return None
    # Exact matches first, so "An" never steals the row of "Nguyễn Văn An".
    for emp in employees:
        if any(normalize_name(n) == normalize_name(emp.name) for n in names):
            return emp
    for emp in employees:
        if any(names_match(n, emp.name) for n in names):
            return emp
    return None


def _first_time(rows: Sequence[Sequence[Any]], col: int) -> Optional[time]:
    for row in rows:
        if col < len(row):
            t = match_hhmm(cell_text(row[col]))
            if t is not None:
                return t
    return None


class AttendanceImporter:
    """Parse a raw grid into per-employee attendance records for one month."""

    def parse(
        self,
        rows: Grid,
        employees: Sequence[Employee],
        *,
        year: int,
        month: int,
        config: AttendanceConfig,
        first_id: int = 1,
    ) -> ImportResult:
        if len(rows) < IMPORT_MIN_ROWS:
            raise SpreadsheetImportError("File chấm công trống hoặc thiếu dữ liệu")

        max_day = days_in_month(year, month)
        header_idx, day_columns = find_day_columns(rows, max_day)
        first_day_col = min(day_columns.values())

        candidates = [e for e in employees if not e.is_customer]
        rows_by_user: dict[int, list[Sequence[Any]]] = {}
        matched: dict[int, Employee] = {}
        for idx, row in enumerate(rows):
            if idx == header_idx:
                continue
            emp = _match_employee(row, first_day_col, candidates)
            if emp is None:
                continue
            matched.setdefault(emp.user_id, emp)
            rows_by_user.setdefault(emp.user_id, []).append(row)

        records: list[AttendanceRecord] = []
        next_id = first_id
        for user_id, emp in matched.items():
            emp_rows = rows_by_user[user_id]
            start = config.start_time_for(emp.role)
            for day, col in sorted(day_columns.items()):
                check_in = _first_time(emp_rows, col)
                check_out = _first_time(emp_rows, col + 1)
                if check_in is None and check_out is None:
                    continue
                status = AttendanceStatus.PRESENT
                if check_in is not None and is_late(check_in, start):
                    status = AttendanceStatus.LATE
                records.append(
                    AttendanceRecord(
                        record_id=next_id,
                        user_id=user_id,
                        user_name=emp.name,
                        work_date=date(year, month, day),
                        status=status,
                        check_in=check_in,
                        check_out=check_out,
                        note="Import từ máy chấm công",
                    )
                )
                next_id += 1

        if not matched:
            raise SpreadsheetImportError("Không khớp được nhân viên nào trong file chấm công")

        logger.info(
            "Parsed attendance sheet %02d/%d: %d employees matched, %d records",
            month,
            year,
            len(matched),
            len(records),
        )
        return ImportResult(
            year=year,
            month=month,
            matched_user_ids=tuple(matched),
            records=tuple(records),
        )
