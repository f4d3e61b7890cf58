"""Conversion between stored JSON objects (camelCase) and domain objects."""

from __future__ import annotations

from typing import Any, Mapping

from ..attendance.model import AttendanceRecord, LeaveDetails
from ..common.datetime_utils import format_hhmm, match_hhmm, parse_iso_date
from ..core.enums import AttendanceStatus, LeavePeriod, MoneyPresetType
from ..core.exceptions import ValidationError
from ..payroll.model import MoneyPreset
from ..users.employment import employment_from_dict
from ..users.model import Employee


def _time(value: Any):
    if not value:
        return None
    return match_hhmm(str(value)[:5])


def record_from_dict(data: Mapping[str, Any]) -> AttendanceRecord:
    try:
        status = AttendanceStatus(data.get("status"))
        work_date = parse_iso_date(str(data.get("date") or "")[:10])
        user_id = int(data["userId"])
        record_id = int(data.get("id") or 0)
    except (KeyError, TypeError, ValueError):
        raise ValidationError(f"Bản ghi chấm công không hợp lệ: {dict(data)!r}")

    leave = None
    if status.is_leave:
        duration = 0.5 if str(data.get("leaveDuration")) == "0.5" else 1
        try:
            period = LeavePeriod(data.get("leavePeriod") or LeavePeriod.ALL_DAY.value)
        except ValueError:
            raise ValidationError(f"Buổi nghỉ không hợp lệ: {data.get('leavePeriod')!r}")
        if duration == 1:
            period = LeavePeriod.ALL_DAY
        elif period == LeavePeriod.ALL_DAY:
            # Half day stored without its session is shown as afternoon.
            period = LeavePeriod.AFTERNOON
        leave = LeaveDetails(
            reason=data.get("leaveReason") or None,
            file=data.get("leaveFile") or None,
            duration=duration,
            period=period,
        )

    return AttendanceRecord(
        record_id=record_id,
        user_id=user_id,
        user_name=data.get("userName"),
        work_date=work_date,
        status=status,
        check_in=_time(data.get("checkIn")),
        check_out=_time(data.get("checkOut")),
        leave=leave,
        note=data.get("note") or None,
    )


def record_to_dict(record: AttendanceRecord) -> dict:
    out = {
        "id": record.record_id,
        "userId": record.user_id,
        "userName": record.user_name,
        "date": record.work_date.isoformat(),
        "checkIn": format_hhmm(record.check_in),
        "checkOut": format_hhmm(record.check_out),
        "status": record.status.value,
    }
    if record.note:
        out["note"] = record.note
    if record.leave is not None:
        out.update(
            {
                "leaveType": "Paid" if record.status == AttendanceStatus.ON_LEAVE else "Unpaid",
                "leaveDuration": record.leave.duration,
                "leavePeriod": record.leave.period.value,
            }
        )
        if record.leave.reason:
            out["leaveReason"] = record.leave.reason
        if record.leave.file:
            out["leaveFile"] = record.leave.file
    return out


def employee_from_dict(data: Mapping[str, Any]) -> Employee:
    try:
        user_id = int(data["id"])
    except (KeyError, TypeError, ValueError):
        raise ValidationError(f"Người dùng không hợp lệ: {data.get('name')!r}")
    return Employee(
        user_id=user_id,
        name=str(data.get("name") or ""),
        role=str(data.get("role") or ""),
        email=str(data.get("email") or ""),
        english_name=data.get("englishName"),
        department=data.get("department"),
        position=data.get("position"),
        status=str(data.get("status") or "Active"),
        employment=employment_from_dict(data.get("employmentStatus")),
    )


def preset_from_dict(data: Mapping[str, Any]) -> MoneyPreset:
    try:
        return MoneyPreset(
            preset_id=int(data["id"]),
            type=MoneyPresetType(data["type"]),
            amount=int(data["amount"]),
            month=int(data["month"]),
            year=int(data["year"]),
            name=str(data.get("name") or ""),
        )
    except (KeyError, TypeError, ValueError):
        raise ValidationError(f"Cấu hình khoản tiền không hợp lệ: {dict(data)!r}")


def preset_to_dict(preset: MoneyPreset) -> dict:
    return {
        "id": preset.preset_id,
        "type": preset.type.value,
        "amount": preset.amount,
        "month": preset.month,
        "year": preset.year,
        "name": preset.name,
    }
