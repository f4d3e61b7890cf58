from datetime import date, time

import pytest

from src.logistics_portal.logistics_portal.attendance.model import AttendanceConfig, AttendanceRecord, LeaveDetails
from src.logistics_portal.logistics_portal.core.enums import AttendanceStatus, DayStatus, LeavePeriod
from src.logistics_portal.logistics_portal.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.logistics_portal.logistics_portal.users.employment import Resignation
from src.logistics_portal.logistics_portal.users.model import Employee
from tests.attendance.fakes_attendance import make_service

SALES = Employee(user_id=1, name="Nguyễn Văn A", role="Sales")
DOCS = Employee(user_id=2, name="Trần Thị Bình", role="Document")
CUSTOMER = Employee(user_id=9, name="Công ty ABC", role="Customer")


def test_exempt_user_work_days_equal_weekdays_in_thirty_day_month():
    service, *_ = make_service([SALES], config=AttendanceConfig(exempt_user_ids=frozenset({1})))

    # April 2025 has 30 days, 22 of them Monday to Friday.
    assert service.calculate_work_days(1, 4, 2025) == 22


def test_work_days_count_present_and_late_only():
    records = [
        AttendanceRecord(1, 1, date(2025, 3, 3), AttendanceStatus.PRESENT, check_in=time(8, 0)),
        AttendanceRecord(2, 1, date(2025, 3, 4), AttendanceStatus.LATE, check_in=time(9, 0)),
        AttendanceRecord(3, 1, date(2025, 3, 5), AttendanceStatus.ON_LEAVE, leave=LeaveDetails()),
        AttendanceRecord(4, 1, date(2025, 3, 6), AttendanceStatus.ABSENT),
        AttendanceRecord(5, 1, date(2025, 4, 1), AttendanceStatus.PRESENT),
    ]
    service, *_ = make_service([SALES], records)

    assert service.calculate_work_days(1, 3, 2025) == 2


def test_work_days_for_unknown_employee():
    service, *_ = make_service([SALES])

    with pytest.raises(NotFoundError):
        service.calculate_work_days(42, 3, 2025)


def test_month_grid_totals_and_customer_excluded():
    records = [
        AttendanceRecord(1, 1, date(2025, 3, 3), AttendanceStatus.PRESENT, check_in=time(8, 0)),
        AttendanceRecord(
            2, 1, date(2025, 3, 4), AttendanceStatus.ON_LEAVE, leave=LeaveDetails(duration=0.5, period=LeavePeriod.MORNING)
        ),
        AttendanceRecord(3, 1, date(2025, 3, 5), AttendanceStatus.UNPAID_LEAVE, leave=LeaveDetails()),
        AttendanceRecord(4, 1, date(2025, 3, 6), AttendanceStatus.ABSENT),
    ]
    service, *_ = make_service([SALES, DOCS, CUSTOMER], records)

    rows = service.month_grid(2025, 3)

    assert [r.employee.user_id for r in rows] == [1, 2]
    row = rows[0]
    assert len(row.cells) == 31
    assert row.total_present == 1
    assert row.total_leave == 0.5
    assert row.total_unpaid == 2
    assert row.to_dict()["cells"][3]["symbol"] == "P(S)"


def test_month_grid_search_by_name_or_role():
    service, *_ = make_service([SALES, DOCS])

    assert [r.employee.user_id for r in service.month_grid(2025, 3, search="document")] == [2]
    assert [r.employee.user_id for r in service.month_grid(2025, 3, search="nguyễn")] == [1]


def test_save_cell_upserts_and_keeps_times():
    day = date(2025, 3, 3)
    existing = AttendanceRecord(7, 1, day, AttendanceStatus.LATE, check_in=time(8, 40), note="kẹt xe")
    service, attendance, *_ = make_service([SALES], [existing])

    saved = service.save_cell(user_id=1, work_date=day, status="On Leave", reason="Ốm", file="giay.pdf")

    assert saved.record_id == 7
    assert saved.check_in == time(8, 40)
    assert saved.leave.reason == "Ốm" and saved.leave.duration == 1
    assert len(attendance.records) == 1


def test_save_cell_unpaid_leave_drops_reason():
    day = date(2025, 3, 3)
    service, *_ = make_service([SALES])

    saved = service.save_cell(user_id=1, work_date=day, status="Unpaid Leave", reason="Việc riêng")

    assert saved.leave.reason is None


def test_save_cell_rejects_locked_day_and_bad_status():
    emp = Employee(user_id=1, name="A", role="Sales", employment=Resignation(start_date=date(2025, 3, 1)))
    service, *_ = make_service([emp])

    with pytest.raises(ValidationError):
        service.save_cell(user_id=1, work_date=date(2025, 3, 3), status="Present")
    with pytest.raises(ValidationError):
        service.save_cell(user_id=1, work_date=date(2025, 2, 3), status="Working")


def test_multi_day_leave_books_full_days_and_uses_balance():
    service, attendance, *_ = make_service([SALES])

    records = service.book_leave(
        user_id=1,
        start=date(2025, 3, 10),
        end=date(2025, 3, 12),
        duration=0.5,
        period="Morning",
        reason="Về quê",
    )

    assert len(records) == 3
    assert all(r.leave.duration == 1 and r.leave.period == LeavePeriod.ALL_DAY for r in records)
    assert len({r.record_id for r in records}) == 3
    assert service.leave_balance(1, 2025) == 9


def test_half_day_leave_and_balance_never_negative():
    service, *_ = make_service([SALES])

    service.book_leave(user_id=1, start=date(2025, 3, 10), duration=0.5, period="Afternoon")
    assert service.leave_balance(1, 2025) == 11.5

    with pytest.raises(ValidationError):
        service.book_leave(user_id=1, start=date(2025, 4, 1), end=date(2025, 4, 12))


def test_rebooking_paid_leave_on_same_days_is_not_counted_twice():
    service, *_ = make_service([SALES])
    service.book_leave(user_id=1, start=date(2025, 3, 3), end=date(2025, 3, 12))
    assert service.leave_balance(1, 2025) == 2

    records = service.book_leave(user_id=1, start=date(2025, 3, 10), end=date(2025, 3, 12), reason="Đổi lý do")

    assert [r.note for r in records] == ["Đổi lý do"] * 3
    assert service.leave_balance(1, 2025) == 2


def test_unpaid_leave_does_not_use_balance():
    service, *_ = make_service([SALES])

    service.book_leave(user_id=1, start=date(2025, 5, 1), end=date(2025, 5, 20), paid=False)

    assert service.leave_balance(1, 2025) == 12


def test_config_and_employment_are_admin_only():
    service, _, employees, configs = make_service([SALES])
    config = AttendanceConfig(start_times={"Sales": time(8, 30)})

    with pytest.raises(AuthorizationError):
        service.save_config("Sales", config)
    with pytest.raises(AuthorizationError):
        service.set_employment_status(current_role=None, user_id=1, employment=Resignation(start_date=date(2025, 1, 1)))

    service.save_config("Admin", config)
    updated = service.set_employment_status(
        current_role="admin", user_id=1, employment=Resignation(start_date=date(2025, 1, 1))
    )

    assert configs.config == config
    assert updated.employment.locks(date(2025, 2, 1))
    assert employees.by_id[1].employment.locks(date(2025, 2, 1))


def test_config_round_trips_through_json_shape():
    config = AttendanceConfig.from_dict({"startTimes": {"Sales": "08:30", "Docs": ""}, "exemptUserIds": ["7"]})

    assert config.start_time_for("Sales") == time(8, 30)
    assert config.start_time_for("Docs") == time(8, 0)
    assert config.is_exempt(7)
    assert config.to_dict() == {"startTimes": {"Sales": "08:30"}, "exemptUserIds": [7]}


def test_grid_uses_holiday_and_lock():
    emp = Employee(user_id=2, name="Trần Thị Bình", role="Document", employment=Resignation(start_date=date(2025, 3, 20)))
    service, *_ = make_service([SALES, emp])

    rows = {r.employee.user_id: r for r in service.month_grid(2025, 3)}

    assert rows[2].cells[19].classification.status == DayStatus.LOCKED
    assert rows[2].cells[18].classification.status == DayStatus.NO_DATA
    assert rows[2].to_dict()["note"] == "Nghỉ việc từ ngày 20/03/2025"
