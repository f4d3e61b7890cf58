import io
import json
from datetime import date, datetime, time

import pytest
from werkzeug.datastructures import FileStorage

from src.logistics_portal.logistics_portal.attendance.model import AttendanceRecord
from src.logistics_portal.logistics_portal.core.constants import STORAGE_DIRS
from src.logistics_portal.logistics_portal.core.enums import AttendanceStatus, LeavePeriod
from src.logistics_portal.logistics_portal.core.exceptions import ValidationError
from src.logistics_portal.logistics_portal.storage.json_repositories import (
    JsonAttendanceRepository,
    JsonEmployeeRepository,
    JsonHolidayRepository,
)
from src.logistics_portal.logistics_portal.storage.json_store import JsonDataStore
from src.logistics_portal.logistics_portal.storage.serializers import record_from_dict
from src.logistics_portal.logistics_portal.users.employment import Maternity

NOW = datetime(2025, 3, 5, 14, 7, 9)


@pytest.fixture()
def store(tmp_path):
    return JsonDataStore(tmp_path, clock=lambda: NOW)


def test_first_read_creates_directories_and_master(store, tmp_path):
    snapshot = store.read_snapshot()

    assert all((tmp_path / d).is_dir() for d in STORAGE_DIRS)
    assert (tmp_path / "Database" / "master_data.json").exists()
    assert [u["id"] for u in snapshot["users"]] == [1, 7]
    assert snapshot["attendanceConfig"] == {"startTimes": {}, "exemptUserIds": []}


def test_replace_collection_writes_master_and_backup(store, tmp_path):
    backup = store.replace_collection("carriers", [{"name": "MSC"}], "Mr. A")

    assert backup == tmp_path / "History" / "2025-03-05" / "2025-03-05_14-07-09_CARRIERS_by_Mr__A.json"
    assert json.loads(backup.read_text(encoding="utf-8"))["carriers"] == [{"name": "MSC"}]
    assert store.read_snapshot()["carriers"] == [{"name": "MSC"}]
    assert store.read_snapshot()["users"]


def test_backup_without_user_is_by_system(store):
    assert store.replace_collection("statements", [], None).name.endswith("_STATEMENTS_by_SYSTEM.json")


@pytest.mark.parametrize("bad_type", ["", "../users", None, "a b"])
def test_replace_collection_rejects_bad_type(store, bad_type):
    with pytest.raises(ValidationError):
        store.replace_collection(bad_type, [], "admin")


def test_corrupt_master_falls_back_to_initial_data(store, tmp_path):
    store.read_snapshot()
    (tmp_path / "Database" / "master_data.json").write_text("{not json", encoding="utf-8")

    assert [u["id"] for u in store.read_snapshot()["users"]] == [1, 7]


def test_manual_backup_label(store):
    path = store.manual_backup("Truoc import", "admin")

    assert path.name == "2025-03-05_14-07-09_MANUAL_Truoc_import_by_admin.json"


def test_guq_upload_is_stored_and_listed(store, tmp_path):
    upload = FileStorage(stream=io.BytesIO(b"%PDF-1.4"), filename="giay uy quyen.pdf")

    entry = store.save_upload("GUQ", upload, "Mr. A")

    assert (tmp_path / "GUQ" / "20250305_giay_uy_quyen.pdf").read_bytes() == b"%PDF-1.4"
    assert entry["id"] == 1
    assert store.read_snapshot()["guq"][0]["originalName"] == "giay uy quyen.pdf"


def test_upload_category_must_be_a_storage_folder(store):
    upload = FileStorage(stream=io.BytesIO(b"x"), filename="a.pdf")

    with pytest.raises(ValidationError):
        store.save_upload("Database", upload)


def test_attendance_repository_replace_month_keeps_unparsed_entries(store):
    raw = [
        {"id": 1, "userId": 1, "date": "2025-03-03", "status": "Present", "checkIn": "08:00"},
        {"id": 2, "userId": 1, "date": "2025-04-01", "status": "Present"},
        {"id": 3, "userId": 2, "date": "2025-03-03", "status": "Working"},
    ]
    store.replace_collection("attendanceRecords", raw, "seed")
    repo = JsonAttendanceRepository(store)

    assert len(repo.list_all()) == 2
    assert repo.next_id() == 4

    new = AttendanceRecord(4, 1, date(2025, 3, 10), AttendanceStatus.LATE, check_in=time(8, 40))
    repo.replace_month(user_ids=[1], year=2025, month=3, records=[new])

    stored = store.read_collection("attendanceRecords")
    assert [r["id"] for r in stored] == [2, 3, 4]
    assert stored[-1]["checkIn"] == "08:40"
    assert repo.get_for_user_and_date(1, date(2025, 3, 10)).status == AttendanceStatus.LATE


def test_attendance_repository_upsert_by_user_and_date(store):
    repo = JsonAttendanceRepository(store)
    day = date(2025, 3, 3)

    repo.upsert_many([AttendanceRecord(1, 1, day, AttendanceStatus.PRESENT)])
    repo.upsert_many([AttendanceRecord(1, 1, day, AttendanceStatus.ABSENT)])

    assert [r.status for r in repo.list_all()] == [AttendanceStatus.ABSENT]


def test_employee_repository_sets_employment(store):
    repo = JsonEmployeeRepository(store)

    assert repo.set_employment(1, Maternity(start_date=date(2025, 5, 1)))
    assert not repo.set_employment(99, Maternity(start_date=date(2025, 5, 1)))

    emp = repo.get_by_id(1)
    assert emp.employment.locks(date(2025, 6, 1))
    assert store.read_collection("users")[0]["employmentStatus"]["type"] == "Maternity"


def test_holiday_repository_reads_notifications(store):
    store.replace_collection(
        "notifications",
        [{"title": "Nghỉ Tết Nguyên Đán", "startDate": "2026-02-14", "expiryDate": "2026-02-22"}],
        "admin",
    )

    windows = JsonHolidayRepository(store).list_windows()

    assert windows[0].covers(date(2026, 2, 17))


@pytest.mark.parametrize("period", [None, "", "All Day"])
def test_half_day_leave_without_session_reads_as_afternoon(period):
    data = {"id": 5, "userId": 1, "date": "2025-03-04", "status": "On Leave", "leaveDuration": 0.5}
    if period is not None:
        data["leavePeriod"] = period

    record = record_from_dict(data)

    assert record.leave.duration == 0.5
    assert record.leave.period == LeavePeriod.AFTERNOON


def test_half_day_leave_without_session_is_kept_by_repository(store):
    store.replace_collection(
        "attendanceRecords",
        [{"id": 1, "userId": 1, "date": "2025-03-04", "status": "On Leave", "leaveDuration": 0.5}],
        "seed",
    )

    records = JsonAttendanceRepository(store).list_all()

    assert len(records) == 1
    assert records[0].leave_days == 0.5
