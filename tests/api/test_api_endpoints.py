import io

import pytest

from src.logistics_portal.logistics_portal.main import create_app
from src.logistics_portal.logistics_portal.payroll.service import EXCEL_MIMETYPE


@pytest.fixture()
def client(tmp_path):
    app = create_app({"DATA_ROOT": str(tmp_path), "TESTING": True, "LOG_LEVEL": "WARNING"})
    return app.test_client()


def _exempt(client, user_ids):
    return client.post(
        "/api/attendance/config",
        json={"role": "Admin", "user": "admin", "config": {"startTimes": {"Sales": "08:00"}, "exemptUserIds": user_ids}},
    )


def test_data_snapshot_has_initial_users(client):
    res = client.get("/api/data")

    assert res.status_code == 200
    assert [u["id"] for u in res.get_json()["users"]] == [1, 7]


def test_sync_requires_type_and_data(client):
    res = client.post("/api/sync", json={"type": "carriers"})

    assert res.status_code == 400
    assert res.get_json() == {"success": False, "message": "Missing type or data"}


def test_synced_holiday_shows_in_grid(client):
    notice = {"title": "Nghỉ lễ 30/4 - 1/5", "startDate": "2025-04-30", "expiryDate": "2025-05-01"}
    assert client.post("/api/sync", json={"type": "notifications", "data": [notice], "user": "admin"}).status_code == 200

    res = client.get("/api/attendance/grid?year=2025&month=4")

    rows = {r["userId"]: r for r in res.get_json()["rows"]}
    assert rows[1]["cells"][29]["symbol"] == "Lễ"
    assert rows[1]["cells"][29]["editable"] is False


def test_grid_requires_month(client):
    assert client.get("/api/attendance/grid?year=2025").status_code == 400


def test_manual_backup_returns_file_name(client):
    res = client.post("/api/backup/manual", json={"label": "Truoc import", "user": "admin"})

    assert res.status_code == 200
    assert "_MANUAL_Truoc_import_by_admin.json" in res.get_json()["fileName"]


def test_document_pages(client):
    rows = [{"cost": f"Phí {i}", "qty": 1, "price": 10} for i in range(40)]

    res = client.post("/api/documents/quotation/pages", json={"rows": rows})

    body = res.get_json()
    assert res.status_code == 200
    assert body["page_count"] == len(body["pages"]) > 1
    assert body["pages"][0]["label"] == f"- Trang 1 / {body['page_count']} -"


def test_unknown_document_type_is_rejected(client):
    assert client.post("/api/documents/invoice/pages", json={}).status_code == 400


def test_config_is_admin_only(client):
    res = client.post("/api/attendance/config", json={"role": "Sales", "config": {"exemptUserIds": [1]}})

    assert res.status_code == 403
    assert res.get_json()["success"] is False


def test_exempt_user_gets_every_weekday(client):
    url = "/api/attendance/1/work-days?year=2025&month=4"
    assert client.get(url).get_json()["workDays"] == 0

    assert _exempt(client, [1]).status_code == 200

    assert client.get(url).get_json()["workDays"] == 22
    assert client.get("/api/attendance/config").get_json()["config"]["exemptUserIds"] == [1]


def test_work_days_unknown_user(client):
    assert client.get("/api/attendance/99/work-days?year=2025&month=4").status_code == 404


def test_import_csv_from_attendance_machine(client):
    header = ["STT", "Họ và tên"]
    for d in range(1, 32):
        header += [str(d), ""]
    person = ["1", "Nguyễn Văn A"] + [""] * 62
    person[2 + 2 * 2] = "08:20"
    person[3 + 2 * 2] = "17:30"
    csv = "\n".join(["BẢNG CHẤM CÔNG", ",".join(header), ",".join(person)]).encode("utf-8")

    res = client.post(
        "/api/attendance/import?year=2025&month=3",
        data={"file": (io.BytesIO(csv), "cham_cong.csv"), "user": "admin"},
        content_type="multipart/form-data",
    )

    assert res.status_code == 200
    assert res.get_json() == {"success": True, "matchedEmployees": 1, "records": 1}
    grid = client.get("/api/attendance/grid?year=2025&month=3").get_json()
    row = next(r for r in grid["rows"] if r["userId"] == 1)
    assert row["cells"][2]["status"] == "Late"
    assert row["totalPresent"] == 1


def test_import_without_file(client):
    assert client.post("/api/attendance/import?year=2025&month=3", data={}).status_code == 400


def test_cell_edit_and_leave_booking(client):
    res = client.post(
        "/api/attendance/cell",
        json={"userId": 1, "date": "2025-04-02", "status": "On Leave", "leaveReason": "Việc nhà", "user": "admin"},
    )
    assert res.status_code == 200

    res = client.post(
        "/api/attendance/leave",
        json={"userId": 1, "startDate": "2025-04-07", "endDate": "2025-04-08", "leaveType": "Unpaid", "user": "admin"},
    )
    assert res.status_code == 200
    assert res.get_json()["days"] == 2

    row = next(r for r in client.get("/api/attendance/grid?year=2025&month=4").get_json()["rows"] if r["userId"] == 1)
    assert row["totalLeave"] == 1
    assert row["totalUnpaid"] == 2


def test_payroll_lines_and_export(client):
    _exempt(client, [1])
    body = {"year": 2025, "month": 4, "inputs": {"1": {"basic": 2600000}}}

    res = client.post("/api/payroll", json=body)

    lines = {l["userId"]: l for l in res.get_json()["lines"]}
    assert set(lines) == {1, 7}
    assert lines[1]["workDays"] == 22
    assert lines[1]["timeSalary"] == pytest.approx(2200000)

    export = client.post("/api/payroll/export", json=body)
    assert export.status_code == 200
    assert export.mimetype == EXCEL_MIMETYPE
    assert "BangLuong_T04_2025.xlsx" in export.headers["Content-Disposition"]


def test_money_presets_round_trip(client):
    res = client.post(
        "/api/payroll/presets",
        json={"type": "parking", "amount": "200.000", "month": 4, "year": 2025, "name": "Gửi xe T4"},
    )
    preset_id = res.get_json()["id"]

    applied = client.post(
        "/api/payroll/presets/apply", json={"type": "parking", "month": 4, "year": 2025, "inputs": {"basic": 5000000}}
    ).get_json()
    assert applied["inputs"]["parking"] == 200000

    assert client.delete(f"/api/payroll/presets/{preset_id}").status_code == 200
    assert client.get("/api/payroll/presets").get_json()["presets"] == []


def test_guq_upload(client, tmp_path):
    res = client.post(
        "/api/upload?category=GUQ",
        data={"file": (io.BytesIO(b"%PDF"), "giay uy quyen.pdf"), "user": "admin"},
        content_type="multipart/form-data",
    )

    entry = res.get_json()["file"]
    assert res.status_code == 200
    assert (tmp_path / "GUQ" / entry["fileName"]).read_bytes() == b"%PDF"
    assert client.get("/api/data").get_json()["guq"][0]["id"] == 1


def test_document_pages_accepts_non_object_body(client):
    res = client.post("/api/documents/report/pages", json=[1, 2, 3])

    assert res.status_code == 200
    assert res.get_json()["page_count"] >= 1


def test_document_pages_with_nan_month(client):
    res = client.post("/api/documents/report/pages", json={"month": "NaN", "year": "1e400"})

    assert res.status_code == 200
