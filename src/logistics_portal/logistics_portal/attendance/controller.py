from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.api import json_endpoint
from ..common.validators import require_int, require_month
from ..core.exceptions import ValidationError
from ..users.employment import employment_from_dict
from .model import AttendanceConfig
from .service import parse_work_date


def register(app: Flask, container) -> None:
    service = container.attendance_service

    def _body() -> dict:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Dữ liệu gửi lên không hợp lệ")
        return data

    @app.route("/api/attendance/grid", methods=["GET"], endpoint="attendance_grid")
    @json_endpoint
    def attendance_grid():
        year, month = require_month(request.args.get("year"), request.args.get("month"))
        rows = service.month_grid(year, month, search=request.args.get("search", ""))
        return jsonify({"success": True, "year": year, "month": month, "rows": [r.to_dict() for r in rows]})

    @app.route("/api/attendance/<int:user_id>/work-days", methods=["GET"], endpoint="attendance_work_days")
    @json_endpoint
    def attendance_work_days(user_id: int):
        year, month = require_month(request.args.get("year"), request.args.get("month"))
        days = service.calculate_work_days(user_id, month, year)
        return jsonify({"success": True, "userId": user_id, "workDays": days})

    @app.route("/api/attendance/cell", methods=["POST"], endpoint="attendance_cell")
    @json_endpoint
    def attendance_cell():
        data = _body()
        record = service.save_cell(
            user_id=require_int(data.get("userId"), "Mã nhân viên"),
            work_date=parse_work_date(data.get("date")),
            status=str(data.get("status") or ""),
            reason=data.get("leaveReason"),
            file=data.get("leaveFile"),
            changed_by=str(data.get("user") or ""),
        )
        return jsonify({"success": True, "recordId": record.record_id})

    @app.route("/api/attendance/leave", methods=["POST"], endpoint="attendance_leave")
    @json_endpoint
    def attendance_leave():
        data = _body()
        start = parse_work_date(data.get("startDate"))
        end = parse_work_date(data.get("endDate")) if data.get("endDate") else None
        records = service.book_leave(
            user_id=require_int(data.get("userId"), "Mã nhân viên"),
            start=start,
            end=end,
            paid=str(data.get("leaveType") or "Paid") == "Paid",
            duration=0.5 if str(data.get("duration")) == "0.5" else 1,
            period=str(data.get("period") or "All Day"),
            reason=data.get("reason"),
            file=data.get("file"),
            changed_by=str(data.get("user") or ""),
        )
        balance = service.leave_balance(records[0].user_id, start.year)
        return jsonify({"success": True, "days": len(records), "remaining": balance})

    @app.route("/api/attendance/config", methods=["GET"], endpoint="attendance_config_get")
    @json_endpoint
    def attendance_config_get():
        return jsonify({"success": True, "config": service.get_config().to_dict()})

    @app.route("/api/attendance/config", methods=["POST"], endpoint="attendance_config_save")
    @json_endpoint
    def attendance_config_save():
        data = _body()
        config = service.save_config(
            data.get("role"),
            AttendanceConfig.from_dict(data.get("config") or {}),
            changed_by=str(data.get("user") or ""),
        )
        return jsonify({"success": True, "config": config.to_dict()})

    @app.route("/api/attendance/employment", methods=["POST"], endpoint="attendance_employment")
    @json_endpoint
    def attendance_employment():
        data = _body()
        employee = service.set_employment_status(
            current_role=data.get("role"),
            user_id=require_int(data.get("userId"), "Mã nhân viên"),
            employment=employment_from_dict(data.get("employmentStatus")),
            changed_by=str(data.get("user") or ""),
        )
        return jsonify({"success": True, "employmentStatus": employee.employment.to_dict()})

    @app.route("/api/attendance/import", methods=["POST"], endpoint="attendance_import")
    @json_endpoint
    def attendance_import():
        year, month = require_month(request.args.get("year"), request.args.get("month"))
        f = request.files.get("file")
        if f is None or not f.filename:
            raise ValidationError("Thiếu file chấm công")
        result = service.import_month(
            year=year,
            month=month,
            source=f.read(),
            filename=f.filename,
            changed_by=request.form.get("user", ""),
        )
        return jsonify(
            {
                "success": True,
                "matchedEmployees": len(result.matched_user_ids),
                "records": result.record_count,
            }
        )
