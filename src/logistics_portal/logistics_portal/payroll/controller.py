from __future__ import annotations

import io

from flask import Flask, jsonify, request, send_file

from ..common.api import json_endpoint
from ..common.validators import require_month
from ..core.exceptions import ValidationError
from .model import PayrollInput
from .service import EXCEL_MIMETYPE


def register(app: Flask, container) -> None:
    service = container.payroll_service

    def _body() -> dict:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Dữ liệu gửi lên không hợp lệ")
        return data

    def _lines(data: dict):
        year, month = require_month(request.args.get("year") or data.get("year"), request.args.get("month") or data.get("month"))
        inputs = data.get("inputs") or {}
        if not isinstance(inputs, dict):
            raise ValidationError("Dữ liệu lương không hợp lệ")
        lines = service.build_month(year, month, inputs, role=data.get("role"), search=data.get("search") or "")
        return year, month, lines

    @app.route("/api/payroll", methods=["POST"], endpoint="payroll_build")
    @json_endpoint
    def payroll_build():
        year, month, lines = _lines(_body())
        return jsonify({"success": True, "year": year, "month": month, "lines": [l.to_dict() for l in lines]})

    @app.route("/api/payroll/export", methods=["POST"], endpoint="payroll_export")
    @json_endpoint
    def payroll_export():
        year, month, lines = _lines(_body())
        content = service.export_excel(lines)
        return send_file(
            io.BytesIO(content),
            mimetype=EXCEL_MIMETYPE,
            as_attachment=True,
            download_name=f"BangLuong_T{month:02d}_{year}.xlsx",
        )

    @app.route("/api/payroll/presets", methods=["GET"], endpoint="payroll_presets")
    @json_endpoint
    def payroll_presets():
        presets = [
            {"id": p.preset_id, "type": p.type.value, "amount": p.amount, "month": p.month, "year": p.year, "name": p.name}
            for p in service.list_presets()
        ]
        return jsonify({"success": True, "presets": presets})

    @app.route("/api/payroll/presets", methods=["POST"], endpoint="payroll_preset_add")
    @json_endpoint
    def payroll_preset_add():
        data = _body()
        year, month = require_month(data.get("year"), data.get("month"))
        preset = service.add_preset(
            type=str(data.get("type") or ""),
            amount=data.get("amount"),
            month=month,
            year=year,
            name=str(data.get("name") or ""),
            changed_by=str(data.get("user") or ""),
        )
        return jsonify({"success": True, "id": preset.preset_id})

    @app.route("/api/payroll/presets/<int:preset_id>", methods=["DELETE"], endpoint="payroll_preset_delete")
    @json_endpoint
    def payroll_preset_delete(preset_id: int):
        service.remove_preset(preset_id, changed_by=request.args.get("user", ""))
        return jsonify({"success": True})

    @app.route("/api/payroll/presets/apply", methods=["POST"], endpoint="payroll_preset_apply")
    @json_endpoint
    def payroll_preset_apply():
        data = _body()
        year, month = require_month(data.get("year"), data.get("month"))
        inputs = PayrollInput.from_dict(data.get("inputs") or {})
        updated = service.apply_preset(inputs, str(data.get("type") or ""), month=month, year=year)
        return jsonify({"success": True, "inputs": updated.to_dict()})
