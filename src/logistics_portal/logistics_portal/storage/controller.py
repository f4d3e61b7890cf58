from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.api import json_endpoint
from ..core.exceptions import ValidationError


def _body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def register(app: Flask, container) -> None:
    store = container.store

    @app.route("/api/data", methods=["GET"], endpoint="data_snapshot")
    @json_endpoint
    def data_snapshot():
        return jsonify(store.read_snapshot())

    @app.route("/api/sync", methods=["POST"], endpoint="data_sync")
    @json_endpoint
    def data_sync():
        body = _body()
        if not body.get("type") or body.get("data") is None:
            raise ValidationError("Missing type or data")
        store.replace_collection(body["type"], body["data"], body.get("user"))
        return jsonify({"success": True, "message": "Synced successfully"})

    @app.route("/api/backup/manual", methods=["POST"], endpoint="data_backup_manual")
    @json_endpoint
    def data_backup_manual():
        body = _body()
        path = store.manual_backup(str(body.get("label") or ""), body.get("user"))
        return jsonify({"success": True, "fileName": path.name})

    @app.route("/api/upload", methods=["POST"], endpoint="data_upload")
    @json_endpoint
    def data_upload():
        f = request.files.get("file")
        if f is None or not f.filename:
            raise ValidationError("Thiếu file tải lên")
        entry = store.save_upload(
            request.args.get("category", ""),
            f,
            request.form.get("user") or request.args.get("user"),
        )
        return jsonify({"success": True, "file": entry})
