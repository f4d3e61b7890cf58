from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.api import json_endpoint
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/documents/<doc_type>/pages", methods=["POST"], endpoint="document_pages")
    @json_endpoint
    def document_pages(doc_type: str):
        record = request.get_json(silent=True)
        if not isinstance(record, dict):
            record = {}
        doc = container.layout_service.layout(doc_type, record)
        return jsonify({"success": True, **doc.to_dict()})
