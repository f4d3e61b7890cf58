from __future__ import annotations

import importlib
import logging
from typing import Any, Mapping, Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import build_container
from .layout.controller import register as register_layout
from .payroll.controller import register as register_payroll
from .storage.controller import register as register_storage

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

logger = logging.getLogger(__name__)

_SETTINGS = ("SECRET_KEY", "DEBUG", "TESTING", "DATA_ROOT", "LOG_LEVEL", "MAX_UPLOAD_MB")


def load_settings(overrides: Optional[Mapping[str, Any]] = None) -> dict[str, Any]:
    settings_module = get_settings_module()
    module = importlib.import_module(settings_module)
    settings = {name: getattr(module, name) for name in _SETTINGS if hasattr(module, name)}
    settings.update(overrides or {})
    settings["SETTINGS_MODULE"] = settings_module
    return settings


def create_app(settings: Optional[Mapping[str, Any]] = None) -> Flask:
    load_dotenv(override=False)
    cfg = load_settings(settings)

    logging.basicConfig(level=str(cfg.get("LOG_LEVEL", "INFO")).upper(), format=LOG_FORMAT)

    app = Flask(__name__)
    app.secret_key = cfg.get("SECRET_KEY")
    app.config["DEBUG"] = bool(cfg.get("DEBUG", False))
    app.config["TESTING"] = bool(cfg.get("TESTING", False))
    app.config["DATA_ROOT"] = str(cfg["DATA_ROOT"])
    app.config["MAX_CONTENT_LENGTH"] = int(cfg.get("MAX_UPLOAD_MB", 20)) * 1024 * 1024

    container = build_container(data_root=app.config["DATA_ROOT"])
    app.extensions["logistics_portal"] = container

    register_storage(app, container)
    register_layout(app, container)
    register_attendance(app, container)
    register_payroll(app, container)

    logger.info("[logistics-portal] settings=%s storage root=%s", cfg["SETTINGS_MODULE"], app.config["DATA_ROOT"])
    return app
