"""File-backed data store: one master JSON document plus a backup per write.

Layout under the data root::

    Database/master_data.json
    History/YYYY-MM-DD/<YYYY-MM-DD_HH-MM-SS>_<TYPE>_by_<user>.json
    GUQ/, CVHC/, ... uploaded files

Every write reads the latest snapshot, replaces one collection, then writes the
master file and a full copy into History (last write wins).
"""

from __future__ import annotations

import copy
import json
import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Optional, Union

from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from ..common.datetime_utils import now_local
from ..common.text import safe_token
from ..core.constants import STORAGE_DIRS
from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)

MASTER_FILE = Path("Database") / "master_data.json"
UPLOAD_CATEGORIES = tuple(d for d in STORAGE_DIRS if d not in ("Database", "History"))

_COLLECTION_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")

INITIAL_DATA: dict[str, Any] = {
    "users": [
        {
            "id": 1,
            "name": "Nguyễn Văn A",
            "englishName": "Mr. A",
            "role": "Sales",
            "email": "sales1@longhoanglogistics.com",
            "status": "Active",
            "department": "Sales",
            "position": "Nhân viên kinh doanh",
        },
        {
            "id": 7,
            "name": "Administrator",
            "englishName": "Admin",
            "role": "Admin",
            "email": "admin@longhoanglogistics.com",
            "status": "Active",
            "department": "Board",
            "position": "Admin",
        },
    ],
    "statements": [],
    "attendanceRecords": [],
    "notifications": [],
    "carriers": [],
    "guq": [],
    "moneyConfigs": [],
    "attendanceConfig": {"startTimes": {}, "exemptUserIds": []},
}


def initial_snapshot() -> dict[str, Any]:
    return copy.deepcopy(INITIAL_DATA)


class JsonDataStore:
    def __init__(self, root: Union[str, Path], *, clock: Callable[[], datetime] = now_local):
        self.root = Path(root)
        self._clock = clock

    @property
    def master_path(self) -> Path:
        return self.root / MASTER_FILE

    def ensure_directories(self) -> None:
        for name in STORAGE_DIRS:
            path = self.root / name
            if not path.exists():
                path.mkdir(parents=True, exist_ok=True)
                logger.info("Created storage directory %s", path)

    # --- reading ---------------------------------------------------------

    def read_snapshot(self) -> dict[str, Any]:
        """Latest master document; created with the initial data on first use.

        An unreadable master file is logged and the initial data is returned.
        """
        self.ensure_directories()
        if not self.master_path.exists():
            data = initial_snapshot()
            self._write_json(self.master_path, data)
            return data
        try:
            with self.master_path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError):
            logger.exception("Cannot read master file %s", self.master_path)
            return initial_snapshot()
        if not isinstance(data, dict):
            logger.error("Master file %s does not hold an object", self.master_path)
            return initial_snapshot()
        for key, value in INITIAL_DATA.items():
            data.setdefault(key, copy.deepcopy(value))
        return data

    def read_collection(self, name: str) -> Any:
        return self.read_snapshot().get(name, copy.deepcopy(INITIAL_DATA.get(name)))

    # --- writing ---------------------------------------------------------

    def replace_collection(self, type: str, data: Any, user: Optional[str] = None) -> Path:
        if not isinstance(type, str) or not _COLLECTION_RE.match(type):
            raise ValidationError("Thiếu hoặc sai loại dữ liệu (type)")
        if data is None:
            raise ValidationError("Thiếu dữ liệu (data)")
        snapshot = self.read_snapshot()
        snapshot[type] = data
        return self.write(snapshot, type.upper(), user)

    def write(self, snapshot: dict[str, Any], change_type: str, user: Optional[str] = None) -> Path:
        """Persist the master document and a timestamped copy; return the backup path."""
        self.ensure_directories()
        self._write_json(self.master_path, snapshot)

        now = self._clock()
        backup_dir = self.root / "History" / now.strftime("%Y-%m-%d")
        backup_dir.mkdir(parents=True, exist_ok=True)
        name = f"{now.strftime('%Y-%m-%d_%H-%M-%S')}_{change_type}_by_{safe_token(user)}.json"
        backup = backup_dir / name
        self._write_json(backup, snapshot)

        logger.info("[SAVED] %s updated by %s. Backup: %s", change_type, user or "SYSTEM", name)
        return backup

    def manual_backup(self, label: str, user: Optional[str] = None) -> Path:
        return self.write(self.read_snapshot(), f"MANUAL_{safe_token(label, default='BACKUP')}", user)

    def save_upload(self, category: str, file: FileStorage, user: Optional[str] = None) -> dict[str, Any]:
        """Store an uploaded file under ``<root>/<category>/<YYYYMMDD>_<name>``.

        GUQ uploads (giấy ủy quyền) are also listed in the ``guq`` collection.
        """
        if category not in UPLOAD_CATEGORIES:
            raise ValidationError(f"Thư mục lưu trữ không hợp lệ: {category}")
        original = file.filename or ""
        safe = secure_filename(original)
        if not safe:
            raise ValidationError("Tên file không hợp lệ")

        self.ensure_directories()
        now = self._clock()
        stored_name = f"{now.strftime('%Y%m%d')}_{safe}"
        target = self.root / category / stored_name
        file.save(str(target))
        logger.info("Uploaded %s to %s by %s", original, target, user or "SYSTEM")

        entry = {
            "fileName": stored_name,
            "originalName": original,
            "category": category,
            "uploadedAt": now.isoformat(timespec="seconds"),
            "uploadedBy": user or "SYSTEM",
        }
        if category == "GUQ":
            guq = list(self.read_collection("guq") or [])
            entry = {"id": max((int(g.get("id") or 0) for g in guq), default=0) + 1, **entry}
            guq.append(entry)
            self.replace_collection("guq", guq, user)
        return entry

    @staticmethod
    def _write_json(path: Path, data: Any) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
