"""Seed demo employees, holiday notification and start times for local testing."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.logistics_portal.logistics_portal.storage.json_store import JsonDataStore

DEMO_USERS = [
    {"id": 1, "name": "Nguyễn Văn A", "englishName": "Mr. A", "role": "Sales", "email": "sales1@longhoanglogistics.com", "status": "Active", "department": "Sales"},
    {"id": 2, "name": "Trần Thị Bình", "englishName": "Binh", "role": "Document", "email": "docs@longhoanglogistics.com", "status": "Active", "department": "Docs"},
    {"id": 3, "name": "Lê Đức Cường", "englishName": "Cuong", "role": "Accounting", "email": "acc@longhoanglogistics.com", "status": "Active", "department": "Accounting"},
    {"id": 7, "name": "Administrator", "englishName": "Admin", "role": "Admin", "email": "admin@longhoanglogistics.com", "status": "Active", "department": "Board"},
]

DEMO_NOTIFICATIONS = [
    {"id": 1, "title": "Thông báo nghỉ lễ Quốc khánh 2/9", "startDate": "2025-09-01", "expiryDate": "2025-09-02"},
]

DEMO_CONFIG = {"startTimes": {"Sales": "08:00", "Document": "08:30"}, "exemptUserIds": [7]}


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    store = JsonDataStore(settings.DATA_ROOT)
    snapshot = store.read_snapshot()

    existing = {int(u.get("id")) for u in snapshot.get("users") or [] if u.get("id") is not None}
    snapshot["users"] = list(snapshot.get("users") or []) + [u for u in DEMO_USERS if u["id"] not in existing]
    if not snapshot.get("notifications"):
        snapshot["notifications"] = DEMO_NOTIFICATIONS
    snapshot["attendanceConfig"] = DEMO_CONFIG

    path = store.write(snapshot, "SEED", "SYSTEM")
    print(f"OK: Seeded {store.root.resolve()} (users={len(snapshot['users'])}). Backup: {path.name}")


if __name__ == "__main__":
    main()
