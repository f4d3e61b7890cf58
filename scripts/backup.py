"""Backup dữ liệu: tạo một bản sao toàn bộ master_data.json vào History/.

Dùng khi cần chốt dữ liệu trước khi import chấm công hoặc chạy bảng lương.
"""

from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.logistics_portal.logistics_portal.storage.json_store import JsonDataStore


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Manual backup of the portal data store")
    parser.add_argument("--label", default="CLI")
    parser.add_argument("--user", default="SYSTEM")
    args = parser.parse_args(argv)

    settings = importlib.import_module(get_settings_module())
    store = JsonDataStore(settings.DATA_ROOT)
    path = store.manual_backup(args.label, args.user)
    print(f"OK: Backup created: {path}")


if __name__ == "__main__":
    main()
