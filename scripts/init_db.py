from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.logistics_portal.logistics_portal.storage.json_store import JsonDataStore


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    store = JsonDataStore(settings.DATA_ROOT)
    snapshot = store.read_snapshot()
    print(
        "OK: Storage ready -> "
        f"{store.root.resolve()} (collections={len(snapshot)}, users={len(snapshot.get('users') or [])})"
    )


if __name__ == "__main__":
    main()
