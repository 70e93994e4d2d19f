from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.workshop_attendance.workshop_attendance.backend.connection import BackendConfig, BackendConnection
from src.workshop_attendance.workshop_attendance.staff.rest_staff_repository import RestStaffRepository


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    backend_config = dict(settings.BACKEND_CONFIG)

    conn = BackendConnection(
        BackendConfig(
            url=backend_config["url"],
            api_key=backend_config["api_key"],
            timeout=float(backend_config.get("timeout", 15)),
            schema=backend_config.get("schema") or None,
        )
    )
    roster = RestStaffRepository(conn).list_roster()
    print(f"OK: Reached backend -> {conn.url_for('')} (staff={len(roster)})")


if __name__ == "__main__":
    main()
