from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.leave_management.leave_management.database.bootstrap import DEMO_USERS, apply_schema, ensure_demo_data


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    ensure_demo_data(db_config)

    print(
        "OK: Seeded database -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )
    for username, password, _name, role, department, year in DEMO_USERS:
        cohort = f" {department}/{year}" if year else (f" {department}" if department else "")
        print(f"  {role:<8} {username} / {password}{cohort}")


if __name__ == "__main__":
    main()
