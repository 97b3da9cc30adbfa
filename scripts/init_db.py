"""Create the report store tables on the configured MySQL server.

Usage: APP_ENV=production python scripts/init_db.py
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.attendance_reports.attendance_reports.database.bootstrap import apply_schema, list_tables
from src.attendance_reports.attendance_reports.database.connection import DBConfig


def main() -> None:
    load_dotenv(override=False)
    db_config = dict(importlib.import_module(get_settings_module()).DB_CONFIG)

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    print(f"Schema applied to {DBConfig.from_mapping(db_config).describe()}: {', '.join(list_tables(db_config))}")


if __name__ == "__main__":
    main()
