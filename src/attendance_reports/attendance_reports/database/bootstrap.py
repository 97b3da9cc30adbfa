"""Schema bootstrap for the MySQL report store.

``database/schema.sql`` carries its own CREATE DATABASE/USE lines for manual
use; they are dropped here so the configured database name always wins.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator

import mysql.connector

from .connection import DBConfig

logger = logging.getLogger(__name__)

_DB_SELECTION_RE = re.compile(r"(?im)^\s*(CREATE\s+DATABASE|USE)\b[^;]*;\s*$")


def _schema_statements(sql: str) -> Iterator[str]:
    """Split a schema file on ';', skipping '--' comment lines and quoted ';'."""

    body = "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))
    body = _DB_SELECTION_RE.sub("", body)

    current: list[str] = []
    quote = None
    for ch in body:
        if quote:
            if ch == quote:
                quote = None
        elif ch in ("'", '"', "`"):
            quote = ch
        elif ch == ";":
            statement = "".join(current).strip()
            current = []
            if statement:
                yield statement
            continue
        current.append(ch)

    tail = "".join(current).strip()
    if tail:
        yield tail


def _server_connection(config: DBConfig, *, select_database: bool = True):
    kwargs = dict(host=config.host, port=config.port, user=config.user, password=config.password, use_pure=True)
    if select_database:
        kwargs["database"] = config.database
    return mysql.connector.connect(**kwargs)


def ensure_database_exists(db_config: dict) -> None:
    config = DBConfig.from_mapping(db_config)
    conn = _server_connection(config, select_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    """Create the database if needed and run every statement of the schema file."""

    config = DBConfig.from_mapping(db_config)
    ensure_database_exists(db_config)

    statements = list(_schema_statements(Path(schema_path).read_text(encoding="utf-8")))
    conn = _server_connection(config)
    try:
        cur = conn.cursor()
        for statement in statements:
            cur.execute(statement)
        conn.commit()
    finally:
        conn.close()
    logger.info("Applied %d schema statements to %s", len(statements), config.describe())


def list_tables(db_config: dict) -> list[str]:
    conn = _server_connection(DBConfig.from_mapping(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return sorted(str(row[0]) for row in cur.fetchall())
    finally:
        conn.close()
