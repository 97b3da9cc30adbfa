from __future__ import annotations

from pathlib import Path

import pytest

from src.attendance_reports.attendance_reports.database.bootstrap import _schema_statements
from src.attendance_reports.attendance_reports.database.connection import DBConfig
from src.attendance_reports.attendance_reports.database.mysql_base import (
    db_cursor,
    dump_text_list,
    fetchall,
    fetchone,
    load_text_list,
)

SCHEMA = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


class FakeCursor:
    def __init__(self, rows=()):
        self.rows = list(rows)
        self.closed = False

    def fetchone(self):
        return self.rows[0] if self.rows else None

    def fetchall(self):
        return self.rows

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self):
        self.cursor_obj = FakeCursor()
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return self.cursor_obj

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeFactory:
    def __init__(self):
        self.conn = FakeConnection()
        self.config = DBConfig.from_mapping({})

    def connect(self):
        return self.conn


def test_schema_statements_skip_database_selection_and_comments():
    statements = list(_schema_statements(SCHEMA.read_text(encoding="utf-8")))

    assert len(statements) == 5
    assert all(s.startswith("CREATE TABLE IF NOT EXISTS") for s in statements)


def test_schema_statements_keep_quoted_semicolons():
    sql = "-- note; ignored\nINSERT INTO t VALUES('a;b');\nSELECT 1"

    assert list(_schema_statements(sql)) == ["INSERT INTO t VALUES('a;b')", "SELECT 1"]


def test_db_cursor_commits_and_closes():
    factory = FakeFactory()

    with db_cursor(factory) as (_, cur):
        assert cur is factory.conn.cursor_obj

    assert factory.conn.committed
    assert factory.conn.closed
    assert cur.closed


def test_db_cursor_rolls_back_and_reraises():
    factory = FakeFactory()

    with pytest.raises(RuntimeError):
        with db_cursor(factory):
            raise RuntimeError("boom")

    assert factory.conn.rolled_back
    assert not factory.conn.committed
    assert factory.conn.closed


def test_fetch_helpers_decode_bytes():
    cur = FakeCursor([{"employee_id": bytearray(b"1001"), "punch_count": 2}])

    assert fetchone(cur) == {"employee_id": "1001", "punch_count": 2}
    assert fetchall(cur) == [{"employee_id": "1001", "punch_count": 2}]
    assert fetchone(FakeCursor()) is None


def test_text_list_round_trip():
    assert load_text_list(dump_text_list(("06:40:00", "14:35:00"))) == ("06:40:00", "14:35:00")
    assert load_text_list(None) == ()


def test_db_config_defaults_and_describe():
    config = DBConfig.from_mapping({"host": "db", "port": "3307", "user": "app"})

    assert config.port == 3307
    assert config.database == "attendance_reports"
    assert config.describe() == "app@db:3307/attendance_reports"
