from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import ShiftOverride
from .repository import ShiftOverrideRepository


class MySQLShiftOverrideRepository(ShiftOverrideRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_report(self, *, report_id: str) -> Sequence[ShiftOverride]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT report_id, employee_id, shift_time, note
                FROM shift_overrides
                WHERE report_id=%s
                ORDER BY employee_id ASC
                """,
                (report_id,),
            )
            return [
                ShiftOverride(
                    report_id=r["report_id"],
                    employee_id=r["employee_id"],
                    shift_time=r["shift_time"],
                    note=r.get("note"),
                )
                for r in fetchall(cur)
            ]

    def upsert(self, *, report_id: str, employee_id: str, shift_time: str, note: Optional[str] = None) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO shift_overrides(report_id, employee_id, shift_time, note)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE shift_time=VALUES(shift_time), note=VALUES(note)
                """,
                (report_id, employee_id, shift_time, note),
            )

    def delete(self, *, report_id: str, employee_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM shift_overrides WHERE report_id=%s AND employee_id=%s",
                (report_id, employee_id),
            )
            return cur.rowcount > 0
