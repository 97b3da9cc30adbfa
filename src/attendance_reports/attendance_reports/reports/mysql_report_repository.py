from __future__ import annotations

from typing import Optional, Sequence

from ..attendance.model import DailyAttendanceRecord, Duration
from ..core.constants import MISSING_TIME
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_text_list, fetchall, fetchone, load_text_list
from ..punches.model import Employee, PunchEvent
from .model import AttendanceReport, ReportSummaryRow
from .repository import ReportStore


_REPORT_COLUMNS = "report_id, file_name, upload_date, date_range_start, date_range_end"
_EMPLOYEE_COLUMNS = "employee_id, first_name, department"
_PUNCH_COLUMNS = "employee_id, first_name, department, work_date, work_time"
_RECORD_COLUMNS = (
    "employee_id, first_name, department, work_date, arrival_time, departure_time, "
    "duration, punch_count, others_punch"
)


def _by_report(rows: list[dict]) -> dict[str, list[dict]]:
    grouped: dict[str, list[dict]] = {}
    for row in rows:
        grouped.setdefault(row["report_id"], []).append(row)
    return grouped


def _assemble(head: dict, employee_rows: list[dict], punch_rows: list[dict], record_rows: list[dict]) -> AttendanceReport:
    employees = tuple(
        Employee(employee_id=r["employee_id"], first_name=r["first_name"], department=r["department"])
        for r in employee_rows
    )
    punches = tuple(
        PunchEvent(
            employee_id=r["employee_id"],
            first_name=r["first_name"],
            department=r["department"],
            date=r["work_date"],
            time=r["work_time"],
        )
        for r in punch_rows
    )
    records = tuple(
        DailyAttendanceRecord(
            employee_id=r["employee_id"],
            first_name=r["first_name"],
            department=r["department"],
            date=r["work_date"],
            arrival_time=r["arrival_time"],
            departure_time=None if r["departure_time"] == MISSING_TIME else r["departure_time"],
            duration=Duration.parse(r["duration"]),
            punch_count=int(r["punch_count"]),
            others_punch=load_text_list(r["others_punch"]),
        )
        for r in record_rows
    )
    return AttendanceReport(
        report_id=head["report_id"],
        file_name=head["file_name"],
        upload_date=head["upload_date"],
        date_range_start=head["date_range_start"],
        date_range_end=head["date_range_end"],
        employees=employees,
        departments=tuple(dict.fromkeys(e.department for e in employees)),
        punches=punches,
        records=records,
    )


class MySQLReportStore(ReportStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def save(self, report: AttendanceReport) -> None:
        # One transaction: a report is either stored whole or not at all.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO reports(report_id, file_name, upload_date, date_range_start, date_range_end)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (
                    report.report_id,
                    report.file_name,
                    report.upload_date,
                    report.date_range_start,
                    report.date_range_end,
                ),
            )
            cur.executemany(
                """
                INSERT INTO report_employees(report_id, employee_id, first_name, department, sort_order)
                VALUES(%s,%s,%s,%s,%s)
                """,
                [
                    (report.report_id, e.employee_id, e.first_name, e.department, i)
                    for i, e in enumerate(report.employees)
                ],
            )
            cur.executemany(
                """
                INSERT INTO punch_events(report_id, employee_id, first_name, department, work_date, work_time)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                [(report.report_id, p.employee_id, p.first_name, p.department, p.date, p.time) for p in report.punches],
            )
            cur.executemany(
                """
                INSERT INTO daily_records(
                    report_id, employee_id, first_name, department, work_date,
                    arrival_time, departure_time, duration, punch_count, others_punch
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                [
                    (
                        report.report_id,
                        r.employee_id,
                        r.first_name,
                        r.department,
                        r.date,
                        r.arrival_time,
                        r.departure_display,
                        str(r.duration),
                        r.punch_count,
                        dump_text_list(r.others_punch),
                    )
                    for r in report.records
                ],
            )

    def get(self, report_id: str) -> Optional[AttendanceReport]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_REPORT_COLUMNS} FROM reports WHERE report_id=%s", (report_id,))
            head = fetchone(cur)
            if not head:
                return None

            cur.execute(f"SELECT {_EMPLOYEE_COLUMNS} FROM report_employees WHERE report_id=%s ORDER BY sort_order", (report_id,))
            employees = fetchall(cur)
            cur.execute(f"SELECT {_PUNCH_COLUMNS} FROM punch_events WHERE report_id=%s ORDER BY punch_id", (report_id,))
            punches = fetchall(cur)
            cur.execute(f"SELECT {_RECORD_COLUMNS} FROM daily_records WHERE report_id=%s ORDER BY record_id", (report_id,))
            records = fetchall(cur)

        return _assemble(head, employees, punches, records)

    def list(self) -> Sequence[ReportSummaryRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_REPORT_COLUMNS} FROM reports ORDER BY upload_date DESC")
            return [
                ReportSummaryRow(
                    report_id=r["report_id"],
                    file_name=r["file_name"],
                    upload_date=r["upload_date"],
                    date_range_start=r["date_range_start"],
                    date_range_end=r["date_range_end"],
                )
                for r in fetchall(cur)
            ]

    def list_full(self) -> Sequence[AttendanceReport]:
        # Four queries on one connection, whatever the number of reports.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_REPORT_COLUMNS} FROM reports ORDER BY upload_date DESC")
            heads = fetchall(cur)
            cur.execute(f"SELECT report_id, {_EMPLOYEE_COLUMNS} FROM report_employees ORDER BY report_id, sort_order")
            employees = _by_report(fetchall(cur))
            cur.execute(f"SELECT report_id, {_PUNCH_COLUMNS} FROM punch_events ORDER BY punch_id")
            punches = _by_report(fetchall(cur))
            cur.execute(f"SELECT report_id, {_RECORD_COLUMNS} FROM daily_records ORDER BY record_id")
            records = _by_report(fetchall(cur))

        return [
            _assemble(
                head,
                employees.get(head["report_id"], []),
                punches.get(head["report_id"], []),
                records.get(head["report_id"], []),
            )
            for head in heads
        ]

    def delete(self, report_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM reports WHERE report_id=%s", (report_id,))
            return cur.rowcount > 0
