"""Aggregations over reconciled records.

Every function here is a pure fold over its inputs; nothing is cached between
calls so each view recomputes its own numbers.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Optional, Sequence

from ..attendance.model import DailyAttendanceRecord
from ..delays.classifier import classify_delay
from ..punches.model import PunchEvent
from ..shifts.scheduling import scheduled_start
from .model import DepartmentStats, EmployeeData, RecordsOverview, SummaryStats


def group_records_by_department_and_employee(
    records: Iterable[DailyAttendanceRecord],
    punches: Iterable[PunchEvent] = (),
) -> tuple[dict[str, list[EmployeeData]], set[str]]:
    """Employees per department, each with their records and raw punches by date."""

    entries_by_employee: dict[tuple[str, str], dict[str, list[PunchEvent]]] = {}
    for p in punches:
        by_date = entries_by_employee.setdefault((p.employee_id, p.first_name), {})
        by_date.setdefault(p.date, []).append(p)

    employees_by_department: dict[str, list[EmployeeData]] = {}
    index: dict[tuple[str, str], EmployeeData] = {}
    all_dates: set[str] = set()

    for r in records:
        all_dates.add(r.date)
        employees = employees_by_department.setdefault(r.department, [])

        employee = index.get((r.department, r.employee_id))
        if employee is None:
            employee = EmployeeData(
                employee_id=r.employee_id,
                first_name=r.first_name,
                department=r.department,
                time_entries=entries_by_employee.get((r.employee_id, r.first_name), {}),
            )
            index[(r.department, r.employee_id)] = employee
            employees.append(employee)

        employee.records[r.date] = r

    return employees_by_department, all_dates


def generate_summary_stats(
    departments: Sequence[str],
    employees_by_department: Mapping[str, Sequence[EmployeeData]],
    dates: Sequence[str],
    overrides: Optional[Mapping[str, str]] = None,
) -> SummaryStats:
    """Count on-time/late/early days overall and per department.

    Entries are counted even when the department has no schedule. Average
    delay only takes late entries into account.
    """

    summary = SummaryStats()
    total_delay_minutes = 0
    total_delay_entries = 0

    for dept in departments:
        employees = employees_by_department.get(dept) or []
        stats = DepartmentStats(employees=len(employees))
        dept_total_delay = 0

        summary.total_employees += len(employees)

        for employee in employees:
            for work_date in dates:
                record = employee.records.get(work_date)
                if record is None:
                    continue

                summary.total_entries += 1
                stats.entries += 1

                scheduled = scheduled_start(record.arrival_time, dept, employee.employee_id, overrides)
                delay = classify_delay(record.arrival_time, scheduled, dept)
                minutes = delay.minutes
                if minutes is None:
                    continue

                if delay.is_on_time:
                    summary.on_time_count += 1
                    stats.on_time += 1
                elif delay.is_delay:
                    summary.late_count += 1
                    stats.late += 1
                    total_delay_minutes += minutes
                    total_delay_entries += 1
                    dept_total_delay += minutes
                else:
                    summary.early_count += 1
                    stats.early += 1

        stats.avg_delay = dept_total_delay / stats.late if stats.late > 0 else 0.0
        summary.department_stats[dept] = stats

    summary.average_delay = total_delay_minutes / total_delay_entries if total_delay_entries > 0 else 0.0
    return summary


def records_overview(records: Sequence[DailyAttendanceRecord]) -> RecordsOverview:
    total_minutes = 0
    valid = 0
    for r in records:
        minutes = r.duration.total_minutes
        if minutes is None or minutes < 0:
            continue
        total_minutes += minutes
        valid += 1

    average = total_minutes / valid if valid else 0
    return RecordsOverview(
        total_employees=len({r.employee_id for r in records}),
        total_departments=len({r.department for r in records}),
        total_days=len({r.date for r in records}),
        average_duration=f"{int(average // 60)}h {int(average % 60)}m",
    )


def filter_records(
    records: Iterable[DailyAttendanceRecord],
    *,
    search: Optional[str] = None,
    department: Optional[str] = None,
    employee_id: Optional[str] = None,
    start: Optional[str] = None,
    end: Optional[str] = None,
) -> list[DailyAttendanceRecord]:
    needle = (search or "").lower()
    out: list[DailyAttendanceRecord] = []
    for r in records:
        if needle and not (
            needle in r.first_name.lower() or needle in r.employee_id.lower() or needle in r.department.lower()
        ):
            continue
        if department and r.department != department:
            continue
        if employee_id and r.employee_id != employee_id:
            continue
        if start and r.date < start:
            continue
        if end and r.date > end:
            continue
        out.append(r)
    return out
