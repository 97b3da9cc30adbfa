"""Read-model for the per-department attendance view and its exports."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional

from ..core.constants import OPERATIONS_DEPARTMENT, UNSCHEDULED
from ..delays.classifier import classify_delay
from ..delays.model import DelayClassification
from ..shifts.scheduling import default_shift, detect_shift_pattern, scheduled_start
from ..summary.model import EmployeeData, SummaryStats
from ..summary.service import generate_summary_stats, group_records_by_department_and_employee
from .model import AttendanceReport


@dataclass(frozen=True)
class DepartmentDayRow:
    department: str
    employee_id: str
    first_name: str
    date: str
    scheduled_time: str
    arrival_time: str
    departure_time: str
    delay: DelayClassification
    duration: str
    punch_count: int
    time_entries: tuple[str, ...]

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "scheduled_time": self.scheduled_time[:5] if self.scheduled_time != UNSCHEDULED else UNSCHEDULED,
            "arrival_time": self.arrival_time,
            "departure_time": self.departure_time,
            "delay": self.delay.to_dict(),
            "duration": self.duration,
            "punch_count": self.punch_count,
            "time_entries": list(self.time_entries),
        }


@dataclass(frozen=True)
class DepartmentEmployeeView:
    employee_id: str
    first_name: str
    department: str
    shift_pattern: str
    suggested_shift: Optional[str]
    assigned_shift: Optional[str]
    rows: tuple[DepartmentDayRow, ...]

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "first_name": self.first_name,
            "shift_pattern": self.shift_pattern,
            "suggested_shift": self.suggested_shift,
            "assigned_shift": self.assigned_shift,
            "days": [r.to_dict() for r in self.rows],
        }


@dataclass(frozen=True)
class DepartmentView:
    departments: tuple[str, ...]
    dates: tuple[str, ...]
    employees_by_department: dict[str, tuple[DepartmentEmployeeView, ...]]
    summary: SummaryStats
    selected_department: Optional[str] = None
    all_departments: tuple[str, ...] = field(default_factory=tuple)

    def rows(self) -> list[DepartmentDayRow]:
        return [
            row
            for dept in self.departments
            for employee in self.employees_by_department.get(dept, ())
            for row in employee.rows
        ]

    def to_dict(self) -> dict:
        return {
            "departments": list(self.departments),
            "all_departments": list(self.all_departments),
            "dates": list(self.dates),
            "employees_by_department": {
                dept: [e.to_dict() for e in employees] for dept, employees in self.employees_by_department.items()
            },
            "summary": self.summary.to_dict(),
        }


def _employee_rows(
    employee: EmployeeData,
    dept: str,
    dates: list[str],
    overrides: Mapping[str, str],
) -> tuple[DepartmentDayRow, ...]:
    rows = []
    for work_date in dates:
        record = employee.records.get(work_date)
        if record is None:
            continue
        scheduled = scheduled_start(record.arrival_time, dept, employee.employee_id, overrides)
        rows.append(
            DepartmentDayRow(
                department=dept,
                employee_id=employee.employee_id,
                first_name=employee.first_name,
                date=work_date,
                scheduled_time=scheduled,
                arrival_time=record.arrival_time,
                departure_time=record.departure_display,
                delay=classify_delay(record.arrival_time, scheduled, dept),
                duration=str(record.duration),
                punch_count=record.punch_count,
                time_entries=tuple(p.time for p in employee.time_entries.get(work_date, [])),
            )
        )
    return tuple(rows)


def build_department_view(
    report: AttendanceReport,
    *,
    overrides: Optional[Mapping[str, str]] = None,
    department: Optional[str] = None,
    employee_id: Optional[str] = None,
    start: Optional[str] = None,
    end: Optional[str] = None,
) -> DepartmentView:
    overrides = overrides or {}
    grouped, all_dates = group_records_by_department_and_employee(report.records, report.punches)

    if employee_id and employee_id != "all":
        grouped = {dept: [e for e in employees if e.employee_id == employee_id] for dept, employees in grouped.items()}

    all_departments = sorted(grouped)
    departments = [department] if department and department != "all" else all_departments
    dates = [d for d in sorted(all_dates) if (not start or d >= start) and (not end or d <= end)]

    employees_by_department: dict[str, tuple[DepartmentEmployeeView, ...]] = {}
    for dept in departments:
        views = []
        for employee in grouped.get(dept, []):
            punch_times = employee.punch_times()
            views.append(
                DepartmentEmployeeView(
                    employee_id=employee.employee_id,
                    first_name=employee.first_name,
                    department=dept,
                    shift_pattern=detect_shift_pattern(punch_times),
                    suggested_shift=default_shift(punch_times) if dept == OPERATIONS_DEPARTMENT else None,
                    assigned_shift=overrides.get(employee.employee_id) if dept == OPERATIONS_DEPARTMENT else None,
                    rows=_employee_rows(employee, dept, dates, overrides),
                )
            )
        employees_by_department[dept] = tuple(views)

    summary = generate_summary_stats(departments, grouped, dates, overrides)
    return DepartmentView(
        departments=tuple(departments),
        dates=tuple(dates),
        employees_by_department=employees_by_department,
        summary=summary,
        selected_department=department if department and department != "all" else None,
        all_departments=tuple(all_departments),
    )
