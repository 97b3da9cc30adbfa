from __future__ import annotations

from dataclasses import asdict, dataclass, field

from ..attendance.model import DailyAttendanceRecord
from ..punches.model import PunchEvent


@dataclass
class EmployeeData:
    """Read-model for the department view: one employee's days."""

    employee_id: str
    first_name: str
    department: str
    records: dict[str, DailyAttendanceRecord] = field(default_factory=dict)
    time_entries: dict[str, list[PunchEvent]] = field(default_factory=dict)

    def punch_times(self) -> list[str]:
        return [p.time for entries in self.time_entries.values() for p in entries]


@dataclass
class DepartmentStats:
    employees: int = 0
    entries: int = 0
    on_time: int = 0
    late: int = 0
    early: int = 0
    avg_delay: float = 0.0


@dataclass
class SummaryStats:
    total_employees: int = 0
    total_entries: int = 0
    on_time_count: int = 0
    late_count: int = 0
    early_count: int = 0
    average_delay: float = 0.0
    department_stats: dict[str, DepartmentStats] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class RecordsOverview:
    total_employees: int
    total_departments: int
    total_days: int
    average_duration: str

    def to_dict(self) -> dict:
        return asdict(self)
