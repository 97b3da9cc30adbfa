from __future__ import annotations

from dataclasses import dataclass, field

from ..attendance.model import DailyAttendanceRecord
from ..punches.model import Employee, PunchEvent


@dataclass(frozen=True)
class AttendanceReport:
    """Domain entity: one uploaded punch file and everything derived from it.

    Reports are immutable; uploading the same file again creates a new report.
    """

    report_id: str
    file_name: str
    upload_date: str
    date_range_start: str
    date_range_end: str
    employees: tuple[Employee, ...] = field(default_factory=tuple)
    departments: tuple[str, ...] = field(default_factory=tuple)
    punches: tuple[PunchEvent, ...] = field(default_factory=tuple)
    records: tuple[DailyAttendanceRecord, ...] = field(default_factory=tuple)

    def header_dict(self) -> dict:
        return {
            "report_id": self.report_id,
            "file_name": self.file_name,
            "upload_date": self.upload_date,
            "date_range": {"start": self.date_range_start, "end": self.date_range_end},
            "departments": list(self.departments),
            "employee_count": len(self.employees),
            "record_count": len(self.records),
        }


@dataclass(frozen=True)
class ReportSummaryRow:
    """Read-model for report listings (no punches or records loaded)."""

    report_id: str
    file_name: str
    upload_date: str
    date_range_start: str
    date_range_end: str

    def to_dict(self) -> dict:
        return {
            "report_id": self.report_id,
            "file_name": self.file_name,
            "upload_date": self.upload_date,
            "date_range": {"start": self.date_range_start, "end": self.date_range_end},
        }
