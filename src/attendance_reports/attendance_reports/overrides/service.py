from __future__ import annotations

from typing import Optional

from ..common.validators import require_non_empty
from ..core.constants import OPERATIONS_DEPARTMENT
from ..core.exceptions import ReportNotFoundError, ShiftOverrideNotFoundError, ValidationError
from ..reports.model import AttendanceReport
from ..reports.repository import ReportStore
from ..shifts.scheduling import resolve_template
from .model import ShiftOverride
from .repository import ShiftOverrideRepository


class ShiftOverrideService:
    """Use case: assign roster shifts to Operations employees of a report."""

    def __init__(self, overrides: ShiftOverrideRepository, reports: ReportStore):
        self._overrides = overrides
        self._reports = reports

    def _require_report(self, report_id: str) -> AttendanceReport:
        report = self._reports.get(report_id)
        if not report:
            raise ReportNotFoundError(f"Report {report_id} not found")
        return report

    def assign(self, *, report_id: str, employee_id: str, shift: str, note: Optional[str] = None) -> ShiftOverride:
        report = self._require_report(report_id)
        employee_id = require_non_empty(employee_id, "Employee")

        employee = next((e for e in report.employees if e.employee_id == employee_id), None)
        if not employee:
            raise ValidationError(f"Employee {employee_id} is not part of this report")
        if employee.department != OPERATIONS_DEPARTMENT:
            raise ValidationError("Shifts can only be assigned to Operations employees")

        template = resolve_template(shift)
        if not template:
            raise ValidationError(f"Unknown shift: {shift!r}")

        note = note.strip() if note else None
        self._overrides.upsert(report_id=report_id, employee_id=employee_id, shift_time=template.start_time, note=note)
        return ShiftOverride(report_id=report_id, employee_id=employee_id, shift_time=template.start_time, note=note)

    def remove(self, *, report_id: str, employee_id: str) -> None:
        self._require_report(report_id)
        if not self._overrides.delete(report_id=report_id, employee_id=employee_id):
            raise ShiftOverrideNotFoundError(f"No shift assigned to employee {employee_id}")

    def list(self, *, report_id: str) -> list[ShiftOverride]:
        self._require_report(report_id)
        return list(self._overrides.list_for_report(report_id=report_id))

    def as_mapping(self, *, report_id: str) -> dict[str, str]:
        """employee_id -> shift start time, the shape the scheduler consumes."""
        return {o.employee_id: o.shift_time for o in self._overrides.list_for_report(report_id=report_id)}
