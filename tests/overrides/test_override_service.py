from __future__ import annotations

import pytest

from src.attendance_reports.attendance_reports.attendance.reconciliation import reconcile
from src.attendance_reports.attendance_reports.core.exceptions import (
    ReportNotFoundError,
    ShiftOverrideNotFoundError,
    ValidationError,
)
from src.attendance_reports.attendance_reports.overrides.memory_override_repository import (
    InMemoryShiftOverrideRepository,
)
from src.attendance_reports.attendance_reports.overrides.service import ShiftOverrideService
from src.attendance_reports.attendance_reports.punches.ingestion import unique_employees
from src.attendance_reports.attendance_reports.reports.memory_report_repository import InMemoryReportStore
from src.attendance_reports.attendance_reports.reports.model import AttendanceReport


@pytest.fixture
def service(punch):
    punches = [
        punch("O1", "Operations", "2024-03-01", "06:40:00"),
        punch("I1", "ID", "2024-03-01", "08:00:00"),
    ]
    reports = InMemoryReportStore()
    reports.save(
        AttendanceReport(
            report_id="r-1",
            file_name="march.csv",
            upload_date="2024-03-04T09:30:00+00:00",
            date_range_start="2024-03-01",
            date_range_end="2024-03-01",
            employees=tuple(unique_employees(punches)),
            departments=("Operations", "ID"),
            punches=tuple(punches),
            records=tuple(reconcile(punches)),
        )
    )
    return ShiftOverrideService(InMemoryShiftOverrideRepository(), reports)


def test_assign_by_label_stores_template_start(service):
    override = service.assign(report_id="r-1", employee_id="O1", shift="evening", note="  swapped  ")

    assert override.shift_time == "19:30:00"
    assert override.note == "swapped"
    assert service.as_mapping(report_id="r-1") == {"O1": "19:30:00"}


def test_assign_again_replaces_previous(service):
    service.assign(report_id="r-1", employee_id="O1", shift="Morning")
    service.assign(report_id="r-1", employee_id="O1", shift="13:00")

    assert [o.shift_time for o in service.list(report_id="r-1")] == ["13:00:00"]


def test_assign_rejects_non_operations_employee(service):
    with pytest.raises(ValidationError, match="Operations"):
        service.assign(report_id="r-1", employee_id="I1", shift="Morning")


def test_assign_rejects_unknown_employee_and_shift(service):
    with pytest.raises(ValidationError):
        service.assign(report_id="r-1", employee_id="X", shift="Morning")
    with pytest.raises(ValidationError):
        service.assign(report_id="r-1", employee_id="O1", shift="07:15")
    with pytest.raises(ValidationError):
        service.assign(report_id="r-1", employee_id=" ", shift="Morning")


def test_unknown_report(service):
    with pytest.raises(ReportNotFoundError):
        service.assign(report_id="nope", employee_id="O1", shift="Morning")
    with pytest.raises(ReportNotFoundError):
        service.list(report_id="nope")


def test_remove(service):
    service.assign(report_id="r-1", employee_id="O1", shift="Morning")

    service.remove(report_id="r-1", employee_id="O1")

    assert service.as_mapping(report_id="r-1") == {}
    with pytest.raises(ShiftOverrideNotFoundError, match="O1"):
        service.remove(report_id="r-1", employee_id="O1")
