from __future__ import annotations

import logging
import uuid
from typing import BinaryIO, Callable, Optional, Sequence

from ..attendance.model import DailyAttendanceRecord
from ..attendance.reconciliation import reconcile
from ..common.datetime_utils import now_utc
from ..common.validators import optional_iso_date, require_non_empty, require_upload_extension
from ..core.constants import ADJACENT_DAY_CALENDAR, NOT_AVAILABLE
from ..core.exceptions import IngestionError, ReportNotFoundError
from ..punches.ingestion import date_range, read_punch_file, unique_departments, unique_employees
from ..punches.model import PunchEvent
from ..summary.model import RecordsOverview
from ..summary.service import filter_records, records_overview
from .department_view import DepartmentView, build_department_view
from .model import AttendanceReport, ReportSummaryRow
from .repository import ReportStore

logger = logging.getLogger(__name__)


class ReportService:
    """Use case: turn uploads into stored reports and serve views over them."""

    def __init__(
        self,
        reports: ReportStore,
        *,
        adjacent_day_mode: str = ADJACENT_DAY_CALENDAR,
        id_factory: Optional[Callable[[], str]] = None,
        clock=now_utc,
    ):
        self._reports = reports
        self._adjacent_day_mode = adjacent_day_mode
        self._id_factory = id_factory or (lambda: str(uuid.uuid4()))
        self._clock = clock

    def build_report(self, punches: Sequence[PunchEvent], *, file_name: str) -> AttendanceReport:
        if not punches:
            raise IngestionError("No valid records found in the file")

        records = reconcile(punches, adjacent_day_mode=self._adjacent_day_mode)
        dates = date_range(punches)
        start, end = dates if dates else (NOT_AVAILABLE, NOT_AVAILABLE)

        return AttendanceReport(
            report_id=self._id_factory(),
            file_name=file_name,
            upload_date=self._clock().isoformat(),
            date_range_start=start,
            date_range_end=end,
            employees=tuple(unique_employees(punches)),
            departments=tuple(unique_departments(punches)),
            punches=tuple(punches),
            records=tuple(records),
        )

    def create_from_upload(self, stream: BinaryIO, file_name: str) -> AttendanceReport:
        file_name = require_upload_extension(require_non_empty(file_name, "File name"))
        punches = read_punch_file(stream, file_name)
        report = self.build_report(punches, file_name=file_name)
        self._reports.save(report)
        logger.info(
            "Stored report %s from %s: %d punches, %d daily records",
            report.report_id,
            file_name,
            len(report.punches),
            len(report.records),
        )
        return report

    def get(self, report_id: str) -> AttendanceReport:
        report = self._reports.get(report_id)
        if not report:
            raise ReportNotFoundError(f"Report {report_id} not found")
        return report

    def list(self) -> Sequence[ReportSummaryRow]:
        return self._reports.list()

    def delete(self, report_id: str) -> None:
        if not self._reports.delete(report_id):
            raise ReportNotFoundError(f"Report {report_id} not found")
        logger.info("Deleted report %s", report_id)

    def records(
        self,
        report_id: str,
        *,
        search: Optional[str] = None,
        department: Optional[str] = None,
        employee_id: Optional[str] = None,
        start: Optional[str] = None,
        end: Optional[str] = None,
    ) -> list[DailyAttendanceRecord]:
        report = self.get(report_id)
        return filter_records(
            report.records,
            search=search,
            department=department,
            employee_id=employee_id,
            start=optional_iso_date(start, "start"),
            end=optional_iso_date(end, "end"),
        )

    def overview(self, report_id: str) -> RecordsOverview:
        return records_overview(self.get(report_id).records)

    def department_view(
        self,
        report_id: str,
        *,
        overrides: Optional[dict[str, str]] = None,
        department: Optional[str] = None,
        employee_id: Optional[str] = None,
        start: Optional[str] = None,
        end: Optional[str] = None,
    ) -> DepartmentView:
        return build_department_view(
            self.get(report_id),
            overrides=overrides,
            department=department,
            employee_id=employee_id,
            start=optional_iso_date(start, "start"),
            end=optional_iso_date(end, "end"),
        )

    def dashboard(self) -> dict:
        reports = self._reports.list_full()
        all_records = [r for report in reports for r in report.records]
        overview = records_overview(all_records)
        return {"report_count": len(reports), **overview.to_dict()}
