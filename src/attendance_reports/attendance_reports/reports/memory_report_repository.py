from __future__ import annotations

from threading import Lock
from typing import Optional, Sequence

from .model import AttendanceReport, ReportSummaryRow
from .repository import ReportStore


class InMemoryReportStore(ReportStore):
    """Process-local store. Contents are lost on restart."""

    def __init__(self):
        self._reports: dict[str, AttendanceReport] = {}
        self._lock = Lock()

    def save(self, report: AttendanceReport) -> None:
        with self._lock:
            self._reports[report.report_id] = report

    def get(self, report_id: str) -> Optional[AttendanceReport]:
        return self._reports.get(report_id)

    def list(self) -> Sequence[ReportSummaryRow]:
        with self._lock:
            reports = list(self._reports.values())
        reports.sort(key=lambda r: r.upload_date, reverse=True)
        return [
            ReportSummaryRow(
                report_id=r.report_id,
                file_name=r.file_name,
                upload_date=r.upload_date,
                date_range_start=r.date_range_start,
                date_range_end=r.date_range_end,
            )
            for r in reports
        ]

    def list_full(self) -> Sequence[AttendanceReport]:
        with self._lock:
            reports = list(self._reports.values())
        reports.sort(key=lambda r: r.upload_date, reverse=True)
        return reports

    def delete(self, report_id: str) -> bool:
        with self._lock:
            return self._reports.pop(report_id, None) is not None
