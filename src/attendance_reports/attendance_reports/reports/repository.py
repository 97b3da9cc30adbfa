from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AttendanceReport, ReportSummaryRow


class ReportStore(Protocol):
    """Repository interface for uploaded reports.

    Note (DIP): services depend on this interface, never on a concrete store.
    """

    def save(self, report: AttendanceReport) -> None:
        raise NotImplementedError

    def get(self, report_id: str) -> Optional[AttendanceReport]:
        raise NotImplementedError

    def list(self) -> Sequence[ReportSummaryRow]:
        """Newest first."""

        raise NotImplementedError

    def list_full(self) -> Sequence[AttendanceReport]:
        raise NotImplementedError

    def delete(self, report_id: str) -> bool:
        raise NotImplementedError
