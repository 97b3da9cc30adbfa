from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import ShiftOverride


class ShiftOverrideRepository(Protocol):
    def list_for_report(self, *, report_id: str) -> Sequence[ShiftOverride]:
        raise NotImplementedError

    def upsert(self, *, report_id: str, employee_id: str, shift_time: str, note: Optional[str] = None) -> None:
        """Create or replace the override for (report, employee)."""

        raise NotImplementedError

    def delete(self, *, report_id: str, employee_id: str) -> bool:
        raise NotImplementedError
