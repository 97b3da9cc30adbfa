from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ShiftOverride:
    """A roster shift assigned by hand to one employee of one report."""

    report_id: str
    employee_id: str
    shift_time: str
    note: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "report_id": self.report_id,
            "employee_id": self.employee_id,
            "shift_time": self.shift_time,
            "note": self.note or "",
        }
