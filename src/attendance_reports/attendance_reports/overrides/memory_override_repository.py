from __future__ import annotations

from typing import Optional, Sequence

from .model import ShiftOverride
from .repository import ShiftOverrideRepository


class InMemoryShiftOverrideRepository(ShiftOverrideRepository):
    def __init__(self):
        self._by_key: dict[tuple[str, str], ShiftOverride] = {}

    def list_for_report(self, *, report_id: str) -> Sequence[ShiftOverride]:
        items = [o for (rid, _), o in self._by_key.items() if rid == report_id]
        items.sort(key=lambda o: o.employee_id)
        return items

    def upsert(self, *, report_id: str, employee_id: str, shift_time: str, note: Optional[str] = None) -> None:
        self._by_key[(report_id, employee_id)] = ShiftOverride(
            report_id=report_id, employee_id=employee_id, shift_time=shift_time, note=note
        )

    def delete(self, *, report_id: str, employee_id: str) -> bool:
        return self._by_key.pop((report_id, employee_id), None) is not None
