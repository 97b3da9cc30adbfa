from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional

from ..core.constants import MISSING_TIME
from ..core.enums import DurationState

_DURATION_RE = re.compile(r"^(-?\d+)h\s+(-?\d+)m$")

_SENTINELS = {
    DurationState.INCOMPLETE: "Incomplete",
    DurationState.MISSING_END: "erreur",
    DurationState.ERROR: "Error",
}


@dataclass(frozen=True)
class Duration:
    """Worked time for one employee-day, or the reason it is unavailable.

    Only ``COMPLETE`` durations carry minutes. ``str()`` gives the serialized
    text stored in reports and exports ("8h 30m", "Incomplete", "erreur",
    "Error").
    """

    state: DurationState
    hours: Optional[int] = None
    minutes: Optional[int] = None

    @classmethod
    def complete(cls, hours: int, minutes: int) -> "Duration":
        return cls(DurationState.COMPLETE, hours, minutes)

    @classmethod
    def incomplete(cls) -> "Duration":
        return cls(DurationState.INCOMPLETE)

    @classmethod
    def missing_end(cls) -> "Duration":
        return cls(DurationState.MISSING_END)

    @classmethod
    def error(cls) -> "Duration":
        return cls(DurationState.ERROR)

    @classmethod
    def parse(cls, text: str) -> "Duration":
        match = _DURATION_RE.match((text or "").strip())
        if match:
            return cls.complete(int(match.group(1)), int(match.group(2)))
        for state, sentinel in _SENTINELS.items():
            if text == sentinel:
                return cls(state)
        return cls.error()

    @property
    def is_complete(self) -> bool:
        return self.state == DurationState.COMPLETE

    @property
    def total_minutes(self) -> Optional[int]:
        if not self.is_complete:
            return None
        return self.hours * 60 + self.minutes

    def __str__(self) -> str:
        if self.is_complete:
            return f"{self.hours}h {self.minutes}m"
        return _SENTINELS[self.state]


@dataclass(frozen=True)
class DailyAttendanceRecord:
    """One reconciled employee-day."""

    employee_id: str
    first_name: str
    department: str
    date: str
    arrival_time: str
    departure_time: Optional[str]
    duration: Duration
    punch_count: int
    others_punch: tuple[str, ...] = field(default_factory=tuple)

    @property
    def departure_display(self) -> str:
        return self.departure_time if self.departure_time is not None else MISSING_TIME

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "first_name": self.first_name,
            "department": self.department,
            "date": self.date,
            "arrival_time": self.arrival_time,
            "departure_time": self.departure_display,
            "duration": str(self.duration),
            "punch_count": self.punch_count,
            "others_punch": list(self.others_punch),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DailyAttendanceRecord":
        departure = data.get("departure_time")
        return cls(
            employee_id=str(data.get("employee_id") or ""),
            first_name=str(data.get("first_name") or ""),
            department=str(data.get("department") or ""),
            date=str(data.get("date") or ""),
            arrival_time=str(data.get("arrival_time") or ""),
            departure_time=None if departure in (None, MISSING_TIME) else str(departure),
            duration=Duration.parse(str(data.get("duration") or "")),
            punch_count=int(data.get("punch_count") or 0),
            others_punch=tuple(data.get("others_punch") or ()),
        )
