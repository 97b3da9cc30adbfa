from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from ..core.constants import UNSCHEDULED
from ..core.enums import AttendanceStatus

_VALUE_RE = re.compile(r"^(-?\d+)min$")


@dataclass(frozen=True)
class DelayClassification:
    """Arrival against its scheduled start.

    ``value`` is the signed difference as "<n>min", or "-" when the day
    cannot be classified. Early arrivals have a value but neither flag set.
    """

    value: str
    is_delay: bool
    is_on_time: bool

    @classmethod
    def unclassified(cls) -> "DelayClassification":
        return cls(value=UNSCHEDULED, is_delay=False, is_on_time=False)

    @classmethod
    def on_time(cls) -> "DelayClassification":
        return cls(value="0min", is_delay=False, is_on_time=True)

    @classmethod
    def early(cls, minutes: int) -> "DelayClassification":
        return cls(value=f"{minutes}min", is_delay=False, is_on_time=False)

    @classmethod
    def late(cls, minutes: int) -> "DelayClassification":
        return cls(value=f"{minutes}min", is_delay=True, is_on_time=False)

    @property
    def minutes(self) -> Optional[int]:
        match = _VALUE_RE.match(self.value)
        return int(match.group(1)) if match else None

    @property
    def status(self) -> AttendanceStatus:
        if self.minutes is None:
            return AttendanceStatus.UNCLASSIFIED
        if self.is_on_time:
            return AttendanceStatus.ON_TIME
        if self.is_delay:
            return AttendanceStatus.LATE
        return AttendanceStatus.EARLY

    def to_dict(self) -> dict:
        return {
            "value": self.value,
            "is_delay": self.is_delay,
            "is_on_time": self.is_on_time,
            "status": self.status.value,
        }
