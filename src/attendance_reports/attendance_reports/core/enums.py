from __future__ import annotations

from enum import Enum


class DurationState(str, Enum):
    """How a day's worked duration was resolved."""

    COMPLETE = "COMPLETE"
    INCOMPLETE = "INCOMPLETE"
    MISSING_END = "MISSING_END"
    ERROR = "ERROR"


class AttendanceStatus(str, Enum):
    """Arrival classification against the scheduled start."""

    ON_TIME = "ON_TIME"
    LATE = "LATE"
    EARLY = "EARLY"
    UNCLASSIFIED = "UNCLASSIFIED"


class ReportStoreKind(str, Enum):
    MYSQL = "mysql"
    MEMORY = "memory"
