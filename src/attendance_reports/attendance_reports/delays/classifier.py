from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from ..attendance.reconciliation import sort_by_timestamp
from ..common.datetime_utils import clock_minutes
from ..core.constants import UNSCHEDULED
from ..punches.model import PunchEvent
from ..shifts.scheduling import scheduled_start
from .factory import DelayStrategyFactory
from .model import DelayClassification

_default_factory = DelayStrategyFactory()


def classify_delay(
    arrival_time: str,
    scheduled_time: str,
    department: str,
    *,
    factory: Optional[DelayStrategyFactory] = None,
) -> DelayClassification:
    """Classify an arrival as early, on time or late. Never raises."""

    if scheduled_time == UNSCHEDULED:
        return DelayClassification.unclassified()

    arrival = clock_minutes(arrival_time)
    scheduled = clock_minutes(scheduled_time)
    if arrival is None or scheduled is None:
        return DelayClassification.unclassified()

    strategy = (factory or _default_factory).for_department(department=department, scheduled_time=scheduled_time)
    return strategy.classify(arrival_minutes=arrival, scheduled_minutes=scheduled)


@dataclass(frozen=True)
class ScheduledEntry:
    punch: PunchEvent
    scheduled_time: str


def format_time_entries(
    entries: Optional[Sequence[PunchEvent]],
    department: str,
    employee_id: str,
    overrides: Optional[Mapping[str, str]] = None,
) -> list[ScheduledEntry]:
    """Punches in time order, each with the scheduled start it would map to."""

    if not entries:
        return []
    return [
        ScheduledEntry(punch=p, scheduled_time=scheduled_start(p.time, department, employee_id, overrides))
        for p in sort_by_timestamp(entries)
    ]
