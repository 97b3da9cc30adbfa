"""Daily reconciliation: one arrival/departure/duration record per employee-day.

Punches are first indexed by (employee, date) so that overnight corrections
can look at the neighbouring days of the same batch. Only then is each group
resolved. Resolution never raises; unusable values end up as sentinels.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import adjacent_day, clock_hour, clock_seconds
from ..core.constants import (
    ADJACENT_DAY_CALENDAR,
    EARLY_ARRIVAL_BEFORE_HOUR,
    EVENING_SHIFT_FROM_HOUR,
    NIGHT_SHIFT_DEPARTMENT,
    NIGHT_SHIFT_FROM_HOUR,
    NIGHT_SHIFT_TAIL_BEFORE_HOUR,
)
from ..punches.model import PunchEvent
from .duration import calculate_duration
from .model import DailyAttendanceRecord, Duration

logger = logging.getLogger(__name__)

GroupKey = tuple[str, str]


def group_punches(punches: Iterable[PunchEvent]) -> dict[GroupKey, list[PunchEvent]]:
    groups: dict[GroupKey, list[PunchEvent]] = {}
    for punch in punches:
        groups.setdefault((punch.employee_id, punch.date), []).append(punch)
    return groups


def _timestamp_key(punch: PunchEvent) -> tuple:
    seconds = clock_seconds(punch.time)
    if seconds is None:
        return (punch.date, 1, 0)
    return (punch.date, 0, seconds)


def sort_by_timestamp(punches: Iterable[PunchEvent]) -> list[PunchEvent]:
    return sorted(punches, key=_timestamp_key)


def _hour_below(punch: PunchEvent, limit: int) -> bool:
    hour = clock_hour(punch.time)
    return hour is not None and hour < limit


def _hour_at_least(punch: PunchEvent, limit: int) -> bool:
    hour = clock_hour(punch.time)
    return hour is not None and hour >= limit


def _skip_previous_night_tail(
    ordered: Sequence[PunchEvent],
    previous_day: Optional[Sequence[PunchEvent]],
) -> Optional[PunchEvent]:
    """Arrival after the tail of a night shift that started the day before.

    Returns None when no correction applies.
    """

    if not previous_day:
        return None
    if not any(_hour_at_least(p, NIGHT_SHIFT_FROM_HOUR) for p in previous_day):
        return None

    tail_index = None
    for i, punch in enumerate(ordered):
        if _hour_below(punch, NIGHT_SHIFT_TAIL_BEFORE_HOUR):
            tail_index = i

    if tail_index is None or tail_index + 1 >= len(ordered):
        return None
    return ordered[tail_index + 1]


def _next_morning_departure(next_day: Sequence[PunchEvent]) -> Optional[str]:
    for punch in sort_by_timestamp(next_day):
        if _hour_below(punch, NIGHT_SHIFT_TAIL_BEFORE_HOUR):
            return punch.time
    return None


def _single_punch_record(punch: PunchEvent) -> DailyAttendanceRecord:
    return DailyAttendanceRecord(
        employee_id=punch.employee_id,
        first_name=punch.first_name,
        department=punch.department,
        date=punch.date,
        arrival_time=punch.time,
        departure_time=None,
        duration=Duration.incomplete(),
        punch_count=1,
        others_punch=(punch.time,),
    )


def _resolve_group(
    key: GroupKey,
    day_punches: Sequence[PunchEvent],
    groups: dict[GroupKey, list[PunchEvent]],
    adjacent_day_mode: str,
) -> DailyAttendanceRecord:
    if len(day_punches) == 1:
        return _single_punch_record(day_punches[0])

    employee_id, work_date = key
    ordered = sort_by_timestamp(day_punches)
    first = ordered[0]
    departure: Optional[str] = ordered[-1].time
    night_shift = first.department == NIGHT_SHIFT_DEPARTMENT

    previous_date = adjacent_day(work_date, -1, mode=adjacent_day_mode)
    next_date = adjacent_day(work_date, 1, mode=adjacent_day_mode)

    if night_shift and previous_date and _hour_below(first, EARLY_ARRIVAL_BEFORE_HOUR):
        previous_day = groups.get((employee_id, previous_date))
        corrected = _skip_previous_night_tail(ordered, previous_day)
        if corrected is not None:
            logger.debug("Employee %s on %s: arrival moved %s -> %s after night shift", employee_id, work_date, first.time, corrected.time)
            first = corrected

    is_evening_shift = _hour_at_least(first, EVENING_SHIFT_FROM_HOUR)
    if is_evening_shift and night_shift and next_date:
        next_day = groups.get((employee_id, next_date))
        if next_day:
            departure = _next_morning_departure(next_day)
            logger.debug("Employee %s on %s: evening shift departure %s", employee_id, work_date, departure)

    return DailyAttendanceRecord(
        employee_id=first.employee_id,
        first_name=first.first_name,
        department=first.department,
        date=first.date,
        arrival_time=first.time,
        departure_time=departure,
        duration=calculate_duration(first.time, departure, is_evening_shift),
        punch_count=len(ordered),
        others_punch=tuple(p.time for p in ordered),
    )


def reconcile(
    punches: Iterable[PunchEvent],
    *,
    adjacent_day_mode: str = ADJACENT_DAY_CALENDAR,
) -> list[DailyAttendanceRecord]:
    """Derive one DailyAttendanceRecord per (employee, date) in ``punches``.

    Output is ordered by (department, employee_id, date).
    """

    groups = group_punches(punches)
    records = [
        _resolve_group(key, day_punches, groups, adjacent_day_mode)
        for key, day_punches in groups.items()
    ]
    records.sort(key=lambda r: (r.department or "", r.employee_id or "", r.date or ""))
    return records
