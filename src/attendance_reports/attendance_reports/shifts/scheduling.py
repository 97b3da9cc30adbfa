from __future__ import annotations

from typing import Iterable, Mapping, Optional, Sequence

from ..common.datetime_utils import clock_hour, clock_minutes, parse_clock
from ..core.constants import (
    ID_DEPARTMENT,
    ID_SCHEDULED_START_TIME,
    OPERATIONS_DEPARTMENT,
    SHIFT_INFERENCE_RADIUS_MINUTES,
    UNSCHEDULED,
)
from .model import OPERATIONS_TEMPLATES, OPERATIONS_WINDOWS, ScheduleWindow, ShiftTemplate


def resolve_template(value: Optional[str]) -> Optional[ShiftTemplate]:
    """Find a roster template by label ("evening") or start time ("19:30")."""
    if not value:
        return None
    wanted = value.strip()
    parsed = parse_clock(wanted)
    for template in OPERATIONS_TEMPLATES:
        if template.label.lower() == wanted.lower():
            return template
        if parsed is not None and parse_clock(template.start_time) == parsed:
            return template
    return None


def infer_window(arrival_time: str, windows: Sequence[ScheduleWindow] = OPERATIONS_WINDOWS) -> Optional[ScheduleWindow]:
    """Window whose start is within three hours of the arrival, else the nearest one."""

    arrival = clock_minutes(arrival_time)
    if arrival is None:
        return None

    for window in windows:
        start = clock_minutes(window.start_time)
        if start - SHIFT_INFERENCE_RADIUS_MINUTES <= arrival <= start + SHIFT_INFERENCE_RADIUS_MINUTES:
            return window

    closest = windows[0]
    best = None
    for window in windows:
        difference = abs(arrival - clock_minutes(window.start_time))
        if best is None or difference < best:
            best = difference
            closest = window
    return closest


def scheduled_start(
    arrival_time: str,
    department: str,
    employee_id: Optional[str] = None,
    overrides: Optional[Mapping[str, str]] = None,
) -> str:
    """Scheduled start ("HH:MM:SS") for an arrival, or "-" when unscheduled."""

    if department != OPERATIONS_DEPARTMENT:
        return ID_SCHEDULED_START_TIME if department == ID_DEPARTMENT else UNSCHEDULED

    if overrides and employee_id is not None:
        template = resolve_template(overrides.get(employee_id))
        if template:
            return template.start_time

    window = infer_window(arrival_time)
    return window.start_time if window else UNSCHEDULED


def _bucket_counts(punch_times: Iterable[str]) -> tuple[int, int, int]:
    morning = afternoon = evening = 0
    for value in punch_times:
        hour = clock_hour(value)
        if hour is None:
            continue
        if 4 <= hour < 10:
            morning += 1
        elif 10 <= hour < 16:
            afternoon += 1
        else:
            evening += 1
    return morning, afternoon, evening


def default_shift(punch_times: Iterable[str]) -> str:
    """Suggested roster start time from where an employee's punches cluster."""

    morning, afternoon, evening = _bucket_counts(punch_times)
    morning_t, afternoon_t, evening_t = OPERATIONS_TEMPLATES
    if morning > afternoon and morning > evening:
        return morning_t.start_time
    if afternoon > morning and afternoon > evening:
        return afternoon_t.start_time
    return evening_t.start_time


def detect_shift_pattern(punch_times: Iterable[str]) -> str:
    counts = _bucket_counts(punch_times)
    if not any(counts):
        return "Unknown"

    morning, afternoon, evening = counts
    morning_t, afternoon_t, evening_t = OPERATIONS_TEMPLATES
    if morning > afternoon and morning > evening:
        return morning_t.display
    if afternoon > morning and afternoon > evening:
        return afternoon_t.display
    if evening > morning and evening > afternoon:
        return evening_t.display
    return "Mixed"
