from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScheduleWindow:
    """Domain entity: a shift used to infer the scheduled start from an arrival.

    ``window_start``/``window_end`` are minutes since midnight and may run
    past 24h for shifts that cross midnight.
    """

    label: str
    start_time: str
    window_start: int
    window_end: int


@dataclass(frozen=True)
class ShiftTemplate:
    """A roster shift that can be assigned to an employee by hand."""

    label: str
    start_time: str
    display: str


OPERATIONS_WINDOWS: tuple[ScheduleWindow, ...] = (
    ScheduleWindow(label="Morning", start_time="06:30:00", window_start=6 * 60, window_end=14 * 60),
    ScheduleWindow(label="Afternoon", start_time="13:30:00", window_start=13 * 60, window_end=int(19.5 * 60)),
    ScheduleWindow(label="Evening", start_time="20:00:00", window_start=int(19.5 * 60), window_end=int(30.5 * 60)),
)

OPERATIONS_TEMPLATES: tuple[ShiftTemplate, ...] = (
    ShiftTemplate(label="Morning", start_time="06:00:00", display="Morning (6:00)"),
    ShiftTemplate(label="Afternoon", start_time="13:00:00", display="Afternoon (13:00)"),
    ShiftTemplate(label="Evening", start_time="19:30:00", display="Evening (19:30)"),
)
