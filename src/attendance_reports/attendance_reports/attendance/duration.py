from __future__ import annotations

import math
from typing import Optional

from ..common.datetime_utils import clock_minutes
from ..core.constants import MISSING_TIME
from .model import Duration

MINUTES_PER_DAY = 24 * 60


def calculate_duration(start_time: str, end_time: Optional[str], is_evening_shift: bool) -> Duration:
    """Worked duration between two clock times on a reference day.

    For an evening shift an end earlier than the start is taken to fall on the
    next day. Hours and minutes are floored the same way for negative spans
    (-90 minutes gives -2h -30m).
    """

    if end_time is None or end_time == MISSING_TIME:
        return Duration.missing_end()

    start = clock_minutes(start_time)
    end = clock_minutes(end_time)
    if start is None or end is None:
        return Duration.error()

    if is_evening_shift and end < start:
        end += MINUTES_PER_DAY

    diff = end - start
    hours = math.floor(diff / 60)
    minutes = int(math.fmod(diff, 60))
    return Duration.complete(hours, minutes)
