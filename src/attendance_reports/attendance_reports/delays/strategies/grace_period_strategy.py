from __future__ import annotations

from ..model import DelayClassification
from .base import DelayStrategy


class GracePeriodStrategy(DelayStrategy):
    """Arrivals up to ``grace_minutes`` before the start count as on time.

    Earlier arrivals are measured from the start of the grace period, not from
    the scheduled start.
    """

    def __init__(self, grace_minutes: int):
        self._grace_minutes = int(grace_minutes)

    def classify(self, *, arrival_minutes: int, scheduled_minutes: int) -> DelayClassification:
        grace_start = scheduled_minutes - self._grace_minutes
        if grace_start <= arrival_minutes <= scheduled_minutes:
            return DelayClassification.on_time()
        if arrival_minutes < grace_start:
            return DelayClassification.early(arrival_minutes - grace_start)
        return DelayClassification.late(arrival_minutes - scheduled_minutes)
