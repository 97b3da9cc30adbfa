from __future__ import annotations

from ..model import DelayClassification
from .base import DelayStrategy


class ExactStartStrategy(DelayStrategy):
    """On time only at the exact scheduled minute."""

    def classify(self, *, arrival_minutes: int, scheduled_minutes: int) -> DelayClassification:
        diff = arrival_minutes - scheduled_minutes
        if diff == 0:
            return DelayClassification.on_time()
        if diff < 0:
            return DelayClassification.early(diff)
        return DelayClassification.late(diff)
