from __future__ import annotations

from ..model import DelayClassification
from .base import DelayStrategy


class UnscheduledStrategy(DelayStrategy):
    """No schedule applies."""

    def classify(self, *, arrival_minutes: int, scheduled_minutes: int) -> DelayClassification:
        return DelayClassification.unclassified()
