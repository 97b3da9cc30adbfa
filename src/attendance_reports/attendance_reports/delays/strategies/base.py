from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import DelayClassification


class DelayStrategy(ABC):
    """Strategy Pattern: encapsulate how an arrival is compared to its schedule."""

    @abstractmethod
    def classify(self, *, arrival_minutes: int, scheduled_minutes: int) -> DelayClassification:
        raise NotImplementedError
