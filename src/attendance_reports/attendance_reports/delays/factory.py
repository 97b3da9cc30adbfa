from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import OPERATIONS_DEPARTMENT, OPERATIONS_GRACE_PERIOD_MINUTES, UNSCHEDULED
from .strategies.base import DelayStrategy
from .strategies.exact_start_strategy import ExactStartStrategy
from .strategies.grace_period_strategy import GracePeriodStrategy
from .strategies.unscheduled_strategy import UnscheduledStrategy


@dataclass
class DelayStrategyFactory:
    """Factory Pattern: choose the delay rule for a department."""

    grace_minutes: int = OPERATIONS_GRACE_PERIOD_MINUTES

    def for_department(self, *, department: str, scheduled_time: str) -> DelayStrategy:
        if scheduled_time == UNSCHEDULED:
            return UnscheduledStrategy()
        if department == OPERATIONS_DEPARTMENT:
            return GracePeriodStrategy(self.grace_minutes)
        return ExactStartStrategy()
