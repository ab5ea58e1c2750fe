"""Pure domain layer: clock, value coercion and fact records."""

from portavia_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from portavia_kernel.domain.facts import (
    CostBreakdownFacts,
    CostBreakdownRow,
    OverviewRow,
    ProjectFacts,
    TaskEffortRow,
)

__all__ = [
    "Clock",
    "CostBreakdownFacts",
    "CostBreakdownRow",
    "DeterministicClock",
    "OverviewRow",
    "ProjectFacts",
    "SystemClock",
    "TaskEffortRow",
]
