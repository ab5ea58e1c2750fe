"""
portavia_engines.completion -- Milestone-ratio completion.

Completion is the share of milestones marked completed, as a whole
percentage.  It is deliberately not an earned-value measure: there is no
weighting by cost or effort.

Invariants enforced:
    - Result is always an int in [0, 100].
    - No milestones means 0% (and ``has_milestones`` is False, which the
      panel shows as a "No milestones" hint rather than a real 0%).
    - completed > total clamps to 100.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum

from portavia_kernel.domain.values import HUNDRED, round_to_int, to_count
from portavia_kernel.logging_config import get_logger
from portavia_engines.tracer import traced_engine

logger = get_logger("engines.completion")

NO_MILESTONES_HINT = "No milestones"


class CompletionTier(str, Enum):
    """Colour band of the completion figure."""

    COMPLETE = "complete"  # >= 100
    ADVANCED = "advanced"  # >= 75
    HALFWAY = "halfway"  # >= 50
    UNDERWAY = "underway"  # >= 25
    STARTING = "starting"


_TIER_FLOORS: tuple[tuple[int, CompletionTier], ...] = (
    (100, CompletionTier.COMPLETE),
    (75, CompletionTier.ADVANCED),
    (50, CompletionTier.HALFWAY),
    (25, CompletionTier.UNDERWAY),
)


class CompletionCalculator:
    """Pure calculator for milestone completion."""

    @traced_engine(
        "completion", "1.0",
        fingerprint_fields=("total_milestones", "completed_milestones"),
    )
    def completion_percent(
        self,
        total_milestones: int = 0,
        completed_milestones: int = 0,
    ) -> int:
        """round(100 * completed / total), halves away from zero, clamped to [0, 100]."""
        total = to_count(total_milestones)
        completed = to_count(completed_milestones)
        if total == 0:
            return 0

        percent = round_to_int(Decimal(completed) * HUNDRED / Decimal(total))
        if percent > 100:
            logger.debug("completion_clamped", extra={
                "total_milestones": total,
                "completed_milestones": completed,
            })
            return 100
        return max(percent, 0)

    def has_milestones(self, total_milestones: int = 0) -> bool:
        return to_count(total_milestones) > 0

    def completion_tier(self, percent: int) -> CompletionTier:
        for floor, tier in _TIER_FLOORS:
            if percent >= floor:
                return tier
        return CompletionTier.STARTING
