"""
portavia_engines.budget -- Spend, remaining budget, utilisation and cost breakdown.

Responsibility:
    Derive the budget figures shown in the health summary tiles and the
    financial overview: spent, remaining, percent spent, utilisation,
    the over-budget / low-buffer / remaining-low flags, and the per-category
    breakdown of actual cost.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import portavia_kernel.domain and sibling engine modules.

Invariants enforced:
    - Decimal-only arithmetic; missing amounts read as 0.
    - remaining = max(0, budget - actual), so
      remaining + min(actual, budget) == budget whenever budget > 0.
    - is_over_budget <=> actual > budget (strict).
    - is_low_buffer <=> low_buffer_percent < percent_spent <= 100.
    - is_remaining_low <=> budget > 0 and remaining < remaining_low_fraction * budget.
    - Breakdown lists only categories with a positive amount, in the fixed
      order Labor, Materials, Infrastructure, Other; empty when all are 0.
    - Percentages carry one decimal, halves away from zero; a zero
      denominator yields 0.

Failure modes:
    None -- degenerate inputs (missing, zero budget) produce zeros.

Usage:
    from decimal import Decimal
    from portavia_engines.budget import BudgetCalculator

    summary = BudgetCalculator().summarize(
        budget=Decimal("100000"), actual_cost=Decimal("120000"),
    )
    summary.is_over_budget     # True
    summary.percent_spent      # 120
    summary.remaining          # Decimal("0")
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from portavia_kernel.domain.values import (
    HUNDRED,
    ZERO,
    percent_of,
    round_half_away,
    round_to_int,
    to_amount,
)
from portavia_kernel.logging_config import get_logger
from portavia_engines.tracer import traced_engine
from portavia_engines.vocabulary import Tone

logger = get_logger("engines.budget")


@dataclass(frozen=True)
class BudgetThresholds:
    """
    Thresholds for the budget flags.

    low_buffer_percent: percent spent above which (up to 100) the buffer is low.
    remaining_low_fraction: share of budget below which remaining is low.
    """

    low_buffer_percent: int = 85
    remaining_low_fraction: Decimal = Decimal("0.15")


DEFAULT_BUDGET_THRESHOLDS = BudgetThresholds()


class BudgetState(str, Enum):
    """The single budget condition a panel renders (most severe wins)."""

    OVER_BUDGET = "over_budget"
    LOW_BUFFER = "low_buffer"
    HEALTHY = "healthy"


class CostCategory(str, Enum):
    """Actual-cost categories, in display order."""

    LABOR = "labor"
    MATERIALS = "materials"
    INFRASTRUCTURE = "infrastructure"
    OTHER = "other"

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class BudgetSummary:
    """
    Budget figures for one project.

    percent_spent is the integer badge value; utilization_percent is the
    one-decimal figure of the financial overview.  Both are 0 without a
    positive budget.
    """

    budget: Decimal
    spent: Decimal
    remaining: Decimal
    percent_spent: int
    utilization_percent: Decimal
    is_over_budget: bool
    is_low_buffer: bool
    is_remaining_low: bool
    utilization_tone: Tone

    @property
    def state(self) -> BudgetState:
        if self.is_over_budget:
            return BudgetState.OVER_BUDGET
        if self.is_low_buffer:
            return BudgetState.LOW_BUFFER
        return BudgetState.HEALTHY

    @property
    def remaining_tone(self) -> Tone:
        return Tone.WARNING if self.is_remaining_low else Tone.HEALTHY


@dataclass(frozen=True)
class CostBreakdownEntry:
    """One non-zero slice of actual cost."""

    category: CostCategory
    amount: Decimal
    percent_of_total: Decimal
    percent_of_budget: Decimal

    @property
    def label(self) -> str:
        return self.category.label


class BudgetCalculator:
    """
    Pure calculator for budget figures.

    Contract:
        No I/O, fully deterministic.  Thresholds are injected.
    Non-goals:
        - No earned-value metrics (CPI, EAC, ...).
        - Does not reconcile actual_cost against the category sum; the
          hosted backend keeps them aligned.
    """

    def __init__(self, thresholds: BudgetThresholds = DEFAULT_BUDGET_THRESHOLDS):
        self.thresholds = thresholds

    @traced_engine("budget", "1.0", fingerprint_fields=("budget", "actual_cost"))
    def summarize(
        self,
        budget: Decimal | None = None,
        actual_cost: Decimal | None = None,
    ) -> BudgetSummary:
        """
        Spent, remaining, percent spent, utilisation and the three flags.

        Missing or negative amounts read as 0.
        """
        b = to_amount(budget) or ZERO
        a = to_amount(actual_cost) or ZERO

        remaining = max(ZERO, b - a)
        utilization = percent_of(a, b)
        percent_spent = round_to_int(utilization)

        is_over_budget = a > b
        is_low_buffer = self.thresholds.low_buffer_percent < percent_spent <= 100
        is_remaining_low = b > ZERO and remaining < self.thresholds.remaining_low_fraction * b

        if utilization > HUNDRED:
            utilization_tone = Tone.CRITICAL
        elif utilization > self.thresholds.low_buffer_percent:
            utilization_tone = Tone.WARNING
        else:
            utilization_tone = Tone.NEUTRAL

        summary = BudgetSummary(
            budget=b,
            spent=a,
            remaining=remaining,
            percent_spent=percent_spent,
            utilization_percent=round_half_away(utilization, 1),
            is_over_budget=is_over_budget,
            is_low_buffer=is_low_buffer,
            is_remaining_low=is_remaining_low,
            utilization_tone=utilization_tone,
        )

        logger.debug("budget_summary_calculated", extra={
            "budget": b,
            "spent": a,
            "percent_spent": percent_spent,
            "state": summary.state.value,
            "is_remaining_low": is_remaining_low,
        })
        return summary

    @traced_engine(
        "budget", "1.0",
        fingerprint_fields=("budget", "actual_cost", "categories"),
    )
    def breakdown(
        self,
        budget: Decimal | None = None,
        actual_cost: Decimal | None = None,
        categories: dict[CostCategory, Decimal | None] | None = None,
    ) -> tuple[CostBreakdownEntry, ...]:
        """
        Non-zero category slices with their share of actual cost and budget.

        ``categories`` may omit categories; omitted ones read as 0.
        """
        b = to_amount(budget) or ZERO
        a = to_amount(actual_cost) or ZERO
        amounts = categories or {}

        entries: list[CostBreakdownEntry] = []
        for category in CostCategory:
            amount = to_amount(amounts.get(category)) or ZERO
            if amount <= ZERO:
                continue
            entries.append(
                CostBreakdownEntry(
                    category=category,
                    amount=amount,
                    percent_of_total=round_half_away(percent_of(amount, a), 1),
                    percent_of_budget=round_half_away(percent_of(amount, b), 1),
                )
            )

        logger.debug("cost_breakdown_calculated", extra={
            "category_count": len(entries),
            "actual_cost": a,
        })
        return tuple(entries)
