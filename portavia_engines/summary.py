"""
portavia_engines.summary -- Summary assembler, the single entry point of the core.

Responsibility:
    Compose the formatters, temporal, completion, budget and health engines
    over one ProjectFacts snapshot and produce the two display-ready views:
    ProjectSummaryView (Project Information + Project Health Summary panels)
    and FinancialOverviewView (Financial Overview panel).

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Consumed by portavia_services.dashboard_service and by the CLI.

Invariants enforced:
    - Totality: ``assemble_summary`` returns a well-formed DashboardSummary
      for every ProjectFacts value; degenerate input degrades to zeros and
      "—" strings instead of raising.
    - Determinism: output depends only on (facts, today, settings).
    - Counters are clamped to [0, MAX_COUNT]; money is clamped to [0, MAX_AMOUNT]
      and kept to nine decimals (the precision of the backing columns).
    - The summary panel reads budget/actual from the overview view; the
      financial overview prefers the ``projects`` row when it was fetched.

Usage:
    from datetime import date
    from portavia_engines.summary import assemble_summary

    dashboard = assemble_summary(facts, date(2025, 1, 20))
    dashboard.summary.health.label       # "On Track"
    dashboard.financial.utilization_percent
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from typing import Any

from portavia_kernel.domain.facts import CostBreakdownFacts, ProjectFacts
from portavia_kernel.domain.values import (
    ZERO,
    round_half_away,
    round_to_int,
    to_amount,
    to_count,
    to_date,
    to_decimal,
    to_text,
)
from portavia_kernel.logging_config import get_logger
from portavia_engines.budget import (
    DEFAULT_BUDGET_THRESHOLDS,
    BudgetCalculator,
    BudgetState,
    BudgetThresholds,
    CostBreakdownEntry,
    CostCategory,
)
from portavia_engines.completion import (
    NO_MILESTONES_HINT,
    CompletionCalculator,
    CompletionTier,
)
from portavia_engines.formatters import (
    DEFAULT_HOURS_PER_MAN_DAY,
    format_currency_compact,
    format_currency_full,
    format_date,
    format_duration,
    format_effort,
    format_percent,
)
from portavia_engines.health import (
    DEFAULT_HEALTH_THRESHOLDS,
    HealthClassification,
    HealthClassifier,
    HealthSignals,
    HealthThresholds,
    Tile,
)
from portavia_engines.temporal import TemporalCalculator, describe_days_remaining
from portavia_engines.tracer import traced_engine
from portavia_engines.vocabulary import (
    Badge,
    Tone,
    phase_badge,
    priority_badge,
    size_badge,
)

logger = get_logger("engines.summary")

# Largest value a Numeric(38, 9) column can hold.
MAX_AMOUNT = Decimal("99999999999999999999999999999.999999999")
# Largest value of the BigInteger counter columns.
MAX_COUNT = 2**63 - 1
_AMOUNT_PLACES = 9


@dataclass(frozen=True)
class EngineSettings:
    """Every tunable the assembler passes down to the engines."""

    health: HealthThresholds = DEFAULT_HEALTH_THRESHOLDS
    budget: BudgetThresholds = DEFAULT_BUDGET_THRESHOLDS
    hours_per_man_day: Decimal = DEFAULT_HOURS_PER_MAN_DAY


DEFAULT_ENGINE_SETTINGS = EngineSettings()


@dataclass(frozen=True)
class ProjectSummaryView:
    """
    Project Information and Project Health Summary panels.

    Identity and classification strings are passed through unchanged.
    ``budget`` is the compact currency string shown on the panel.
    """

    project_id: str | None
    name: str | None
    sponsor_name: str | None
    manager_name: str | None
    program: str | None
    business_unit: str | None
    state: str | None
    priority: str | None
    size: str | None
    phase_badge: Badge
    priority_badge: Badge
    size_badge: Badge

    start_date: date | None
    end_date: date | None
    start_date_display: str
    end_date_display: str
    duration_working_days: int | None
    duration_display: str
    days_remaining: int | None
    days_remaining_label: str | None

    total_milestones: int
    completed_milestones: int
    in_progress_milestones: int
    not_started_milestones: int
    completion_percent: int
    completion_tier: CompletionTier
    has_milestones: bool
    milestone_hint: str | None

    open_risks: int
    open_issues: int
    high_priority_risks: int
    critical_issues: int
    team_count: int
    health: HealthClassification
    risk_tile: Tile
    issue_tile: Tile
    milestone_tile: Tile

    budget: str
    spent: str
    percent_spent: int
    budget_state: BudgetState
    is_over_budget: bool
    is_low_buffer: bool

    total_effort_hours: Decimal
    total_effort_man_days: int | None
    total_effort: str


@dataclass(frozen=True)
class ComparisonBar:
    """One bar of the budget-vs-actual chart."""

    label: str
    amount: Decimal


@dataclass(frozen=True)
class FinancialOverviewView:
    """Financial Overview panel."""

    budget: Decimal
    actual_cost: Decimal
    remaining: Decimal
    utilization_percent: Decimal
    breakdown: tuple[CostBreakdownEntry, ...]
    is_over_budget: bool
    is_low_buffer: bool
    is_remaining_low: bool
    budget_state: BudgetState
    utilization_tone: Tone
    remaining_tone: Tone
    budget_display: str
    actual_cost_display: str
    remaining_display: str
    utilization_display: str
    breakdown_total_display: str
    comparison: tuple[ComparisonBar, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class DashboardSummary:
    summary: ProjectSummaryView
    financial: FinancialOverviewView


# ---------------------------------------------------------------------------
# Sanitising
# ---------------------------------------------------------------------------


def _money(value: Any) -> Decimal | None:
    amount = to_amount(value)
    if amount is None:
        return None
    if amount > MAX_AMOUNT:
        amount = MAX_AMOUNT
    return round_half_away(amount, _AMOUNT_PLACES)


def _count(value: Any) -> int:
    number = to_decimal(value)
    if number is not None and number > MAX_COUNT:
        return MAX_COUNT
    return to_count(value)


def _sanitize_cost_breakdown(value: Any) -> CostBreakdownFacts | None:
    if not isinstance(value, CostBreakdownFacts):
        return None
    return CostBreakdownFacts(
        budget=_money(value.budget),
        actual_cost=_money(value.actual_cost),
        labor=_money(value.labor),
        materials=_money(value.materials),
        infrastructure=_money(value.infrastructure),
        other=_money(value.other),
    )


def _sanitize_hours(value: Any) -> tuple[Decimal, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(_money(hours) or ZERO for hours in value)


def sanitize_facts(facts: ProjectFacts) -> ProjectFacts:
    """
    Return a copy of ``facts`` with every field coerced to its narrow type.

    Counters become non-negative ints; money becomes a non-negative Decimal
    or None; dates become ``date`` or None; text that is not a non-blank
    string becomes None; effort entries that are missing, negative or
    non-finite become 0.
    """
    return replace(
        facts,
        project_id=to_text(facts.project_id),
        name=to_text(facts.name),
        sponsor_name=to_text(facts.sponsor_name),
        manager_name=to_text(facts.manager_name),
        program=to_text(facts.program),
        business_unit=to_text(facts.business_unit),
        state=to_text(facts.state),
        priority=to_text(facts.priority),
        size=to_text(facts.size),
        start_date=to_date(facts.start_date),
        end_date=to_date(facts.end_date),
        budget=_money(facts.budget),
        actual_cost=_money(facts.actual_cost),
        cost_breakdown=_sanitize_cost_breakdown(facts.cost_breakdown),
        total_milestones=_count(facts.total_milestones),
        completed_milestones=_count(facts.completed_milestones),
        in_progress_milestones=_count(facts.in_progress_milestones),
        not_started_milestones=_count(facts.not_started_milestones),
        open_risks=_count(facts.open_risks),
        open_issues=_count(facts.open_issues),
        team_count=_count(facts.team_count),
        high_priority_risks=_count(facts.high_priority_risks),
        critical_issues=_count(facts.critical_issues),
        task_hours=_sanitize_hours(facts.task_hours),
    )


# ---------------------------------------------------------------------------
# Assembly
# ---------------------------------------------------------------------------


def _financial_source(facts: ProjectFacts) -> tuple[Decimal | None, Decimal | None, dict]:
    """Budget, actual and category amounts for the financial overview."""
    row = facts.cost_breakdown
    if row is None:
        return facts.budget, facts.actual_cost, {}
    categories = {
        CostCategory.LABOR: row.labor,
        CostCategory.MATERIALS: row.materials,
        CostCategory.INFRASTRUCTURE: row.infrastructure,
        CostCategory.OTHER: row.other,
    }
    return row.budget or ZERO, row.actual_cost or ZERO, categories


@traced_engine("summary", "1.0", fingerprint_fields=("facts", "today"))
def assemble_summary(
    facts: ProjectFacts,
    today: date,
    *,
    settings: EngineSettings | None = None,
) -> DashboardSummary:
    """
    Derive both dashboard views from one facts snapshot.

    Args:
        facts: Raw facts; sanitised here, so any values are accepted.
        today: The reference date for days remaining and rule 3 of the
            health table.
        settings: Engine thresholds; defaults when omitted.
    """
    settings = settings or DEFAULT_ENGINE_SETTINGS
    f = sanitize_facts(facts)
    today_day = to_date(today)

    temporal = TemporalCalculator()
    completion = CompletionCalculator()
    budget_calc = BudgetCalculator(settings.budget)
    classifier = HealthClassifier(settings.health)

    # Schedule
    duration = temporal.working_days(start=f.start_date, end=f.end_date)
    days_remaining = temporal.days_remaining(end=f.end_date, today=today_day)
    elapsed = temporal.elapsed_fraction(f.start_date, f.end_date, today_day)

    # Milestones
    percent_complete = completion.completion_percent(
        total_milestones=f.total_milestones,
        completed_milestones=f.completed_milestones,
    )
    has_milestones = completion.has_milestones(f.total_milestones)

    # Health
    health = classifier.classify(signals=HealthSignals(
        open_risks=f.open_risks,
        open_issues=f.open_issues,
        critical_issues=f.critical_issues,
        high_priority_risks=f.high_priority_risks,
        total_milestones=f.total_milestones,
        completed_milestones=f.completed_milestones,
        in_progress_milestones=f.in_progress_milestones,
        completion_percent=percent_complete,
        days_remaining=days_remaining,
        elapsed_fraction=elapsed,
    ))

    # Budget badge on the summary panel uses the overview figures.
    panel_budget = budget_calc.summarize(budget=f.budget, actual_cost=f.actual_cost)

    # Effort
    total_hours = sum(f.task_hours, ZERO)
    if total_hours > ZERO and settings.hours_per_man_day > ZERO:
        man_days: int | None = round_to_int(total_hours / settings.hours_per_man_day)
    else:
        man_days = None

    summary = ProjectSummaryView(
        project_id=f.project_id,
        name=f.name,
        sponsor_name=f.sponsor_name,
        manager_name=f.manager_name,
        program=f.program,
        business_unit=f.business_unit,
        state=f.state,
        priority=f.priority,
        size=f.size,
        phase_badge=phase_badge(f.state),
        priority_badge=priority_badge(f.priority),
        size_badge=size_badge(f.size),
        start_date=f.start_date,
        end_date=f.end_date,
        start_date_display=format_date(f.start_date),
        end_date_display=format_date(f.end_date),
        duration_working_days=duration,
        duration_display=format_duration(duration),
        days_remaining=days_remaining,
        days_remaining_label=describe_days_remaining(days_remaining),
        total_milestones=f.total_milestones,
        completed_milestones=f.completed_milestones,
        in_progress_milestones=f.in_progress_milestones,
        not_started_milestones=f.not_started_milestones,
        completion_percent=percent_complete,
        completion_tier=completion.completion_tier(percent_complete),
        has_milestones=has_milestones,
        milestone_hint=None if has_milestones else NO_MILESTONES_HINT,
        open_risks=f.open_risks,
        open_issues=f.open_issues,
        high_priority_risks=f.high_priority_risks,
        critical_issues=f.critical_issues,
        team_count=f.team_count,
        health=health,
        risk_tile=classifier.risk_tile(f.open_risks, f.high_priority_risks),
        issue_tile=classifier.issue_tile(f.open_issues, f.critical_issues),
        milestone_tile=classifier.milestone_tile(
            f.total_milestones, f.completed_milestones,
        ),
        budget=format_currency_compact(f.budget),
        spent=format_currency_compact(f.actual_cost),
        percent_spent=panel_budget.percent_spent,
        budget_state=panel_budget.state,
        is_over_budget=panel_budget.is_over_budget,
        is_low_buffer=panel_budget.is_low_buffer,
        total_effort_hours=total_hours,
        total_effort_man_days=man_days,
        total_effort=format_effort(total_hours, settings.hours_per_man_day),
    )

    # Financial overview
    fin_budget, fin_actual, categories = _financial_source(f)
    money = budget_calc.summarize(budget=fin_budget, actual_cost=fin_actual)
    breakdown = budget_calc.breakdown(
        budget=fin_budget, actual_cost=fin_actual, categories=categories,
    )
    breakdown_total = sum((entry.amount for entry in breakdown), ZERO)

    financial = FinancialOverviewView(
        budget=money.budget,
        actual_cost=money.spent,
        remaining=money.remaining,
        utilization_percent=money.utilization_percent,
        breakdown=breakdown,
        is_over_budget=money.is_over_budget,
        is_low_buffer=money.is_low_buffer,
        is_remaining_low=money.is_remaining_low,
        budget_state=money.state,
        utilization_tone=money.utilization_tone,
        remaining_tone=money.remaining_tone,
        budget_display=format_currency_compact(money.budget),
        actual_cost_display=format_currency_compact(money.spent),
        remaining_display=format_currency_compact(money.remaining),
        utilization_display=format_percent(money.utilization_percent),
        breakdown_total_display=format_currency_full(breakdown_total),
        comparison=(
            ComparisonBar("Budget", money.budget),
            ComparisonBar("Actual", money.spent),
        ),
    )

    logger.debug("dashboard_summary_assembled", extra={
        "project_id": f.project_id,
        "health_status": health.status.value,
        "completion_percent": percent_complete,
        "budget_state": money.state.value,
        "breakdown_entries": len(breakdown),
    })
    return DashboardSummary(summary=summary, financial=financial)
