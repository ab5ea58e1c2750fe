"""
Facts -- Input records handed to the derivation engines.

Responsibility:
    Defines ProjectFacts, the single immutable bundle the summary assembler
    consumes, and the row DTOs the fact source returns.  The gathering
    layer builds ProjectFacts from those rows; the engines never see rows.

Architecture position:
    Kernel > Domain -- pure data, zero I/O.

Invariants:
    - start_date > end_date is allowed (duration is then 0).
    - completed_milestones > total_milestones is allowed (completion clamps).
    - actual_cost > budget is allowed (over budget).
    Records are not validated on construction; the assembler sanitises.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class OverviewRow:
    """A row of the ``vw_project_overview`` view."""

    id: str
    name: str | None = None
    sponsor_name: str | None = None
    manager_name: str | None = None
    program: str | None = None
    business_unit: str | None = None
    state: str | None = None
    priority: str | None = None
    size: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    budget: Decimal | None = None
    actual_cost: Decimal | None = None
    total_milestones: int | None = None
    completed_milestones: int | None = None
    in_progress_milestones: int | None = None
    not_started_milestones: int | None = None
    open_risks: int | None = None
    open_issues: int | None = None


@dataclass(frozen=True)
class TaskEffortRow:
    """Estimated effort of one task."""

    estimated_hours: Decimal | None = None


@dataclass(frozen=True)
class CostBreakdownRow:
    """Budget, actual cost and per-category actuals from ``projects``."""

    budget: Decimal | None = None
    actual_cost: Decimal | None = None
    actual_cost_labor: Decimal | None = None
    actual_cost_materials: Decimal | None = None
    actual_cost_infrastructure: Decimal | None = None
    actual_cost_other: Decimal | None = None


@dataclass(frozen=True)
class CostBreakdownFacts:
    """Cost facts from the ``projects`` row; preferred by the financial overview."""

    budget: Decimal | None = None
    actual_cost: Decimal | None = None
    labor: Decimal | None = None
    materials: Decimal | None = None
    infrastructure: Decimal | None = None
    other: Decimal | None = None

    @classmethod
    def from_row(cls, row: CostBreakdownRow) -> CostBreakdownFacts:
        return cls(
            budget=row.budget,
            actual_cost=row.actual_cost,
            labor=row.actual_cost_labor,
            materials=row.actual_cost_materials,
            infrastructure=row.actual_cost_infrastructure,
            other=row.actual_cost_other,
        )


@dataclass(frozen=True)
class ProjectFacts:
    """
    Everything known about one project at refresh time.

    Identity and classification strings are passed through to the views
    unchanged.  Counters default to 0; money and dates default to absent.
    """

    project_id: str | None = None
    name: str | None = None
    sponsor_name: str | None = None
    manager_name: str | None = None
    program: str | None = None
    business_unit: str | None = None

    state: str | None = None
    priority: str | None = None
    size: str | None = None

    start_date: date | None = None
    end_date: date | None = None

    budget: Decimal | None = None
    actual_cost: Decimal | None = None
    cost_breakdown: CostBreakdownFacts | None = None

    total_milestones: int = 0
    completed_milestones: int = 0
    in_progress_milestones: int = 0
    not_started_milestones: int = 0
    open_risks: int = 0
    open_issues: int = 0

    team_count: int = 0
    high_priority_risks: int = 0
    critical_issues: int = 0

    task_hours: tuple[Decimal | None, ...] = ()

    @classmethod
    def from_rows(
        cls,
        overview: OverviewRow,
        *,
        team_count: int = 0,
        high_priority_risks: int = 0,
        critical_issues: int = 0,
        task_rows: tuple[TaskEffortRow, ...] | list[TaskEffortRow] = (),
        cost_row: CostBreakdownRow | None = None,
    ) -> ProjectFacts:
        """Assemble facts from the fact source's rows (NULL counters read as 0)."""
        return cls(
            project_id=overview.id,
            name=overview.name,
            sponsor_name=overview.sponsor_name,
            manager_name=overview.manager_name,
            program=overview.program,
            business_unit=overview.business_unit,
            state=overview.state,
            priority=overview.priority,
            size=overview.size,
            start_date=overview.start_date,
            end_date=overview.end_date,
            budget=overview.budget,
            actual_cost=overview.actual_cost,
            cost_breakdown=(
                CostBreakdownFacts.from_row(cost_row) if cost_row is not None else None
            ),
            total_milestones=overview.total_milestones or 0,
            completed_milestones=overview.completed_milestones or 0,
            in_progress_milestones=overview.in_progress_milestones or 0,
            not_started_milestones=overview.not_started_milestones or 0,
            open_risks=overview.open_risks or 0,
            open_issues=overview.open_issues or 0,
            team_count=team_count,
            high_priority_risks=high_priority_risks,
            critical_issues=critical_issues,
            task_hours=tuple(row.estimated_hours for row in task_rows),
        )
