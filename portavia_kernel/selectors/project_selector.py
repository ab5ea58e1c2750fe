"""
Module: portavia_kernel.selectors.project_selector
Responsibility: The six reads that make up one project's fact bundle:
    overview row, team size, high-priority open risks, critical open issues,
    task effort rows and the cost breakdown row.
Architecture position: Kernel > Selectors.  May import from models/,
    domain/facts.py and selectors/base.py.

Invariants enforced:
    - Read-only; every method issues exactly one SELECT.
    - "Open" means status differs from the closed status under SQL
      semantics, so rows with a NULL status are not counted.
    - Priority matching is exact against the configured levels, as stored.

Failure modes:
    - Database errors (OperationalError, ProgrammingError, ...) propagate;
      the gathering layer decides whether a failure is fatal.
    - Missing rows are not errors: project_overview and
      project_cost_breakdown return None.
"""

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from portavia_kernel.domain.facts import CostBreakdownRow, OverviewRow, TaskEffortRow
from portavia_kernel.logging_config import get_logger
from portavia_kernel.models.project import Project, ProjectResource
from portavia_kernel.models.project_overview import ProjectOverview
from portavia_kernel.models.risk_issue import Issue, ItemPriority, ItemStatus, Risk
from portavia_kernel.models.task import Task
from portavia_kernel.selectors.base import BaseSelector

logger = get_logger("selectors.project")

DEFAULT_ESCALATED_PRIORITIES: tuple[str, ...] = (
    ItemPriority.HIGH.value,
    ItemPriority.CRITICAL.value,
)
DEFAULT_CLOSED_STATUS: str = ItemStatus.CLOSED.value


class ProjectFactSelector(BaseSelector[ProjectOverview]):
    """
    Selector for the per-project dashboard facts.

    Contract:
        One method per fact query.  Counts are plain ints, rows are frozen
        DTOs from ``portavia_kernel.domain.facts``.

    Non-goals:
        - No aggregation beyond counting; totals such as effort hours are
          summed by the assembler so NULL handling lives in one place.
    """

    def __init__(
        self,
        session: Session,
        escalated_priorities: tuple[str, ...] = DEFAULT_ESCALATED_PRIORITIES,
        closed_status: str = DEFAULT_CLOSED_STATUS,
    ):
        super().__init__(session)
        self.escalated_priorities = tuple(escalated_priorities)
        self.closed_status = closed_status

    def project_overview(self, project_id: str) -> OverviewRow | None:
        """Fetch the overview row, or None if the project is unknown."""
        row = self.session.execute(
            select(ProjectOverview).where(ProjectOverview.id == project_id)
        ).scalar_one_or_none()

        if row is None:
            logger.debug("project_overview_missing", extra={"project_id": project_id})
            return None

        return OverviewRow(
            id=row.id,
            name=row.name,
            sponsor_name=row.sponsor_name,
            manager_name=row.manager_name,
            program=row.program,
            business_unit=row.business_unit,
            state=row.state,
            priority=row.priority,
            size=row.size,
            start_date=row.start_date,
            end_date=row.end_date,
            budget=row.budget,
            actual_cost=row.actual_cost,
            total_milestones=row.total_milestones,
            completed_milestones=row.completed_milestones,
            in_progress_milestones=row.in_progress_milestones,
            not_started_milestones=row.not_started_milestones,
            open_risks=row.open_risks,
            open_issues=row.open_issues,
        )

    def team_count(self, project_id: str) -> int:
        """Number of resource assignments on the project."""
        count = self.session.execute(
            select(func.count(ProjectResource.resource_id)).where(
                ProjectResource.project_id == project_id
            )
        ).scalar_one()
        return int(count or 0)

    def high_priority_open_risk_count(self, project_id: str) -> int:
        """Open risks whose priority is one of the escalated levels."""
        count = self.session.execute(
            select(func.count(Risk.id)).where(
                Risk.project_id == project_id,
                Risk.priority.in_(self.escalated_priorities),
                Risk.status != self.closed_status,
            )
        ).scalar_one()
        return int(count or 0)

    def critical_open_issue_count(self, project_id: str) -> int:
        """Open issues whose priority is one of the escalated levels."""
        count = self.session.execute(
            select(func.count(Issue.id)).where(
                Issue.project_id == project_id,
                Issue.priority.in_(self.escalated_priorities),
                Issue.status != self.closed_status,
            )
        ).scalar_one()
        return int(count or 0)

    def task_effort_rows(self, project_id: str) -> list[TaskEffortRow]:
        """Estimated hours of every task on the project, NULLs included."""
        hours = self.session.execute(
            select(Task.estimated_hours)
            .where(Task.project_id == project_id)
            .order_by(Task.id)
        ).scalars().all()
        return [TaskEffortRow(estimated_hours=h) for h in hours]

    def project_cost_breakdown(self, project_id: str) -> CostBreakdownRow | None:
        """Budget, actual cost and category actuals from ``projects``."""
        row = self.session.execute(
            select(
                Project.budget,
                Project.actual_cost,
                Project.actual_cost_labor,
                Project.actual_cost_materials,
                Project.actual_cost_infrastructure,
                Project.actual_cost_other,
            ).where(Project.id == project_id)
        ).one_or_none()

        if row is None:
            return None

        return CostBreakdownRow(
            budget=row.budget,
            actual_cost=row.actual_cost,
            actual_cost_labor=row.actual_cost_labor,
            actual_cost_materials=row.actual_cost_materials,
            actual_cost_infrastructure=row.actual_cost_infrastructure,
            actual_cost_other=row.actual_cost_other,
        )
