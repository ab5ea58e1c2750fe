"""
portavia_services.fact_source -- The Fact Source contract and its SQL realisation.

Responsibility:
    Declare the six reads the dashboard needs (``FactSource``) and
    implement them over SQLAlchemy with ``SelectorFactSource``.

Architecture position:
    Services -- I/O boundary.  Wraps portavia_kernel.selectors.

Invariants enforced:
    - One session per read: a Session is never shared between threads,
      so the gatherer may run the reads concurrently.
    - Read-only: sessions are closed without commit.

Failure modes:
    - Database errors propagate unchanged; the gatherer classifies them.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, TypeVar

from sqlalchemy.orm import Session

from portavia_config.schema import FactSourceDef
from portavia_kernel.domain.facts import CostBreakdownRow, OverviewRow, TaskEffortRow
from portavia_kernel.logging_config import get_logger
from portavia_kernel.selectors.project_selector import (
    DEFAULT_CLOSED_STATUS,
    DEFAULT_ESCALATED_PRIORITIES,
    ProjectFactSelector,
)

logger = get_logger("services.fact_source")

T = TypeVar("T")


class FactSource(Protocol):
    """The reads that make up one project's fact bundle."""

    def project_overview(self, project_id: str) -> OverviewRow | None: ...

    def team_count(self, project_id: str) -> int: ...

    def high_priority_open_risk_count(self, project_id: str) -> int: ...

    def critical_open_issue_count(self, project_id: str) -> int: ...

    def task_effort_rows(self, project_id: str) -> list[TaskEffortRow]: ...

    def project_cost_breakdown(self, project_id: str) -> CostBreakdownRow | None: ...


class SelectorFactSource:
    """
    FactSource backed by ``ProjectFactSelector``.

    Contract:
        ``session_factory`` is called once per read and the session is
        closed when the read returns or raises.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        escalated_priorities: tuple[str, ...] = DEFAULT_ESCALATED_PRIORITIES,
        closed_status: str = DEFAULT_CLOSED_STATUS,
    ):
        self._session_factory = session_factory
        self.escalated_priorities = tuple(escalated_priorities)
        self.closed_status = closed_status

    @classmethod
    def from_config(
        cls,
        session_factory: Callable[[], Session],
        config: FactSourceDef,
    ) -> SelectorFactSource:
        return cls(
            session_factory,
            escalated_priorities=config.escalated_priorities,
            closed_status=config.closed_status,
        )

    def _read(self, query: Callable[[ProjectFactSelector], T]) -> T:
        with self._session_factory() as session:
            selector = ProjectFactSelector(
                session,
                escalated_priorities=self.escalated_priorities,
                closed_status=self.closed_status,
            )
            return query(selector)

    def project_overview(self, project_id: str) -> OverviewRow | None:
        return self._read(lambda s: s.project_overview(project_id))

    def team_count(self, project_id: str) -> int:
        return self._read(lambda s: s.team_count(project_id))

    def high_priority_open_risk_count(self, project_id: str) -> int:
        return self._read(lambda s: s.high_priority_open_risk_count(project_id))

    def critical_open_issue_count(self, project_id: str) -> int:
        return self._read(lambda s: s.critical_open_issue_count(project_id))

    def task_effort_rows(self, project_id: str) -> list[TaskEffortRow]:
        return self._read(lambda s: s.task_effort_rows(project_id))

    def project_cost_breakdown(self, project_id: str) -> CostBreakdownRow | None:
        return self._read(lambda s: s.project_cost_breakdown(project_id))
