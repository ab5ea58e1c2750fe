"""
portavia_services.fact_gatherer -- All-settled gathering of one project's facts.

Responsibility:
    Run the six Fact Source reads concurrently, wait for every one of them
    to settle, and fold the results into a single ProjectFacts snapshot.

Architecture position:
    Services -- orchestration over the Fact Source.  Produces the input of
    ``portavia_engines.summary.assemble_summary``.

Invariants enforced:
    - All-settled: a failing read never cancels the others; every read is
      awaited before anything is decided.
    - The overview read is essential.  If it fails the gather fails with
      FactQueryError; if it returns no row the gather fails with
      ProjectNotFoundError.
    - Every other read is secondary.  A failure degrades that field to its
      default (0, no tasks, no cost row), is logged at WARNING and is
      reported in ``FactGatherResult.failures``.
    - The caller's LogContext is visible inside the worker threads.

Failure modes:
    - FactQueryError: the overview read raised.
    - ProjectNotFoundError: the overview read returned None.
"""

from __future__ import annotations

import contextvars
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Any

from portavia_kernel.domain.facts import ProjectFacts
from portavia_kernel.exceptions import FactQueryError, ProjectNotFoundError
from portavia_kernel.logging_config import get_logger
from portavia_services.fact_source import FactSource

logger = get_logger("services.fact_gatherer")

QUERY_OVERVIEW = "project_overview"
QUERY_TEAM_COUNT = "team_count"
QUERY_HIGH_PRIORITY_RISKS = "high_priority_open_risk_count"
QUERY_CRITICAL_ISSUES = "critical_open_issue_count"
QUERY_TASK_EFFORT = "task_effort_rows"
QUERY_COST_BREAKDOWN = "project_cost_breakdown"

# Value each secondary read degrades to when it fails.
_SECONDARY_DEFAULTS: dict[str, Any] = {
    QUERY_TEAM_COUNT: 0,
    QUERY_HIGH_PRIORITY_RISKS: 0,
    QUERY_CRITICAL_ISSUES: 0,
    QUERY_TASK_EFFORT: (),
    QUERY_COST_BREAKDOWN: None,
}

DEFAULT_MAX_WORKERS = 6


@dataclass(frozen=True)
class QueryFailure:
    """A secondary read that raised and was degraded to its default."""

    query_name: str
    error_type: str
    message: str


@dataclass(frozen=True)
class FactGatherResult:
    facts: ProjectFacts
    failures: tuple[QueryFailure, ...] = ()

    @property
    def degraded_fields(self) -> tuple[str, ...]:
        return tuple(failure.query_name for failure in self.failures)

    @property
    def is_degraded(self) -> bool:
        return bool(self.failures)


class FactGatherer:
    """
    Concurrent, all-settled fact gathering.

    Contract:
        ``gather`` returns a complete ProjectFacts or raises one of the two
        documented errors; it never returns partial data silently.
    """

    def __init__(self, fact_source: FactSource, max_workers: int = DEFAULT_MAX_WORKERS):
        self._source = fact_source
        self._max_workers = max(1, max_workers)

    def _queries(self) -> dict[str, Callable[[str], Any]]:
        return {
            QUERY_OVERVIEW: self._source.project_overview,
            QUERY_TEAM_COUNT: self._source.team_count,
            QUERY_HIGH_PRIORITY_RISKS: self._source.high_priority_open_risk_count,
            QUERY_CRITICAL_ISSUES: self._source.critical_open_issue_count,
            QUERY_TASK_EFFORT: self._source.task_effort_rows,
            QUERY_COST_BREAKDOWN: self._source.project_cost_breakdown,
        }

    def gather(self, project_id: str) -> FactGatherResult:
        queries = self._queries()

        with ThreadPoolExecutor(
            max_workers=min(self._max_workers, len(queries)),
            thread_name_prefix="portavia-facts",
        ) as executor:
            futures: dict[str, Future] = {
                name: executor.submit(contextvars.copy_context().run, query, project_id)
                for name, query in queries.items()
            }
            wait(futures.values())

        overview_error = futures[QUERY_OVERVIEW].exception()
        if overview_error is not None:
            logger.error(
                "fact_query_failed",
                exc_info=overview_error,
                extra={"query_name": QUERY_OVERVIEW, "project_id": project_id},
            )
            raise FactQueryError(
                QUERY_OVERVIEW, project_id, str(overview_error),
            ) from overview_error

        overview = futures[QUERY_OVERVIEW].result()
        if overview is None:
            raise ProjectNotFoundError(project_id)

        values: dict[str, Any] = {}
        failures: list[QueryFailure] = []
        for name, default in _SECONDARY_DEFAULTS.items():
            error = futures[name].exception()
            if error is None:
                values[name] = futures[name].result()
                continue
            logger.warning(
                "fact_query_degraded",
                exc_info=error,
                extra={"query_name": name, "project_id": project_id},
            )
            failures.append(QueryFailure(name, type(error).__name__, str(error)))
            values[name] = default

        facts = ProjectFacts.from_rows(
            overview,
            team_count=values[QUERY_TEAM_COUNT],
            high_priority_risks=values[QUERY_HIGH_PRIORITY_RISKS],
            critical_issues=values[QUERY_CRITICAL_ISSUES],
            task_rows=values[QUERY_TASK_EFFORT] or (),
            cost_row=values[QUERY_COST_BREAKDOWN],
        )

        logger.info("project_facts_gathered", extra={
            "project_id": project_id,
            "task_count": len(facts.task_hours),
            "has_cost_breakdown": facts.cost_breakdown is not None,
            "degraded_queries": [f.query_name for f in failures],
        })
        return FactGatherResult(facts=facts, failures=tuple(failures))
