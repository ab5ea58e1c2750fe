"""
portavia_services.dashboard_service -- Load the dashboard of one project.

Responsibility:
    Gather a project's facts, run the summary assembler with the configured
    thresholds and "today" from the injected clock, and return the views
    together with the list of fields that were degraded.

Architecture position:
    Services -- stateful orchestration over engines + kernel.
    Composes FactGatherer (I/O) with assemble_summary (pure).

Failure modes:
    - FactQueryError: the overview read failed (error banner).
    - ProjectNotFoundError: no overview row (not-found notice).

Usage:
    from portavia_kernel.db.engine import get_session_factory
    from portavia_kernel.domain.clock import SystemClock
    from portavia_services import ProjectDashboardService, SelectorFactSource

    service = ProjectDashboardService(
        SelectorFactSource(get_session_factory()), SystemClock(),
    )
    dashboard = service.load(project_id)
"""

from __future__ import annotations

from dataclasses import dataclass

from portavia_config import DashboardConfiguration, get_active_config
from portavia_config.bridges import build_engine_settings
from portavia_engines.summary import (
    FinancialOverviewView,
    ProjectSummaryView,
    assemble_summary,
)
from portavia_kernel.domain.clock import Clock
from portavia_kernel.logging_config import LogContext, get_logger
from portavia_services.fact_gatherer import FactGatherer
from portavia_services.fact_source import FactSource

logger = get_logger("services.dashboard")


@dataclass(frozen=True)
class ProjectDashboard:
    """Both panels' views plus the secondary reads that had to be defaulted."""

    summary: ProjectSummaryView
    financial: FinancialOverviewView
    degraded_fields: tuple[str, ...] = ()

    @property
    def is_degraded(self) -> bool:
        return bool(self.degraded_fields)


class ProjectDashboardService:
    """
    Builds ProjectDashboard records.

    Contract:
        One call to ``load`` gathers once and assembles once.  The service
        holds no per-project state.

    Args:
        fact_source: Where the facts come from.
        clock: Supplies "today".
        config: Thresholds; ``get_active_config()`` when omitted.
        max_workers: Gather pool size; the configured value when omitted.
    """

    def __init__(
        self,
        fact_source: FactSource,
        clock: Clock,
        config: DashboardConfiguration | None = None,
        max_workers: int | None = None,
    ):
        self._config = config if config is not None else get_active_config()
        self._clock = clock
        self._settings = build_engine_settings(self._config)
        self._gatherer = FactGatherer(
            fact_source,
            max_workers=max_workers or self._config.fact_source.max_workers,
        )

    @property
    def config(self) -> DashboardConfiguration:
        return self._config

    def load(self, project_id: str) -> ProjectDashboard:
        with LogContext.bind(project_id=project_id):
            gathered = self._gatherer.gather(project_id)
            today = self._clock.today()
            views = assemble_summary(gathered.facts, today, settings=self._settings)

            logger.info("project_dashboard_loaded", extra={
                "as_of": today,
                "health_status": views.summary.health.status.value,
                "config_id": self._config.config_id,
                "degraded_fields": list(gathered.degraded_fields),
            })
            return ProjectDashboard(
                summary=views.summary,
                financial=views.financial,
                degraded_fields=gathered.degraded_fields,
            )
