"""Service layer: fact gathering and dashboard loading."""

from portavia_services.dashboard_service import ProjectDashboard, ProjectDashboardService
from portavia_services.fact_gatherer import (
    FactGatherer,
    FactGatherResult,
    QueryFailure,
)
from portavia_services.fact_source import FactSource, SelectorFactSource

__all__ = [
    "FactGatherResult",
    "FactGatherer",
    "FactSource",
    "ProjectDashboard",
    "ProjectDashboardService",
    "QueryFailure",
    "SelectorFactSource",
]
