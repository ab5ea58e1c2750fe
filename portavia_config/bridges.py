"""
Config -> Engine Bridges.

Functions that convert a DashboardConfiguration into the threshold objects
the engines take.  These live in portavia_config (the producer) because the
engines must never import portavia_config.

Usage:
    from portavia_config import get_active_config
    from portavia_config.bridges import build_engine_settings

    settings = build_engine_settings(get_active_config())
    assemble_summary(facts, today, settings=settings)
"""

from __future__ import annotations

from portavia_config.schema import DashboardConfiguration
from portavia_engines.budget import BudgetThresholds
from portavia_engines.health import HealthThresholds
from portavia_engines.summary import EngineSettings


def build_health_thresholds(config: DashboardConfiguration) -> HealthThresholds:
    h = config.health
    return HealthThresholds(
        critical_open_risks=h.critical_open_risks,
        critical_open_issues=h.critical_open_issues,
        critical_issue_count=h.critical_issue_count,
        at_risk_open_risks=h.at_risk_open_risks,
        at_risk_open_issues=h.at_risk_open_issues,
        at_risk_high_priority_risks=h.at_risk_high_priority_risks,
        lagging_completion_percent=h.lagging_completion_percent,
        late_elapsed_fraction=h.late_elapsed_fraction,
        risk_tile_critical=h.risk_tile_critical,
        issue_tile_critical=h.issue_tile_critical,
    )


def build_budget_thresholds(config: DashboardConfiguration) -> BudgetThresholds:
    return BudgetThresholds(
        low_buffer_percent=config.budget.low_buffer_percent,
        remaining_low_fraction=config.budget.remaining_low_fraction,
    )


def build_engine_settings(config: DashboardConfiguration) -> EngineSettings:
    """All engine tunables in one object for ``assemble_summary``."""
    return EngineSettings(
        health=build_health_thresholds(config),
        budget=build_budget_thresholds(config),
        hours_per_man_day=config.effort.hours_per_man_day,
    )
