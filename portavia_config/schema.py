"""
DashboardConfiguration schema.

Defines the human-authored, reviewable configuration artifact for the
dashboard: the health decision-table limits, the budget flag thresholds,
the effort conversion and the fact source predicates.  YAML files are
parsed into these types by the loader, checked by the validator and
turned into engine inputs by the bridges.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

# ---------------------------------------------------------------------------
# Engine thresholds
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class HealthThresholdsDef:
    """Strict limits of the traffic-light decision table and tile colours."""

    critical_open_risks: int = 5
    critical_open_issues: int = 10
    critical_issue_count: int = 3
    at_risk_open_risks: int = 3
    at_risk_open_issues: int = 5
    at_risk_high_priority_risks: int = 2
    lagging_completion_percent: int = 50
    late_elapsed_fraction: Decimal = Decimal("0.5")
    risk_tile_critical: int = 3
    issue_tile_critical: int = 5


@dataclass(frozen=True)
class BudgetThresholdsDef:
    low_buffer_percent: int = 85
    remaining_low_fraction: Decimal = Decimal("0.15")


@dataclass(frozen=True)
class EffortDef:
    hours_per_man_day: Decimal = Decimal("8")


# ---------------------------------------------------------------------------
# Fact source
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FactSourceDef:
    """Predicates of the ancillary count queries and the gather pool size."""

    escalated_priorities: tuple[str, ...] = ("High", "Critical")
    closed_status: str = "Closed"
    max_workers: int = 6


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DashboardConfiguration:
    """
    The complete dashboard configuration.

    ``checksum`` is the SHA-256 of the canonical JSON of the source YAML,
    so two loads of the same file are recognisably identical.
    """

    config_id: str
    version: int
    health: HealthThresholdsDef = HealthThresholdsDef()
    budget: BudgetThresholdsDef = BudgetThresholdsDef()
    effort: EffortDef = EffortDef()
    fact_source: FactSourceDef = FactSourceDef()
    checksum: str = ""
