"""
Module: portavia_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the pure
    derivation engines.  This is the import surface for the service layer
    and the CLI.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import portavia_kernel.domain and sibling engine modules.
    MUST NOT import portavia_services or portavia_kernel.db.

Invariants enforced:
    - Purity: engines never read the clock; "today" is always a parameter.
    - Decimal-only arithmetic for money and percentages.
    - Determinism: identical inputs always produce identical outputs.

Audit relevance:
    Every public engine call is traced via ``@traced_engine`` (see
    ``portavia_engines.tracer``), emitting PORTAVIA_ENGINE_TRACE records.

Usage:
    from portavia_engines import assemble_summary
    from portavia_engines.budget import BudgetCalculator
    from portavia_engines.health import HealthClassifier
"""

from portavia_kernel.logging_config import get_logger

logger = get_logger("engines")

from portavia_engines.budget import (
    BudgetCalculator,
    BudgetState,
    BudgetSummary,
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
    EMPTY,
    format_currency_compact,
    format_currency_full,
    format_date,
    format_duration,
    format_effort,
    format_percent,
)
from portavia_engines.health import (
    HealthClassification,
    HealthClassifier,
    HealthRule,
    HealthSignals,
    HealthStatus,
    HealthThresholds,
    Tile,
)
from portavia_engines.summary import (
    ComparisonBar,
    DashboardSummary,
    EngineSettings,
    FinancialOverviewView,
    ProjectSummaryView,
    assemble_summary,
    sanitize_facts,
)
from portavia_engines.temporal import TemporalCalculator, describe_days_remaining
from portavia_engines.tracer import traced_engine
from portavia_engines.vocabulary import (
    Badge,
    PhaseCategory,
    PriorityLevel,
    SizeClass,
    Tone,
)

__all__ = [
    "EMPTY",
    "NO_MILESTONES_HINT",
    "Badge",
    "BudgetCalculator",
    "BudgetState",
    "BudgetSummary",
    "BudgetThresholds",
    "ComparisonBar",
    "CompletionCalculator",
    "CompletionTier",
    "CostBreakdownEntry",
    "CostCategory",
    "DashboardSummary",
    "EngineSettings",
    "FinancialOverviewView",
    "HealthClassification",
    "HealthClassifier",
    "HealthRule",
    "HealthSignals",
    "HealthStatus",
    "HealthThresholds",
    "PhaseCategory",
    "PriorityLevel",
    "ProjectSummaryView",
    "SizeClass",
    "TemporalCalculator",
    "Tile",
    "Tone",
    "assemble_summary",
    "describe_days_remaining",
    "format_currency_compact",
    "format_currency_full",
    "format_date",
    "format_duration",
    "format_effort",
    "format_percent",
    "sanitize_facts",
    "traced_engine",
]
