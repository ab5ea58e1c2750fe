"""
Configuration Validator (``portavia_config.validator``).

Responsibility
--------------
Checks a parsed ``DashboardConfiguration`` before it is handed to the
engines: every threshold must be in range, and the at-risk limits should
not exceed the critical ones.

Invariants enforced
-------------------
* Counts and percentages are non-negative; percentages are at most 100.
* Fractions lie in [0, 1].
* Hours per man-day and the gather pool size are positive.
* The fact source has at least one escalated priority and a closed status.

Failure modes
-------------
* Errors -> ``validate_configuration`` raises ``InvalidThresholdError``
  for the first offending field.
* Warnings (at-risk limit above its critical limit) -> configuration is
  usable but the yellow band can never be reached by that signal.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from decimal import Decimal

from portavia_config.schema import DashboardConfiguration
from portavia_kernel.exceptions import InvalidThresholdError


@dataclass(frozen=True)
class ThresholdIssue:
    field: str
    value: object
    reason: str

    def __str__(self) -> str:
        return f"{self.field}={self.value!r}: {self.reason}"


@dataclass
class ConfigValidationResult:
    """
    Result of configuration validation.

    ``is_valid`` is True only when ``errors`` is empty.
    """

    errors: list[ThresholdIssue] = field(default_factory=list)
    warnings: list[ThresholdIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def add_error(self, name: str, value: object, reason: str) -> None:
        self.errors.append(ThresholdIssue(name, value, reason))

    def add_warning(self, name: str, value: object, reason: str) -> None:
        self.warnings.append(ThresholdIssue(name, value, reason))


def check_configuration(config: DashboardConfiguration) -> ConfigValidationResult:
    """Collect every error and warning without raising."""
    result = ConfigValidationResult()
    _check_health(config, result)
    _check_budget(config, result)
    _check_effort(config, result)
    _check_fact_source(config, result)
    return result


def validate_configuration(config: DashboardConfiguration) -> ConfigValidationResult:
    """
    Validate a configuration.

    Returns:
        The result (possibly carrying warnings) when there are no errors.
    Raises:
        InvalidThresholdError: for the first error found.
    """
    result = check_configuration(config)
    if not result.is_valid:
        first = result.errors[0]
        raise InvalidThresholdError(first.field, first.value, first.reason)
    return result


def _check_fraction(name: str, value: Decimal, result: ConfigValidationResult) -> None:
    if value < 0 or value > 1:
        result.add_error(name, value, "must be between 0 and 1")


def _check_percent(name: str, value: int, result: ConfigValidationResult) -> None:
    if value < 0 or value > 100:
        result.add_error(name, value, "must be between 0 and 100")


def _check_health(config: DashboardConfiguration, result: ConfigValidationResult) -> None:
    health = config.health
    for f in fields(health):
        value = getattr(health, f.name)
        if value < 0:
            result.add_error(f"health.{f.name}", value, "must not be negative")

    _check_percent("health.lagging_completion_percent", health.lagging_completion_percent, result)
    _check_fraction("health.late_elapsed_fraction", health.late_elapsed_fraction, result)

    pairs = (
        ("at_risk_open_risks", "critical_open_risks"),
        ("at_risk_open_issues", "critical_open_issues"),
    )
    for at_risk, critical in pairs:
        if getattr(health, at_risk) > getattr(health, critical):
            result.add_warning(
                f"health.{at_risk}",
                getattr(health, at_risk),
                f"exceeds health.{critical}",
            )


def _check_budget(config: DashboardConfiguration, result: ConfigValidationResult) -> None:
    _check_percent("budget.low_buffer_percent", config.budget.low_buffer_percent, result)
    _check_fraction(
        "budget.remaining_low_fraction", config.budget.remaining_low_fraction, result,
    )


def _check_effort(config: DashboardConfiguration, result: ConfigValidationResult) -> None:
    hours = config.effort.hours_per_man_day
    if hours <= 0:
        result.add_error("effort.hours_per_man_day", hours, "must be positive")


def _check_fact_source(config: DashboardConfiguration, result: ConfigValidationResult) -> None:
    source = config.fact_source
    if not source.escalated_priorities:
        result.add_error(
            "fact_source.escalated_priorities", source.escalated_priorities, "must not be empty",
        )
    if not source.closed_status.strip():
        result.add_error("fact_source.closed_status", source.closed_status, "must not be blank")
    if source.max_workers < 1:
        result.add_error("fact_source.max_workers", source.max_workers, "must be at least 1")
