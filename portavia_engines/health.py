"""
portavia_engines.health -- Traffic-light project health.

Responsibility:
    Classify a project as green / yellow / red from its open risk and issue
    counts and its milestone progress against the schedule.  Also derives
    the tones and captions of the risk, issue and milestone tiles.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import portavia_kernel.domain and sibling engine modules.

Decision table (first match wins, thresholds configurable):

    1. open_risks > 5  or open_issues > 10 or critical_issues > 3     -> RED "Critical"
    2. open_risks > 3  or open_issues > 5  or high_priority_risks > 2 -> YELLOW "At Risk"
    3. milestones exist, completion < 50%, days remaining known and
       more than half of the scheduled window has elapsed            -> YELLOW "At Risk"
    4. otherwise                                                      -> GREEN "On Track"

Rule 3's lateness test is the elapsed share of the window between start
and end date.  Without a start date it cannot be measured and rule 3 does
not fire.

Invariants enforced:
    - Monotone in severity: raising any of open_risks, open_issues,
      critical_issues or high_priority_risks never moves the result
      toward green.
    - Counters are clamped to >= 0 before classification.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from portavia_kernel.domain.values import to_count
from portavia_kernel.logging_config import get_logger
from portavia_engines.tracer import traced_engine
from portavia_engines.vocabulary import Tone, normalize_term

logger = get_logger("engines.health")


class HealthStatus(str, Enum):
    """Traffic-light status; each member carries its display label."""

    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"

    @property
    def label(self) -> str:
        return _HEALTH_LABELS[self]

    @property
    def tone(self) -> Tone:
        return _HEALTH_TONES[self]

    @classmethod
    def parse(cls, value: str | None) -> HealthStatus | None:
        """Case-insensitive lookup; None for anything outside the vocabulary."""
        term = normalize_term(value)
        for member in cls:
            if member.value == term:
                return member
        return None


_HEALTH_LABELS = {
    HealthStatus.GREEN: "On Track",
    HealthStatus.YELLOW: "At Risk",
    HealthStatus.RED: "Critical",
}

_HEALTH_TONES = {
    HealthStatus.GREEN: Tone.HEALTHY,
    HealthStatus.YELLOW: Tone.WARNING,
    HealthStatus.RED: Tone.CRITICAL,
}


class HealthRule(str, Enum):
    """Which row of the decision table produced the status."""

    CRITICAL_VOLUME = "critical_volume"
    AT_RISK_VOLUME = "at_risk_volume"
    LAGGING_MILESTONES = "lagging_milestones"
    ON_TRACK = "on_track"


@dataclass(frozen=True)
class HealthThresholds:
    """Strict ("greater than") limits of the decision table."""

    critical_open_risks: int = 5
    critical_open_issues: int = 10
    critical_issue_count: int = 3
    at_risk_open_risks: int = 3
    at_risk_open_issues: int = 5
    at_risk_high_priority_risks: int = 2
    lagging_completion_percent: int = 50
    late_elapsed_fraction: Decimal = Decimal("0.5")
    # Tile colouring
    risk_tile_critical: int = 3
    issue_tile_critical: int = 5


DEFAULT_HEALTH_THRESHOLDS = HealthThresholds()


@dataclass(frozen=True)
class HealthSignals:
    """Inputs of the classifier."""

    open_risks: int = 0
    open_issues: int = 0
    critical_issues: int = 0
    high_priority_risks: int = 0
    total_milestones: int = 0
    completed_milestones: int = 0
    in_progress_milestones: int = 0
    completion_percent: int = 0
    days_remaining: int | None = None
    elapsed_fraction: Decimal | None = None


@dataclass(frozen=True)
class HealthClassification:
    status: HealthStatus
    reason: HealthRule

    @property
    def label(self) -> str:
        return self.status.label


@dataclass(frozen=True)
class Tile:
    """A health-summary tile: headline count, caption and tone."""

    value: int
    caption: str
    tone: Tone
    caption_tone: Tone = Tone.NEUTRAL


class HealthClassifier:
    """
    Pure traffic-light classifier.

    Contract:
        No I/O; thresholds injected.  ``classify`` is total.
    """

    def __init__(self, thresholds: HealthThresholds = DEFAULT_HEALTH_THRESHOLDS):
        self.thresholds = thresholds

    @traced_engine("health", "1.0", fingerprint_fields=("signals",))
    def classify(self, signals: HealthSignals) -> HealthClassification:
        t = self.thresholds
        risks = to_count(signals.open_risks)
        issues = to_count(signals.open_issues)
        critical = to_count(signals.critical_issues)
        high_risks = to_count(signals.high_priority_risks)

        if (
            risks > t.critical_open_risks
            or issues > t.critical_open_issues
            or critical > t.critical_issue_count
        ):
            result = HealthClassification(HealthStatus.RED, HealthRule.CRITICAL_VOLUME)
        elif (
            risks > t.at_risk_open_risks
            or issues > t.at_risk_open_issues
            or high_risks > t.at_risk_high_priority_risks
        ):
            result = HealthClassification(HealthStatus.YELLOW, HealthRule.AT_RISK_VOLUME)
        elif self._is_lagging(signals):
            result = HealthClassification(HealthStatus.YELLOW, HealthRule.LAGGING_MILESTONES)
        else:
            result = HealthClassification(HealthStatus.GREEN, HealthRule.ON_TRACK)

        logger.debug("health_classified", extra={
            "status": result.status.value,
            "reason": result.reason.value,
            "open_risks": risks,
            "open_issues": issues,
            "critical_issues": critical,
            "high_priority_risks": high_risks,
        })
        return result

    def _is_lagging(self, signals: HealthSignals) -> bool:
        """Rule 3: behind on milestones in the second half of the schedule."""
        t = self.thresholds
        if to_count(signals.total_milestones) == 0:
            return False
        if signals.completion_percent >= t.lagging_completion_percent:
            return False
        if signals.days_remaining is None or signals.elapsed_fraction is None:
            return False
        return signals.elapsed_fraction > t.late_elapsed_fraction

    def risk_tile(self, open_risks: int, high_priority_risks: int) -> Tile:
        risks = to_count(open_risks)
        high = to_count(high_priority_risks)
        if risks > self.thresholds.risk_tile_critical:
            tone = Tone.CRITICAL
        elif risks > 0:
            tone = Tone.WARNING
        else:
            tone = Tone.NEUTRAL
        if high > 0:
            return Tile(risks, f"{high} high priority", tone, Tone.CRITICAL)
        return Tile(risks, "none critical", tone)

    def issue_tile(self, open_issues: int, critical_issues: int) -> Tile:
        issues = to_count(open_issues)
        critical = to_count(critical_issues)
        if issues > self.thresholds.issue_tile_critical:
            tone = Tone.CRITICAL
        elif issues > 0:
            tone = Tone.WARNING
        else:
            tone = Tone.NEUTRAL
        if critical > 0:
            return Tile(issues, f"{critical} critical", tone, Tone.CRITICAL)
        return Tile(issues, "none critical", tone)

    def milestone_tile(self, total_milestones: int, completed_milestones: int) -> Tile:
        total = to_count(total_milestones)
        completed = to_count(completed_milestones)
        return Tile(total, f"{completed} completed", Tone.NEUTRAL)
