"""
Tests for the health classifier.

Covers:
- The four rows of the decision table and their strict boundaries
- Rule 3 (lagging milestones late in the schedule)
- Risk, issue and milestone tiles
"""

from decimal import Decimal

import pytest

from portavia_engines.health import (
    HealthClassifier,
    HealthRule,
    HealthSignals,
    HealthStatus,
    HealthThresholds,
)
from portavia_engines.vocabulary import Tone


def classify(**signals):
    return HealthClassifier().classify(signals=HealthSignals(**signals))


class TestHealthStatus:
    def test_labels(self):
        assert HealthStatus.GREEN.label == "On Track"
        assert HealthStatus.YELLOW.label == "At Risk"
        assert HealthStatus.RED.label == "Critical"

    def test_parse_is_case_insensitive(self):
        assert HealthStatus.parse("  Green ") == HealthStatus.GREEN
        assert HealthStatus.parse("RED") == HealthStatus.RED
        assert HealthStatus.parse("amber") is None
        assert HealthStatus.parse(None) is None


class TestCriticalRule:
    def test_issue_volume(self):
        result = classify(open_risks=0, open_issues=11, critical_issues=4)
        assert result.status == HealthStatus.RED
        assert result.label == "Critical"
        assert result.reason == HealthRule.CRITICAL_VOLUME

    @pytest.mark.parametrize("signals", [
        {"open_risks": 6},
        {"open_issues": 11},
        {"critical_issues": 4},
    ])
    def test_each_trigger(self, signals):
        assert classify(**signals).status == HealthStatus.RED

    def test_boundaries_are_strict(self):
        result = classify(open_risks=5, open_issues=10, critical_issues=3)
        assert result.status == HealthStatus.YELLOW


class TestAtRiskRule:
    def test_high_priority_risks(self):
        result = classify(open_risks=2, open_issues=1, critical_issues=0, high_priority_risks=3)
        assert result.status == HealthStatus.YELLOW
        assert result.label == "At Risk"
        assert result.reason == HealthRule.AT_RISK_VOLUME

    @pytest.mark.parametrize("signals", [
        {"open_risks": 4},
        {"open_issues": 6},
        {"high_priority_risks": 3},
    ])
    def test_each_trigger(self, signals):
        assert classify(**signals).status == HealthStatus.YELLOW

    def test_boundaries_are_strict(self):
        result = classify(open_risks=3, open_issues=5, high_priority_risks=2)
        assert result.status == HealthStatus.GREEN


class TestLaggingRule:
    def test_late_and_behind(self):
        result = classify(
            total_milestones=10, completed_milestones=2, completion_percent=20,
            days_remaining=5, elapsed_fraction=Decimal("0.8"),
        )
        assert result.status == HealthStatus.YELLOW
        assert result.reason == HealthRule.LAGGING_MILESTONES

    def test_early_in_schedule_is_green(self):
        result = classify(
            total_milestones=10, completed_milestones=2, completion_percent=20,
            days_remaining=40, elapsed_fraction=Decimal("0.2"),
        )
        assert result.status == HealthStatus.GREEN

    def test_exactly_half_elapsed_is_green(self):
        result = classify(
            total_milestones=10, completion_percent=20,
            days_remaining=10, elapsed_fraction=Decimal("0.5"),
        )
        assert result.status == HealthStatus.GREEN

    def test_on_pace_completion_is_green(self):
        result = classify(
            total_milestones=10, completion_percent=50,
            days_remaining=2, elapsed_fraction=Decimal("0.9"),
        )
        assert result.status == HealthStatus.GREEN

    def test_without_milestones_is_green(self):
        result = classify(
            total_milestones=0, completion_percent=0,
            days_remaining=2, elapsed_fraction=Decimal("0.9"),
        )
        assert result.status == HealthStatus.GREEN

    def test_unknown_schedule_is_green(self):
        assert classify(
            total_milestones=10, completion_percent=0,
            days_remaining=None, elapsed_fraction=Decimal("0.9"),
        ).status == HealthStatus.GREEN
        assert classify(
            total_milestones=10, completion_percent=0,
            days_remaining=3, elapsed_fraction=None,
        ).status == HealthStatus.GREEN

    def test_overdue_and_behind(self):
        result = classify(
            total_milestones=4, completion_percent=25,
            days_remaining=-10, elapsed_fraction=Decimal("1.3"),
        )
        assert result.status == HealthStatus.YELLOW

    def test_configurable_fraction(self):
        classifier = HealthClassifier(HealthThresholds(late_elapsed_fraction=Decimal("0.9")))
        result = classifier.classify(signals=HealthSignals(
            total_milestones=10, completion_percent=20,
            days_remaining=5, elapsed_fraction=Decimal("0.8"),
        ))
        assert result.status == HealthStatus.GREEN


class TestOnTrack:
    def test_healthy_signals(self):
        result = classify(
            open_risks=1, open_issues=2, total_milestones=10,
            completed_milestones=7, completion_percent=70,
            days_remaining=17, elapsed_fraction=Decimal("0.45"),
        )
        assert result.status == HealthStatus.GREEN
        assert result.label == "On Track"
        assert result.reason == HealthRule.ON_TRACK

    def test_negative_counters_are_clamped(self):
        assert classify(open_risks=-10, open_issues=-1).status == HealthStatus.GREEN


class TestTiles:
    def setup_method(self):
        self.classifier = HealthClassifier()

    def test_risk_tile(self):
        tile = self.classifier.risk_tile(open_risks=4, high_priority_risks=2)
        assert tile.value == 4
        assert tile.tone == Tone.CRITICAL
        assert tile.caption == "2 high priority"
        assert tile.caption_tone == Tone.CRITICAL

    def test_risk_tile_quiet(self):
        tile = self.classifier.risk_tile(open_risks=0, high_priority_risks=0)
        assert tile.tone == Tone.NEUTRAL
        assert tile.caption == "none critical"
        assert self.classifier.risk_tile(open_risks=3, high_priority_risks=0).tone == Tone.WARNING

    def test_issue_tile(self):
        assert self.classifier.issue_tile(open_issues=6, critical_issues=0).tone == Tone.CRITICAL
        tile = self.classifier.issue_tile(open_issues=5, critical_issues=1)
        assert tile.tone == Tone.WARNING
        assert tile.caption == "1 critical"

    def test_milestone_tile(self):
        tile = self.classifier.milestone_tile(total_milestones=10, completed_milestones=7)
        assert tile.value == 10
        assert tile.caption == "7 completed"
