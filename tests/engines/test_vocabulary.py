"""Tests for the controlled vocabularies and badges."""

import pytest

from portavia_engines.formatters import EMPTY
from portavia_engines.vocabulary import (
    PhaseCategory,
    PriorityLevel,
    SizeClass,
    Tone,
    classify_phase,
    classify_priority,
    classify_size,
    phase_badge,
    priority_badge,
    size_badge,
)


class TestPhase:
    @pytest.mark.parametrize("value,category", [
        ("Active", PhaseCategory.ACTIVE),
        ("executing", PhaseCategory.ACTIVE),
        ("  In Progress ", PhaseCategory.ACTIVE),
        ("Initiation", PhaseCategory.PLANNING),
        ("ON HOLD", PhaseCategory.ON_HOLD),
        ("paused", PhaseCategory.ON_HOLD),
        ("Closed", PhaseCategory.DONE),
        ("Cancelled", PhaseCategory.CANCELLED),
        ("Dormant", PhaseCategory.UNKNOWN),
        (None, PhaseCategory.UNKNOWN),
    ])
    def test_classification(self, value, category):
        assert classify_phase(value) == category

    def test_badge_keeps_display_casing(self):
        badge = phase_badge("  On Hold")
        assert badge.text == "  On Hold"
        assert badge.category == "on_hold"
        assert badge.tone == Tone.WARNING

    def test_missing_badge(self):
        badge = phase_badge(None)
        assert badge.text == EMPTY
        assert badge.tone == Tone.NEUTRAL


class TestPriority:
    def test_levels(self):
        assert classify_priority("CRITICAL") == PriorityLevel.CRITICAL
        assert classify_priority("low") == PriorityLevel.LOW
        assert classify_priority("urgent") == PriorityLevel.UNKNOWN

    def test_badge_tone(self):
        assert priority_badge("Critical").tone == Tone.CRITICAL
        assert priority_badge("High").tone == Tone.WARNING
        assert priority_badge("whatever").tone == Tone.NEUTRAL


class TestSize:
    @pytest.mark.parametrize("value,size", [
        ("XL", SizeClass.EXTRA_LARGE),
        ("Extra Large", SizeClass.EXTRA_LARGE),
        ("l", SizeClass.LARGE),
        ("Medium", SizeClass.MEDIUM),
        ("S", SizeClass.SMALL),
        ("tiny", SizeClass.UNKNOWN),
    ])
    def test_classification(self, value, size):
        assert classify_size(value) == size

    def test_badge(self):
        assert size_badge("Large").tone == Tone.INFO
        assert size_badge("").text == EMPTY
