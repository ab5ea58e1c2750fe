"""
portavia_engines.vocabulary -- Controlled vocabularies and display tones.

Responsibility:
    Map the free-text phase/state, priority and size values stored on a
    project onto their controlled categories, so the panels can pick a
    badge style.  Also defines ``Tone``, the neutral/healthy/warning/critical
    scale every derived indicator is expressed in.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Matching is case-insensitive after trimming; the display text keeps
      the stored casing.
    - Unknown or missing values map to the UNKNOWN member and a neutral
      tone; they are never rejected.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from portavia_engines.formatters import display_text


class Tone(str, Enum):
    """Severity scale shared by badges, tiles and indicators."""

    NEUTRAL = "neutral"
    INFO = "info"
    HEALTHY = "healthy"
    WARNING = "warning"
    CRITICAL = "critical"


class PhaseCategory(str, Enum):
    ACTIVE = "active"
    PLANNING = "planning"
    ON_HOLD = "on_hold"
    DONE = "done"
    CANCELLED = "cancelled"
    UNKNOWN = "unknown"


class PriorityLevel(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    UNKNOWN = "unknown"


class SizeClass(str, Enum):
    EXTRA_LARGE = "extra_large"
    LARGE = "large"
    MEDIUM = "medium"
    SMALL = "small"
    UNKNOWN = "unknown"


PHASE_TERMS: dict[str, PhaseCategory] = {
    "active": PhaseCategory.ACTIVE,
    "executing": PhaseCategory.ACTIVE,
    "in progress": PhaseCategory.ACTIVE,
    "planning": PhaseCategory.PLANNING,
    "initiation": PhaseCategory.PLANNING,
    "on hold": PhaseCategory.ON_HOLD,
    "paused": PhaseCategory.ON_HOLD,
    "completed": PhaseCategory.DONE,
    "closed": PhaseCategory.DONE,
    "cancelled": PhaseCategory.CANCELLED,
}

PRIORITY_TERMS: dict[str, PriorityLevel] = {
    "critical": PriorityLevel.CRITICAL,
    "high": PriorityLevel.HIGH,
    "medium": PriorityLevel.MEDIUM,
    "low": PriorityLevel.LOW,
}

SIZE_TERMS: dict[str, SizeClass] = {
    "extra large": SizeClass.EXTRA_LARGE,
    "xl": SizeClass.EXTRA_LARGE,
    "large": SizeClass.LARGE,
    "l": SizeClass.LARGE,
    "medium": SizeClass.MEDIUM,
    "m": SizeClass.MEDIUM,
    "small": SizeClass.SMALL,
    "s": SizeClass.SMALL,
}

PHASE_TONES: dict[PhaseCategory, Tone] = {
    PhaseCategory.ACTIVE: Tone.INFO,
    PhaseCategory.PLANNING: Tone.INFO,
    PhaseCategory.ON_HOLD: Tone.WARNING,
    PhaseCategory.DONE: Tone.HEALTHY,
    PhaseCategory.CANCELLED: Tone.CRITICAL,
    PhaseCategory.UNKNOWN: Tone.NEUTRAL,
}

PRIORITY_TONES: dict[PriorityLevel, Tone] = {
    PriorityLevel.CRITICAL: Tone.CRITICAL,
    PriorityLevel.HIGH: Tone.WARNING,
    PriorityLevel.MEDIUM: Tone.INFO,
    PriorityLevel.LOW: Tone.HEALTHY,
    PriorityLevel.UNKNOWN: Tone.NEUTRAL,
}


def normalize_term(value: str | None) -> str:
    """Lowercase and trim for vocabulary lookups; None becomes ''."""
    if value is None:
        return ""
    return value.strip().lower()


def classify_phase(value: str | None) -> PhaseCategory:
    return PHASE_TERMS.get(normalize_term(value), PhaseCategory.UNKNOWN)


def classify_priority(value: str | None) -> PriorityLevel:
    return PRIORITY_TERMS.get(normalize_term(value), PriorityLevel.UNKNOWN)


def classify_size(value: str | None) -> SizeClass:
    return SIZE_TERMS.get(normalize_term(value), SizeClass.UNKNOWN)


@dataclass(frozen=True)
class Badge:
    """A classification badge: display text, controlled category and tone."""

    text: str
    category: str
    tone: Tone


def phase_badge(value: str | None) -> Badge:
    category = classify_phase(value)
    return Badge(display_text(value), category.value, PHASE_TONES[category])


def priority_badge(value: str | None) -> Badge:
    level = classify_priority(value)
    return Badge(display_text(value), level.value, PRIORITY_TONES[level])


def size_badge(value: str | None) -> Badge:
    size = classify_size(value)
    tone = Tone.NEUTRAL if size is SizeClass.UNKNOWN else Tone.INFO
    return Badge(display_text(value), size.value, tone)
