"""
portavia_engines.formatters -- Value-to-string normalisation for the panels.

Responsibility:
    Render currency (compact and full), percentages, calendar dates,
    effort and durations the way the dashboard displays them.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import portavia_kernel.domain.

Invariants enforced:
    - Totality: every formatter returns a string for every input,
      including None, NaN, infinities and unparseable values.
    - Rounding is half away from zero on the scaled value (1.25M -> "$1.3M",
      -1500 -> "$-2K").  A value that rounds to zero is shown unsigned.
    - Magnitudes above MAX_DISPLAY render as +/-MAX_DISPLAY.
    - Output is locale-independent: month names and separators are fixed
      to US English regardless of the host locale.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from portavia_kernel.domain.values import (
    ZERO,
    round_half_away,
    round_to_int,
    to_date,
    to_decimal,
)

EMPTY = "—"

DEFAULT_HOURS_PER_MAN_DAY = Decimal("8")

# Decimal cannot quantize past its exponent range; larger values are
# pinned here before any division or rounding.
MAX_DISPLAY = Decimal("1E+30")

_MILLION = Decimal("1000000")
_THOUSAND = Decimal("1000")

_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def _displayable(value: Any) -> Decimal | None:
    number = to_decimal(value)
    if number is None:
        return None
    if abs(number) > MAX_DISPLAY:
        return MAX_DISPLAY.copy_sign(number)
    return number


def format_currency_compact(amount: Any) -> str:
    """
    Compact dollar amount: ``$1.2M``, ``$450K``, ``$999``.

    None (or anything non-numeric) renders as ``$0``.
    """
    value = _displayable(amount)
    if value is None:
        return "$0"

    magnitude = abs(value)
    if magnitude >= _MILLION:
        return f"${round_half_away(value / _MILLION, 1):f}M"
    if magnitude >= _THOUSAND:
        return f"${round_half_away(value / _THOUSAND):f}K"
    return f"${round_half_away(value):f}"


def format_currency_full(amount: Any) -> str:
    """Whole-dollar amount with thousands separators: ``$1,234,567``."""
    value = _displayable(amount)
    if value is None:
        return "$0"

    dollars = round_to_int(value)
    if dollars < 0:
        return f"-${-dollars:,}"
    return f"${dollars:,}"


def format_percent(value: Any) -> str:
    """One-decimal percentage: ``42.5%``.  None/NaN render as ``0%``."""
    number = _displayable(value)
    if number is None:
        return "0%"
    return f"{round_half_away(number, 1):f}%"


def format_date(value: Any) -> str:
    """US English medium date: ``Jan 6, 2025``.  Missing dates render as ``—``."""
    day = to_date(value)
    if day is None:
        return EMPTY
    return f"{_MONTHS[day.month - 1]} {day.day}, {day.year}"


def format_effort(
    hours: Any,
    hours_per_man_day: Decimal = DEFAULT_HOURS_PER_MAN_DAY,
) -> str:
    """Effort in man-days (hours / hours_per_man_day, rounded).  Zero or missing is ``—``."""
    value = _displayable(hours)
    if value is None or value == ZERO or hours_per_man_day <= ZERO:
        return EMPTY
    return f"{round_to_int(value / hours_per_man_day)} man-days"


def format_duration(working_days: int | None) -> str:
    """Working-day duration: ``24 days``, or ``—`` when unknown."""
    if working_days is None:
        return EMPTY
    return f"{working_days} days"


def display_text(value: str | None) -> str:
    """Pass a label through, or ``—`` when it is missing or blank."""
    if value is None or not value.strip():
        return EMPTY
    return value
