"""
portavia_engines.temporal -- Working-day duration and schedule position.

Responsibility:
    Count working days between two dates, compute signed days remaining
    until the target end date, and measure how far through its scheduled
    window a project is.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import portavia_kernel.domain.

Invariants enforced:
    - Purity: "today" is always a parameter; no clock access.
    - Working days are Monday through Friday; no holiday calendar.
    - Both ends of a duration are inclusive.
    - Dates are calendar dates; datetimes are truncated to their date, so
      days remaining never drifts across DST changes.

Failure modes:
    None -- missing dates yield None, inverted ranges yield 0.

Usage:
    from datetime import date
    from portavia_engines.temporal import TemporalCalculator

    calc = TemporalCalculator()
    calc.working_days(start=date(2025, 1, 3), end=date(2025, 1, 6))  # 2
    calc.days_remaining(end=date(2025, 2, 6), today=date(2025, 1, 20))  # 17
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any

from portavia_kernel.domain.values import to_date
from portavia_kernel.logging_config import get_logger
from portavia_engines.tracer import traced_engine

logger = get_logger("engines.temporal")

_WORKDAYS_PER_WEEK = 5
_SATURDAY = 5  # date.weekday(): Monday == 0


class TemporalCalculator:
    """
    Pure calculator for schedule arithmetic.

    Contract:
        No I/O, no clock.  Accepts ``date``, ``datetime`` or ISO strings;
        anything else is treated as missing.
    Guarantees:
        - ``working_days`` is None iff a date is missing, 0 when start > end,
          otherwise between 0 and the inclusive calendar-day span.
        - ``days_remaining`` is negative when the end date has passed.
    """

    @traced_engine("temporal", "1.0", fingerprint_fields=("start", "end"))
    def working_days(self, start: Any = None, end: Any = None) -> int | None:
        """
        Count Monday-Friday days in ``[start, end]``.

        Full weeks contribute five days each; the leftover days (fewer than
        seven) are checked one by one.
        """
        start_day = to_date(start)
        end_day = to_date(end)
        if start_day is None or end_day is None:
            return None
        if start_day > end_day:
            return 0

        span = (end_day - start_day).days + 1
        full_weeks, leftover = divmod(span, 7)
        count = full_weeks * _WORKDAYS_PER_WEEK

        first_weekday = start_day.weekday()
        for offset in range(leftover):
            if (first_weekday + offset) % 7 < _SATURDAY:
                count += 1

        logger.debug("working_days_calculated", extra={
            "start": start_day,
            "end": end_day,
            "calendar_days": span,
            "working_days": count,
        })
        return count

    @traced_engine("temporal", "1.0", fingerprint_fields=("end", "today"))
    def days_remaining(self, end: Any = None, today: Any = None) -> int | None:
        """
        Whole days from ``today`` until ``end``; negative once overdue.

        Returns None when the end date (or today) is missing.
        """
        end_day = to_date(end)
        today_day = to_date(today)
        if end_day is None or today_day is None:
            return None
        return (end_day - today_day).days

    def elapsed_fraction(
        self,
        start: Any = None,
        end: Any = None,
        today: Any = None,
    ) -> Decimal | None:
        """
        Share of the scheduled window that has elapsed as of ``today``.

        ``(today - start) / (end - start)`` in days, unclamped: negative
        before the start, above 1 once overdue.  A zero-length or inverted
        window counts as fully elapsed from its start date on.  None when
        any date is missing.
        """
        start_day = to_date(start)
        end_day = to_date(end)
        today_day = to_date(today)
        if start_day is None or end_day is None or today_day is None:
            return None

        window = (end_day - start_day).days
        elapsed = (today_day - start_day).days
        if window <= 0:
            return Decimal(1) if elapsed >= 0 else Decimal(0)
        return Decimal(elapsed) / Decimal(window)


def describe_days_remaining(days: int | None) -> str | None:
    """
    Caption under the days-remaining figure.

    The figure itself is shown as ``abs(days)``; the caption carries the
    direction.
    """
    if days is None:
        return None
    if days < 0:
        return "days overdue"
    if days == 0:
        return "Due today"
    if days == 1:
        return "day left"
    return "days left"


def is_weekday(day: date) -> bool:
    """True for Monday through Friday."""
    return day.weekday() < _SATURDAY
