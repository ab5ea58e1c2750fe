"""
Values -- Total coercion helpers for raw fact values.

Responsibility:
    Turns the loosely-typed values that arrive from the fact source (driver
    floats, Decimals, numeric strings, ISO date strings, NULLs) into the
    narrow types the engines compute with: ``Decimal``, ``int`` and
    ``date``.  Also provides the one rounding rule used everywhere:
    half away from zero.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Imported by the engines and the summary assembler.

Invariants enforced:
    - Decimal-only arithmetic: floats are converted through ``str`` so the
      shortest repr is preserved (0.1 -> Decimal("0.1")), never the binary
      expansion.
    - Totality: every helper returns a value for every input; anything that
      cannot be interpreted maps to the documented default.
    - Booleans are not numbers here (``True`` is not a count of 1).

Failure modes:
    None -- these helpers never raise.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def to_decimal(value: Any) -> Decimal | None:
    """
    Interpret ``value`` as a finite Decimal.

    Postconditions:
        Returns None for None, booleans, NaN, infinities and anything that
        does not parse as a number.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        return Decimal(value)
    elif isinstance(value, (float, str)):
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            return None
    else:
        return None
    if not result.is_finite():
        return None
    return result


def to_amount(value: Any) -> Decimal | None:
    """Interpret ``value`` as a non-negative amount; negatives clamp to zero."""
    result = to_decimal(value)
    if result is None:
        return None
    return result if result >= ZERO else ZERO


def to_count(value: Any) -> int:
    """
    Interpret ``value`` as a non-negative integer counter.

    Postconditions:
        Missing, malformed, negative or fractional-looking garbage maps to a
        value >= 0.  Fractional numbers are truncated toward zero.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return value if value > 0 else 0
    number = to_decimal(value)
    if number is None or number <= ZERO:
        return 0
    return int(number)


def to_date(value: Any) -> date | None:
    """
    Interpret ``value`` as a calendar date.

    Accepts ``date``, ``datetime`` (time of day dropped) and ISO-8601
    strings, with or without a time part.  Returns None otherwise.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None
    return None


def to_text(value: Any) -> str | None:
    """Pass strings through; blank strings and non-strings become None."""
    if isinstance(value, str) and value.strip():
        return value
    return None


def round_half_away(value: Decimal, places: int = 0) -> Decimal:
    """
    Round ``value`` to ``places`` decimals, halves away from zero.

    ``Decimal``'s ROUND_HALF_UP is symmetric: 2.5 -> 3 and -2.5 -> -3.
    A result of negative zero is normalised to zero.
    """
    exponent = Decimal(1).scaleb(-places)
    with localcontext() as ctx:
        # quantize needs every integer digit plus the kept places
        ctx.prec = max(ctx.prec, value.adjusted() + places + 2)
        result = value.quantize(exponent, rounding=ROUND_HALF_UP)
    if result.is_zero():
        return abs(result)
    return result


def round_to_int(value: Decimal) -> int:
    """Round half away from zero and return a Python int."""
    return int(round_half_away(value))


def percent_of(part: Decimal, whole: Decimal) -> Decimal:
    """``part / whole * 100`` unrounded; zero when ``whole`` is not positive."""
    if whole <= ZERO:
        return ZERO
    return part * HUNDRED / whole
