"""
Tests for the display formatters.

Covers:
- Compact and full currency, including the K/M boundaries
- Percent, date, effort and duration rendering
- Totality on None, NaN and garbage input
"""

from datetime import date, datetime
from decimal import Decimal

import pytest

from portavia_engines.formatters import (
    EMPTY,
    MAX_DISPLAY,
    display_text,
    format_currency_compact,
    format_currency_full,
    format_date,
    format_duration,
    format_effort,
    format_percent,
)


class TestCurrencyCompact:
    """Compact dollars: $X, $XK, $X.YM."""

    @pytest.mark.parametrize("amount,expected", [
        (Decimal("999"), "$999"),
        (Decimal("1000"), "$1K"),
        (Decimal("999999"), "$1000K"),
        (Decimal("1000000"), "$1.0M"),
        (None, "$0"),
    ])
    def test_boundaries(self, amount, expected):
        assert format_currency_compact(amount) == expected

    def test_thousands_round_half_away(self):
        assert format_currency_compact(Decimal("120000")) == "$120K"
        assert format_currency_compact(Decimal("1500")) == "$2K"
        assert format_currency_compact(Decimal("2499")) == "$2K"

    def test_millions_one_decimal(self):
        assert format_currency_compact(Decimal("1250000")) == "$1.3M"
        assert format_currency_compact(Decimal("12340000")) == "$12.3M"

    def test_negative_sign_carried_by_scaled_value(self):
        assert format_currency_compact(Decimal("-1500")) == "$-2K"
        assert format_currency_compact(Decimal("-2500000")) == "$-2.5M"

    def test_negative_rounding_to_zero_is_unsigned(self):
        assert format_currency_compact(Decimal("-0.4")) == "$0"

    def test_small_amounts_round_to_whole_dollars(self):
        assert format_currency_compact(Decimal("12.5")) == "$13"
        assert format_currency_compact(Decimal("0")) == "$0"

    def test_accepts_floats_and_strings(self):
        assert format_currency_compact(45000.0) == "$45K"
        assert format_currency_compact("2000000") == "$2.0M"

    @pytest.mark.parametrize("garbage", [float("nan"), float("inf"), "abc", object(), True])
    def test_garbage_renders_zero(self, garbage):
        assert format_currency_compact(garbage) == "$0"


class TestCurrencyFull:
    """Whole dollars with thousands separators."""

    def test_separators(self):
        assert format_currency_full(Decimal("1234567")) == "$1,234,567"

    def test_rounds_cents(self):
        assert format_currency_full(Decimal("999.5")) == "$1,000"

    def test_negative(self):
        assert format_currency_full(Decimal("-1234")) == "-$1,234"

    def test_none(self):
        assert format_currency_full(None) == "$0"


class TestPercent:
    def test_one_decimal(self):
        assert format_percent(Decimal("42.46")) == "42.5%"
        assert format_percent(Decimal("120")) == "120.0%"

    def test_none_and_nan(self):
        assert format_percent(None) == "0%"
        assert format_percent(float("nan")) == "0%"


class TestDate:
    def test_medium_us_format(self):
        assert format_date(date(2025, 1, 6)) == "Jan 6, 2025"

    def test_accepts_datetime_and_iso_string(self):
        assert format_date(datetime(2025, 12, 31, 23, 59)) == "Dec 31, 2025"
        assert format_date("2025-02-06") == "Feb 6, 2025"
        assert format_date("2025-02-06T10:00:00Z") == "Feb 6, 2025"

    @pytest.mark.parametrize("missing", [None, "", "   ", "not-a-date", 20250106])
    def test_missing_renders_dash(self, missing):
        assert format_date(missing) == EMPTY


class TestEffort:
    def test_man_days(self):
        assert format_effort(Decimal("80")) == "10 man-days"

    def test_rounds_half_away(self):
        assert format_effort(Decimal("12")) == "2 man-days"  # 1.5
        assert format_effort(Decimal("11")) == "1 man-days"

    def test_zero_and_none(self):
        assert format_effort(Decimal("0")) == EMPTY
        assert format_effort(None) == EMPTY

    def test_custom_day_length(self):
        assert format_effort(Decimal("75"), hours_per_man_day=Decimal("7.5")) == "10 man-days"


class TestDurationAndText:
    def test_duration(self):
        assert format_duration(24) == "24 days"
        assert format_duration(0) == "0 days"
        assert format_duration(None) == EMPTY

    def test_display_text(self):
        assert display_text("Active") == "Active"
        assert display_text("  ") == EMPTY
        assert display_text(None) == EMPTY


class TestHugeValues:
    """Values beyond Decimal's exponent range render at the display ceiling."""

    HUGE = [
        "1e999999999",
        Decimal("1E+999999999"),
        float("1e308"),
        10**400,
    ]

    @pytest.mark.parametrize("value", HUGE)
    def test_currency_compact(self, value):
        assert format_currency_compact(value) == "$1000000000000000000000000.0M"

    @pytest.mark.parametrize("value", HUGE)
    def test_currency_full(self, value):
        assert format_currency_full(value) == f"${10**30:,}"

    @pytest.mark.parametrize("value", HUGE)
    def test_percent(self, value):
        assert format_percent(value) == format_percent(MAX_DISPLAY)

    @pytest.mark.parametrize("value", HUGE)
    def test_effort(self, value):
        assert format_effort(value) == "125000000000000000000000000000 man-days"

    def test_negative_is_mirrored(self):
        huge = Decimal("-1E+999999999")
        assert format_currency_compact(huge) == "$-1000000000000000000000000.0M"
        assert format_currency_full(huge) == f"-${10**30:,}"
        assert format_percent(huge) == f"-{format_percent(MAX_DISPLAY)}"
        assert format_effort(huge) == "-125000000000000000000000000000 man-days"

    def test_ceiling_itself_is_unchanged(self):
        assert format_percent(MAX_DISPLAY) == f"{10**30}.0%"
