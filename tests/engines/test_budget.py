"""
Tests for the budget calculator.

Covers:
- Spent, remaining, percent spent and utilisation
- Over-budget, low-buffer and remaining-low flags and their thresholds
- Cost breakdown ordering and percentages
"""

from decimal import Decimal

from portavia_engines.budget import (
    BudgetCalculator,
    BudgetState,
    BudgetThresholds,
    CostCategory,
)
from portavia_engines.vocabulary import Tone


class TestSummarize:
    def setup_method(self):
        self.calc = BudgetCalculator()

    def test_healthy(self):
        s = self.calc.summarize(budget=Decimal("100000"), actual_cost=Decimal("40000"))
        assert s.spent == Decimal("40000")
        assert s.remaining == Decimal("60000")
        assert s.percent_spent == 40
        assert s.utilization_percent == Decimal("40.0")
        assert s.is_over_budget is False
        assert s.is_low_buffer is False
        assert s.is_remaining_low is False
        assert s.state == BudgetState.HEALTHY
        assert s.utilization_tone == Tone.NEUTRAL
        assert s.remaining_tone == Tone.HEALTHY

    def test_over_budget(self):
        s = self.calc.summarize(budget=Decimal("100000"), actual_cost=Decimal("120000"))
        assert s.remaining == Decimal("0")
        assert s.utilization_percent == Decimal("120.0")
        assert s.percent_spent == 120
        assert s.is_over_budget is True
        assert s.is_low_buffer is False
        assert s.state == BudgetState.OVER_BUDGET
        assert s.utilization_tone == Tone.CRITICAL

    def test_low_buffer_window(self):
        assert self.calc.summarize(budget=Decimal("100"), actual_cost=Decimal("85")).is_low_buffer is False
        assert self.calc.summarize(budget=Decimal("100"), actual_cost=Decimal("86")).is_low_buffer is True
        assert self.calc.summarize(budget=Decimal("100"), actual_cost=Decimal("100")).is_low_buffer is True

    def test_low_buffer_uses_rounded_percent(self):
        """85.4% rounds to 85 and is not low buffer; 85.5% rounds to 86."""
        assert self.calc.summarize(budget=Decimal("1000"), actual_cost=Decimal("854")).is_low_buffer is False
        assert self.calc.summarize(budget=Decimal("1000"), actual_cost=Decimal("855")).is_low_buffer is True

    def test_exactly_at_budget_is_not_over(self):
        s = self.calc.summarize(budget=Decimal("5000"), actual_cost=Decimal("5000"))
        assert s.is_over_budget is False
        assert s.state == BudgetState.LOW_BUFFER

    def test_remaining_low(self):
        s = self.calc.summarize(budget=Decimal("100000"), actual_cost=Decimal("86000"))
        assert s.is_remaining_low is True
        assert s.remaining_tone == Tone.WARNING
        s = self.calc.summarize(budget=Decimal("100000"), actual_cost=Decimal("85000"))
        assert s.is_remaining_low is False

    def test_zero_budget(self):
        s = self.calc.summarize(budget=Decimal("0"), actual_cost=Decimal("500"))
        assert s.percent_spent == 0
        assert s.utilization_percent == Decimal("0")
        assert s.is_over_budget is True
        assert s.is_remaining_low is False

    def test_missing_amounts_read_as_zero(self):
        s = self.calc.summarize(budget=None, actual_cost=None)
        assert s.budget == Decimal("0")
        assert s.spent == Decimal("0")
        assert s.is_over_budget is False

    def test_negative_amounts_clamp(self):
        s = self.calc.summarize(budget=Decimal("-100"), actual_cost=Decimal("-5"))
        assert s.budget == Decimal("0")
        assert s.spent == Decimal("0")

    def test_custom_thresholds(self):
        calc = BudgetCalculator(BudgetThresholds(
            low_buffer_percent=70, remaining_low_fraction=Decimal("0.30"),
        ))
        s = calc.summarize(budget=Decimal("100"), actual_cost=Decimal("75"))
        assert s.is_low_buffer is True
        assert s.is_remaining_low is True
        assert s.utilization_tone == Tone.WARNING


class TestBreakdown:
    def setup_method(self):
        self.calc = BudgetCalculator()

    def test_order_and_percentages(self):
        entries = self.calc.breakdown(
            budget=Decimal("100000"),
            actual_cost=Decimal("40000"),
            categories={
                CostCategory.OTHER: Decimal("0"),
                CostCategory.INFRASTRUCTURE: Decimal("5000"),
                CostCategory.LABOR: Decimal("25000"),
                CostCategory.MATERIALS: Decimal("10000"),
            },
        )
        assert [e.category for e in entries] == [
            CostCategory.LABOR, CostCategory.MATERIALS, CostCategory.INFRASTRUCTURE,
        ]
        labor = entries[0]
        assert labor.label == "Labor"
        assert labor.amount == Decimal("25000")
        assert labor.percent_of_total == Decimal("62.5")
        assert labor.percent_of_budget == Decimal("25.0")

    def test_one_decimal_rounding(self):
        entries = self.calc.breakdown(
            budget=Decimal("0"),
            actual_cost=Decimal("3"),
            categories={CostCategory.LABOR: Decimal("1"), CostCategory.OTHER: Decimal("2")},
        )
        assert entries[0].percent_of_total == Decimal("33.3")
        assert entries[1].percent_of_total == Decimal("66.7")
        assert entries[0].percent_of_budget == Decimal("0")

    def test_all_zero_is_empty(self):
        entries = self.calc.breakdown(
            budget=Decimal("100"),
            actual_cost=Decimal("0"),
            categories={c: Decimal("0") for c in CostCategory},
        )
        assert entries == ()

    def test_missing_categories(self):
        assert self.calc.breakdown(budget=None, actual_cost=None, categories=None) == ()
        entries = self.calc.breakdown(
            budget=Decimal("10"), actual_cost=Decimal("4"),
            categories={CostCategory.MATERIALS: None, CostCategory.OTHER: Decimal("4")},
        )
        assert [e.category for e in entries] == [CostCategory.OTHER]
