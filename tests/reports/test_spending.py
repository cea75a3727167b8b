from decimal import Decimal

from processors.categorization import UNCATEGORIZED
from reports.spending import (
    category_stats,
    category_totals,
    monthly_spending,
    uncategorized_totals,
)

MONTHS = ["2024-05", "2024-06"]


class TestMonthlySpending:
    """Tests for monthly_spending function."""

    def test_zero_filled_and_sorted(self, household_transactions):
        """Test every category appears in every month, biggest first."""
        result = monthly_spending(household_transactions, MONTHS)

        assert [(s.month, s.category, s.amount, s.count) for s in result] == [
            ("2024-05", UNCATEGORIZED, Decimal("250"), 1),
            ("2024-05", "Transport", Decimal("150"), 1),
            ("2024-06", UNCATEGORIZED, Decimal("200"), 1),
            ("2024-06", "Transport", Decimal("0"), 0),
        ]

    def test_no_expenses(self):
        assert monthly_spending([], MONTHS) == []


class TestTotals:
    """Tests for category_totals and uncategorized_totals."""

    def test_category_totals_largest_first(self, household_transactions):
        totals = category_totals(household_transactions)

        assert list(totals.items()) == [
            (UNCATEGORIZED, Decimal("450")),
            ("Transport", Decimal("150")),
        ]

    def test_uncategorized_totals(self, household_transactions):
        result = uncategorized_totals(household_transactions)

        assert result["total"] == Decimal("450")
        assert result["count"] == 2
        assert [t.id for t in result["transactions"]] == ["may.csv-2", "june.csv-2"]


class TestCategoryStats:
    """Tests for category_stats function."""

    def test_stats(self, household_transactions):
        monthly = monthly_spending(household_transactions, MONTHS)

        stats = category_stats(monthly, UNCATEGORIZED)

        assert stats["total"] == Decimal("450")
        assert stats["average"] == Decimal("225")
        assert stats["highest"] == ("2024-05", Decimal("250"))
        assert stats["lowest"] == ("2024-06", Decimal("200"))
        assert stats["standard_deviation"] == Decimal("25")

    def test_unknown_category(self):
        assert category_stats([], "Food")["total"] == 0
