from datetime import date
from decimal import Decimal

import pytest

from tests.helpers import make_transaction


class TestTransaction:
    """Tests for the Transaction model."""

    def test_income_and_expense(self):
        assert make_transaction(amount="10").is_income
        assert make_transaction(amount="-10").is_expense

    def test_zero_amount_is_neither(self):
        """Test a zero amount is neither income nor expense."""
        t = make_transaction(amount="0")

        assert not t.is_income
        assert not t.is_expense

    def test_annotate_returns_copy(self):
        """Test annotate leaves the input transaction untouched."""
        t = make_transaction()

        tagged = t.annotate(category="Food", is_duplicate=False)

        assert tagged.category == "Food"
        assert tagged.is_duplicate is False
        assert t.category is None
        assert tagged.id == t.id

    def test_annotate_rejects_core_fields(self):
        with pytest.raises(ValueError, match="amount"):
            make_transaction().annotate(amount=Decimal("1"))

    def test_to_dict(self):
        t = make_transaction(
            id="may.csv-3", booking_date=date(2024, 5, 20), amount="-12.50"
        )

        data = t.to_dict()

        assert data["id"] == "may.csv-3"
        assert data["booking_date"] == "2024-05-20"
        assert data["amount"] == "-12.50"
        assert data["source_file"] == "may.csv"
        assert data["category"] is None
