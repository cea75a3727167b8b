"""Shared pytest fixtures for all tests."""

from datetime import date

import pytest

from config import Config
from tests.helpers import make_transaction


@pytest.fixture
def test_config(tmp_path):
    """Create a test configuration pointing at a temporary directory.

    Args:
        tmp_path: pytest tmp_path fixture for temporary directory.

    Returns:
        Config: Test configuration object.
    """
    return Config(
        base_dir=tmp_path / "potti",
        log_level="DEBUG",
        log_dir=tmp_path / "potti" / "logs",
        export_dir=tmp_path / "potti" / "exports",
        mappings_file=tmp_path / "potti" / "groupings.json",
    )


@pytest.fixture
def household_transactions():
    """Two months of household transactions from two overlapping files.

    Returns:
        list: Transactions ordered by date, as ingest_many would return them.
    """
    return [
        make_transaction(
            id="may.csv-0", booking_date=date(2024, 5, 1), amount="1000.00",
            title="Salary", name="ALEX ROWAN",
        ),
        make_transaction(
            id="may.csv-1", booking_date=date(2024, 5, 3), amount="600.00",
            title="Transfer", name="Jordan Lee",
        ),
        make_transaction(
            id="may.csv-2", booking_date=date(2024, 5, 10), amount="-250.00",
            title="PRISMA HERTTONIEMI",
        ),
        make_transaction(
            id="may.csv-3", booking_date=date(2024, 5, 20), amount="-150.00",
            title="HSL Mobile", category="Transport",
        ),
        make_transaction(
            id="june.csv-0", booking_date=date(2024, 6, 1), amount="500.00",
            title="Salary", name="ALEX ROWAN",
        ),
        make_transaction(
            id="june.csv-1", booking_date=date(2024, 6, 2), amount="50.00",
            title="Refund", name="Verkkokauppa",
        ),
        make_transaction(
            id="june.csv-2", booking_date=date(2024, 6, 15), amount="-200.00",
            title="PRISMA KAMPPI",
        ),
    ]
