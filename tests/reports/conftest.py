import pytest

from processors.contributors import tag_contributors

CONTRIBUTORS = ["Alex", "Jordan"]


@pytest.fixture
def tagged_transactions(household_transactions):
    """Household transactions with Alex and Jordan tagged as contributors."""
    return tag_contributors(household_transactions, CONTRIBUTORS)
