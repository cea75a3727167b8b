import io
import json
import zipfile
from datetime import date

import pytest

from export.bundle import (
    MAPPING_FILENAME,
    build_bundle,
    bundle_filename,
    group_by_month,
    transactions_to_csv,
    write_bundle,
)
from export.mapping_document import new_mapping_document
from ingestion import ingest
from models.category import CategoryMapping
from tests.helpers import HEADER_LINE, make_transaction

MAPPINGS = [CategoryMapping("PRISMA", "Groceries", "contains")]


def _open(data: bytes) -> zipfile.ZipFile:
    return zipfile.ZipFile(io.BytesIO(data))


class TestTransactionsToCsv:
    """Tests for transactions_to_csv function."""

    def test_statement_layout(self):
        t = make_transaction(
            booking_date=date(2024, 5, 3),
            amount="-1234.50",
            title="PRISMA",
            name="S-Market",
            reference_number="00123",
        )

        lines = transactions_to_csv([t]).splitlines()

        assert lines[0] == HEADER_LINE
        assert lines[1] == "2024/05/03;-1.234,50;;;S-Market;PRISMA;;00123;;EUR"

    def test_reingests(self, household_transactions):
        """Test exported CSV parses back into the same core fields."""
        content = transactions_to_csv(household_transactions)

        reloaded = ingest(content, "export.csv")

        assert [(t.booking_date, t.amount, t.title, t.name) for t in reloaded] == [
            (t.booking_date, t.amount, t.title, t.name) for t in household_transactions
        ]


class TestBuildBundle:
    """Tests for build_bundle function."""

    def test_contents(self, household_transactions):
        data = build_bundle(household_transactions, MAPPINGS, ["Alex", "Jordan"])

        with _open(data) as archive:
            assert sorted(archive.namelist()) == [
                "202405-transactions.csv",
                "202406-transactions.csv",
                MAPPING_FILENAME,
            ]
            may = archive.read("202405-transactions.csv").decode("utf-8")
            document = json.loads(archive.read(MAPPING_FILENAME))

        assert len(may.splitlines()) == 5
        assert document["contributors"] == ["Alex", "Jordan"]
        assert document["categories"][0]["matchType"] == "contains"

    def test_keeps_existing_created_at(self, household_transactions):
        existing = new_mapping_document([], [])

        with _open(build_bundle(household_transactions, [], [], document=existing)) as archive:
            document = json.loads(archive.read(MAPPING_FILENAME))

        assert document["createdAt"].startswith(existing.created_at.isoformat()[:19])

    def test_no_transactions_still_has_document(self):
        with _open(build_bundle([], MAPPINGS, [])) as archive:
            assert archive.namelist() == [MAPPING_FILENAME]


class TestNaming:
    """Tests for bundle naming and grouping."""

    def test_filename_uses_latest_month(self, household_transactions):
        assert bundle_filename(household_transactions) == "202406-bank-export.zip"

    def test_filename_requires_transactions(self):
        with pytest.raises(ValueError):
            bundle_filename([])

    def test_group_by_month_orders_dates(self):
        transactions = [
            make_transaction(id="a-0", booking_date=date(2024, 6, 9)),
            make_transaction(id="a-1", booking_date=date(2024, 5, 2)),
            make_transaction(id="a-2", booking_date=date(2024, 6, 1)),
        ]

        groups = group_by_month(transactions)

        assert list(groups) == ["202405", "202406"]
        assert [t.id for t in groups["202406"]] == ["a-2", "a-0"]


def test_write_bundle(tmp_path, household_transactions):
    path = write_bundle(tmp_path / "exports", household_transactions, MAPPINGS, ["Alex"])

    assert path == tmp_path / "exports" / "202406-bank-export.zip"
    with _open(path.read_bytes()) as archive:
        assert MAPPING_FILENAME in archive.namelist()
