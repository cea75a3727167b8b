"""Helper utilities for tests."""

from datetime import date
from decimal import Decimal
from typing import List, Optional

from ingestion.nordea import CSV_HEADERS
from models.transaction import Transaction

HEADER_LINE = ";".join(CSV_HEADERS)


def statement_row(
    booking_date: str = "2024/5/1",
    amount: str = "-10,00",
    name: str = "",
    title: str = "SHOP",
    message: str = "",
    reference: str = "",
) -> str:
    """Build one semicolon separated statement line."""
    return ";".join(
        [
            booking_date,
            amount,
            "FI12 3456 7890",
            "",
            name,
            title,
            message,
            reference,
            "1.000,00",
            "EUR",
        ]
    )


def build_statement(rows: List[str], header: str = HEADER_LINE) -> str:
    """Join a header and rows into CSV content."""
    return "\n".join([header] + rows) + "\n"


def make_transaction(
    id: str = "file.csv-0",
    booking_date: date = date(2024, 5, 1),
    amount: str = "-10.00",
    title: str = "SHOP",
    name: str = "",
    reference_number: str = "",
    message: str = "",
    source_file: Optional[str] = None,
    category: Optional[str] = None,
    contributor: Optional[str] = None,
) -> Transaction:
    """Create a Transaction with sensible defaults."""
    return Transaction(
        id=id,
        booking_date=booking_date,
        amount=Decimal(amount),
        title=title,
        name=name,
        reference_number=reference_number,
        message=message,
        source_file=source_file or id.rsplit("-", 1)[0],
        category=category,
        contributor=contributor,
    )
