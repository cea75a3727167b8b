import csv
import io
import logging
from dataclasses import dataclass
from typing import Iterable, List

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ingestion.errors import FormatError, ParseError
from ingestion.locale import parse_decimal, parse_statement_date
from models.transaction import Transaction

logger = logging.getLogger(__name__)

DELIMITER = ";"

CSV_HEADERS = [
    "Booking date",
    "Amount",
    "Sender",
    "Recipient",
    "Name",
    "Title",
    "Message",
    "Reference number",
    "Balance",
    "Currency",
]


class RawStatementRow(BaseModel):
    """One data row exactly as it appears in a Nordea CSV export."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    booking_date: str = Field(alias="Booking date")
    amount: str = Field(alias="Amount")
    sender: str = Field(alias="Sender")
    recipient: str = Field(alias="Recipient")
    name: str = Field(alias="Name")
    title: str = Field(alias="Title")
    message: str = Field(alias="Message")
    reference_number: str = Field(alias="Reference number")
    balance: str = Field(alias="Balance")
    currency: str = Field(alias="Currency")


@dataclass(frozen=True)
class StatementFile:
    """A statement export to ingest: its display label and text content."""

    label: str
    content: str


def row_to_transaction(
    row: RawStatementRow, source_label: str, row_index: int
) -> Transaction:
    """Convert a validated CSV row to a Transaction.

    Args:
        row: Validated raw row.
        source_label: Name of the file the row came from.
        row_index: 0-based position of the row among the file's data rows.

    Returns:
        Transaction object.

    Raises:
        FormatError: If the booking date or amount cannot be parsed.
    """
    return Transaction(
        id=f"{source_label}-{row_index}",
        booking_date=parse_statement_date(row.booking_date),
        amount=parse_decimal(row.amount),
        title=row.title.strip(),
        name=row.name.strip(),
        reference_number=row.reference_number,
        message=row.message.strip(),
        source_file=source_label,
    )


def _read_rows(content: str, source_label: str):
    """Split CSV content into its header and data rows."""
    reader = csv.DictReader(io.StringIO(content), delimiter=DELIMITER, strict=True)
    try:
        rows = list(reader)
    except csv.Error as e:
        # line_num counts the header line; errors report data rows
        row = reader.line_num - 1 or None
        raise ParseError(f"Parse error: {e}", source_label, row) from e

    # DictReader collects surplus fields under the None key
    for i, row in enumerate(rows):
        if None in row:
            raise ParseError(
                f"Parse error: too many fields, expected {len(reader.fieldnames)}",
                source_label,
                i + 1,
            )
    return reader.fieldnames or [], rows


def ingest(content: str, source_label: str) -> List[Transaction]:
    """
    Ingest a Nordea bank statement CSV export.

    Expected format:
    - Header row (line 1): Booking date;Amount;Sender;Recipient;Name;Title;Message;Reference number;Balance;Currency
    - Transaction rows (line 2+): "2024/5/1;-45,99;...", amounts in European notation

    Rows with a blank booking date are skipped. Row ids count every data row,
    skipped ones included.

    Raises:
        ParseError: If the file is empty, malformed, lacks columns or a row
            cannot be converted.
    """
    trimmed = content.lstrip("\ufeff").strip()
    if not trimmed:
        raise ParseError("CSV file is empty", source_label)

    header, rows = _read_rows(trimmed, source_label)

    if not rows:
        raise ParseError("CSV file contains no data rows", source_label)

    missing_columns = [col for col in CSV_HEADERS if col not in header]
    if missing_columns:
        raise ParseError(
            f"Missing required columns: {', '.join(missing_columns)}", source_label
        )

    logger.info(f"Validated Nordea CSV header for {source_label}")

    transactions = []
    for i, raw in enumerate(rows):
        try:
            row = RawStatementRow.model_validate(raw)
        except ValidationError as e:
            raise ParseError(f"Invalid row data: {e}", source_label, i + 1) from e

        if not row.booking_date.strip():
            logger.debug(f"Skipping row {i + 1} of {source_label}: empty booking date")
            continue

        try:
            transactions.append(row_to_transaction(row, source_label, i))
        except FormatError as e:
            raise ParseError(
                f"Failed to parse row {i + 1}: {e}", source_label, i + 1
            ) from e

    logger.info(
        f"Successfully ingested {len(transactions)} transactions from {source_label}"
    )
    return transactions


def ingest_many(files: Iterable[StatementFile]) -> List[Transaction]:
    """Ingest several statement files into one date-ordered transaction list.

    The first failing file aborts the whole batch; no partial result is returned.
    Transactions on the same date keep file order, then in-file order.

    Raises:
        ParseError: From the first file that fails to ingest, or when two
            files share a label (their transaction ids would collide).
    """
    all_transactions: List[Transaction] = []
    seen_labels = set()
    file_count = 0
    for statement in files:
        if statement.label in seen_labels:
            raise ParseError("Duplicate source label", statement.label)
        seen_labels.add(statement.label)
        all_transactions.extend(ingest(statement.content, statement.label))
        file_count += 1

    all_transactions.sort(key=lambda t: t.booking_date)

    logger.info(
        f"Ingested {len(all_transactions)} transactions from {file_count} file(s)"
    )
    return all_transactions

