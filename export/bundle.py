"""Export bundle: cleaned statements plus the mapping document in one zip.

Each month is written as "{YYYYMM}-transactions.csv" in the same layout the
ingestion reads, so the bundle can be re-imported in a later session.
"""

import csv
import io
import zipfile
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from export.mapping_document import (
    MappingDocument,
    dump_mapping_document,
    new_mapping_document,
    update_mapping_document,
)
from ingestion.locale import format_decimal, format_statement_date
from ingestion.nordea import CSV_HEADERS, DELIMITER
from logger import get_logger
from models.category import CategoryMapping
from models.transaction import Transaction

logger = get_logger()

MAPPING_FILENAME = "groupings.json"


def _year_month(transaction: Transaction) -> str:
    return f"{transaction.booking_date.year:04d}{transaction.booking_date.month:02d}"


def transactions_to_csv(transactions: Iterable[Transaction], currency: str = "EUR") -> str:
    """Write transactions in the statement CSV layout.

    Sender, Recipient and Balance are not kept on transactions and are left blank.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, delimiter=DELIMITER, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for t in transactions:
        writer.writerow(
            [
                format_statement_date(t.booking_date),
                format_decimal(t.amount),
                "",
                "",
                t.name,
                t.title,
                t.message,
                t.reference_number,
                "",
                currency,
            ]
        )
    return buffer.getvalue()


def group_by_month(transactions: Iterable[Transaction]) -> Dict[str, List[Transaction]]:
    """Group transactions by "YYYYMM", months ascending, dates ascending inside."""
    groups: Dict[str, List[Transaction]] = {}
    for t in transactions:
        groups.setdefault(_year_month(t), []).append(t)
    return {
        month: sorted(groups[month], key=lambda t: t.booking_date)
        for month in sorted(groups)
    }


def build_bundle(
    transactions: List[Transaction],
    mappings: List[CategoryMapping],
    contributors: List[str],
    currency: str = "EUR",
    document: Optional[MappingDocument] = None,
) -> bytes:
    """Build the zip archive in memory.

    Args:
        transactions: Cleaned transactions to export.
        mappings: Category rules to save.
        contributors: Selected contributor names to save.
        currency: Currency written to every CSV row.
        document: Previously loaded mapping document; its createdAt is kept.

    Returns:
        The zip file contents.
    """
    if document is None:
        document = new_mapping_document(contributors, mappings)
    else:
        document = update_mapping_document(document, contributors, mappings)

    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        for month, month_transactions in group_by_month(transactions).items():
            archive.writestr(
                f"{month}-transactions.csv",
                transactions_to_csv(month_transactions, currency),
            )
        archive.writestr(MAPPING_FILENAME, dump_mapping_document(document))

    return buffer.getvalue()


def bundle_filename(transactions: Iterable[Transaction]) -> str:
    """Name the bundle after the month of the latest transaction.

    Raises:
        ValueError: If there are no transactions.
    """
    latest = max((t for t in transactions), key=lambda t: t.booking_date, default=None)
    if latest is None:
        raise ValueError("Cannot name an export bundle without transactions")
    return f"{_year_month(latest)}-bank-export.zip"


def write_bundle(
    directory: Path,
    transactions: List[Transaction],
    mappings: List[CategoryMapping],
    contributors: List[str],
    currency: str = "EUR",
    document: Optional[MappingDocument] = None,
) -> Path:
    """Write the export bundle into a directory and return its path."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / bundle_filename(transactions)
    path.write_bytes(
        build_bundle(transactions, mappings, contributors, currency, document)
    )
    logger.info(f"Wrote export bundle to {path}")
    return path
