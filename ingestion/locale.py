"""Parsers and formatters for the statement's locale-specific fields.

Amounts use "." as thousands separator and "," as decimal separator
("1.234,56"); booking dates are "YYYY/M/D".
"""

import re
from datetime import date
from decimal import Decimal

from ingestion.errors import FormatError

# ASCII digits only, after thousands separators are removed
_AMOUNT_PATTERN = re.compile(r"-?[0-9]+(\.[0-9]+)?")
_DATE_PART_PATTERN = re.compile(r"[0-9]{1,4}")


def parse_decimal(text: str) -> Decimal:
    """Parse a European formatted amount.

    Examples:
        "1.234,56" -> Decimal("1234.56")
        "-45,99" -> Decimal("-45.99")

    Raises:
        FormatError: If the text is not a plain signed decimal number.
    """
    normalized = text.strip().replace(".", "").replace(",", ".", 1)
    if not _AMOUNT_PATTERN.fullmatch(normalized):
        raise FormatError(f'Invalid number format: "{text}"')
    return Decimal(normalized)


def parse_statement_date(text: str) -> date:
    """Parse a "YYYY/M/D" booking date (month and day may be zero padded).

    Raises:
        FormatError: If the text has the wrong shape or is not a real date.
    """
    parts = text.strip().split("/")
    if len(parts) != 3 or not all(_DATE_PART_PATTERN.fullmatch(p) for p in parts):
        raise FormatError(f'Invalid date format: "{text}"')
    try:
        year, month, day = (int(part) for part in parts)
        return date(year, month, day)
    except ValueError:
        raise FormatError(f'Invalid date: "{text}"')


def format_decimal(value: Decimal) -> str:
    """Format an amount back into statement notation.

    Examples:
        Decimal("1234.56") -> "1.234,56"
        Decimal("-45.9") -> "-45,90"
    """
    sign = "-" if value < 0 else ""
    integer_part, decimal_part = f"{abs(value):.2f}".split(".")
    grouped = f"{int(integer_part):,}".replace(",", ".")
    return f"{sign}{grouped},{decimal_part}"


def format_statement_date(value: date) -> str:
    """Format a date as zero padded "YYYY/MM/DD"."""
    return f"{value.year:04d}/{value.month:02d}/{value.day:02d}"
