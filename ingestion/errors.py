"""Errors raised while reading bank statements."""

from typing import Optional


class FormatError(ValueError):
    """A single field (date or amount) is not in the expected format."""


class ParseError(ValueError):
    """A statement file or one of its rows could not be ingested.

    Args:
        reason: Human readable description of the failure.
        source_label: Name of the file being ingested.
        row: 1-based data row number, when the failure is row specific.
    """

    def __init__(self, reason: str, source_label: str, row: Optional[int] = None):
        self.reason = reason
        self.source_label = source_label
        self.row = row
        super().__init__(reason)

    def __str__(self) -> str:
        location = self.source_label
        if self.row is not None:
            location = f"{location}, row {self.row}"
        return f"{self.reason} ({location})"
