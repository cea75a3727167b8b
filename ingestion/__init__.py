from ingestion.errors import FormatError, ParseError
from ingestion.nordea import StatementFile, ingest, ingest_many

__all__ = [
    "FormatError",
    "ParseError",
    "StatementFile",
    "ingest",
    "ingest_many",
]
