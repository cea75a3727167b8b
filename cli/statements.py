#!/usr/bin/env python3

import sys
from collections import Counter
from pathlib import Path
from typing import List

from ingestion import ParseError, StatementFile, ingest_many
from processors.deduplication import find_duplicate_groups
from reports.data_quality import date_range
from logger import get_logger

logger = get_logger()


def statement_labels(paths: List[str]) -> List[str]:
    """Choose a unique source label for each statement path.

    Labels are file names, except where two paths share a file name; those
    are labelled with the path as given so their transaction ids differ.

    Raises:
        ValueError: If the same path is given more than once.
    """
    names = Counter(Path(p).name for p in paths)
    labels = [Path(p).name if names[Path(p).name] == 1 else p for p in paths]

    repeated = sorted(label for label, count in Counter(labels).items() if count > 1)
    if repeated:
        raise ValueError(f"Statement file given more than once: {', '.join(repeated)}")
    return labels


def read_statement_files(paths: List[str]) -> List[StatementFile]:
    """Read statement CSV files from disk, exiting if one is missing or repeated."""
    try:
        labels = statement_labels(paths)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    files = []
    for raw_path, label in zip(paths, labels):
        path = Path(raw_path)
        if not path.exists():
            logger.error(f"File not found: {raw_path}")
            sys.exit(1)
        with open(path, "r", encoding="utf-8") as f:
            files.append(StatementFile(label=label, content=f.read()))
    return files


def ingest_statement_files(files: List[StatementFile]):
    """Ingest read statement files, exiting with the parse error on failure."""
    try:
        return ingest_many(files)
    except ParseError as e:
        logger.error(f"Error reading {e.source_label}: {e}")
        sys.exit(1)


def load_transactions(paths: List[str]):
    return ingest_statement_files(read_statement_files(paths))


def cmd_check(args, config):
    """Ingest statement files and show what they contain."""
    files = read_statement_files(args.files)
    transactions = ingest_statement_files(files)

    print("\nStatements:")
    print("=" * 80)
    for statement in files:
        file_transactions = [
            t for t in transactions if t.source_file == statement.label
        ]
        span = date_range(file_transactions)
        print(f"File: {statement.label}")
        print(f"  Transactions: {len(file_transactions)}")
        if span:
            print(f"  Dates: {span.start.isoformat()} to {span.end.isoformat()}")
        print("-" * 80)

    print(f"\nTotal transactions: {len(transactions)}")


def cmd_duplicates(args, config):
    """List transactions that appear in more than one statement file."""
    transactions = load_transactions(args.files)
    groups = find_duplicate_groups(transactions)

    if not groups:
        print("No duplicates found.")
        return

    print("\nDuplicate transactions:")
    print("=" * 80)
    for group in groups:
        print(
            f"{group.booking_date.isoformat()}  {group.amount:>12,.2f}  "
            f"{group.title} (ref {group.reference_number or '-'})"
        )
        for t in group.transactions:
            print(f"    {t.source_file}")
    print(f"\nTotal duplicate groups: {len(groups)}")


def setup_parser(subparsers):
    """Setup statements subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "statements",
        help="Inspect bank statement files",
        description="Validate statement CSV files and find overlapping transactions",
    )

    statements_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available statement commands",
        dest="subcommand",
        required=True,
    )

    check_parser = statements_subparsers.add_parser(
        "check", help="Validate statement files and summarize them"
    )
    check_parser.add_argument("files", nargs="+", help="Statement CSV files")
    check_parser.set_defaults(func=cmd_check)

    duplicates_parser = statements_subparsers.add_parser(
        "duplicates", help="List transactions found in more than one file"
    )
    duplicates_parser.add_argument("files", nargs="+", help="Statement CSV files")
    duplicates_parser.set_defaults(func=cmd_duplicates)
