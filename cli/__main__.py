#!/usr/bin/env python3
"""
Potti CLI - Command-line interface for bank statement analysis.

Usage:
    python -m cli <command> [subcommand] [options]

Commands:
    statements   Validate statement files and find duplicates
    contributors Rank income contributors
    categories   Manage category rules
    report       Generate the full report

Examples:
    python -m cli statements check may.csv june.csv
    python -m cli contributors may.csv june.csv --limit 5
    python -m cli categories add "PRISMA" Groceries --match contains
    python -m cli report may.csv june.csv --contributors Alex Jordan --export
"""

import sys
import argparse
from cli import categories, contributors, report, statements
from config import load_config
from logger import setup_logging


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="cli",
        description="Potti - Household bank statement analysis",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    statements.setup_parser(subparsers)
    contributors.setup_parser(subparsers)
    categories.setup_parser(subparsers)
    report.setup_parser(subparsers)

    args = parser.parse_args()

    if hasattr(args, "func"):
        try:
            config = load_config()
            setup_logging(config)
            args.func(args, config)
        except Exception as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
