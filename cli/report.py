#!/usr/bin/env python3

import sys
from pathlib import Path

from cli.statements import read_statement_files
from export.bundle import write_bundle
from export.mapping_document import read_mapping_file
from workflow.pipeline import run_pipeline
from logger import get_logger

logger = get_logger()


def _print_report(report):
    quality = report.data_quality
    print("\nData quality")
    print("=" * 80)
    if quality.date_range:
        print(
            f"Period: {quality.date_range.start.isoformat()} to "
            f"{quality.date_range.end.isoformat()}"
        )
    print(f"Files: {quality.total_files}")
    print(
        f"Transactions: {quality.total_transactions} "
        f"({quality.income_transactions} income, {quality.expense_transactions} expense)"
    )
    print(f"Duplicates removed: {quality.duplicates_removed}")
    if quality.missing_months:
        print(f"Missing months: {', '.join(quality.missing_months)}")
    if quality.missing_weeks:
        print(f"Missing weeks: {', '.join(quality.missing_weeks)}")

    contributions = report.contributions
    print("\nContributions")
    print("=" * 80)
    for summary in contributions.contributors:
        print(
            f"{summary.name:<25} total {summary.total:>12,.2f}  "
            f"monthly avg {summary.monthly_average:>10,.2f}"
        )
    print(f"Other income: {contributions.other_income:,.2f}")
    if len(contributions.contributors) >= 2:
        print(f"Difference: {contributions.total_difference:,.2f}")
        print(f"Equalisation transfer: {contributions.equalisation_amount:,.2f}")

    print("\nSpending by category")
    print("=" * 80)
    for category, amount in report.spending.by_category.items():
        print(f"{category:<30} {amount:>12,.2f}")

    print("\nCash flow")
    print("=" * 80)
    for month in report.cash_flow.monthly:
        print(
            f"{month.month}  in {month.income:>10,.2f}  out {month.outgoings:>10,.2f}  "
            f"net {month.net:>10,.2f}  balance {month.cumulative_balance:>10,.2f}"
        )
    print(
        f"Total: in {report.cash_flow.total_income:,.2f}  "
        f"out {report.cash_flow.total_outgoings:,.2f}  "
        f"net {report.cash_flow.net_balance:,.2f}"
    )


def cmd_report(args, config):
    """Run the full pipeline over statement files and print the report."""
    files = read_statement_files(args.files)
    mappings_path = Path(args.mappings) if args.mappings else config.mappings_file
    document = read_mapping_file(mappings_path)

    state = run_pipeline(
        files,
        document=document,
        contributors=args.contributors,
        contributor_count=config.contributor_count,
        keep_duplicates=args.keep_duplicates,
    )
    if state.error:
        logger.error(state.error)
        sys.exit(1)

    _print_report(state.report)

    if args.export:
        if not state.transactions:
            logger.error("Nothing to export.")
            sys.exit(1)
        path = write_bundle(
            config.export_dir,
            list(state.transactions),
            list(state.category_mappings),
            list(state.selected_contributors),
            currency=config.currency,
            document=document,
        )
        print(f"\n✓ Export bundle written to {path}")


def setup_parser(subparsers):
    """Setup report subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "report",
        help="Generate the finance report",
        description="Deduplicate, tag and categorize statements, then report",
    )
    parser.add_argument("files", nargs="+", help="Statement CSV files")
    parser.add_argument("--mappings", help="Mapping document path")
    parser.add_argument(
        "--contributors",
        nargs="+",
        help="Contributors to track (default: from mappings, else the top earners)",
    )
    parser.add_argument(
        "--keep-duplicates",
        action="store_true",
        help="Do not remove transactions found in several files",
    )
    parser.add_argument(
        "--export",
        action="store_true",
        help="Write an export bundle to the configured export directory",
    )
    parser.set_defaults(func=cmd_report)
