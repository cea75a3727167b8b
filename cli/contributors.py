#!/usr/bin/env python3

from cli.statements import load_transactions
from processors.contributors import rank_contributors


def cmd_contributors(args, config):
    """Rank the payers found in income transactions."""
    transactions = load_transactions(args.files)
    contributors = rank_contributors(transactions, args.limit)

    if not contributors:
        print("No contributors found.")
        return

    print("\nContributors:")
    print("=" * 80)
    for position, contributor in enumerate(contributors, start=1):
        print(
            f"{position:>3}. {contributor.name:<30} {contributor.total:>12,.2f}  "
            f"({contributor.transaction_count} transactions)"
        )


def setup_parser(subparsers):
    """Setup contributors subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "contributors",
        help="Rank income contributors",
        description="List payers of income transactions by total amount",
    )
    parser.add_argument("files", nargs="+", help="Statement CSV files")
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Number of contributors to show (default: all)",
    )
    parser.set_defaults(func=cmd_contributors)
