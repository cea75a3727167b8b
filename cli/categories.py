#!/usr/bin/env python3

import sys
from pathlib import Path

from cli.statements import load_transactions
from export.mapping_document import (
    new_mapping_document,
    read_mapping_file,
    update_mapping_document,
    write_mapping_file,
)
from models.category import MATCH_TYPES, create_mapping
from processors.categorization import (
    apply_category_mappings,
    categorization_progress,
    suggest_category_targets,
)
from processors.patterns import extract_title_patterns
from logger import get_logger

logger = get_logger()


def _mappings_path(args, config) -> Path:
    return Path(args.mappings) if args.mappings else config.mappings_file


def cmd_list(args, config):
    """List the category rules in the mapping document."""
    document = read_mapping_file(_mappings_path(args, config))

    if document is None or not document.categories:
        print("No category rules found.")
        return

    print("\nCategory rules:")
    print("=" * 80)
    for rule in document.categories:
        print(f"{rule.category:<25} {rule.match_type:<9} {rule.pattern}")
    print(f"\nTotal rules: {len(document.categories)}")


def cmd_add(args, config):
    """Append a category rule to the mapping document."""
    path = _mappings_path(args, config)

    try:
        mapping = create_mapping(args.pattern, args.category, args.match)
    except ValueError as e:
        logger.error(f"Error creating rule: {e}")
        sys.exit(1)

    document = read_mapping_file(path)
    if document is None:
        document = new_mapping_document([], [mapping])
    else:
        document = update_mapping_document(
            document, document.contributors, document.mappings() + [mapping]
        )

    write_mapping_file(path, document)
    print(f"✓ Added rule: {mapping.match_type} '{mapping.pattern}' -> {mapping.category}")


def cmd_suggest(args, config):
    """Show what is left to categorize, biggest spending first."""
    transactions = load_transactions(args.files)

    document = read_mapping_file(_mappings_path(args, config))
    if document is not None:
        transactions = apply_category_mappings(transactions, document.mappings())

    progress = categorization_progress(transactions)
    print("\nCategorization progress:")
    print("=" * 80)
    print(
        f"Categorized: {progress.categorized}/{progress.total_expenses} expenses "
        f"({progress.percent_complete}% of spending)"
    )
    print(f"Uncategorized amount: {progress.uncategorized_amount:,.2f}")

    suggestions = suggest_category_targets(transactions)[: args.limit]
    if suggestions:
        print("\nTop uncategorized titles:")
        print("-" * 80)
        for s in suggestions:
            print(f"{s.total_amount:>12,.2f}  {s.transaction_count:>4}x  {s.title}")

    patterns = extract_title_patterns(transactions, limit=config.pattern_limit)
    if patterns:
        print("\nCommon keywords:")
        print("-" * 80)
        for p in patterns:
            examples = "; ".join(p.example_titles)
            print(f"{p.total_amount:>12,.2f}  {p.match_count:>4}x  {p.pattern}  ({examples})")


def setup_parser(subparsers):
    """Setup categories subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "categories",
        help="Manage category rules",
        description="List, add and discover rules that categorize spending",
    )

    categories_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available category commands",
        dest="subcommand",
        required=True,
    )

    # categories list
    list_parser = categories_subparsers.add_parser("list", help="List category rules")
    list_parser.add_argument("--mappings", help="Mapping document path")
    list_parser.set_defaults(func=cmd_list)

    # categories add
    add_parser = categories_subparsers.add_parser("add", help="Add a category rule")
    add_parser.add_argument("pattern", help="Title or text to match")
    add_parser.add_argument("category", help="Category to assign")
    add_parser.add_argument(
        "--match",
        choices=MATCH_TYPES,
        default="exact",
        help="Match the whole title or any part of it (default: exact)",
    )
    add_parser.add_argument("--mappings", help="Mapping document path")
    add_parser.set_defaults(func=cmd_add)

    # categories suggest
    suggest_parser = categories_subparsers.add_parser(
        "suggest", help="Show uncategorized spending and common keywords"
    )
    suggest_parser.add_argument("files", nargs="+", help="Statement CSV files")
    suggest_parser.add_argument("--mappings", help="Mapping document path")
    suggest_parser.add_argument(
        "--limit", type=int, default=20, help="Number of titles to show"
    )
    suggest_parser.set_defaults(func=cmd_suggest)
