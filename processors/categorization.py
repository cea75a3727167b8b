"""Rule-based categorization of expense transactions.

Rules (CategoryMapping) match the trimmed transaction title case-insensitively.
All exact rules are tried before any contains rule; within each tier the first
rule in declaration order wins.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List

from logger import get_logger
from models.category import MATCH_CONTAINS, MATCH_EXACT, CategoryMapping
from models.report import CategorizationProgress, TitleSuggestion
from models.transaction import Transaction

logger = get_logger()

UNCATEGORIZED = "Uncategorized"


def _needs_category(t: Transaction) -> bool:
    return t.is_expense and not t.category


def suggest_category_targets(
    transactions: Iterable[Transaction],
) -> List[TitleSuggestion]:
    """Rank uncategorized expense titles by total amount spent.

    Titles are trimmed but keep their case. Blank titles are ignored, and
    titles with equal totals keep first-seen order.

    Returns:
        Suggestions sorted by total amount, biggest spend first.
    """
    totals: Dict[str, Decimal] = {}
    counts: Dict[str, int] = {}

    for t in transactions:
        if not _needs_category(t):
            continue
        title = t.title.strip()
        if not title:
            continue
        totals[title] = totals.get(title, Decimal("0")) + abs(t.amount)
        counts[title] = counts.get(title, 0) + 1

    suggestions = [
        TitleSuggestion(title=title, total_amount=total, transaction_count=counts[title])
        for title, total in totals.items()
    ]
    suggestions.sort(key=lambda s: s.total_amount, reverse=True)
    return suggestions


def _first_match(title: str, mappings: List[CategoryMapping]):
    for mapping in mappings:
        if mapping.matches(title):
            return mapping
    return None


def apply_category_mappings(
    transactions: Iterable[Transaction], mappings: Iterable[CategoryMapping]
) -> List[Transaction]:
    """Assign categories to uncategorized expenses using the mapping rules.

    Income and already-categorized transactions pass through unchanged.

    Returns:
        New list of transactions.
    """
    mappings = list(mappings)
    exact_mappings = [m for m in mappings if m.match_type == MATCH_EXACT]
    contains_mappings = [m for m in mappings if m.match_type == MATCH_CONTAINS]

    result = []
    matched = 0
    for t in transactions:
        if not _needs_category(t):
            result.append(t)
            continue

        title = t.title.strip()
        mapping = _first_match(title, exact_mappings) or _first_match(
            title, contains_mappings
        )
        if mapping is None:
            result.append(t)
            continue

        result.append(t.annotate(category=mapping.category))
        matched += 1

    logger.info(f"Categorized {matched} transaction(s) with {len(mappings)} rule(s)")
    return result


def autocomplete(text: str, known_categories: Iterable[str]) -> List[str]:
    """Suggest known categories for a partially typed category name.

    Blank input returns every known category.

    Returns:
        Matching category names sorted alphabetically.
    """
    if not text.strip():
        return sorted(known_categories)

    needle = text.strip().lower()
    return sorted(c for c in known_categories if needle in c.lower())


def categorization_progress(
    transactions: Iterable[Transaction],
) -> CategorizationProgress:
    """Measure how much of the spending has been categorized.

    The percentage is amount-weighted and reported as 100 when there is
    nothing to categorize.
    """
    expenses = [t for t in transactions if t.is_expense]
    categorized = [t for t in expenses if t.category]
    uncategorized = [t for t in expenses if not t.category]

    categorized_amount = sum((abs(t.amount) for t in categorized), Decimal("0"))
    uncategorized_amount = sum((abs(t.amount) for t in uncategorized), Decimal("0"))
    total_amount = categorized_amount + uncategorized_amount

    if total_amount > 0:
        ratio = categorized_amount / total_amount * 100
        percent_complete = int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    else:
        percent_complete = 100

    return CategorizationProgress(
        total_expenses=len(expenses),
        categorized=len(categorized),
        uncategorized=len(uncategorized),
        categorized_amount=categorized_amount,
        uncategorized_amount=uncategorized_amount,
        percent_complete=percent_complete,
    )


def transactions_by_category(
    transactions: Iterable[Transaction],
) -> Dict[str, List[Transaction]]:
    """Group expenses by category, uncategorized ones under "Uncategorized"."""
    grouped: Dict[str, List[Transaction]] = {}
    for t in transactions:
        if not t.is_expense:
            continue
        grouped.setdefault(t.category or UNCATEGORIZED, []).append(t)
    return grouped
