"""Contributor identification from income transactions.

A contributor is recognised by the first word of the payer name (or of the
title when the payer name is blank), e.g. "ALEX ROWAN NGUYEN" -> "Alex".
"""

import re
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from logger import get_logger
from models.report import Contributor
from models.transaction import Transaction

logger = get_logger()

OTHER_CONTRIBUTOR = "Other"

_NAME_PATTERN = re.compile(r"[a-z]+")


def extract_name(text: str) -> str:
    """Extract the first alphabetic word of a text, lower-cased.

    Examples:
        "ALEX ROWAN NGUYEN" -> "alex"
        "123 PAYMENT" -> "payment"
        "123456" -> ""
    """
    match = _NAME_PATTERN.search(text.lower())
    return match.group(0) if match else ""


def normalize_name(name: str) -> str:
    """Capitalize a name for display ("alex" -> "Alex")."""
    if not name:
        return ""
    return name[0].upper() + name[1:].lower()


def _source_text(transaction: Transaction) -> str:
    # The Name field is usually filled for incoming transfers; Title is the fallback
    return transaction.name.strip() or transaction.title.strip()


def rank_contributors(
    transactions: Iterable[Transaction], limit: Optional[int] = 2
) -> List[Contributor]:
    """Rank payers of income transactions by total amount.

    Contributors with equal totals keep the order in which they were first seen.

    Args:
        transactions: All transactions (only positive amounts are considered).
        limit: Maximum number of contributors to return, None for all.

    Returns:
        Contributors sorted by total amount, highest first.
    """
    totals: Dict[str, Decimal] = {}
    counts: Dict[str, int] = {}

    for t in transactions:
        if not t.is_income:
            continue
        name = extract_name(_source_text(t))
        if not name:
            continue
        totals[name] = totals.get(name, Decimal("0")) + t.amount
        counts[name] = counts.get(name, 0) + 1

    contributors = [
        Contributor(
            name=normalize_name(name), total=total, transaction_count=counts[name]
        )
        for name, total in totals.items()
    ]
    contributors.sort(key=lambda c: c.total, reverse=True)

    if limit is None:
        return contributors
    return contributors[:limit]


def all_contributors(transactions: Iterable[Transaction]) -> List[Contributor]:
    """Get every contributor found in income transactions, ranked."""
    return rank_contributors(transactions, limit=None)


def tag_contributors(
    transactions: Iterable[Transaction], selected_names: Iterable[str]
) -> List[Transaction]:
    """Tag income transactions with their contributor.

    Income from a selected contributor (matched case-insensitively) is tagged
    with the normalized name, all other income with "Other". Expenses are
    returned untouched.

    Returns:
        New list of transactions.
    """
    selected = {n.lower() for n in selected_names}

    tagged = []
    for t in transactions:
        if not t.is_income:
            tagged.append(t)
            continue

        name = extract_name(_source_text(t))
        if name and name in selected:
            tagged.append(t.annotate(contributor=normalize_name(name)))
        else:
            tagged.append(t.annotate(contributor=OTHER_CONTRIBUTOR))

    logger.info(f"Tagged contributions for {len(selected)} selected contributor(s)")
    return tagged


def transactions_by_contributor(
    transactions: Iterable[Transaction],
) -> Dict[str, List[Transaction]]:
    """Group tagged income transactions by contributor."""
    grouped: Dict[str, List[Transaction]] = {}
    for t in transactions:
        if not t.is_income or not t.contributor:
            continue
        grouped.setdefault(t.contributor, []).append(t)
    return grouped
