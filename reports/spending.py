"""Spending by category, per month and overall."""

from decimal import Decimal
from typing import Dict, Iterable, List, Tuple

from models.report import MonthlySpending
from models.transaction import Transaction
from processors.categorization import UNCATEGORIZED
from reports.periods import month_key

ZERO = Decimal("0")


def monthly_spending(
    transactions: Iterable[Transaction], months: List[str]
) -> List[MonthlySpending]:
    """Calculate monthly spending per category.

    Every category seen anywhere in the data is reported for every month,
    with zeros where nothing was spent. Expenses without a category are
    reported under "Uncategorized".

    Returns:
        Entries sorted by month, then by amount (highest first).
    """
    categories: Dict[str, None] = {}
    amounts: Dict[Tuple[str, str], Decimal] = {}
    counts: Dict[Tuple[str, str], int] = {}

    for t in transactions:
        if not t.is_expense:
            continue
        category = t.category or UNCATEGORIZED
        categories[category] = None
        key = (month_key(t.booking_date), category)
        amounts[key] = amounts.get(key, ZERO) + abs(t.amount)
        counts[key] = counts.get(key, 0) + 1

    results = [
        MonthlySpending(
            month=month,
            category=category,
            amount=amounts.get((month, category), ZERO),
            count=counts.get((month, category), 0),
        )
        for month in months
        for category in categories
    ]
    results.sort(key=lambda s: (s.month, -s.amount))
    return results


def category_totals(transactions: Iterable[Transaction]) -> Dict[str, Decimal]:
    """Total spending per category over all expenses, largest first."""
    totals: Dict[str, Decimal] = {}
    for t in transactions:
        if not t.is_expense:
            continue
        category = t.category or UNCATEGORIZED
        totals[category] = totals.get(category, ZERO) + abs(t.amount)
    return dict(sorted(totals.items(), key=lambda item: item[1], reverse=True))


def uncategorized_transactions(
    transactions: Iterable[Transaction],
) -> List[Transaction]:
    return [t for t in transactions if t.is_expense and not t.category]


def uncategorized_totals(transactions: Iterable[Transaction]) -> Dict:
    """Amount, count and list of the expenses that still lack a category."""
    uncategorized = uncategorized_transactions(transactions)
    return {
        "total": sum((abs(t.amount) for t in uncategorized), ZERO),
        "count": len(uncategorized),
        "transactions": uncategorized,
    }


def category_stats(monthly: Iterable[MonthlySpending], category: str) -> Dict:
    """Summary statistics of one category's monthly spending.

    Returns:
        Dictionary with total, average, highest and lowest (month, amount)
        pairs and the population standard deviation.
    """
    entries = [s for s in monthly if s.category == category]
    if not entries:
        return {
            "total": ZERO,
            "average": ZERO,
            "highest": ("", ZERO),
            "lowest": ("", ZERO),
            "standard_deviation": ZERO,
        }

    total = sum((s.amount for s in entries), ZERO)
    average = total / len(entries)
    highest = max(entries, key=lambda s: s.amount)
    lowest = min(entries, key=lambda s: s.amount)
    variance = sum(((s.amount - average) ** 2 for s in entries), ZERO) / len(entries)

    return {
        "total": total,
        "average": average,
        "highest": (highest.month, highest.amount),
        "lowest": (lowest.month, lowest.amount),
        "standard_deviation": variance.sqrt(),
    }
