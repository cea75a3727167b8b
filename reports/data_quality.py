"""Coverage checks over the imported transactions."""

from typing import Dict, Iterable, List, Optional

from models.report import DataQuality, DateRange
from models.transaction import Transaction
from reports.periods import month_key, month_range, week_key, week_range


def date_range(transactions: Iterable[Transaction]) -> Optional[DateRange]:
    """Earliest and latest booking date, or None when there are no transactions."""
    dates = [t.booking_date for t in transactions]
    if not dates:
        return None
    return DateRange(start=min(dates), end=max(dates))


def count_source_files(transactions: Iterable[Transaction]) -> int:
    return len({t.source_file for t in transactions})


def missing_weeks(transactions: Iterable[Transaction], weeks: List[str]) -> List[str]:
    """Weeks from the given list with no transactions."""
    weeks_with_data = {week_key(t.booking_date) for t in transactions}
    return [week for week in weeks if week not in weeks_with_data]


def missing_months(
    transactions: Iterable[Transaction], months: List[str]
) -> List[str]:
    """Months from the given list with no transactions."""
    months_with_data = {month_key(t.booking_date) for t in transactions}
    return [month for month in months if month not in months_with_data]


def data_quality(
    transactions: List[Transaction], duplicates_removed: int = 0
) -> DataQuality:
    """Calculate data quality metrics.

    Args:
        transactions: Cleaned transactions.
        duplicates_removed: Number of duplicates the caller removed earlier.

    Returns:
        DataQuality with zeroed values for an empty transaction set.
    """
    span = date_range(transactions)
    if span is None:
        return DataQuality(
            date_range=None,
            total_files=0,
            total_transactions=0,
            income_transactions=0,
            expense_transactions=0,
            duplicates_removed=duplicates_removed,
            missing_weeks=[],
            missing_months=[],
        )

    return DataQuality(
        date_range=span,
        total_files=count_source_files(transactions),
        total_transactions=len(transactions),
        income_transactions=sum(1 for t in transactions if t.is_income),
        expense_transactions=sum(1 for t in transactions if t.is_expense),
        duplicates_removed=duplicates_removed,
        missing_weeks=missing_weeks(transactions, week_range(span.start, span.end)),
        missing_months=missing_months(
            transactions, month_range(span.start, span.end)
        ),
    )


def transaction_counts_by_month(
    transactions: Iterable[Transaction],
) -> Dict[str, Dict[str, int]]:
    """Count income and expense transactions per month."""
    counts: Dict[str, Dict[str, int]] = {}
    for t in transactions:
        month = counts.setdefault(month_key(t.booking_date), {"income": 0, "expense": 0})
        if t.is_income:
            month["income"] += 1
        elif t.is_expense:
            month["expense"] += 1
    return dict(sorted(counts.items()))
