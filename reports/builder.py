"""Assembles the complete report from cleaned, tagged transactions."""

from typing import List

from logger import get_logger
from models.report import ContributionsReport, ReportData, SpendingReport
from models.transaction import Transaction
from reports.cashflow import cash_flow_report
from reports.contributions import (
    contributor_summaries,
    cumulative_contributions,
    equalisation,
    monthly_contributions,
    other_income,
)
from reports.data_quality import data_quality
from reports.periods import month_range
from reports.spending import category_totals, monthly_spending, uncategorized_totals

logger = get_logger()


def build_report(
    transactions: List[Transaction],
    contributors: List[str],
    duplicates_removed: int = 0,
) -> ReportData:
    """Compute every report section in one pass over the inputs.

    Args:
        transactions: Deduplicated transactions, tagged with contributors and
            categories.
        contributors: Names of the tracked contributors.
        duplicates_removed: How many duplicates were dropped before reporting.

    Returns:
        ReportData. An empty transaction set produces empty series and zeros.
    """
    quality = data_quality(transactions, duplicates_removed)
    if quality.date_range is None:
        months = []
    else:
        months = month_range(quality.date_range.start, quality.date_range.end)

    monthly = monthly_contributions(transactions, contributors, months)
    summaries = contributor_summaries(transactions, contributors, len(months))
    equal = equalisation(summaries)

    uncategorized = uncategorized_totals(transactions)

    report = ReportData(
        data_quality=quality,
        contributions=ContributionsReport(
            contributors=summaries,
            monthly=monthly,
            cumulative=cumulative_contributions(monthly, contributors),
            total_difference=equal.difference,
            equalisation_amount=equal.equalisation_amount,
            other_income=other_income(transactions),
        ),
        spending=SpendingReport(
            by_category=category_totals(transactions),
            monthly=monthly_spending(transactions, months),
            uncategorized=uncategorized["transactions"],
            uncategorized_total=uncategorized["total"],
            uncategorized_count=uncategorized["count"],
        ),
        cash_flow=cash_flow_report(transactions, months),
        months=months,
    )

    logger.info(
        f"Built report over {len(months)} month(s) and "
        f"{len(transactions)} transaction(s)"
    )
    return report
