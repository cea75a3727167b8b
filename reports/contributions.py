"""Per-contributor income reporting and the equalisation transfer."""

from decimal import Decimal
from typing import Dict, Iterable, List, Tuple

from models.report import (
    ContributorSummary,
    CumulativeContribution,
    Equalisation,
    MonthlyContribution,
)
from models.transaction import Transaction
from processors.contributors import OTHER_CONTRIBUTOR
from reports.periods import month_key

ZERO = Decimal("0")


def monthly_contributions(
    transactions: Iterable[Transaction], contributors: List[str], months: List[str]
) -> List[MonthlyContribution]:
    """Calculate monthly income per tracked contributor.

    Contributor names are matched case-insensitively against the tag on each
    transaction and reported as given in contributors.

    Returns:
        One entry per (month, contributor), zero where nothing was received.
    """
    canonical = {c.lower(): c for c in contributors}
    totals: Dict[Tuple[str, str], Decimal] = {}

    for t in transactions:
        if not t.is_income or not t.contributor:
            continue
        name = canonical.get(t.contributor.lower())
        if name is None:
            continue
        key = (month_key(t.booking_date), name)
        totals[key] = totals.get(key, ZERO) + t.amount

    return [
        MonthlyContribution(
            month=month,
            contributor=contributor,
            amount=totals.get((month, contributor), ZERO),
        )
        for month in months
        for contributor in contributors
    ]


def cumulative_contributions(
    monthly: Iterable[MonthlyContribution], contributors: List[str]
) -> List[CumulativeContribution]:
    """Turn monthly contributions into running totals per contributor."""
    amounts: Dict[Tuple[str, str], Decimal] = {}
    for entry in monthly:
        amounts[(entry.month, entry.contributor)] = entry.amount

    months = sorted({month for month, _ in amounts})
    running = {contributor: ZERO for contributor in contributors}

    results = []
    for month in months:
        for contributor in contributors:
            running[contributor] += amounts.get((month, contributor), ZERO)
            results.append(
                CumulativeContribution(
                    month=month, contributor=contributor, cumulative=running[contributor]
                )
            )
    return results


def contributor_summaries(
    transactions: Iterable[Transaction], contributors: List[str], month_count: int
) -> List[ContributorSummary]:
    """Total and monthly average per tracked contributor, highest total first."""
    transactions = list(transactions)

    summaries = []
    for contributor in contributors:
        total = sum(
            (
                t.amount
                for t in transactions
                if t.is_income
                and t.contributor
                and t.contributor.lower() == contributor.lower()
            ),
            ZERO,
        )
        monthly_average = total / month_count if month_count > 0 else ZERO
        summaries.append(
            ContributorSummary(
                name=contributor, total=total, monthly_average=monthly_average
            )
        )

    summaries.sort(key=lambda s: s.total, reverse=True)
    return summaries


def equalisation(summaries: List[ContributorSummary]) -> Equalisation:
    """Calculate the transfer that evens out the two largest contributors.

    Only the first two summaries (the largest, when sorted) are considered.
    Fewer than two contributors yield a zero transfer.
    """
    if len(summaries) < 2:
        return Equalisation(
            difference=ZERO,
            equalisation_amount=ZERO,
            higher_contributor=summaries[0].name if summaries else "",
            lower_contributor="",
        )

    first, second = summaries[0], summaries[1]
    difference = abs(first.total - second.total)
    higher, lower = (first, second) if first.total >= second.total else (second, first)

    return Equalisation(
        difference=difference,
        equalisation_amount=difference / 2,
        higher_contributor=higher.name,
        lower_contributor=lower.name,
    )


def other_income(transactions: Iterable[Transaction]) -> Decimal:
    """Total income not attributed to a tracked contributor."""
    return sum(
        (t.amount for t in transactions if t.is_income and t.contributor == OTHER_CONTRIBUTOR),
        ZERO,
    )
