"""Result models produced by the processors and the report builder.

All of these are computed from a transaction set and never modified afterwards.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from models.transaction import Transaction


@dataclass(frozen=True)
class DuplicateGroup:
    """Transactions representing the same ledger entry in more than one file.

    The representative date, amount, title and reference come from the first
    member, which is also the one kept when duplicates are removed.
    """

    transactions: Tuple[Transaction, ...]
    booking_date: date
    amount: Decimal
    title: str
    reference_number: str


@dataclass(frozen=True)
class Contributor:
    """A payer identified from income transactions."""

    name: str
    total: Decimal
    transaction_count: int


@dataclass(frozen=True)
class TitleSuggestion:
    """An uncategorized expense title with its spending impact."""

    title: str
    total_amount: Decimal
    transaction_count: int


@dataclass(frozen=True)
class TitlePattern:
    """A keyword shared by several uncategorized expense titles."""

    pattern: str
    match_count: int
    total_amount: Decimal
    example_titles: Tuple[str, ...]


@dataclass(frozen=True)
class CategorizationProgress:
    total_expenses: int
    categorized: int
    uncategorized: int
    categorized_amount: Decimal
    uncategorized_amount: Decimal
    percent_complete: int


@dataclass(frozen=True)
class DateRange:
    start: date
    end: date


@dataclass(frozen=True)
class DataQuality:
    """Coverage information about the imported statements.

    Attributes:
        date_range: Earliest and latest booking date, None for an empty set.
        total_files: Number of distinct source files.
        duplicates_removed: Supplied by the caller, not recomputed.
        missing_weeks: ISO weeks ("YYYY-Www") in range without transactions.
        missing_months: Months ("YYYY-MM") in range without transactions.
    """

    date_range: Optional[DateRange]
    total_files: int
    total_transactions: int
    income_transactions: int
    expense_transactions: int
    duplicates_removed: int
    missing_weeks: List[str]
    missing_months: List[str]


@dataclass(frozen=True)
class MonthlyContribution:
    month: str
    contributor: str
    amount: Decimal


@dataclass(frozen=True)
class CumulativeContribution:
    month: str
    contributor: str
    cumulative: Decimal


@dataclass(frozen=True)
class ContributorSummary:
    name: str
    total: Decimal
    monthly_average: Decimal


@dataclass(frozen=True)
class Equalisation:
    """Transfer that would make the two largest contributors even."""

    difference: Decimal
    equalisation_amount: Decimal
    higher_contributor: str
    lower_contributor: str


@dataclass(frozen=True)
class MonthlySpending:
    month: str
    category: str
    amount: Decimal
    count: int


@dataclass(frozen=True)
class MonthlyCashFlow:
    month: str
    income: Decimal
    outgoings: Decimal
    net: Decimal
    cumulative_balance: Decimal


@dataclass(frozen=True)
class ContributionsReport:
    contributors: List[ContributorSummary]
    monthly: List[MonthlyContribution]
    cumulative: List[CumulativeContribution]
    total_difference: Decimal
    equalisation_amount: Decimal
    other_income: Decimal = Decimal("0")


@dataclass(frozen=True)
class SpendingReport:
    by_category: Dict[str, Decimal]
    monthly: List[MonthlySpending]
    uncategorized: List[Transaction]
    uncategorized_total: Decimal
    uncategorized_count: int


@dataclass(frozen=True)
class CashFlowReport:
    monthly: List[MonthlyCashFlow]
    total_income: Decimal
    total_outgoings: Decimal
    net_balance: Decimal


@dataclass(frozen=True)
class ReportData:
    """Complete report, regenerated wholesale whenever its inputs change."""

    data_quality: DataQuality
    contributions: ContributionsReport
    spending: SpendingReport
    cash_flow: CashFlowReport
    months: List[str] = field(default_factory=list)
