"""Monthly cash flow: income, outgoings, net and running balance."""

from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from models.report import CashFlowReport, MonthlyCashFlow
from models.transaction import Transaction
from reports.periods import month_key

ZERO = Decimal("0")


def monthly_cash_flow(
    transactions: Iterable[Transaction], months: List[str]
) -> List[MonthlyCashFlow]:
    """Calculate monthly cash flow for the given months.

    Args:
        transactions: All transactions.
        months: Month keys to report, in chronological order. Months without
            transactions are reported with zeros.

    Returns:
        One entry per month, with cumulative_balance as the running sum of net.
    """
    income: Dict[str, Decimal] = {month: ZERO for month in months}
    outgoings: Dict[str, Decimal] = {month: ZERO for month in months}

    for t in transactions:
        month = month_key(t.booking_date)
        if month not in income:
            continue
        if t.is_income:
            income[month] += t.amount
        elif t.is_expense:
            outgoings[month] += abs(t.amount)

    results = []
    cumulative_balance = ZERO
    for month in months:
        net = income[month] - outgoings[month]
        cumulative_balance += net
        results.append(
            MonthlyCashFlow(
                month=month,
                income=income[month],
                outgoings=outgoings[month],
                net=net,
                cumulative_balance=cumulative_balance,
            )
        )
    return results


def cash_flow_totals(transactions: Iterable[Transaction]) -> Dict[str, Decimal]:
    """Total income, outgoings and net balance over all transactions."""
    total_income = ZERO
    total_outgoings = ZERO
    for t in transactions:
        if t.is_income:
            total_income += t.amount
        elif t.is_expense:
            total_outgoings += abs(t.amount)

    return {
        "total_income": total_income,
        "total_outgoings": total_outgoings,
        "net_balance": total_income - total_outgoings,
    }


def cash_flow_report(
    transactions: List[Transaction], months: List[str]
) -> CashFlowReport:
    totals = cash_flow_totals(transactions)
    return CashFlowReport(monthly=monthly_cash_flow(transactions, months), **totals)


def extreme_months(
    cash_flow: List[MonthlyCashFlow],
) -> Dict[str, Optional[MonthlyCashFlow]]:
    """Find the months with the highest/lowest net, highest income and outgoings.

    Earlier months win ties. All values are None for an empty series.
    """
    if not cash_flow:
        return {
            "highest_net": None,
            "lowest_net": None,
            "highest_income": None,
            "highest_outgoings": None,
        }

    return {
        "highest_net": max(cash_flow, key=lambda cf: cf.net),
        "lowest_net": min(cash_flow, key=lambda cf: cf.net),
        "highest_income": max(cash_flow, key=lambda cf: cf.income),
        "highest_outgoings": max(cash_flow, key=lambda cf: cf.outgoings),
    }


def cash_flow_averages(cash_flow: List[MonthlyCashFlow]) -> Dict[str, Decimal]:
    """Average monthly income, outgoings and net."""
    if not cash_flow:
        return {"average_income": ZERO, "average_outgoings": ZERO, "average_net": ZERO}

    count = len(cash_flow)
    return {
        "average_income": sum((cf.income for cf in cash_flow), ZERO) / count,
        "average_outgoings": sum((cf.outgoings for cf in cash_flow), ZERO) / count,
        "average_net": sum((cf.net for cf in cash_flow), ZERO) / count,
    }
