"""Calendar bucketing for reports.

Months are keyed "YYYY-MM" and weeks "YYYY-Www" (ISO 8601). Range helpers
return every bucket between two dates so series can be zero-filled.
"""

from datetime import date, timedelta
from typing import List

from dateutil.relativedelta import relativedelta


def month_key(value: date) -> str:
    """Format a date as its "YYYY-MM" month bucket."""
    return f"{value.year:04d}-{value.month:02d}"


def week_key(value: date) -> str:
    """Format a date as its ISO week bucket, e.g. "2024-W01"."""
    iso_year, iso_week, _ = value.isocalendar()
    return f"{iso_year:04d}-W{iso_week:02d}"


def month_range(start: date, end: date) -> List[str]:
    """Get every month between start and end, inclusive.

    Returns an empty list when end is before start.
    """
    months = []
    current = start.replace(day=1)
    last = end.replace(day=1)
    while current <= last:
        months.append(month_key(current))
        current += relativedelta(months=1)
    return months


def week_range(start: date, end: date) -> List[str]:
    """Get every ISO week between start and end, inclusive."""
    weeks = []
    # Step from the Monday of the starting week
    current = start - timedelta(days=start.weekday())
    while current <= end:
        weeks.append(week_key(current))
        current += timedelta(weeks=1)
    return weeks
