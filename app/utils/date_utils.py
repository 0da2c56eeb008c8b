"""
Calendar-month helpers for leave accounting.

All functions take plain dates and never read the clock.
"""
import calendar
from datetime import date
from typing import Iterator, Optional, Tuple


def month_start(day: date) -> date:
    """First day of the calendar month containing day"""
    return day.replace(day=1)


def month_end(day: date) -> date:
    """Last day of the calendar month containing day"""
    return day.replace(day=calendar.monthrange(day.year, day.month)[1])


def add_months(day: date, months: int) -> date:
    """
    Shift a date by whole calendar months.

    Clamps to the last day of the target month (Jan 31 + 1 month = Feb 28/29).
    """
    month_index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def iter_months(start: date, end: date) -> Iterator[date]:
    """
    Yield the first day of every calendar month touched by [start, end].

    Months are yielded in ascending order, including partially covered months.
    Yields nothing when start is after end.
    """
    current = month_start(start)
    last = month_start(end)
    while current <= last:
        yield current
        current = add_months(current, 1)


def months_between(earlier: date, later: date) -> int:
    """
    Number of full calendar months from earlier to later.

    A month counts once the same day-of-month is reached. When the dates are
    one calendar month apart, later being the last day of its month also
    completes the month (Jan 31 to Feb 29 is one month, Jan 31 to Apr 30 is
    two). Negative when later precedes earlier.
    """
    if later < earlier:
        return -months_between(later, earlier)
    months = (later.year - earlier.year) * 12 + (later.month - earlier.month)
    if later.day < earlier.day and not (months == 1 and later == month_end(later)):
        months -= 1
    return months


def clip_to_month(start: date, end: date, month: date) -> Optional[Tuple[date, date]]:
    """
    Intersect [start, end] with the calendar month containing month.

    Returns None when the range does not overlap that month.
    """
    clipped_start = max(start, month_start(month))
    clipped_end = min(end, month_end(month))
    if clipped_start > clipped_end:
        return None
    return clipped_start, clipped_end


def month_key(day: date) -> str:
    """Machine key for a month, e.g. '2024-01'"""
    return f"{day.year:04d}-{day.month:02d}"


def month_label(day: date) -> str:
    """Display label for a month, e.g. 'January 2024'"""
    return f"{calendar.month_name[day.month]} {day.year}"


def parse_month_key(value: str) -> date:
    """
    Parse a 'YYYY-MM' key into the first day of that month.

    Raises:
        ValueError: If value is not a valid YYYY-MM string
    """
    parts = value.split("-")
    if len(parts) != 2 or len(parts[0]) != 4:
        raise ValueError(f"Invalid month: {value}. Use YYYY-MM (e.g., 2024-01)")
    year, month = int(parts[0]), int(parts[1])
    if month < 1 or month > 12:
        raise ValueError(f"Invalid month: {value}. Use YYYY-MM (e.g., 2024-01)")
    return date(year, month, 1)
