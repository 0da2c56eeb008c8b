"""
Business-day counting for leave requests

A business day is Monday to Friday. Public holidays are not excluded.
"""
from datetime import date, timedelta

from app.core.errors import InvalidDateRangeError

SATURDAY = 5  # date.weekday(): Monday=0, Sunday=6


def is_weekend(check_date: date) -> bool:
    """Check if a date falls on Saturday or Sunday"""
    return check_date.weekday() >= SATURDAY


def count_business_days(start: date, end: date) -> int:
    """
    Count weekdays in the inclusive range [start, end].

    Args:
        start: First day of the range
        end: Last day of the range

    Returns:
        Number of days in the range falling Monday to Friday

    Raises:
        InvalidDateRangeError: If start is after end
    """
    if start > end:
        raise InvalidDateRangeError(start, end)

    count = 0
    current = start
    while current <= end:
        if not is_weekend(current):
            count += 1
        current += timedelta(days=1)
    return count
