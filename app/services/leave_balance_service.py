"""
Leave balance service - accrued vs taken leave for an employee

Leave accrues at settings.MONTHLY_ACCRUAL_DAYS per full month of service.
Approved paid-pool requests (annual, sick, personal, halfday) reduce the
balance; pending ones are reported separately.
"""
import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, Optional

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import InvalidDateRangeError
from app.services.employee_service import get_employee
from app.models.leave import PAID_POOL_LEAVE_TYPES, LeaveStatus
from app.services.business_days import count_business_days
from app.services.leave_request_service import list_leave_requests_for_user
from app.services.paid_leave_service import (
    as_date,
    record_field,
    day_equivalents,
    parse_leave_status,
    parse_leave_type,
)
from app.utils.date_utils import add_months, month_start, months_between

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LeaveBalance:
    as_of_date: date
    total_accrued: float
    total_taken: float
    pending_requests: float
    remaining_balance: float
    next_accrual_date: date
    accrued_this_year: float
    taken_this_year: float


def _request_days(req: Any) -> float:
    leave_type = parse_leave_type(record_field(req, "type"))
    days = count_business_days(as_date(record_field(req, "start_date")), as_date(record_field(req, "end_date")))
    return day_equivalents(leave_type, days)


def calculate_leave_balance(
    join_date: date,
    leave_requests: Iterable[Any],
    as_of_date: date,
    accrual_days: Optional[float] = None
) -> LeaveBalance:
    """
    Calculate an employee's leave balance as of a date.

    Args:
        join_date: Employee join date
        leave_requests: The employee's leave history (all statuses)
        as_of_date: Date the balance is computed for
        accrual_days: Override for settings.MONTHLY_ACCRUAL_DAYS

    Returns:
        LeaveBalance

    Raises:
        InvalidDateRangeError: If as_of_date is before join_date
    """
    if as_of_date < join_date:
        raise InvalidDateRangeError(join_date, as_of_date, label="join date")

    rate = float(settings.MONTHLY_ACCRUAL_DAYS if accrual_days is None else accrual_days)
    year_start = date(as_of_date.year, 1, 1)

    total_taken = 0.0
    pending = 0.0
    taken_this_year = 0.0
    for req in leave_requests:
        if parse_leave_type(record_field(req, "type")) not in PAID_POOL_LEAVE_TYPES:
            continue
        status = parse_leave_status(record_field(req, "status"))
        if status == LeaveStatus.APPROVED:
            days = _request_days(req)
            total_taken += days
            if as_date(record_field(req, "start_date")).year == as_of_date.year:
                taken_this_year += days
        elif status == LeaveStatus.PENDING:
            pending += _request_days(req)

    total_accrued = months_between(join_date, as_of_date) * rate
    accrued_this_year = months_between(max(join_date, year_start), as_of_date) * rate

    return LeaveBalance(
        as_of_date=as_of_date,
        total_accrued=total_accrued,
        total_taken=total_taken,
        pending_requests=pending,
        remaining_balance=total_accrued - total_taken,
        next_accrual_date=add_months(month_start(as_of_date), 1),
        accrued_this_year=accrued_this_year,
        taken_this_year=taken_this_year,
    )


def get_leave_balance(db: Session, employee_id: int, as_of_date: date) -> LeaveBalance:
    """
    Load an employee and their leave history and compute the balance.

    Raises:
        EmployeeNotFoundError: If the employee does not exist
        InvalidDateRangeError: If as_of_date is before the join date
    """
    employee = get_employee(db, employee_id)

    requests = list_leave_requests_for_user(db, employee_id)
    balance = calculate_leave_balance(employee.join_date, requests, as_of_date)
    logger.info(
        "Leave balance employee=%s as_of=%s accrued=%.1f taken=%.1f remaining=%.1f",
        employee_id, as_of_date, balance.total_accrued, balance.total_taken, balance.remaining_balance
    )
    return balance
