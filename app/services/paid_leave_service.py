"""
Paid leave service - monthly paid-usage aggregation and paid/unpaid determination

Every calendar month allows a fixed number of paid leave day-equivalents
(settings.MONTHLY_PAID_LEAVE_CAP). A prospective leave request is split by
calendar month; if any month would go over the cap the whole request is
classified unpaid.

All functions here are pure: they take the leave history as an argument and
never touch the database or the clock.
"""
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Iterable, List, Mapping, Optional

from app.core.config import settings
from app.core.errors import (
    InvalidDateRangeError,
    UnrecognizedLeaveStatusError,
    UnrecognizedLeaveTypeError,
)
from app.models.leave import (
    EXEMPT_LEAVE_TYPES,
    PAID_POOL_LEAVE_TYPES,
    LeaveStatus,
    LeaveType,
)
from app.services.business_days import count_business_days
from app.utils.date_utils import clip_to_month, iter_months, month_key, month_label
from app.utils.enums import coerce_enum

logger = logging.getLogger(__name__)

HALF_DAY_FACTOR = 0.5


@dataclass(frozen=True)
class MonthlyUsageRecord:
    """Usage of the paid pool in one calendar month touched by a request"""
    month: str
    month_key: str
    current_usage: float
    request_days_in_month: float
    new_total: float
    limit: float
    remaining: float
    would_exceed: bool


@dataclass(frozen=True)
class LeaveLimitEvaluation:
    """Outcome of checking a prospective request against the monthly cap"""
    would_exceed: bool
    will_be_paid: bool
    total_request_days: float
    per_month_analysis: List[MonthlyUsageRecord] = field(default_factory=list)


def parse_leave_type(value: Any) -> LeaveType:
    """Coerce a LeaveType or its string value, raising UnrecognizedLeaveTypeError otherwise"""
    try:
        return coerce_enum(LeaveType, value)
    except ValueError:
        raise UnrecognizedLeaveTypeError(value) from None


def parse_leave_status(value: Any) -> LeaveStatus:
    """Coerce a LeaveStatus or its string value, raising UnrecognizedLeaveStatusError otherwise"""
    try:
        return coerce_enum(LeaveStatus, value)
    except ValueError:
        raise UnrecognizedLeaveStatusError(value) from None


def as_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


def record_field(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record[name]
    return getattr(record, name)


def resolve_monthly_cap(monthly_cap: Optional[float] = None) -> float:
    """Explicit cap if given, else the configured one"""
    if monthly_cap is None:
        return float(settings.MONTHLY_PAID_LEAVE_CAP)
    return float(monthly_cap)


def day_equivalents(leave_type: LeaveType, business_days: int) -> float:
    """
    Convert a business-day count into paid-pool day-equivalents.

    Half-day requests count half of every business day they cover.
    """
    if leave_type == LeaveType.HALFDAY:
        return business_days * HALF_DAY_FACTOR
    return float(business_days)


def compute_monthly_paid_usage(
    user_id: int,
    target_month: date,
    leave_requests: Iterable[Any]
) -> float:
    """
    Sum approved paid-pool day-equivalents for a user in one calendar month.

    Only requests owned by user_id, with status approved and type annual,
    sick, personal or halfday are counted. Each request is clipped to the
    month before counting business days.

    Args:
        user_id: Employee whose usage is computed
        target_month: Any date inside the month of interest
        leave_requests: Leave history (ORM rows, objects or mappings with
            user_id, type, status, start_date and end_date)

    Returns:
        Day-equivalents already used in that month (0 when none)
    """
    target_month = as_date(target_month)
    total = 0.0
    for req in leave_requests:
        if record_field(req, "user_id") != user_id:
            continue
        if parse_leave_status(record_field(req, "status")) != LeaveStatus.APPROVED:
            continue
        leave_type = parse_leave_type(record_field(req, "type"))
        if leave_type not in PAID_POOL_LEAVE_TYPES:
            continue

        clipped = clip_to_month(
            as_date(record_field(req, "start_date")),
            as_date(record_field(req, "end_date")),
            target_month,
        )
        if clipped is None:
            continue

        total += day_equivalents(leave_type, count_business_days(*clipped))
    return total


def evaluate_leave_limit(
    user_id: int,
    start_date: date,
    end_date: date,
    leave_type: Any,
    leave_requests: Iterable[Any],
    monthly_cap: Optional[float] = None
) -> LeaveLimitEvaluation:
    """
    Decide whether a prospective leave request would be paid.

    The request is split by calendar month. For each month the approved
    paid-pool usage is added to the request's own day-equivalents in that
    month; reaching the cap exactly is still paid, going over it is not.
    unpaid and workfromhome requests never touch the paid pool.

    Args:
        user_id: Employee applying for leave
        start_date: First day of the request (inclusive)
        end_date: Last day of the request (inclusive)
        leave_type: LeaveType or its string value
        leave_requests: Leave history; the request being evaluated must not
            already be present in it as approved
        monthly_cap: Override for settings.MONTHLY_PAID_LEAVE_CAP

    Returns:
        LeaveLimitEvaluation with one MonthlyUsageRecord per month touched

    Raises:
        UnrecognizedLeaveTypeError: If leave_type is not a known type
        InvalidDateRangeError: If start_date is after end_date
    """
    leave_type = parse_leave_type(leave_type)
    start_date = as_date(start_date)
    end_date = as_date(end_date)
    if start_date > end_date:
        raise InvalidDateRangeError(start_date, end_date)

    if leave_type in EXEMPT_LEAVE_TYPES:
        return LeaveLimitEvaluation(
            would_exceed=False,
            will_be_paid=True,
            total_request_days=0.0,
            per_month_analysis=[],
        )

    cap = resolve_monthly_cap(monthly_cap)
    # Materialize once; the history is scanned for every month
    history = list(leave_requests)

    per_month: List[MonthlyUsageRecord] = []
    for month in iter_months(start_date, end_date):
        current_usage = compute_monthly_paid_usage(user_id, month, history)

        request_days = 0.0
        clipped = clip_to_month(start_date, end_date, month)
        if clipped is not None:
            request_days = day_equivalents(leave_type, count_business_days(*clipped))

        new_total = current_usage + request_days
        record = MonthlyUsageRecord(
            month=month_label(month),
            month_key=month_key(month),
            current_usage=current_usage,
            request_days_in_month=request_days,
            new_total=new_total,
            limit=cap,
            remaining=max(0.0, cap - current_usage),
            would_exceed=new_total > cap,
        )
        logger.debug(
            "Paid leave check user=%s month=%s usage=%.1f request=%.1f cap=%.1f exceed=%s",
            user_id, record.month_key, current_usage, request_days, cap, record.would_exceed
        )
        per_month.append(record)

    would_exceed = any(r.would_exceed for r in per_month)
    return LeaveLimitEvaluation(
        would_exceed=would_exceed,
        will_be_paid=not would_exceed,
        total_request_days=sum(r.request_days_in_month for r in per_month),
        per_month_analysis=per_month,
    )
