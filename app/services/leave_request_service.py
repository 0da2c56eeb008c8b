"""
Leave request service - storage and status transitions for leave requests
"""
import logging
from datetime import date
from typing import List, Optional, Tuple, Union
from sqlalchemy.orm import Session
from app.core.errors import (
    EmployeeNotFoundError,
    InvalidDateRangeError,
    LeaveRequestNotFoundError,
    LeaveStateError,
)
from app.models.employee import Employee
from app.models.leave import LeaveRequest, LeaveStatus, LeaveType
from app.services.paid_leave_service import (
    LeaveLimitEvaluation,
    evaluate_leave_limit,
    parse_leave_type,
)
from app.utils.datetime_utils import now_utc

logger = logging.getLogger(__name__)


def list_leave_requests_for_user(db: Session, user_id: int) -> List[LeaveRequest]:
    """
    All leave requests of a user regardless of status, oldest first.

    Args:
        db: Database session
        user_id: Employee ID

    Returns:
        List of LeaveRequest instances
    """
    return (
        db.query(LeaveRequest)
        .filter(LeaveRequest.user_id == user_id)
        .order_by(LeaveRequest.start_date, LeaveRequest.id)
        .all()
    )


def get_leave_request(db: Session, leave_id: int) -> LeaveRequest:
    """Get a leave request by ID, raising LeaveRequestNotFoundError if missing"""
    leave_request = db.query(LeaveRequest).filter(LeaveRequest.id == leave_id).first()
    if leave_request is None:
        raise LeaveRequestNotFoundError(leave_id)
    return leave_request


def _get_employee(db: Session, employee_id: int, lock: bool = False) -> Employee:
    query = db.query(Employee).filter(Employee.id == employee_id)
    if lock:
        # Row lock serializes approvals for the same employee (no-op on SQLite)
        query = query.with_for_update()
    employee = query.first()
    if employee is None:
        raise EmployeeNotFoundError(employee_id)
    return employee


def evaluate_for_user(
    db: Session,
    user_id: int,
    start_date: date,
    end_date: date,
    leave_type: Union[LeaveType, str]
) -> LeaveLimitEvaluation:
    """Evaluate a prospective request against the user's stored leave history"""
    _get_employee(db, user_id)
    history = list_leave_requests_for_user(db, user_id)
    return evaluate_leave_limit(user_id, start_date, end_date, leave_type, history)


def apply_leave(
    db: Session,
    user_id: int,
    leave_type: Union[LeaveType, str],
    start_date: date,
    end_date: date,
    reason: Optional[str] = None
) -> Tuple[LeaveRequest, LeaveLimitEvaluation]:
    """
    Create a PENDING leave request

    Args:
        db: Database session
        user_id: Employee applying
        leave_type: Type of leave
        start_date: First day (inclusive)
        end_date: Last day (inclusive)
        reason: Optional free text

    Returns:
        Tuple of (created LeaveRequest, evaluation of whether it would be paid)

    Raises:
        EmployeeNotFoundError: If the employee does not exist
        InvalidDateRangeError: If start_date is after end_date
        UnrecognizedLeaveTypeError: If leave_type is unknown
    """
    leave_type = parse_leave_type(leave_type)
    if start_date > end_date:
        raise InvalidDateRangeError(start_date, end_date)

    evaluation = evaluate_for_user(db, user_id, start_date, end_date, leave_type)

    now = now_utc()
    leave_request = LeaveRequest(
        user_id=user_id,
        type=leave_type,
        start_date=start_date,
        end_date=end_date,
        reason=reason,
        status=LeaveStatus.PENDING,
        created_at=now,
        updated_at=now
    )
    db.add(leave_request)
    db.commit()
    db.refresh(leave_request)

    logger.info(
        "Leave applied id=%s user=%s type=%s %s..%s will_be_paid=%s",
        leave_request.id, user_id, leave_type.value, start_date, end_date, evaluation.will_be_paid
    )
    return leave_request, evaluation


def approve_leave(db: Session, leave_id: int) -> Tuple[LeaveRequest, LeaveLimitEvaluation]:
    """
    Approve a PENDING leave request and record whether it is paid

    The paid decision is taken against the approved history at approval time,
    with the employee row locked for the duration of the transaction.

    Raises:
        LeaveRequestNotFoundError: If the request does not exist
        LeaveStateError: If the request is not PENDING
    """
    leave_request = get_leave_request(db, leave_id)
    if leave_request.status != LeaveStatus.PENDING:
        raise LeaveStateError(
            f"Cannot approve leave request with status {leave_request.status.value}"
        )

    _get_employee(db, leave_request.user_id, lock=True)
    history = [
        r for r in list_leave_requests_for_user(db, leave_request.user_id)
        if r.id != leave_request.id
    ]
    evaluation = evaluate_leave_limit(
        leave_request.user_id,
        leave_request.start_date,
        leave_request.end_date,
        leave_request.type,
        history,
    )

    leave_request.status = LeaveStatus.APPROVED
    leave_request.is_paid = evaluation.will_be_paid
    leave_request.updated_at = now_utc()
    db.commit()
    db.refresh(leave_request)

    logger.info(
        "Leave approved id=%s user=%s paid=%s",
        leave_request.id, leave_request.user_id, leave_request.is_paid
    )
    return leave_request, evaluation


def reject_leave(db: Session, leave_id: int) -> LeaveRequest:
    """
    Reject a PENDING leave request

    Raises:
        LeaveRequestNotFoundError: If the request does not exist
        LeaveStateError: If the request is not PENDING
    """
    leave_request = get_leave_request(db, leave_id)
    if leave_request.status != LeaveStatus.PENDING:
        raise LeaveStateError(
            f"Cannot reject leave request with status {leave_request.status.value}"
        )

    leave_request.status = LeaveStatus.REJECTED
    leave_request.updated_at = now_utc()
    db.commit()
    db.refresh(leave_request)

    logger.info("Leave rejected id=%s user=%s", leave_request.id, leave_request.user_id)
    return leave_request


def list_pending_leave_requests(db: Session) -> List[LeaveRequest]:
    """
    Leave requests awaiting a decision, across all employees, oldest first.

    Args:
        db: Database session

    Returns:
        List of PENDING LeaveRequest instances
    """
    return (
        db.query(LeaveRequest)
        .filter(LeaveRequest.status == LeaveStatus.PENDING)
        .order_by(LeaveRequest.created_at, LeaveRequest.id)
        .all()
    )


def cancel_leave(db: Session, leave_id: int) -> None:
    """
    Withdraw a PENDING leave request

    The request is deleted; approved or rejected requests stay on record.

    Raises:
        LeaveRequestNotFoundError: If the request does not exist
        LeaveStateError: If the request is not PENDING
    """
    leave_request = get_leave_request(db, leave_id)
    if leave_request.status != LeaveStatus.PENDING:
        raise LeaveStateError(
            f"Cannot cancel leave request with status {leave_request.status.value}"
        )

    user_id = leave_request.user_id
    db.delete(leave_request)
    db.commit()

    logger.info("Leave cancelled id=%s user=%s", leave_id, user_id)
