"""
Leave endpoints
"""
from fastapi import APIRouter, Depends, Query, HTTPException, status
from sqlalchemy.orm import Session
from app.core.deps import get_db
from app.schemas.leave import (
    LeaveApplyRequest,
    LeaveDecisionOut,
    LeaveLimitCheckRequest,
    LeaveLimitEvaluationOut,
    LeaveListResponse,
    LeaveOut,
    MonthlyPaidUsageOut,
)
from app.services.employee_service import get_employee
from app.services.leave_request_service import (
    apply_leave,
    approve_leave,
    cancel_leave,
    evaluate_for_user,
    list_leave_requests_for_user,
    list_pending_leave_requests,
    reject_leave,
)
from app.services.paid_leave_service import compute_monthly_paid_usage, resolve_monthly_cap
from app.utils.date_utils import parse_month_key

router = APIRouter()


def _decision(leave_request, evaluation) -> LeaveDecisionOut:
    return LeaveDecisionOut(
        leave=LeaveOut.model_validate(leave_request),
        evaluation=LeaveLimitEvaluationOut.model_validate(evaluation),
    )


@router.post("/evaluate", response_model=LeaveLimitEvaluationOut)
async def evaluate_leave_endpoint(
    check: LeaveLimitCheckRequest,
    db: Session = Depends(get_db),
):
    """
    Check whether a prospective leave request would be paid

    The request is split by calendar month and each month is compared with
    the monthly paid-leave cap. unpaid and workfromhome are always paid and
    never counted.
    """
    evaluation = evaluate_for_user(
        db,
        user_id=check.user_id,
        start_date=check.start_date,
        end_date=check.end_date,
        leave_type=check.leave_type,
    )
    return LeaveLimitEvaluationOut.model_validate(evaluation)


@router.get("/monthly-usage", response_model=MonthlyPaidUsageOut)
async def monthly_usage_endpoint(
    user_id: int = Query(..., description="Employee ID"),
    month: str = Query(..., description="Month in YYYY-MM format (e.g., 2024-01)"),
    db: Session = Depends(get_db),
):
    """Approved paid leave already used by an employee in a month"""
    try:
        target_month = parse_month_key(month)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    get_employee(db, user_id)
    usage = compute_monthly_paid_usage(user_id, target_month, list_leave_requests_for_user(db, user_id))
    cap = resolve_monthly_cap()
    return MonthlyPaidUsageOut(
        user_id=user_id,
        month=month,
        current_usage=usage,
        limit=cap,
        remaining=max(0.0, cap - usage),
    )


@router.get("/user/{user_id}", response_model=LeaveListResponse)
async def list_user_leaves_endpoint(
    user_id: int,
    db: Session = Depends(get_db),
):
    """All leave requests of an employee, any status"""
    get_employee(db, user_id)
    items = list_leave_requests_for_user(db, user_id)
    return LeaveListResponse(items=[LeaveOut.model_validate(i) for i in items], total=len(items))


@router.post("/apply", response_model=LeaveDecisionOut, status_code=201)
async def apply_leave_endpoint(
    leave_data: LeaveApplyRequest,
    db: Session = Depends(get_db),
):
    """
    Apply for leave (creates PENDING request)

    Returns the stored request and whether it would be paid if approved now.
    """
    leave_request, evaluation = apply_leave(
        db=db,
        user_id=leave_data.user_id,
        leave_type=leave_data.leave_type,
        start_date=leave_data.start_date,
        end_date=leave_data.end_date,
        reason=leave_data.reason,
    )
    return _decision(leave_request, evaluation)


@router.post("/{leave_id}/approve", response_model=LeaveDecisionOut)
async def approve_leave_endpoint(
    leave_id: int,
    db: Session = Depends(get_db),
):
    """Approve a PENDING leave request; records whether it is paid"""
    leave_request, evaluation = approve_leave(db, leave_id)
    return _decision(leave_request, evaluation)


@router.post("/{leave_id}/reject", response_model=LeaveOut)
async def reject_leave_endpoint(
    leave_id: int,
    db: Session = Depends(get_db),
):
    """Reject a PENDING leave request"""
    return reject_leave(db, leave_id)


@router.get("/pending", response_model=LeaveListResponse)
async def list_pending_leaves_endpoint(
    db: Session = Depends(get_db),
):
    """Approval queue: PENDING requests of all employees, oldest first"""
    items = list_pending_leave_requests(db)
    return LeaveListResponse(items=[LeaveOut.model_validate(i) for i in items], total=len(items))


@router.delete("/{leave_id}", status_code=status.HTTP_204_NO_CONTENT)
async def cancel_leave_endpoint(
    leave_id: int,
    db: Session = Depends(get_db),
):
    """
    Cancel a PENDING leave request

    Returns 204 No Content on success.
    Returns 404 if the request does not exist.
    Returns 409 if the request has already been approved or rejected.
    """
    cancel_leave(db, leave_id)
    return None
