"""
Employee endpoints
"""
from dataclasses import asdict
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.core.deps import get_db
from app.schemas.employee import EmployeeCreate, EmployeeOut
from app.schemas.leave import LeaveBalanceOut
from app.services.employee_service import create_employee, get_employee
from app.services.leave_balance_service import get_leave_balance

router = APIRouter()


@router.post("", response_model=EmployeeOut, status_code=201)
async def create_employee_endpoint(
    employee_data: EmployeeCreate,
    db: Session = Depends(get_db),
):
    """Create a new employee"""
    return create_employee(
        db,
        name=employee_data.name,
        email=employee_data.email,
        join_date=employee_data.join_date,
        active=employee_data.active,
    )


@router.get("/{employee_id}", response_model=EmployeeOut)
async def get_employee_endpoint(
    employee_id: int,
    db: Session = Depends(get_db),
):
    """Get an employee by ID"""
    return get_employee(db, employee_id)


@router.get("/{employee_id}/leave-balance", response_model=LeaveBalanceOut)
async def leave_balance_endpoint(
    employee_id: int,
    as_of: Optional[date] = Query(None, description="Balance date (YYYY-MM-DD). Defaults to today."),
    db: Session = Depends(get_db),
):
    """
    Leave balance of an employee

    Accrual is 1.5 days per full month of service by default
    (MONTHLY_ACCRUAL_DAYS). Approved annual, sick, personal and halfday
    requests reduce the balance; pending ones are reported separately.
    """
    balance = get_leave_balance(db, employee_id, as_of or date.today())
    return LeaveBalanceOut(employee_id=employee_id, **asdict(balance))
