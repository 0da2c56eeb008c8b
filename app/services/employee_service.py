"""
Employee service - minimal employee directory backing leave requests
"""
from datetime import date
from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from app.core.errors import EmployeeNotFoundError
from app.models.employee import Employee
from app.utils.datetime_utils import now_utc


def create_employee(db: Session, name: str, email: str, join_date: date, active: bool = True) -> Employee:
    """
    Create a new employee

    Raises:
        HTTPException: If an employee with the same email exists
    """
    existing = db.query(Employee).filter(Employee.email == email).first()
    if existing:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Employee with email {email} already exists"
        )

    now = now_utc()
    employee = Employee(
        name=name,
        email=email,
        join_date=join_date,
        active=active,
        created_at=now,
        updated_at=now
    )
    db.add(employee)
    db.commit()
    db.refresh(employee)
    return employee


def get_employee(db: Session, employee_id: int) -> Employee:
    """Get an employee by ID, raising EmployeeNotFoundError if missing"""
    employee = db.query(Employee).filter(Employee.id == employee_id).first()
    if employee is None:
        raise EmployeeNotFoundError(employee_id)
    return employee
