"""
Database models
"""
from app.models.employee import Employee
from app.models.leave import (
    LeaveRequest,
    LeaveType,
    LeaveStatus,
    PAID_POOL_LEAVE_TYPES,
    EXEMPT_LEAVE_TYPES,
)

__all__ = [
    "Employee",
    "LeaveRequest",
    "LeaveType",
    "LeaveStatus",
    "PAID_POOL_LEAVE_TYPES",
    "EXEMPT_LEAVE_TYPES",
]
