"""
Leave schemas
"""
from datetime import date, datetime
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict, field_serializer
from pydantic.alias_generators import to_camel
from app.models.leave import LeaveType, LeaveStatus
from app.utils.datetime_utils import iso_8601_utc


class LeaveLimitCheckRequest(BaseModel):
    """Schema for checking a prospective leave request against the monthly cap"""
    user_id: int = Field(..., description="Employee applying for leave")
    start_date: date = Field(..., description="First day of leave (inclusive)")
    end_date: date = Field(..., description="Last day of leave (inclusive)")
    leave_type: str = Field(..., description="Type of leave (annual, sick, personal, halfday, unpaid, other, workfromhome)")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LeaveApplyRequest(BaseModel):
    """Schema for applying leave"""
    user_id: int = Field(..., description="Employee applying for leave")
    leave_type: str = Field(..., description="Type of leave (annual, sick, personal, halfday, unpaid, other, workfromhome)")
    start_date: date = Field(..., description="First day of leave (inclusive)")
    end_date: date = Field(..., description="Last day of leave (inclusive)")
    reason: Optional[str] = Field(None, description="Reason for leave")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MonthlyUsageOut(BaseModel):
    """Per-month slice of a leave limit evaluation"""
    month: str
    month_key: str
    current_usage: float
    request_days_in_month: float
    new_total: float
    limit: float
    remaining: float
    would_exceed: bool

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class LeaveLimitEvaluationOut(BaseModel):
    """Whether a prospective request would be paid, split by month"""
    would_exceed: bool
    will_be_paid: bool
    total_request_days: float
    per_month_analysis: List[MonthlyUsageOut]

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class MonthlyPaidUsageOut(BaseModel):
    """Approved paid-pool usage of a user in one month"""
    user_id: int
    month: str = Field(..., description="Month in YYYY-MM format")
    current_usage: float
    limit: float
    remaining: float


class LeaveOut(BaseModel):
    """Schema for leave output"""
    id: int
    user_id: int
    type: LeaveType
    start_date: date
    end_date: date
    reason: Optional[str]
    status: LeaveStatus
    is_paid: Optional[bool] = Field(None, description="Set when the request is approved")
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("created_at", "updated_at", when_used="always")
    @classmethod
    def _ser_datetime(cls, dt: Optional[datetime]) -> Optional[str]:
        return iso_8601_utc(dt)


class LeaveDecisionOut(BaseModel):
    """A leave request together with its paid/unpaid evaluation"""
    leave: LeaveOut
    evaluation: LeaveLimitEvaluationOut


class LeaveListResponse(BaseModel):
    items: List[LeaveOut]
    total: int


class LeaveBalanceOut(BaseModel):
    """Accrued vs taken leave as of a date"""
    employee_id: int
    as_of_date: date
    total_accrued: float
    total_taken: float
    pending_requests: float
    remaining_balance: float
    next_accrual_date: date
    accrued_this_year: float
    taken_this_year: float

    model_config = ConfigDict(from_attributes=True)
