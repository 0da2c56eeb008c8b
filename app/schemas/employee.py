"""
Employee schemas
"""
from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict, field_serializer
from app.utils.datetime_utils import iso_8601_utc


class EmployeeCreate(BaseModel):
    """Schema for creating an employee"""
    name: str = Field(..., min_length=1, description="Full name")
    email: str = Field(..., min_length=3, description="Unique email address")
    join_date: date = Field(..., description="Date the employee joined")
    active: bool = Field(True, description="Whether the employee is active")


class EmployeeOut(BaseModel):
    """Schema for employee output"""
    id: int
    name: str
    email: str
    join_date: date
    active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("created_at", "updated_at", when_used="always")
    @classmethod
    def _ser_datetime(cls, dt: Optional[datetime]) -> Optional[str]:
        return iso_8601_utc(dt)
