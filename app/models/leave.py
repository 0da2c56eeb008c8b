"""
Leave models
"""
from sqlalchemy import (
    Column,
    Integer,
    Date,
    DateTime,
    ForeignKey,
    Text,
    Enum as SQLEnum,
    Boolean,
    Index,
    CheckConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import enum
from app.db.base import Base


class LeaveType(str, enum.Enum):
    ANNUAL = "annual"
    SICK = "sick"
    PERSONAL = "personal"
    HALFDAY = "halfday"
    UNPAID = "unpaid"
    OTHER = "other"
    WORKFROMHOME = "workfromhome"


class LeaveStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


# Types that draw from the monthly paid pool once approved
PAID_POOL_LEAVE_TYPES = frozenset({
    LeaveType.ANNUAL,
    LeaveType.SICK,
    LeaveType.PERSONAL,
    LeaveType.HALFDAY,
})

# Types that never touch paid-leave accounting
EXEMPT_LEAVE_TYPES = frozenset({
    LeaveType.UNPAID,
    LeaveType.WORKFROMHOME,
})


class LeaveRequest(Base):
    __tablename__ = "leave_requests"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    type = Column(SQLEnum(LeaveType, values_callable=lambda e: [m.value for m in e]), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    reason = Column(Text, nullable=True)
    status = Column(
        SQLEnum(LeaveStatus, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=LeaveStatus.PENDING,
    )
    is_paid = Column(Boolean, nullable=True)  # Decided when the request is approved
    created_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), onupdate=func.current_timestamp(), nullable=False)

    # Relationships
    employee = relationship("Employee", back_populates="leave_requests")

    __table_args__ = (
        Index('ix_leave_requests_user_dates', 'user_id', 'start_date', 'end_date'),
        CheckConstraint('start_date <= end_date', name='check_start_date_le_end_date'),
    )
