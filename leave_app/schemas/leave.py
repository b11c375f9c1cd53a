"""
Leave schemas
"""
from datetime import datetime, timedelta
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator, field_serializer, model_validator
from leave_app.core.constants import MAX_LEAVE_SPAN_DAYS
from leave_app.models.leave import LeaveStatus, LeaveType, SpecialLeaveType
from leave_app.schemas.common import API_MODEL_CONFIG
from leave_app.schemas.employee import EmployeeRef
from leave_app.utils.datetime_utils import iso_local, to_local_naive


def check_leave_span(start: datetime, end: datetime) -> None:
    """Raise ValueError when [start, end] is longer than MAX_LEAVE_SPAN_DAYS"""
    if end - start > timedelta(days=MAX_LEAVE_SPAN_DAYS):
        raise ValueError(f"Leave may span at most {MAX_LEAVE_SPAN_DAYS} days")


class LeaveRange(BaseModel):
    """Start and end of a leave, normalised to local calendar time"""
    start_of_leave: datetime = Field(..., description="Start of leave (local time unless an offset is given)")
    end_of_leave: datetime = Field(..., description="End of leave (local time unless an offset is given)")
    leave_type: LeaveType = Field(LeaveType.REGULAR, description="REGULAR or SPECIAL")
    special_leave_type: Optional[SpecialLeaveType] = Field(None, description="Required for SPECIAL leave")

    model_config = API_MODEL_CONFIG

    @field_validator("start_of_leave", "end_of_leave")
    @classmethod
    def to_calendar_time(cls, v: datetime) -> datetime:
        try:
            return to_local_naive(v)
        except OverflowError:
            raise ValueError("Date is out of range")

    @model_validator(mode="after")
    def limit_span(self):
        # end before start is a business rule error, reported by the rules engine
        check_leave_span(self.start_of_leave, self.end_of_leave)
        return self


class LeaveCreate(LeaveRange):
    """Schema for requesting leave"""
    leave_label: str = Field(..., min_length=1, max_length=255, description="Short description of the leave")
    employee_id: str = Field(..., min_length=1, description="Employee requesting the leave")


class LeaveCheck(LeaveRange):
    """Schema for a dry-run rule check (no employee, nothing persisted)"""


class LeaveStatusUpdate(BaseModel):
    """Schema for a manager's status decision. Status is checked by the service (400 when unknown)."""
    status: str = Field(..., description="New status, one of LeaveStatus")
    approver_id: str = Field(..., description="Employee code of the deciding manager")

    model_config = API_MODEL_CONFIG


class LeaveDelete(BaseModel):
    employee_id: str = Field(..., description="Employee code of the leave owner")

    model_config = API_MODEL_CONFIG


class LeaveOut(BaseModel):
    """Schema for leave output"""
    leave_id: int
    leave_label: str
    employee_id: str
    start_of_leave: datetime
    end_of_leave: datetime
    approver_id: Optional[str] = None
    status: LeaveStatus
    leave_type: LeaveType
    special_leave_type: Optional[SpecialLeaveType] = None
    total_hours: float
    employee: Optional[EmployeeRef] = None
    approver: Optional[EmployeeRef] = None
    created_at: datetime
    updated_at: datetime

    model_config = API_MODEL_CONFIG

    @field_serializer("created_at", "updated_at", when_used="always")
    @classmethod
    def _ser_datetime(cls, dt):
        return iso_local(dt)


class LeaveCheckOut(BaseModel):
    """Result of a dry-run rule check"""
    is_valid: bool
    errors: List[str]
    warnings: List[str]
    total_hours: float

    model_config = API_MODEL_CONFIG


class WorkingHoursOut(BaseModel):
    start: datetime
    end: datetime
    total_hours: float

    model_config = API_MODEL_CONFIG
