"""
Leave balance and special leave usage schemas
"""
from pydantic import BaseModel
from leave_app.models.leave import SpecialLeaveType
from leave_app.schemas.common import API_MODEL_CONFIG


class LeaveBalanceOut(BaseModel):
    """Regular leave balance for one year; remaining = total - used"""
    id: int
    employee_id: str
    year: int
    total_days: int
    total_hours: float
    used_days: int
    used_hours: float
    remaining_days: int
    remaining_hours: float

    model_config = API_MODEL_CONFIG


class SpecialLeaveUsageOut(BaseModel):
    """Usage of one special leave type against its yearly cap"""
    employee_id: str
    year: int
    special_leave_type: SpecialLeaveType
    used_days: int
    used_hours: float
    max_days: int
    max_hours: float
    remaining_days: int
    remaining_hours: float

    model_config = API_MODEL_CONFIG
