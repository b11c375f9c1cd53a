"""
Database models
"""
from leave_app.models.employee import Employee
from leave_app.models.audit_log import AuditLog
from leave_app.models.leave import (
    Leave,
    LeaveBalance,
    SpecialLeaveUsage,
    LeaveStatus,
    LeaveType,
    SpecialLeaveType,
    TERMINAL_LEAVE_STATUSES,
)
from leave_app.models.holiday import Holiday

__all__ = [
    "Employee",
    "AuditLog",
    "Leave",
    "LeaveBalance",
    "SpecialLeaveUsage",
    "LeaveStatus",
    "LeaveType",
    "SpecialLeaveType",
    "TERMINAL_LEAVE_STATUSES",
    "Holiday",
]
