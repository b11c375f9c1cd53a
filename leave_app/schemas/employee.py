"""
Employee schemas
"""
import re
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator, field_serializer
from leave_app.core.constants import EMPLOYEE_ID_PATTERN, DEFAULT_CONTRACT_HOURS
from leave_app.schemas.common import API_MODEL_CONFIG
from leave_app.utils.datetime_utils import iso_local


class EmployeeCreate(BaseModel):
    """Schema for creating an employee"""
    employee_id: str = Field(..., description="Employee code, e.g. K012345")
    name: str = Field(..., min_length=1, description="Employee name")
    manager_id: Optional[str] = Field(None, description="Direct manager's employee code")
    contract_hours: int = Field(DEFAULT_CONTRACT_HOURS, gt=0, le=80, description="Weekly contract hours")
    is_manager: bool = Field(False, description="Whether the employee manages others")

    model_config = API_MODEL_CONFIG

    @field_validator("employee_id", "manager_id", mode="before")
    @classmethod
    def strip_codes(cls, v):
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    def has_valid_employee_id(self) -> bool:
        return bool(self.employee_id and re.match(EMPLOYEE_ID_PATTERN, self.employee_id))


class EmployeeRef(BaseModel):
    """Minimal employee reference (manager, approver, subordinate)"""
    employee_id: str
    name: str

    model_config = API_MODEL_CONFIG


class SubordinateOut(BaseModel):
    employee_id: str
    name: str
    contract_hours: int

    model_config = API_MODEL_CONFIG


class EmployeeOut(BaseModel):
    """Schema for employee output"""
    employee_id: str
    name: str
    manager_id: Optional[str] = None
    contract_hours: int
    is_manager: bool
    manager: Optional[EmployeeRef] = None
    subordinates: List[EmployeeRef] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    model_config = API_MODEL_CONFIG

    @field_serializer("created_at", "updated_at", when_used="always")
    @classmethod
    def _ser_datetime(cls, dt):
        return iso_local(dt)
