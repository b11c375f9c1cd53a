"""
Holiday calendar schemas
"""
from datetime import date as date_type, datetime
from typing import Optional
from pydantic import BaseModel, Field, field_serializer
from leave_app.schemas.common import API_MODEL_CONFIG
from leave_app.utils.datetime_utils import iso_local


class HolidayCreate(BaseModel):
    """Schema for creating a holiday"""
    year: int = Field(..., description="Year (e.g., 2026)")
    date: date_type = Field(..., description="Holiday date")
    name: str = Field(..., min_length=1, description="Holiday name")
    active: bool = Field(True, description="Whether the holiday is active")

    model_config = API_MODEL_CONFIG


class HolidayUpdate(BaseModel):
    """Schema for updating a holiday"""
    name: Optional[str] = Field(None, description="Holiday name")
    active: Optional[bool] = Field(None, description="Whether the holiday is active")

    model_config = API_MODEL_CONFIG


class HolidayOut(BaseModel):
    id: int
    year: int
    date: date_type
    name: str
    active: bool
    created_at: datetime
    updated_at: datetime

    model_config = API_MODEL_CONFIG

    @field_serializer("created_at", "updated_at", when_used="always")
    @classmethod
    def _ser_datetime(cls, dt):
        return iso_local(dt)
