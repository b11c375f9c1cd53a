"""
Authentication schemas
"""
from typing import Optional
from pydantic import BaseModel, Field
from leave_app.schemas.common import API_MODEL_CONFIG


class LoginRequest(BaseModel):
    """Login request schema. The stub service checks only that the user exists."""
    employee_id: str = Field(..., min_length=1, description="Employee code")

    model_config = API_MODEL_CONFIG


class UserOut(BaseModel):
    employee_id: str
    name: str
    is_manager: bool
    manager_id: Optional[str] = None

    model_config = API_MODEL_CONFIG


class TokenResponse(BaseModel):
    """Token response schema"""
    access_token: str
    token_type: str = "bearer"
    user: UserOut

    model_config = API_MODEL_CONFIG
