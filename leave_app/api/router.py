"""
Main API router
"""
from fastapi import APIRouter

from leave_app.api.v1 import (
    health,
    version,
    auth,
    employees,
    managers,
    leaves,
    balances,
    holidays,
    leave_rules,
)

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(version.router, tags=["version"])
api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])
api_router.include_router(employees.router, prefix="/employees", tags=["employees"])
api_router.include_router(balances.router, prefix="/employees", tags=["balances"])
api_router.include_router(managers.router, prefix="/managers", tags=["managers"])
api_router.include_router(leaves.router, prefix="/leaves", tags=["leaves"])
api_router.include_router(holidays.router, prefix="/holidays", tags=["holidays"])
api_router.include_router(leave_rules.router, prefix="/leave-rules", tags=["leave-rules"])
