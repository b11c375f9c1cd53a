"""
Manager endpoints
"""
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from leave_app.core.deps import get_db
from leave_app.schemas.leave import LeaveOut
from leave_app.services.leave_service import list_manager_leaves

router = APIRouter()


@router.get("/{manager_id}/leaves", response_model=List[LeaveOut])
async def list_manager_leaves_endpoint(manager_id: str, db: Session = Depends(get_db)):
    """Leaves of the manager's direct reports, latest first"""
    return list_manager_leaves(db, manager_id)
