"""
Leave endpoints
"""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from leave_app.core.deps import get_db
from leave_app.schemas.leave import LeaveCreate, LeaveDelete, LeaveOut, LeaveStatusUpdate
from leave_app.services.leave_service import create_leave, update_leave_status, delete_leave

router = APIRouter()


@router.post("", response_model=LeaveOut, status_code=201)
async def create_leave_endpoint(
    leave_data: LeaveCreate,
    db: Session = Depends(get_db),
):
    """
    Request leave (creates REQUESTED leave routed to the employee's manager)

    Responses:
    - 400 with error and details when business rules are broken
    - 409 when it overlaps an open leave of the same employee
    - 400 when the regular balance or special leave cap is exceeded
    """
    return create_leave(db, leave_data)


@router.patch("/{leave_id}/status", response_model=LeaveOut)
async def update_leave_status_endpoint(
    leave_id: int,
    status_data: LeaveStatusUpdate,
    db: Session = Depends(get_db),
):
    """
    Approve, reject, cancel or close a leave

    Only the employee's direct manager may change the status.
    """
    return update_leave_status(db, leave_id, status_data.status, status_data.approver_id)


@router.delete("/{leave_id}", status_code=204, response_class=Response)
async def delete_leave_endpoint(
    leave_id: int,
    delete_data: LeaveDelete,
    db: Session = Depends(get_db),
):
    """Withdraw a future leave that is still waiting for a decision"""
    delete_leave(db, leave_id, delete_data.employee_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
