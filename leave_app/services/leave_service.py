"""
Leave service - business logic for leave management
"""
import logging
from typing import List, Optional
from sqlalchemy.orm import Session, joinedload
from fastapi import HTTPException, status
from leave_app.core.errors import LeaveRuleViolation
from leave_app.models.employee import Employee
from leave_app.models.leave import (
    Leave,
    LeaveStatus,
    LeaveType,
    SpecialLeaveUsage,
    TERMINAL_LEAVE_STATUSES,
)
from leave_app.schemas.leave import LeaveCreate
from leave_app.services.audit_service import log_audit
from leave_app.services.balance_service import (
    adjust_special_usage,
    get_employee_or_404,
    get_or_create_balance,
    sum_leave_hours,
)
from leave_app.services.holiday_service import get_holiday_calendar
from leave_app.services.leave_rules import (
    HolidayCalendar,
    calculate_working_hours,
    get_special_leave_limit,
    validate_leave_request,
)
from leave_app.utils.datetime_utils import now_local

logger = logging.getLogger(__name__)


def _get_leave(db: Session, leave_id: int) -> Optional[Leave]:
    return (
        db.query(Leave)
        .options(joinedload(Leave.employee), joinedload(Leave.approver))
        .filter(Leave.id == leave_id)
        .first()
    )


def validate_overlap(db: Session, employee_id: str, leave_data: LeaveCreate) -> None:
    """
    Reject a leave that overlaps any non-terminal leave of the same employee.
    Bounds are inclusive: a leave ending at 12:00 clashes with one starting at 12:00.

    Raises:
        HTTPException: 409 on overlap
    """
    overlapping = db.query(Leave).filter(
        Leave.employee_id == employee_id,
        Leave.status.notin_(list(TERMINAL_LEAVE_STATUSES)),
        Leave.start_of_leave <= leave_data.end_of_leave,
        Leave.end_of_leave >= leave_data.start_of_leave,
    ).first()

    if overlapping:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=(
                f"Overlapping leave exists from {overlapping.start_of_leave.isoformat()} "
                f"to {overlapping.end_of_leave.isoformat()}"
            )
        )


def validate_balance(db: Session, employee: Employee, leave_data: LeaveCreate, total_hours: float) -> None:
    """
    Check that the requested hours fit in what is left for the year the leave starts in.

    Hours of leaves still waiting for a decision are reserved, so two pending
    requests cannot both spend the same balance.

    Raises:
        HTTPException: 400 when the balance or special leave cap is exceeded
    """
    year = leave_data.start_of_leave.year

    if leave_data.leave_type == LeaveType.REGULAR:
        balance = get_or_create_balance(db, employee, year)
        approved = sum_leave_hours(db, employee.id, year, [LeaveStatus.APPROVED])
        pending = sum_leave_hours(db, employee.id, year, [LeaveStatus.REQUESTED])
        available = balance.total_hours - approved - pending
        if total_hours > available:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=(
                    f"Insufficient leave balance: requested {total_hours:g} hours, "
                    f"{max(available, 0):g} hours available in {year}"
                )
            )
        return

    limit = get_special_leave_limit(leave_data.special_leave_type, employee.contract_hours)
    usage = db.query(SpecialLeaveUsage).filter(
        SpecialLeaveUsage.employee_id == employee.id,
        SpecialLeaveUsage.year == year,
        SpecialLeaveUsage.special_leave_type == leave_data.special_leave_type,
    ).first()
    used_hours = usage.used_hours if usage else 0.0
    pending = sum_leave_hours(
        db, employee.id, year, [LeaveStatus.REQUESTED],
        leave_type=LeaveType.SPECIAL,
        special_leave_type=leave_data.special_leave_type,
    )
    available = limit.max_hours - used_hours - pending
    if total_hours > available:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=(
                f"Insufficient special leave balance for {leave_data.special_leave_type.value}: "
                f"requested {total_hours:g} hours, {max(available, 0):g} hours available in {year}"
            )
        )


def create_leave(
    db: Session,
    leave_data: LeaveCreate,
    calendar: Optional[HolidayCalendar] = None,
) -> Leave:
    """
    Request leave (creates a REQUESTED leave routed to the employee's manager)

    Steps:
    - Business rules (dates, working hours, special leave notice) - 400 with all violations
    - Overlap with non-terminal leaves - 409
    - Working hours of the leave stamped on total_hours
    - Regular balance or special leave cap - 400

    Args:
        db: Database session
        leave_data: Leave request
        calendar: Holiday table; built from settings and the holidays table when omitted

    Returns:
        Created Leave instance

    Raises:
        HTTPException / LeaveRuleViolation: If validation fails
    """
    employee = get_employee_or_404(db, leave_data.employee_id)
    calendar = calendar or get_holiday_calendar(db)

    result = validate_leave_request(leave_data, now=now_local(), calendar=calendar)
    if not result.is_valid:
        logger.info(
            "Leave request for %s rejected by business rules: %s",
            employee.id, "; ".join(result.errors)
        )
        raise LeaveRuleViolation(
            "Leave request violates business rules",
            details=result.errors,
            warnings=result.warnings,
        )

    validate_overlap(db, employee.id, leave_data)

    total_hours = calculate_working_hours(
        leave_data.start_of_leave, leave_data.end_of_leave, calendar
    )
    if total_hours <= 0:
        raise LeaveRuleViolation(
            "Leave request violates business rules",
            details=["Leave must include at least one working hour"],
            warnings=result.warnings,
        )

    validate_balance(db, employee, leave_data, total_hours)

    leave = Leave(
        leave_label=leave_data.leave_label,
        employee_id=employee.id,
        start_of_leave=leave_data.start_of_leave,
        end_of_leave=leave_data.end_of_leave,
        approver_id=employee.manager_id,
        status=LeaveStatus.REQUESTED,
        leave_type=leave_data.leave_type,
        special_leave_type=(
            leave_data.special_leave_type if leave_data.leave_type == LeaveType.SPECIAL else None
        ),
        total_hours=total_hours,
    )
    db.add(leave)
    db.flush()

    log_audit(
        db=db,
        actor_id=employee.id,
        action="LEAVE_CREATE",
        entity_type="leave",
        entity_id=leave.id,
        meta={
            "leave_type": leave.leave_type,
            "special_leave_type": leave.special_leave_type,
            "start_of_leave": leave.start_of_leave,
            "end_of_leave": leave.end_of_leave,
            "total_hours": total_hours,
            "warnings": result.warnings,
        }
    )
    db.commit()

    logger.info(
        "Leave %s requested by %s: %s to %s, %s hours (%s)",
        leave.id, employee.id, leave.start_of_leave, leave.end_of_leave,
        total_hours, leave.leave_type.value
    )

    return _get_leave(db, leave.id)


def update_leave_status(
    db: Session,
    leave_id: int,
    new_status: str,
    approver_id: str,
) -> Leave:
    """
    Record a manager's decision on a leave

    Only the employee's direct manager may change the status. The approver is
    stored only when the leave is approved. Approving a special leave spends
    its hours on the usage row; moving an approved special leave to another
    status gives them back.

    Raises:
        HTTPException: 400 unknown status, 404 missing leave, 403 not the manager
    """
    try:
        target_status = LeaveStatus(new_status)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid status value"
        )

    leave = _get_leave(db, leave_id)
    if not leave:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Leave not found"
        )

    if leave.employee.manager_id != approver_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Approver not authorized for this leave"
        )

    previous_status = leave.status
    leave.status = target_status
    if target_status == LeaveStatus.APPROVED:
        leave.approver_id = approver_id

    if leave.leave_type == LeaveType.SPECIAL and leave.special_leave_type and previous_status != target_status:
        if target_status == LeaveStatus.APPROVED:
            adjust_special_usage(db, leave, 1)
        elif previous_status == LeaveStatus.APPROVED:
            adjust_special_usage(db, leave, -1)

    log_audit(
        db=db,
        actor_id=approver_id,
        action="LEAVE_STATUS_UPDATE",
        entity_type="leave",
        entity_id=leave.id,
        meta={"from": previous_status, "to": target_status}
    )
    db.commit()

    logger.info(
        "Leave %s status %s -> %s by %s",
        leave.id, previous_status.value, target_status.value, approver_id
    )

    return _get_leave(db, leave_id)


def delete_leave(db: Session, leave_id: int, employee_id: str) -> None:
    """
    Withdraw a leave request

    Only the owner may delete, only before the leave starts, and only while
    it is still waiting for a decision.

    Raises:
        HTTPException: 404 missing or already started, 403 not the owner,
            400 approved or otherwise decided
    """
    leave = db.query(Leave).filter(Leave.id == leave_id).first()

    if not leave:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Leave not found"
        )

    if leave.employee_id != employee_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to delete this leave"
        )

    if leave.start_of_leave <= now_local():
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Cannot delete leave that has started or passed"
        )

    if leave.status == LeaveStatus.APPROVED:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete an approved leave. Please contact your manager to cancel it."
        )

    if leave.status in TERMINAL_LEAVE_STATUSES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Cannot delete a leave with status {leave.status.value}"
        )

    db.delete(leave)
    log_audit(
        db=db,
        actor_id=employee_id,
        action="LEAVE_DELETE",
        entity_type="leave",
        entity_id=leave_id,
    )
    db.commit()
    logger.info("Leave %s deleted by %s", leave_id, employee_id)


def list_employee_leaves(db: Session, employee_id: str) -> List[Leave]:
    """An employee's leaves, latest start first"""
    return (
        db.query(Leave)
        .options(joinedload(Leave.employee), joinedload(Leave.approver))
        .filter(Leave.employee_id == employee_id)
        .order_by(Leave.start_of_leave.desc())
        .all()
    )


def list_manager_leaves(db: Session, manager_id: str) -> List[Leave]:
    """Leaves of a manager's direct reports, latest start first"""
    subordinate_ids = [
        employee_id
        for (employee_id,) in db.query(Employee.id).filter(Employee.manager_id == manager_id).all()
    ]
    if not subordinate_ids:
        return []

    return (
        db.query(Leave)
        .options(joinedload(Leave.employee), joinedload(Leave.approver))
        .filter(Leave.employee_id.in_(subordinate_ids))
        .order_by(Leave.start_of_leave.desc())
        .all()
    )
