"""
Tests for leave request, status and delete endpoints
"""
import pytest
from datetime import date, timedelta
from fastapi import status
from leave_app.models.audit_log import AuditLog
from leave_app.models.employee import Employee
from leave_app.models.leave import Leave, LeaveStatus, LeaveType, SpecialLeaveUsage
from leave_app.schemas.leave import LeaveCreate
from leave_app.services import leave_service
from leave_app.tests.helpers import at, iso, next_monday, next_workday


def leave_payload(employee_id, day, start_hour=9, end_hour=17, end_day=None, **extra):
    payload = {
        "leaveLabel": "Holiday",
        "employeeId": employee_id,
        "startOfLeave": iso(day, start_hour),
        "endOfLeave": iso(end_day or day, end_hour),
    }
    payload.update(extra)
    return payload


def request_leave(client, employee_id, day, **kwargs):
    return client.post("/api/leaves", json=leave_payload(employee_id, day, **kwargs))


def test_request_leave_success(client, db, employee, workday):
    """A valid request is stored as REQUESTED and routed to the manager"""
    response = request_leave(client, employee.id, workday)

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["leaveId"] > 0
    assert data["leaveLabel"] == "Holiday"
    assert data["employeeId"] == "K012345"
    assert data["status"] == "REQUESTED"
    assert data["leaveType"] == "REGULAR"
    assert data["specialLeaveType"] is None
    assert data["approverId"] == "K000001"
    assert data["totalHours"] == 8.0
    assert data["startOfLeave"] == iso(workday, 9)
    assert data["employee"]["name"] == "Mohammad Farhadi"

    leave = db.query(Leave).filter(Leave.id == data["leaveId"]).first()
    assert leave.total_hours == 8.0
    assert leave.start_of_leave == at(workday, 9)


def test_request_leave_records_audit_entry(client, db, employee, workday):
    response = request_leave(client, employee.id, workday)
    assert response.status_code == status.HTTP_201_CREATED

    audit = db.query(AuditLog).filter(AuditLog.action == "LEAVE_CREATE").first()
    assert audit is not None
    assert audit.actor_id == "K012345"
    assert audit.entity_id == str(response.json()["leaveId"])
    assert audit.meta_json["total_hours"] == 8.0


def test_multi_day_leave_skips_weekend(client, employee):
    """Friday to Monday bills two working days"""
    monday = next_monday()
    friday = monday + timedelta(days=4)

    response = request_leave(client, employee.id, friday, end_day=friday + timedelta(days=3))

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["totalHours"] == 16.0


def test_aware_timestamps_are_stored_as_local_time(client, db, employee, workday):
    """An offset timestamp is converted to the calendar zone"""
    payload = leave_payload(employee.id, workday)
    payload["startOfLeave"] = at(workday, 10).isoformat() + "+02:00"
    payload["endOfLeave"] = at(workday, 12).isoformat() + "+02:00"

    response = client.post("/api/leaves", json=payload)

    assert response.status_code == status.HTTP_201_CREATED
    leave = db.query(Leave).filter(Leave.id == response.json()["leaveId"]).first()
    assert leave.start_of_leave.tzinfo is None
    assert leave.end_of_leave - leave.start_of_leave == timedelta(hours=2)


def test_rule_violations_are_reported_together(client, employee):
    """Past date and missing special leave type come back in one response"""
    yesterday = date.today() - timedelta(days=1)

    response = request_leave(client, employee.id, yesterday, leaveType="SPECIAL")

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    data = response.json()
    assert data["error"] == "Leave request violates business rules"
    assert "Cannot schedule leave in the past" in data["details"]
    assert "Special leave type is required for special leaves" in data["details"]


def test_leave_outside_working_hours_rejected(client, employee, workday):
    response = request_leave(client, employee.id, workday, start_hour=8, end_hour=18)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["details"] == [
        "Start time must be within working hours (9:00-17:00)",
        "End time must be within working hours (9:00-17:00)",
    ]


def test_weekend_only_leave_rejected(client, employee):
    """Warnings alone do not block, but a leave with no working hours does"""
    saturday = next_monday() + timedelta(days=5)

    response = request_leave(client, employee.id, saturday)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    data = response.json()
    assert "Leave must include at least one working hour" in data["details"]
    assert any("weekend day" in warning for warning in data["warnings"])


def test_unknown_employee_rejected(client, manager, workday):
    response = request_leave(client, "K999999", workday)

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Employee not found"


def test_missing_fields_rejected(client, employee):
    response = client.post("/api/leaves", json={"employeeId": employee.id})

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_overlapping_leave_rejected(client, employee, workday):
    assert request_leave(client, employee.id, workday).status_code == status.HTTP_201_CREATED

    response = request_leave(client, employee.id, workday, start_hour=13, end_hour=15)

    assert response.status_code == status.HTTP_409_CONFLICT
    assert "Overlapping leave" in response.json()["detail"]


def test_touching_leaves_overlap(client, employee, workday):
    """Bounds are inclusive"""
    assert request_leave(client, employee.id, workday, start_hour=9, end_hour=12).status_code == 201

    response = request_leave(client, employee.id, workday, start_hour=12, end_hour=17)

    assert response.status_code == status.HTTP_409_CONFLICT


def test_terminal_leave_does_not_block_new_request(client, employee, workday):
    created = request_leave(client, employee.id, workday).json()
    client.patch(
        f"/api/leaves/{created['leaveId']}/status",
        json={"status": "REJECTED", "approverId": "K000001"},
    )

    response = request_leave(client, employee.id, workday)

    assert response.status_code == status.HTTP_201_CREATED


def test_other_employees_leave_does_not_overlap(client, employee, part_timer, workday):
    assert request_leave(client, employee.id, workday).status_code == 201
    assert request_leave(client, part_timer.id, workday).status_code == 201


def test_insufficient_regular_balance_rejected(client, db, manager):
    """A 1-hour contract earns 5 hours of leave a year"""
    db.add(Employee(id="K054321", name="Tiny Contract", manager_id=manager.id, contract_hours=1))
    db.commit()

    response = request_leave(client, "K054321", next_workday())

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "Insufficient leave balance" in response.json()["detail"]


def test_pending_requests_reserve_balance(client, db, manager):
    """Two pending requests cannot both spend the same hours"""
    db.add(Employee(id="K054321", name="Tiny Contract", manager_id=manager.id, contract_hours=2))
    db.commit()
    monday = next_monday()

    # 10 hours a year: 8 fit, the next 8 do not
    assert request_leave(client, "K054321", monday).status_code == status.HTTP_201_CREATED
    response = request_leave(client, "K054321", monday + timedelta(days=1))

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_approve_leave(client, employee, workday):
    created = request_leave(client, employee.id, workday).json()

    response = client.patch(
        f"/api/leaves/{created['leaveId']}/status",
        json={"status": "APPROVED", "approverId": "K000001"},
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["status"] == "APPROVED"
    assert data["approverId"] == "K000001"
    assert data["approver"]["name"] == "Velthoven Jeroen-van"


def test_status_change_by_other_manager_forbidden(client, employee, other_manager, workday):
    created = request_leave(client, employee.id, workday).json()

    response = client.patch(
        f"/api/leaves/{created['leaveId']}/status",
        json={"status": "APPROVED", "approverId": other_manager.id},
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["detail"] == "Approver not authorized for this leave"


def test_invalid_status_value_rejected(client, employee, workday):
    created = request_leave(client, employee.id, workday).json()

    response = client.patch(
        f"/api/leaves/{created['leaveId']}/status",
        json={"status": "ON_HOLD", "approverId": "K000001"},
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Invalid status value"


def test_status_change_of_missing_leave(client, manager):
    response = client.patch(
        "/api/leaves/9999/status",
        json={"status": "APPROVED", "approverId": manager.id},
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_status_change_is_audited(client, db, employee, workday):
    created = request_leave(client, employee.id, workday).json()
    client.patch(
        f"/api/leaves/{created['leaveId']}/status",
        json={"status": "REJECTED", "approverId": "K000001"},
    )

    audit = db.query(AuditLog).filter(AuditLog.action == "LEAVE_STATUS_UPDATE").first()
    assert audit.actor_id == "K000001"
    assert audit.meta_json == {"from": "REQUESTED", "to": "REJECTED"}


def test_special_leave_approval_consumes_usage(client, db, employee):
    monday = next_monday()
    created = request_leave(
        client, employee.id, monday, leaveType="SPECIAL", specialLeaveType="MOVING"
    ).json()
    assert created["specialLeaveType"] == "MOVING"

    client.patch(
        f"/api/leaves/{created['leaveId']}/status",
        json={"status": "APPROVED", "approverId": "K000001"},
    )

    usage = db.query(SpecialLeaveUsage).filter(
        SpecialLeaveUsage.employee_id == employee.id,
        SpecialLeaveUsage.year == monday.year,
    ).one()
    assert usage.used_hours == 8.0
    assert usage.used_days == 1

    # The yearly cap of one day is spent
    response = request_leave(
        client, employee.id, monday + timedelta(days=1), leaveType="SPECIAL", specialLeaveType="MOVING"
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "Insufficient special leave balance" in response.json()["detail"]


def test_pending_special_leave_reserves_cap(client, employee):
    monday = next_monday()
    first = request_leave(client, employee.id, monday, leaveType="SPECIAL", specialLeaveType="WEDDING")
    assert first.status_code == status.HTTP_201_CREATED

    response = request_leave(
        client, employee.id, monday + timedelta(days=1), leaveType="SPECIAL", specialLeaveType="WEDDING"
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_cancelling_approved_special_leave_gives_usage_back(client, db, employee, workday):
    created = request_leave(
        client, employee.id, workday, leaveType="SPECIAL", specialLeaveType="WEDDING"
    ).json()
    url = f"/api/leaves/{created['leaveId']}/status"
    client.patch(url, json={"status": "APPROVED", "approverId": "K000001"})

    response = client.patch(url, json={"status": "CANCELLED", "approverId": "K000001"})

    assert response.status_code == status.HTTP_200_OK
    usage = db.query(SpecialLeaveUsage).filter(SpecialLeaveUsage.employee_id == employee.id).one()
    db.refresh(usage)
    assert usage.used_hours == 0


def test_special_leave_does_not_spend_regular_balance(client, employee, workday):
    created = request_leave(
        client, employee.id, workday, leaveType="SPECIAL", specialLeaveType="CHILD_BIRTH"
    ).json()
    client.patch(
        f"/api/leaves/{created['leaveId']}/status",
        json={"status": "APPROVED", "approverId": "K000001"},
    )

    balance = client.get(f"/api/employees/{employee.id}/balance", params={"year": workday.year}).json()

    assert balance["usedHours"] == 0
    assert balance["remainingHours"] == 200


def test_delete_requested_leave(client, db, employee, workday):
    created = request_leave(client, employee.id, workday).json()

    response = client.request(
        "DELETE", f"/api/leaves/{created['leaveId']}", json={"employeeId": employee.id}
    )

    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert db.query(Leave).count() == 0
    assert db.query(AuditLog).filter(AuditLog.action == "LEAVE_DELETE").count() == 1


def test_delete_by_other_employee_forbidden(client, employee, part_timer, workday):
    created = request_leave(client, employee.id, workday).json()

    response = client.request(
        "DELETE", f"/api/leaves/{created['leaveId']}", json={"employeeId": part_timer.id}
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_delete_approved_leave_rejected(client, employee, workday):
    created = request_leave(client, employee.id, workday).json()
    client.patch(
        f"/api/leaves/{created['leaveId']}/status",
        json={"status": "APPROVED", "approverId": "K000001"},
    )

    response = client.request(
        "DELETE", f"/api/leaves/{created['leaveId']}", json={"employeeId": employee.id}
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "approved" in response.json()["detail"].lower()


def test_delete_rejected_leave_rejected(client, employee, workday):
    created = request_leave(client, employee.id, workday).json()
    client.patch(
        f"/api/leaves/{created['leaveId']}/status",
        json={"status": "REJECTED", "approverId": "K000001"},
    )

    response = client.request(
        "DELETE", f"/api/leaves/{created['leaveId']}", json={"employeeId": employee.id}
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_delete_started_leave_not_found(client, db, employee):
    """Leaves already under way can no longer be withdrawn"""
    last_week = date.today() - timedelta(days=7)
    leave = Leave(
        leave_label="Past",
        employee_id=employee.id,
        start_of_leave=at(last_week, 9),
        end_of_leave=at(last_week, 17),
        approver_id="K000001",
        status=LeaveStatus.REQUESTED,
        leave_type=LeaveType.REGULAR,
        total_hours=8,
    )
    db.add(leave)
    db.commit()

    response = client.request("DELETE", f"/api/leaves/{leave.id}", json={"employeeId": employee.id})

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Cannot delete leave that has started or passed"


def test_delete_missing_leave(client, employee):
    response = client.request("DELETE", "/api/leaves/9999", json={"employeeId": employee.id})

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_list_employee_leaves_latest_first(client, employee):
    first = next_workday()
    second = next_workday(35)
    request_leave(client, employee.id, first)
    request_leave(client, employee.id, second)

    response = client.get(f"/api/employees/{employee.id}/leaves")

    assert response.status_code == status.HTTP_200_OK
    starts = [leave["startOfLeave"] for leave in response.json()]
    assert starts == [iso(second, 9), iso(first, 9)]


def test_list_manager_leaves(client, employee, part_timer, other_manager, db, workday):
    db.add(Employee(id="K012347", name="Carol Davis", manager_id=other_manager.id))
    db.commit()
    request_leave(client, employee.id, workday)
    request_leave(client, part_timer.id, workday)
    request_leave(client, "K012347", workday)

    response = client.get("/api/managers/K000001/leaves")

    assert response.status_code == status.HTTP_200_OK
    assert sorted(leave["employeeId"] for leave in response.json()) == ["K012345", "K012346"]
    assert client.get("/api/managers/K012345/leaves").json() == []


def test_request_leave_longer_than_a_year_rejected(client, db, employee, workday):
    response = request_leave(client, employee.id, workday, end_day=workday + timedelta(days=3650))

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert db.query(Leave).count() == 0


def failing_audit(*args, **kwargs):
    raise RuntimeError("audit table unavailable")


def test_leave_not_stored_when_audit_fails(db, employee, workday, monkeypatch):
    """The leave and its audit entry are written in one transaction"""
    monkeypatch.setattr(leave_service, "log_audit", failing_audit)
    leave_data = LeaveCreate(
        leave_label="Holiday",
        employee_id=employee.id,
        start_of_leave=at(workday, 9),
        end_of_leave=at(workday, 17),
    )

    with pytest.raises(RuntimeError):
        leave_service.create_leave(db, leave_data)
    db.rollback()

    assert db.query(Leave).count() == 0
    assert db.query(AuditLog).count() == 0


def test_status_unchanged_when_audit_fails(client, db, employee, workday, monkeypatch):
    leave_id = request_leave(client, employee.id, workday).json()["leaveId"]
    monkeypatch.setattr(leave_service, "log_audit", failing_audit)

    with pytest.raises(RuntimeError):
        leave_service.update_leave_status(db, leave_id, "APPROVED", "K000001")
    db.rollback()

    leave = db.query(Leave).filter(Leave.id == leave_id).one()
    assert leave.status == LeaveStatus.REQUESTED
    assert db.query(AuditLog).filter(AuditLog.action == "LEAVE_STATUS_UPDATE").count() == 0
