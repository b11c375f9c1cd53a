"""
Tests for leave balance and special leave usage endpoints
"""
from datetime import date, timedelta
from fastapi import status
from leave_app.models.leave import LeaveBalance
from leave_app.tests.helpers import iso, next_monday


def approve_leave(client, employee_id, day, **extra):
    payload = {
        "leaveLabel": "Day off",
        "employeeId": employee_id,
        "startOfLeave": iso(day, 9),
        "endOfLeave": iso(day, 17),
    }
    payload.update(extra)
    created = client.post("/api/leaves", json=payload)
    assert created.status_code == status.HTTP_201_CREATED
    response = client.patch(
        f"/api/leaves/{created.json()['leaveId']}/status",
        json={"status": "APPROVED", "approverId": "K000001"},
    )
    assert response.status_code == status.HTTP_200_OK
    return response.json()


def test_balance_is_created_lazily(client, db, employee):
    assert db.query(LeaveBalance).count() == 0

    response = client.get(f"/api/employees/{employee.id}/balance", params={"year": 2031})

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["employeeId"] == "K012345"
    assert data["year"] == 2031
    assert data["totalDays"] == 25
    assert data["totalHours"] == 200
    assert data["usedDays"] == 0
    assert data["usedHours"] == 0
    assert data["remainingDays"] == 25
    assert data["remainingHours"] == 200
    assert db.query(LeaveBalance).filter(LeaveBalance.year == 2031).count() == 1


def test_balance_is_pro_rata_for_part_timers(client, part_timer):
    data = client.get(f"/api/employees/{part_timer.id}/balance", params={"year": 2031}).json()

    assert data["totalHours"] == 160
    assert data["totalDays"] == 20


def test_balance_defaults_to_current_year(client, employee):
    data = client.get(f"/api/employees/{employee.id}/balance").json()

    assert data["year"] == date.today().year


def test_repeated_balance_reads_reuse_the_row(client, db, employee):
    client.get(f"/api/employees/{employee.id}/balance", params={"year": 2031})
    client.get(f"/api/employees/{employee.id}/balance", params={"year": 2031})

    assert db.query(LeaveBalance).count() == 1


def test_approved_regular_leave_is_used(client, employee):
    monday = next_monday()
    approve_leave(client, employee.id, monday)
    # Pending leave reserves hours for new requests but is not used yet
    client.post("/api/leaves", json={
        "leaveLabel": "Pending",
        "employeeId": employee.id,
        "startOfLeave": iso(monday + timedelta(days=1), 9),
        "endOfLeave": iso(monday + timedelta(days=1), 13),
    })

    data = client.get(f"/api/employees/{employee.id}/balance", params={"year": monday.year}).json()

    assert data["usedHours"] == 8
    assert data["usedDays"] == 1
    assert data["remainingHours"] == 192
    assert data["remainingDays"] == 24


def test_balance_unknown_employee(client):
    response = client.get("/api/employees/K999999/balance")

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_special_usage_lists_every_type(client, employee):
    response = client.get(f"/api/employees/{employee.id}/special-leave-usage", params={"year": 2031})

    assert response.status_code == status.HTTP_200_OK
    usage = {row["specialLeaveType"]: row for row in response.json()}
    assert set(usage) == {"MOVING", "WEDDING", "CHILD_BIRTH", "PARENTAL_CARE"}
    assert all(row["usedHours"] == 0 for row in usage.values())
    assert usage["MOVING"]["maxHours"] == 8
    assert usage["CHILD_BIRTH"]["maxDays"] == 5
    assert usage["PARENTAL_CARE"]["maxHours"] == 400
    assert usage["PARENTAL_CARE"]["remainingDays"] == 50


def test_special_usage_reflects_approved_leave(client, part_timer):
    monday = next_monday()
    approve_leave(client, part_timer.id, monday, leaveType="SPECIAL", specialLeaveType="PARENTAL_CARE")

    response = client.get(
        f"/api/employees/{part_timer.id}/special-leave-usage", params={"year": monday.year}
    )

    usage = {row["specialLeaveType"]: row for row in response.json()}
    assert usage["PARENTAL_CARE"]["usedHours"] == 8
    assert usage["PARENTAL_CARE"]["maxHours"] == 320
    assert usage["PARENTAL_CARE"]["remainingHours"] == 312
    assert usage["MOVING"]["usedHours"] == 0


def test_special_usage_unknown_employee(client):
    response = client.get("/api/employees/K999999/special-leave-usage")

    assert response.status_code == status.HTTP_404_NOT_FOUND
