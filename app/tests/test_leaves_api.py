"""
Tests for leave endpoints
"""
import pytest
from datetime import date, datetime, timezone
from sqlalchemy.orm import Session
from app.models.employee import Employee
from app.models.leave import LeaveRequest, LeaveStatus, LeaveType


@pytest.fixture
def test_employee(db: Session):
    """Create a test employee"""
    now = datetime.now(timezone.utc)
    employee = Employee(
        name="Test Employee",
        email="employee@example.com",
        join_date=date(2023, 1, 15),
        active=True,
        created_at=now,
        updated_at=now
    )
    db.add(employee)
    db.commit()
    db.refresh(employee)
    return employee


@pytest.fixture
def approved_day(db: Session, test_employee):
    """One approved annual day on Monday 2024-01-15"""
    now = datetime.now(timezone.utc)
    leave = LeaveRequest(
        user_id=test_employee.id,
        type=LeaveType.ANNUAL,
        start_date=date(2024, 1, 15),
        end_date=date(2024, 1, 15),
        status=LeaveStatus.APPROVED,
        is_paid=True,
        created_at=now,
        updated_at=now
    )
    db.add(leave)
    db.commit()
    db.refresh(leave)
    return leave


def _apply(client, user_id, leave_type, start, end, reason=None):
    return client.post(
        "/api/v1/leaves/apply",
        json={
            "user_id": user_id,
            "leave_type": leave_type,
            "start_date": start,
            "end_date": end,
            "reason": reason,
        }
    )


def test_evaluate_returns_camel_case_contract(client, test_employee, approved_day):
    response = client.post(
        "/api/v1/leaves/evaluate",
        json={
            "user_id": test_employee.id,
            "start_date": "2024-01-22",
            "end_date": "2024-01-22",
            "leave_type": "annual",
        }
    )
    assert response.status_code == 200
    data = response.json()
    assert data["wouldExceed"] is True
    assert data["willBePaid"] is False
    assert data["totalRequestDays"] == 1
    month = data["perMonthAnalysis"][0]
    assert month["month"] == "January 2024"
    assert month["currentUsage"] == 1
    assert month["requestDaysInMonth"] == 1
    assert month["newTotal"] == 2
    assert month["limit"] == 1.5
    assert month["remaining"] == 0.5
    assert month["wouldExceed"] is True


def test_evaluate_accepts_camel_case_input(client, test_employee, approved_day):
    response = client.post(
        "/api/v1/leaves/evaluate",
        json={
            "userId": test_employee.id,
            "startDate": "2024-01-26",
            "endDate": "2024-01-26",
            "leaveType": "halfday",
        }
    )
    assert response.status_code == 200
    assert response.json()["willBePaid"] is True


def test_evaluate_rejects_reversed_range(client, test_employee):
    response = client.post(
        "/api/v1/leaves/evaluate",
        json={
            "user_id": test_employee.id,
            "start_date": "2024-01-23",
            "end_date": "2024-01-22",
            "leave_type": "annual",
        }
    )
    assert response.status_code == 400
    assert response.json()["error"] is True
    assert "Invalid date range" in response.json()["detail"]


def test_evaluate_rejects_unknown_leave_type(client, test_employee):
    response = client.post(
        "/api/v1/leaves/evaluate",
        json={
            "user_id": test_employee.id,
            "start_date": "2024-01-22",
            "end_date": "2024-01-22",
            "leave_type": "vacation",
        }
    )
    assert response.status_code == 400
    assert response.json()["detail"].startswith("Unrecognized leave type: 'vacation'")


def test_evaluate_unknown_employee_is_404(client, db):
    response = client.post(
        "/api/v1/leaves/evaluate",
        json={"user_id": 999, "start_date": "2024-01-22", "end_date": "2024-01-22", "leave_type": "annual"}
    )
    assert response.status_code == 404


def test_apply_creates_pending_request_with_evaluation(client, db, test_employee, approved_day):
    response = _apply(client, test_employee.id, "annual", "2024-01-30", "2024-02-02", "Family trip")
    assert response.status_code == 201
    data = response.json()

    assert data["leave"]["status"] == "pending"
    assert data["leave"]["type"] == "annual"
    assert data["leave"]["reason"] == "Family trip"
    assert data["leave"]["is_paid"] is None
    months = data["evaluation"]["perMonthAnalysis"]
    assert [m["month"] for m in months] == ["January 2024", "February 2024"]
    assert data["evaluation"]["totalRequestDays"] == 4

    stored = db.query(LeaveRequest).filter(LeaveRequest.id == data["leave"]["id"]).first()
    assert stored.status == LeaveStatus.PENDING


def test_pending_request_does_not_count_toward_usage(client, test_employee):
    _apply(client, test_employee.id, "annual", "2024-01-15", "2024-01-19")

    response = client.get(
        "/api/v1/leaves/monthly-usage",
        params={"user_id": test_employee.id, "month": "2024-01"}
    )
    assert response.status_code == 200
    assert response.json()["current_usage"] == 0


def test_approve_records_paid_decision(client, test_employee):
    first = _apply(client, test_employee.id, "annual", "2024-01-15", "2024-01-15").json()
    second = _apply(client, test_employee.id, "halfday", "2024-01-26", "2024-01-26").json()
    third = _apply(client, test_employee.id, "annual", "2024-01-29", "2024-01-29").json()

    r1 = client.post(f"/api/v1/leaves/{first['leave']['id']}/approve")
    r2 = client.post(f"/api/v1/leaves/{second['leave']['id']}/approve")
    r3 = client.post(f"/api/v1/leaves/{third['leave']['id']}/approve")

    assert r1.status_code == 200
    assert r1.json()["leave"]["is_paid"] is True
    assert r2.json()["leave"]["is_paid"] is True
    assert r2.json()["evaluation"]["perMonthAnalysis"][0]["newTotal"] == 1.5
    assert r3.json()["leave"]["status"] == "approved"
    assert r3.json()["leave"]["is_paid"] is False

    usage = client.get(
        "/api/v1/leaves/monthly-usage",
        params={"user_id": test_employee.id, "month": "2024-01"}
    ).json()
    assert usage["current_usage"] == 2.5
    assert usage["remaining"] == 0


def test_unpaid_request_is_paid_and_never_counted(client, test_employee):
    created = _apply(client, test_employee.id, "unpaid", "2024-01-15", "2024-01-19").json()
    assert created["evaluation"] == {
        "wouldExceed": False,
        "willBePaid": True,
        "totalRequestDays": 0,
        "perMonthAnalysis": [],
    }
    client.post(f"/api/v1/leaves/{created['leave']['id']}/approve")

    usage = client.get(
        "/api/v1/leaves/monthly-usage",
        params={"user_id": test_employee.id, "month": "2024-01"}
    ).json()
    assert usage["current_usage"] == 0


def test_cannot_approve_twice(client, test_employee):
    created = _apply(client, test_employee.id, "sick", "2024-01-15", "2024-01-15").json()
    leave_id = created["leave"]["id"]

    assert client.post(f"/api/v1/leaves/{leave_id}/approve").status_code == 200
    response = client.post(f"/api/v1/leaves/{leave_id}/approve")
    assert response.status_code == 409


def test_reject_then_approve_conflicts(client, test_employee):
    created = _apply(client, test_employee.id, "personal", "2024-01-15", "2024-01-15").json()
    leave_id = created["leave"]["id"]

    rejected = client.post(f"/api/v1/leaves/{leave_id}/reject")
    assert rejected.status_code == 200
    assert rejected.json()["status"] == "rejected"
    assert client.post(f"/api/v1/leaves/{leave_id}/approve").status_code == 409


def test_approve_missing_request_is_404(client, db):
    response = client.post("/api/v1/leaves/12345/approve")
    assert response.status_code == 404
    assert response.json()["detail"] == "Leave request with id 12345 not found"


def test_apply_reversed_range_is_400(client, test_employee):
    response = _apply(client, test_employee.id, "annual", "2024-01-19", "2024-01-15")
    assert response.status_code == 400


def test_list_user_leaves_returns_all_statuses(client, test_employee, approved_day):
    _apply(client, test_employee.id, "sick", "2024-02-05", "2024-02-05")
    response = client.get(f"/api/v1/leaves/user/{test_employee.id}")

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 2
    assert [i["status"] for i in data["items"]] == ["approved", "pending"]


def test_monthly_usage_rejects_bad_month(client, test_employee):
    response = client.get(
        "/api/v1/leaves/monthly-usage",
        params={"user_id": test_employee.id, "month": "2024-1x"}
    )
    assert response.status_code == 400


def test_apply_rejects_unknown_leave_type(client, db, test_employee):
    response = _apply(client, test_employee.id, "vacation", "2024-01-15", "2024-01-15")
    assert response.status_code == 400
    assert db.query(LeaveRequest).count() == 0


def test_apply_accepts_camel_case_input(client, test_employee):
    response = client.post(
        "/api/v1/leaves/apply",
        json={
            "userId": test_employee.id,
            "leaveType": "sick",
            "startDate": "2024-01-15",
            "endDate": "2024-01-16",
        }
    )
    assert response.status_code == 201
    assert response.json()["leave"]["type"] == "sick"
    assert response.json()["evaluation"]["totalRequestDays"] == 2


def test_cancel_pending_request_deletes_it(client, db, test_employee):
    created = _apply(client, test_employee.id, "annual", "2024-01-15", "2024-01-15").json()
    leave_id = created["leave"]["id"]

    response = client.delete(f"/api/v1/leaves/{leave_id}")
    assert response.status_code == 204
    assert db.query(LeaveRequest).filter(LeaveRequest.id == leave_id).first() is None
    assert client.get(f"/api/v1/leaves/user/{test_employee.id}").json()["total"] == 0


@pytest.mark.parametrize("decision", ["approve", "reject"])
def test_cannot_cancel_decided_request(client, db, test_employee, decision):
    created = _apply(client, test_employee.id, "annual", "2024-01-15", "2024-01-15").json()
    leave_id = created["leave"]["id"]
    client.post(f"/api/v1/leaves/{leave_id}/{decision}")

    response = client.delete(f"/api/v1/leaves/{leave_id}")
    assert response.status_code == 409
    assert response.json()["detail"].startswith("Cannot cancel leave request with status")
    assert db.query(LeaveRequest).filter(LeaveRequest.id == leave_id).first() is not None


def test_cancel_missing_request_is_404(client, db):
    response = client.delete("/api/v1/leaves/12345")
    assert response.status_code == 404


def test_pending_queue_lists_only_undecided_requests(client, db, test_employee, approved_day):
    other = Employee(
        name="Other Employee",
        email="other@example.com",
        join_date=date(2023, 6, 1),
        active=True,
        created_at=datetime.now(timezone.utc),
        updated_at=datetime.now(timezone.utc)
    )
    db.add(other)
    db.commit()
    db.refresh(other)

    first = _apply(client, test_employee.id, "sick", "2024-02-05", "2024-02-05").json()
    second = _apply(client, other.id, "annual", "2024-02-06", "2024-02-06").json()
    decided = _apply(client, other.id, "personal", "2024-02-07", "2024-02-07").json()
    client.post(f"/api/v1/leaves/{decided['leave']['id']}/reject")

    response = client.get("/api/v1/leaves/pending")
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 2
    assert [i["id"] for i in data["items"]] == [first["leave"]["id"], second["leave"]["id"]]
    assert {i["status"] for i in data["items"]} == {"pending"}
