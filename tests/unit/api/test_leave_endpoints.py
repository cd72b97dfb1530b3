"""
Name: Leave Endpoint Tests

Responsibilities:
  - Flujo solicitud -> aprobación admin -> consulta con approved_by
  - Visibilidad: el empleado ve lo suyo, el admin ve todo
  - Reglas de borrado y validaciones de fechas vía HTTP
"""

from datetime import date, timedelta

import pytest

from hrms.identity.users import UserRole

pytestmark = pytest.mark.unit


@pytest.fixture
def employee(make_user):
    return make_user(first_name="Eva", email="eva@example.com")


@pytest.fixture
def admin(make_user):
    return make_user(role=UserRole.ADMIN, first_name="Ada", email="ada@example.com")


def _leave_body(start_offset=1, length=2, **overrides):
    start = date.today() + timedelta(days=start_offset)
    body = {
        "leave_type": "Vacation",
        "start_date": start.isoformat(),
        "end_date": (start + timedelta(days=length)).isoformat(),
        "reason": "Family trip",
    }
    body.update(overrides)
    return body


def test_request_approve_and_fetch(client, employee, admin, auth_headers):
    created = client.post("/api/leaves", headers=auth_headers(employee), json=_leave_body())
    assert created.status_code == 201
    leave = created.json()["data"]
    assert leave["status"] == "pending"
    assert leave["approved_by"] is None

    approved = client.put(
        f"/api/leaves/{leave['id']}/status",
        headers=auth_headers(admin),
        json={"status": "approved"},
    )
    assert approved.status_code == 200
    assert approved.json()["data"]["status"] == "approved"

    fetched = client.get(f"/api/leaves/{leave['id']}", headers=auth_headers(employee))
    assert fetched.status_code == 200
    data = fetched.json()["data"]
    assert data["status"] == "approved"
    assert data["approved_by"] == admin.id
    assert data["approver_first_name"] == "Ada"
    assert data["first_name"] == "Eva"


def test_start_date_in_past(client, employee, auth_headers):
    res = client.post(
        "/api/leaves", headers=auth_headers(employee), json=_leave_body(start_offset=-1)
    )

    assert res.status_code == 400
    assert res.json() == {"success": False, "message": "Start date cannot be in the past"}


def test_end_before_start(client, employee, auth_headers):
    body = _leave_body()
    body["end_date"] = date.today().isoformat()

    res = client.post("/api/leaves", headers=auth_headers(employee), json=body)

    assert res.status_code == 400
    assert res.json()["message"] == "End date must be after start date"


def test_missing_fields(client, employee, auth_headers):
    res = client.post(
        "/api/leaves", headers=auth_headers(employee), json={"reason": "no dates"}
    )

    assert res.status_code == 400
    assert res.json()["message"] == "Missing required fields"


def test_malformed_date_is_validation_error(client, employee, auth_headers):
    res = client.post(
        "/api/leaves",
        headers=auth_headers(employee),
        json=_leave_body(start_date="next tuesday"),
    )

    assert res.status_code == 400
    body = res.json()
    assert body["success"] is False
    assert body["message"] == "Validation failed"
    assert body["errors"][0]["field"] == "start_date"


def test_visibility_scope(client, make_user, employee, admin, auth_headers):
    other = make_user(email="other@example.com")
    client.post("/api/leaves", headers=auth_headers(employee), json=_leave_body())
    client.post("/api/leaves", headers=auth_headers(other), json=_leave_body())

    mine = client.get("/api/leaves", headers=auth_headers(employee)).json()["data"]
    everything = client.get("/api/leaves", headers=auth_headers(admin)).json()["data"]

    assert {l["user_id"] for l in mine} == {employee.id}
    assert len(everything) == 2


def test_other_employee_gets_403(client, make_user, employee, auth_headers):
    other = make_user(email="other@example.com")
    leave_id = client.post(
        "/api/leaves", headers=auth_headers(employee), json=_leave_body()
    ).json()["data"]["id"]

    res = client.get(f"/api/leaves/{leave_id}", headers=auth_headers(other))

    assert res.status_code == 403
    assert res.json() == {"success": False, "message": "Access denied"}


def test_missing_leave_is_404(client, employee, auth_headers):
    res = client.get("/api/leaves/404", headers=auth_headers(employee))

    assert res.status_code == 404
    assert res.json() == {"success": False, "message": "Leave not found"}


def test_only_admin_changes_status(client, employee, auth_headers):
    leave_id = client.post(
        "/api/leaves", headers=auth_headers(employee), json=_leave_body()
    ).json()["data"]["id"]

    res = client.put(
        f"/api/leaves/{leave_id}/status",
        headers=auth_headers(employee),
        json={"status": "approved"},
    )

    assert res.status_code == 403


def test_invalid_status_value(client, employee, admin, auth_headers):
    leave_id = client.post(
        "/api/leaves", headers=auth_headers(employee), json=_leave_body()
    ).json()["data"]["id"]

    res = client.put(
        f"/api/leaves/{leave_id}/status",
        headers=auth_headers(admin),
        json={"status": "maybe"},
    )

    assert res.status_code == 400
    assert res.json()["message"] == "Invalid status"


def test_delete_rules(client, employee, admin, auth_headers):
    pending_id = client.post(
        "/api/leaves", headers=auth_headers(employee), json=_leave_body()
    ).json()["data"]["id"]
    decided_id = client.post(
        "/api/leaves", headers=auth_headers(employee), json=_leave_body()
    ).json()["data"]["id"]
    client.put(
        f"/api/leaves/{decided_id}/status",
        headers=auth_headers(admin),
        json={"status": "rejected"},
    )

    deleted = client.delete(f"/api/leaves/{pending_id}", headers=auth_headers(employee))
    blocked = client.delete(f"/api/leaves/{decided_id}", headers=auth_headers(employee))

    assert deleted.json() == {
        "success": True,
        "message": "Leave request deleted successfully",
    }
    assert blocked.status_code == 400
    assert blocked.json()["message"] == "Cannot delete approved/rejected leave"


def test_stats_overview(client, employee, admin, auth_headers):
    first = client.post(
        "/api/leaves", headers=auth_headers(employee), json=_leave_body()
    ).json()["data"]["id"]
    client.post("/api/leaves", headers=auth_headers(employee), json=_leave_body())
    client.put(
        f"/api/leaves/{first}/status",
        headers=auth_headers(admin),
        json={"status": "approved"},
    )

    res = client.get("/api/leaves/stats/overview", headers=auth_headers(employee))

    assert res.json()["data"] == {
        "total_leaves": 2,
        "pending_leaves": 1,
        "approved_leaves": 1,
        "rejected_leaves": 0,
    }
