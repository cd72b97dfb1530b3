"""
Name: Performance Endpoint Tests

Responsibilities:
  - Solo admin/manager cargan reviews (403 en sobre "status")
  - Rating fuera de rango y target inválido
  - El empleado lee sus propias reviews, no las ajenas
"""

import pytest

from hrms.identity.users import UserRole

pytestmark = pytest.mark.unit


@pytest.fixture
def manager(make_user):
    return make_user(role=UserRole.MANAGER, first_name="Max", email="max@example.com")


@pytest.fixture
def employee(make_user):
    return make_user(first_name="Eve", email="eve@example.com", department_id=1)


def test_manager_adds_review_and_employee_reads_it(
    client, manager, employee, auth_headers
):
    added = client.post(
        f"/api/performance/{employee.id}",
        headers=auth_headers(manager),
        json={"rating": 4, "comments": "Great quarter"},
    )
    assert added.status_code == 200
    assert added.json() == {
        "success": True,
        "message": "Performance review added successfully",
    }

    res = client.get(f"/api/performance/{employee.id}", headers=auth_headers(employee))
    assert res.status_code == 200
    reviews = res.json()["data"]
    assert len(reviews) == 1
    assert reviews[0]["rating"] == 4
    assert reviews[0]["reviewer_first_name"] == "Max"
    assert reviews[0]["reviewer_role"] == "manager"


def test_employee_cannot_add_review(client, make_user, employee, auth_headers):
    peer = make_user(email="peer@example.com")

    res = client.post(
        f"/api/performance/{employee.id}", headers=auth_headers(peer), json={"rating": 5}
    )

    assert res.status_code == 403
    assert res.json()["status"] == "error"
    assert "success" not in res.json()


@pytest.mark.parametrize("rating", [0, 6, None])
def test_rating_out_of_range(client, manager, employee, auth_headers, rating):
    res = client.post(
        f"/api/performance/{employee.id}",
        headers=auth_headers(manager),
        json={"rating": rating},
    )

    assert res.status_code == 400
    assert res.json() == {"message": "Rating must be between 1 and 5", "status": "error"}


def test_review_target_must_be_active_employee(client, make_user, manager, auth_headers):
    admin = make_user(role=UserRole.ADMIN, email="root@example.com")

    res = client.post(
        f"/api/performance/{admin.id}", headers=auth_headers(manager), json={"rating": 3}
    )

    assert res.status_code == 404
    assert res.json() == {"message": "Employee not found or inactive", "status": "error"}


def test_employee_cannot_read_peer_reviews(client, make_user, employee, auth_headers):
    peer = make_user(email="peer@example.com")

    res = client.get(f"/api/performance/{employee.id}", headers=auth_headers(peer))

    assert res.status_code == 403
    assert res.json() == {"message": "Access denied", "status": "error"}


def test_reviewable_employees_list(client, make_user, manager, employee, auth_headers):
    make_user(email="gone@example.com", is_active=False)

    res = client.get("/api/performance/employees/list", headers=auth_headers(manager))

    assert res.status_code == 200
    rows = res.json()["data"]
    assert [r["email"] for r in rows] == ["eve@example.com"]
    assert rows[0]["department_name"]


def test_list_all_reviews(client, manager, employee, auth_headers):
    client.post(
        f"/api/performance/{employee.id}", headers=auth_headers(manager), json={"rating": 2}
    )

    res = client.get("/api/performance", headers=auth_headers(manager))

    assert res.status_code == 200
    assert res.json()["data"][0]["employee_email"] == "eve@example.com"
