"""
Name: Leave & Performance Review Use Case Tests

Responsibilities:
  - Alta de licencias: campos requeridos, fechas pasadas, rango invertido
  - Aprobación: estado inválido, leave inexistente, approved_by registrado
  - Baja: dueño o admin, solo pendientes
  - Reviews: rating 1..5 (bool rechazado), target activo con rol employee
"""

from datetime import date, timedelta

import pytest

from hrms.application.usecases.leaves import (
    CreateLeaveInput,
    CreateLeaveUseCase,
    DeleteLeaveUseCase,
    UpdateLeaveStatusUseCase,
)
from hrms.application.usecases.performance import AddReviewInput, AddReviewUseCase
from hrms.application.usecases.results import UseCaseErrorCode
from hrms.domain.entities import LeaveStatus
from hrms.identity.users import UserRole
from hrms.infrastructure.repositories.in_memory import (
    InMemoryLeaveRepository,
    InMemoryPerformanceRepository,
    InMemoryUserRepository,
)

pytestmark = pytest.mark.unit

TODAY = date(2024, 6, 10)


@pytest.fixture
def users():
    return InMemoryUserRepository()


@pytest.fixture
def leaves(users):
    return InMemoryLeaveRepository(user_repo=users)


def _user(users, role=UserRole.EMPLOYEE, email=None, active=True):
    user = users.create_user(
        email=email or f"{role.value}-{len(users.list_non_admin_users())}@example.com",
        password_hash="x",
        first_name="Lea",
        last_name="Ve",
        role=role,
    )
    if not active:
        user = users.set_user_active(user.id, False)
    return user


def _create_leave(leaves, user_id, start=TODAY, end=None, leave_type="Vacation"):
    use_case = CreateLeaveUseCase(leaves, today=lambda: TODAY)
    return use_case.execute(
        CreateLeaveInput(
            user_id=user_id,
            leave_type=leave_type,
            start_date=start,
            end_date=end or start,
            reason="Trip",
        )
    )


# ============================================================================
# Create
# ============================================================================


def test_create_leave_starts_pending(leaves):
    result = _create_leave(leaves, 1, start=TODAY + timedelta(days=1))

    assert result.error is None
    assert result.leave.status == LeaveStatus.PENDING
    assert result.leave.approved_by is None


def test_create_leave_today_is_allowed(leaves):
    assert _create_leave(leaves, 1, start=TODAY).error is None


@pytest.mark.parametrize(
    "leave_type,start,end",
    [
        (None, TODAY, TODAY),
        ("   ", TODAY, TODAY),
        ("Sick", None, TODAY),
        ("Sick", TODAY, None),
    ],
)
def test_create_leave_missing_fields(leaves, leave_type, start, end):
    result = CreateLeaveUseCase(leaves, today=lambda: TODAY).execute(
        CreateLeaveInput(user_id=1, leave_type=leave_type, start_date=start, end_date=end)
    )

    assert result.error.code == UseCaseErrorCode.VALIDATION_ERROR
    assert result.error.message == "Missing required fields"


def test_create_leave_in_the_past(leaves):
    result = _create_leave(leaves, 1, start=TODAY - timedelta(days=1))

    assert result.error.message == "Start date cannot be in the past"


def test_create_leave_end_before_start(leaves):
    result = _create_leave(
        leaves, 1, start=TODAY + timedelta(days=3), end=TODAY + timedelta(days=2)
    )

    assert result.error.message == "End date must be after start date"
    assert leaves.list_leaves() == []


# ============================================================================
# Status
# ============================================================================


def test_approve_records_approver(users, leaves):
    owner = _user(users)
    admin = _user(users, role=UserRole.ADMIN, email="boss@example.com")
    leave = _create_leave(leaves, owner.id).leave

    result = UpdateLeaveStatusUseCase(leaves).execute(
        leave.id, "approved", approver_id=admin.id
    )

    assert result.leave.status == LeaveStatus.APPROVED
    assert result.leave.approved_by == admin.id
    fetched = leaves.get_leave(leave.id)
    assert fetched.approver_first_name == "Lea"


@pytest.mark.parametrize("raw", [None, "", "APPROVED", "cancelled"])
def test_invalid_status(leaves, raw):
    leave = _create_leave(leaves, 1).leave

    result = UpdateLeaveStatusUseCase(leaves).execute(leave.id, raw, approver_id=9)

    assert result.error.code == UseCaseErrorCode.VALIDATION_ERROR
    assert result.error.message == "Invalid status"


def test_status_for_missing_leave(leaves):
    result = UpdateLeaveStatusUseCase(leaves).execute(77, "rejected", approver_id=9)

    assert result.error.code == UseCaseErrorCode.NOT_FOUND
    assert result.error.message == "Leave not found"


# ============================================================================
# Delete
# ============================================================================


def test_owner_deletes_pending_leave(users, leaves):
    owner = _user(users)
    leave = _create_leave(leaves, owner.id).leave

    result = DeleteLeaveUseCase(leaves).execute(leave.id, actor=owner.public())

    assert result.deleted is True
    assert leaves.get_leave(leave.id) is None


def test_other_employee_cannot_delete(users, leaves):
    owner = _user(users, email="owner@example.com")
    stranger = _user(users, email="stranger@example.com")
    leave = _create_leave(leaves, owner.id).leave

    result = DeleteLeaveUseCase(leaves).execute(leave.id, actor=stranger.public())

    assert result.error.code == UseCaseErrorCode.FORBIDDEN
    assert leaves.get_leave(leave.id) is not None


def test_decided_leave_cannot_be_deleted(users, leaves):
    owner = _user(users, email="owner@example.com")
    admin = _user(users, role=UserRole.ADMIN, email="boss@example.com")
    leave = _create_leave(leaves, owner.id).leave
    UpdateLeaveStatusUseCase(leaves).execute(leave.id, "rejected", approver_id=admin.id)

    result = DeleteLeaveUseCase(leaves).execute(leave.id, actor=admin.public())

    assert result.error.code == UseCaseErrorCode.BUSINESS_RULE
    assert result.error.message == "Cannot delete approved/rejected leave"


def test_delete_missing_leave(users, leaves):
    owner = _user(users)

    result = DeleteLeaveUseCase(leaves).execute(5, actor=owner.public())

    assert result.error.code == UseCaseErrorCode.NOT_FOUND


# ============================================================================
# Performance reviews
# ============================================================================


@pytest.fixture
def reviews(users):
    return InMemoryPerformanceRepository(user_repo=users)


def _review(users, reviews, employee_id, rating, reviewer_id=99):
    return AddReviewUseCase(users, reviews).execute(
        AddReviewInput(
            employee_id=employee_id,
            reviewer_id=reviewer_id,
            rating=rating,
            comments="Solid quarter",
        )
    )


@pytest.mark.parametrize("rating", [1, 3, 5])
def test_add_review_valid_ratings(users, reviews, rating):
    employee = _user(users)

    result = _review(users, reviews, employee.id, rating)

    assert result.error is None
    assert result.review.rating == rating


@pytest.mark.parametrize("rating", [None, 0, 6, True])
def test_add_review_invalid_ratings(users, reviews, rating):
    employee = _user(users)

    result = _review(users, reviews, employee.id, rating)

    assert result.error.code == UseCaseErrorCode.VALIDATION_ERROR
    assert result.error.message == "Rating must be between 1 and 5"
    assert reviews.list_for_employee(employee.id) == []


def test_add_review_requires_active_employee(users, reviews):
    manager = _user(users, role=UserRole.MANAGER, email="mgr@example.com")
    inactive = _user(users, email="gone@example.com", active=False)

    for target in (manager.id, inactive.id, 12345):
        result = _review(users, reviews, target, 4)
        assert result.error.code == UseCaseErrorCode.NOT_FOUND
        assert result.error.message == "Employee not found or inactive"


def test_reviews_listed_with_reviewer_names(users, reviews):
    employee = _user(users, email="emp@example.com")
    manager = _user(users, role=UserRole.MANAGER, email="mgr@example.com")
    _review(users, reviews, employee.id, 4, reviewer_id=manager.id)

    listed = reviews.list_for_employee(employee.id)

    assert len(listed) == 1
    assert listed[0].reviewer_role == "manager"
