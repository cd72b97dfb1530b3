"""
CRC — domain/repositories.py

Name
- Domain Repository Interfaces (Protocols)

Responsibilities
- Define persistence contracts for the domain layer (ports).
- Keep application/domain independent from infrastructure (PostgreSQL, in-memory).
- Enable dependency inversion and straightforward unit testing.

Collaborators
- identity.users: User, UserRole
- domain.entities: Department, AttendanceRecord, LeaveRequest, PerformanceReview
- infrastructure.repositories: postgres/*, in_memory/* implementations

Constraints
- Pure interfaces only: no side effects, no SQL.
- Implementations MUST match method signatures exactly.

Notes
- `AttendanceRepository.record_transition` owns the atomicity of the
  read-then-insert sequence; callers pass the pure decision function.
"""

from datetime import date
from decimal import Decimal
from typing import Any, Callable, Optional, Protocol

from ..identity.users import User, UserRole
from .entities import (
    AttendanceRecord,
    AttendanceStatus,
    Department,
    LeaveRequest,
    LeaveStats,
    LeaveStatus,
    PerformanceReview,
)

TransitionDecision = Callable[[Optional[AttendanceStatus]], AttendanceStatus]


class UserRepository(Protocol):
    """
    R: Credential Store + employee records.

    Emails are compared lowercased; create_user raises DuplicateEmailError.
    """

    def get_user_by_email(self, email: str) -> Optional[User]: ...

    def get_user_by_id(self, user_id: int) -> Optional[User]: ...

    def get_active_user_by_id(self, user_id: int) -> Optional[User]:
        """R: Only users with is_active = true (Access Guard lookup)."""
        ...

    def create_user(
        self,
        *,
        email: str,
        password_hash: str,
        first_name: str,
        last_name: str,
        role: UserRole = UserRole.EMPLOYEE,
        department_id: Optional[int] = None,
        position: Optional[str] = None,
        salary: Optional[Decimal] = None,
        phone: Optional[str] = None,
    ) -> User: ...

    def update_user(self, user_id: int, fields: dict[str, Any]) -> Optional[User]:
        """R: Partial update; None values keep the stored value."""
        ...

    def update_password(self, user_id: int, password_hash: str) -> None: ...

    def set_user_active(self, user_id: int, is_active: bool) -> Optional[User]: ...

    def list_non_admin_users(self) -> list[User]: ...

    def list_active_employees(self) -> list[User]: ...

    def delete_non_admin_user(self, user_id: int) -> bool:
        """R: Never deletes admins; returns False when nothing was deleted."""
        ...


class DepartmentRepository(Protocol):
    def list_departments(self) -> list[Department]: ...

    def get_department(self, department_id: int) -> Optional[Department]: ...

    def find_by_name(self, name: str) -> Optional[Department]:
        """R: Case-insensitive exact match."""
        ...


class AttendanceRepository(Protocol):
    """
    R: Append-only attendance log.

    There is intentionally no update/delete method.
    """

    def latest_status_today(self, user_id: int) -> Optional[AttendanceStatus]: ...

    def record_transition(
        self, user_id: int, decide: TransitionDecision
    ) -> AttendanceRecord:
        """
        R: Atomically read today's latest status, call `decide` with it and
        insert the returned status. Concurrent calls for the same user are
        serialized. Exceptions raised by `decide` abort without inserting.
        """
        ...

    def list_history(self, user_id: int, days: int) -> list[AttendanceRecord]: ...


class LeaveRepository(Protocol):
    def list_leaves(self, user_id: Optional[int] = None) -> list[LeaveRequest]:
        """R: user_id=None lists every leave (admin view)."""
        ...

    def get_leave(self, leave_id: int) -> Optional[LeaveRequest]: ...

    def create_leave(
        self,
        *,
        user_id: int,
        leave_type: str,
        start_date: date,
        end_date: date,
        reason: Optional[str] = None,
    ) -> LeaveRequest: ...

    def update_status(
        self, leave_id: int, status: LeaveStatus, approved_by: int
    ) -> Optional[LeaveRequest]: ...

    def delete_leave(self, leave_id: int) -> bool: ...

    def leave_stats(self, user_id: Optional[int] = None) -> LeaveStats: ...


class PerformanceRepository(Protocol):
    def add_review(
        self,
        *,
        employee_id: int,
        reviewer_id: int,
        rating: int,
        comments: Optional[str] = None,
    ) -> PerformanceReview: ...

    def list_for_employee(self, employee_id: int) -> list[PerformanceReview]: ...

    def list_all(self) -> list[dict[str, Any]]:
        """R: Every review joined with employee/department/reviewer names."""
        ...


class ReportingRepository(Protocol):
    """R: Read-only aggregates for /reports and /dashboard."""

    def attendance_report(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        department_id: Optional[int] = None,
    ) -> list[dict[str, Any]]: ...

    def leave_report(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        status: Optional[str] = None,
        department_id: Optional[int] = None,
    ) -> list[dict[str, Any]]: ...

    def payroll_report(
        self, *, department_id: Optional[int] = None
    ) -> list[dict[str, Any]]: ...

    def performance_report(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        department_id: Optional[int] = None,
    ) -> list[dict[str, Any]]: ...

    def department_report(self) -> list[dict[str, Any]]: ...

    def analytics(self) -> dict[str, Any]: ...

    def dashboard_stats(self, *, include_admin_figures: bool) -> dict[str, Any]: ...

    def recent_activity(self) -> list[dict[str, Any]]:
        """R: Raw attendance/leave events of the last 7 days (newest first)."""
        ...

    def user_dashboard(self, user_id: int) -> dict[str, Any]: ...
