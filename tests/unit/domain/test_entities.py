from datetime import date, datetime

import pytest

from hrms.domain.entities import (
    AttendanceRecord,
    AttendanceStatus,
    LeaveRequest,
    LeaveStats,
    LeaveStatus,
    PerformanceReview,
)

pytestmark = pytest.mark.unit


def test_leave_to_dict_serializes_status_value():
    leave = LeaveRequest(
        id=1,
        user_id=2,
        leave_type="Sick Leave",
        start_date=date(2030, 1, 1),
        end_date=date(2030, 1, 3),
    )
    data = leave.to_dict()
    assert data["status"] == "pending"
    assert leave.is_pending
    assert data["approved_by"] is None


def test_leave_not_pending_after_approval():
    leave = LeaveRequest(
        id=1,
        user_id=2,
        leave_type="Annual",
        start_date=date(2030, 1, 1),
        end_date=date(2030, 1, 1),
        status=LeaveStatus.APPROVED,
    )
    assert not leave.is_pending


def test_attendance_history_dict():
    when = datetime(2030, 5, 4, 9, 30)
    record = AttendanceRecord(id=1, user_id=1, status=AttendanceStatus.CHECKED_IN, check_time=when)
    assert record.to_history_dict() == {
        "date": date(2030, 5, 4),
        "status": "Checked In",
        "check_time": when,
    }


def test_leave_stats_defaults():
    assert LeaveStats().to_dict() == {
        "total_leaves": 0,
        "pending_leaves": 0,
        "approved_leaves": 0,
        "rejected_leaves": 0,
    }


def test_review_to_dict_omits_employee_id():
    review = PerformanceReview(id=3, employee_id=4, reviewer_id=5, rating=4, comments="ok")
    data = review.to_dict()
    assert data["rating"] == 4
    assert "employee_id" not in data
