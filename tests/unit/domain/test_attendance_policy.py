"""
Name: Attendance Policy Tests

Responsibilities:
  - Cubrir la tabla de transiciones completa (estado x acción)
  - Verificar mensajes de éxito y de error estables
"""

import pytest

from hrms.domain.attendance_policy import current_status, next_status, success_message
from hrms.domain.entities import AttendanceAction, AttendanceStatus
from hrms.domain.errors import AlreadyCheckedInError, MustCheckInFirstError

pytestmark = pytest.mark.unit


def test_current_status_defaults_to_not_checked_in():
    assert current_status(None) == AttendanceStatus.NOT_CHECKED_IN
    assert current_status(AttendanceStatus.CHECKED_IN) == AttendanceStatus.CHECKED_IN


@pytest.mark.parametrize(
    "current, action, expected",
    [
        (AttendanceStatus.NOT_CHECKED_IN, AttendanceAction.CHECKIN, AttendanceStatus.CHECKED_IN),
        (AttendanceStatus.CHECKED_IN, AttendanceAction.CHECKOUT, AttendanceStatus.CHECKED_OUT),
    ],
)
def test_allowed_transitions(current, action, expected):
    assert next_status(current, action) == expected


@pytest.mark.parametrize(
    "current, action, error",
    [
        (AttendanceStatus.CHECKED_IN, AttendanceAction.CHECKIN, AlreadyCheckedInError),
        (AttendanceStatus.CHECKED_OUT, AttendanceAction.CHECKIN, AlreadyCheckedInError),
        (AttendanceStatus.NOT_CHECKED_IN, AttendanceAction.CHECKOUT, MustCheckInFirstError),
        (AttendanceStatus.CHECKED_OUT, AttendanceAction.CHECKOUT, MustCheckInFirstError),
    ],
)
def test_rejected_transitions(current, action, error):
    with pytest.raises(error):
        next_status(current, action)


def test_error_messages_are_stable():
    assert AlreadyCheckedInError().message == "Already checked in today"
    assert MustCheckInFirstError().message == "Must check in before checking out"


def test_success_messages():
    assert success_message(AttendanceAction.CHECKIN) == "Successfully checked in"
    assert success_message(AttendanceAction.CHECKOUT) == "Successfully checked out"
