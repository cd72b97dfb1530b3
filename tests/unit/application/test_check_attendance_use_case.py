"""
Name: Check Attendance Use Case Tests

Responsibilities:
  - Secuencia diaria completa (checkin -> checkin -> checkout -> checkout)
  - Acción inválida, cruce de medianoche y serialización concurrente
"""

import threading
from datetime import datetime, timedelta

import pytest

from hrms.application.usecases.attendance import (
    CheckAttendanceInput,
    CheckAttendanceUseCase,
    GetAttendanceHistoryUseCase,
    GetAttendanceStatusUseCase,
)
from hrms.application.usecases.results import UseCaseErrorCode
from hrms.domain.entities import AttendanceStatus
from hrms.infrastructure.repositories.in_memory import InMemoryAttendanceRepository

pytestmark = pytest.mark.unit


class _Clock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def _check(use_case, action, user_id=1):
    return use_case.execute(CheckAttendanceInput(user_id=user_id, action=action))


def test_daily_sequence():
    repo = InMemoryAttendanceRepository()
    use_case = CheckAttendanceUseCase(repo)

    first = _check(use_case, "checkin")
    assert first.error is None
    assert first.status == AttendanceStatus.CHECKED_IN
    assert first.message == "Successfully checked in"

    second = _check(use_case, "checkin")
    assert second.error.code == UseCaseErrorCode.BUSINESS_RULE
    assert second.error.message == "Already checked in today"

    out = _check(use_case, "checkout")
    assert out.status == AttendanceStatus.CHECKED_OUT
    assert out.message == "Successfully checked out"

    again = _check(use_case, "checkout")
    assert again.error.message == "Must check in before checking out"


def test_checkout_before_checkin_fails():
    use_case = CheckAttendanceUseCase(InMemoryAttendanceRepository())

    result = _check(use_case, "checkout")

    assert result.error.code == UseCaseErrorCode.BUSINESS_RULE
    assert result.error.message == "Must check in before checking out"


def test_recheckin_after_checkout_same_day_is_rejected():
    use_case = CheckAttendanceUseCase(InMemoryAttendanceRepository())
    _check(use_case, "checkin")
    _check(use_case, "checkout")

    result = _check(use_case, "checkin")

    assert result.error.message == "Already checked in today"


@pytest.mark.parametrize("action", [None, "", "CHECKIN", "lunch", 1, True])
def test_invalid_action(action):
    use_case = CheckAttendanceUseCase(InMemoryAttendanceRepository())

    result = _check(use_case, action)

    assert result.error.code == UseCaseErrorCode.VALIDATION_ERROR
    assert result.error.message == 'Invalid action. Use "checkin" or "checkout"'


def test_rejected_transition_does_not_insert():
    repo = InMemoryAttendanceRepository()
    use_case = CheckAttendanceUseCase(repo)

    _check(use_case, "checkout")

    assert repo.list_history(1, 7) == []


def test_new_day_resets_status():
    clock = _Clock(datetime(2030, 3, 10, 17, 0))
    repo = InMemoryAttendanceRepository(clock=clock)
    use_case = CheckAttendanceUseCase(repo)
    _check(use_case, "checkin")

    clock.now = datetime(2030, 3, 11, 8, 0)

    assert GetAttendanceStatusUseCase(repo).execute(1) == AttendanceStatus.NOT_CHECKED_IN
    assert _check(use_case, "checkin").status == AttendanceStatus.CHECKED_IN


def test_users_are_independent():
    use_case = CheckAttendanceUseCase(InMemoryAttendanceRepository())

    assert _check(use_case, "checkin", user_id=1).error is None
    assert _check(use_case, "checkin", user_id=2).error is None


def test_concurrent_checkins_accept_exactly_one():
    use_case = CheckAttendanceUseCase(InMemoryAttendanceRepository())
    barrier = threading.Barrier(8)
    results = []
    lock = threading.Lock()

    def worker():
        barrier.wait()
        result = _check(use_case, "checkin")
        with lock:
            results.append(result)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    accepted = [r for r in results if r.error is None]
    assert len(accepted) == 1
    assert len(results) == 8


def test_history_window_and_bounds():
    clock = _Clock(datetime(2030, 3, 20, 9, 0))
    repo = InMemoryAttendanceRepository(clock=clock)
    use_case = CheckAttendanceUseCase(repo)
    for day in (1, 15, 20):
        clock.now = datetime(2030, 3, day, 9, 0)
        _check(use_case, "checkin")

    history = GetAttendanceHistoryUseCase(repo, max_days=365)

    recent = history.execute(1, 7)
    assert [r.check_time.day for r in recent.records] == [20, 15]

    too_many = history.execute(1, 366)
    assert too_many.error.code == UseCaseErrorCode.VALIDATION_ERROR
    assert history.execute(1, 0).error is not None


def test_status_defaults_to_not_checked_in():
    repo = InMemoryAttendanceRepository()

    assert GetAttendanceStatusUseCase(repo).execute(99) == AttendanceStatus.NOT_CHECKED_IN


def test_history_is_newest_first():
    clock = _Clock(datetime(2030, 3, 20, 9, 0))
    repo = InMemoryAttendanceRepository(clock=clock)
    use_case = CheckAttendanceUseCase(repo)
    _check(use_case, "checkin")
    clock.now += timedelta(hours=8)
    _check(use_case, "checkout")

    records = GetAttendanceHistoryUseCase(repo).execute(1).records

    assert [r.status for r in records] == [
        AttendanceStatus.CHECKED_OUT,
        AttendanceStatus.CHECKED_IN,
    ]
