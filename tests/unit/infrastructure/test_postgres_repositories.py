"""
Name: PostgreSQL Repository Tests (offline)

Responsibilities:
  - record_transition: advisory lock + lectura + insert en una transacción
  - Errores de dominio se propagan tal cual; fallas del driver => DatabaseError
  - Reportes: filtros opcionales parametrizados, filas como dicts

Notes:
  - Pool y conexión son MagicMock; no hay base real.
"""

from datetime import datetime
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from hrms.crosscutting.exceptions import DatabaseError
from hrms.domain.attendance_policy import current_status, next_status
from hrms.domain.entities import AttendanceAction, AttendanceStatus
from hrms.domain.errors import AlreadyCheckedInError
from hrms.infrastructure.repositories.postgres import (
    PostgresAttendanceRepository,
    PostgresReportingRepository,
    PostgresUserRepository,
)
from hrms.infrastructure.repositories.postgres.attendance import (
    ATTENDANCE_LOCK_NAMESPACE,
)

pytestmark = pytest.mark.unit


def _pool_with(conn: MagicMock) -> MagicMock:
    pool = MagicMock()
    pool.connection.return_value.__enter__.return_value = conn
    return pool


def _cursor(*, one=None, rows=None, description=None) -> MagicMock:
    cursor = MagicMock()
    cursor.fetchone.return_value = one
    cursor.fetchall.return_value = rows or []
    cursor.description = description
    return cursor


def _checkin(current):
    return next_status(current_status(current), AttendanceAction.CHECKIN)


def test_record_transition_locks_reads_and_inserts():
    checked_at = datetime(2024, 6, 10, 9, 0)
    conn = MagicMock()
    conn.execute.side_effect = [
        _cursor(),
        _cursor(one=None),
        _cursor(one=(11, 3, "Checked In", checked_at, None)),
    ]
    repo = PostgresAttendanceRepository(pool=_pool_with(conn))

    record = repo.record_transition(3, _checkin)

    assert record.id == 11
    assert record.status == AttendanceStatus.CHECKED_IN
    assert record.check_time == checked_at
    conn.transaction.assert_called_once()
    lock_sql, lock_params = conn.execute.call_args_list[0][0]
    assert "pg_advisory_xact_lock" in lock_sql
    assert lock_params == (ATTENDANCE_LOCK_NAMESPACE, 3)


def test_record_transition_propagates_business_rule():
    conn = MagicMock()
    conn.execute.side_effect = [_cursor(), _cursor(one=("Checked In",))]
    repo = PostgresAttendanceRepository(pool=_pool_with(conn))

    with pytest.raises(AlreadyCheckedInError):
        repo.record_transition(3, _checkin)

    assert conn.execute.call_count == 2


def test_driver_failure_becomes_database_error():
    conn = MagicMock()
    conn.execute.side_effect = RuntimeError("connection reset")
    repo = PostgresAttendanceRepository(pool=_pool_with(conn))

    with pytest.raises(DatabaseError):
        repo.latest_status_today(3)


def test_latest_status_today_maps_row():
    conn = MagicMock()
    conn.execute.return_value = _cursor(one=("Checked Out",))
    repo = PostgresAttendanceRepository(pool=_pool_with(conn))

    assert repo.latest_status_today(3) == AttendanceStatus.CHECKED_OUT


def test_user_lookup_lowercases_email():
    conn = MagicMock()
    conn.execute.return_value = _cursor(one=None)
    repo = PostgresUserRepository(pool=_pool_with(conn))

    assert repo.get_user_by_email("  Ana@Example.COM ") is None
    params = conn.execute.call_args[0][1]
    assert params == ("ana@example.com",)


def test_leave_report_only_binds_given_filters():
    conn = MagicMock()
    conn.execute.return_value = _cursor(
        rows=[(1, "Vacation")],
        description=[SimpleNamespace(name="id"), SimpleNamespace(name="leave_type")],
    )
    repo = PostgresReportingRepository(pool=_pool_with(conn))

    rows = repo.leave_report(status="approved", department_id=4)

    sql, params = conn.execute.call_args[0]
    assert params == ("approved", 4)
    assert "l.status = %s" in sql
    assert "l.start_date >= %s" not in sql
    assert rows == [{"id": 1, "leave_type": "Vacation"}]


def test_dashboard_stats_hides_admin_figures():
    conn = MagicMock()
    names = [
        "total_employees",
        "new_this_month",
        "present",
        "on_leave",
        "total_salary",
        "pending",
    ]
    conn.execute.return_value = _cursor(
        rows=[(12, 2, 8, 1, 54000, 3)],
        description=[SimpleNamespace(name=n) for n in names],
    )
    repo = PostgresReportingRepository(pool=_pool_with(conn))

    limited = repo.dashboard_stats(include_admin_figures=False)
    full = repo.dashboard_stats(include_admin_figures=True)

    assert limited["totalSalary"] == 0
    assert limited["pendingLeaves"] == 0
    assert limited["totalEmployees"] == 12
    assert full["totalSalary"] == 54000.0
    assert full["pendingLeaves"] == 3
