"""
===============================================================================
USE CASES: Attendance queries (estado del día + historial)
===============================================================================

Collaborators:
    - AttendanceRepository.latest_status_today / list_history
    - domain.attendance_policy.current_status
===============================================================================
"""

from __future__ import annotations

from ....domain.attendance_policy import current_status
from ....domain.entities import AttendanceStatus
from ....domain.repositories import AttendanceRepository
from ..results import AttendanceHistoryResult, UseCaseError, UseCaseErrorCode

DEFAULT_HISTORY_DAYS = 7


class GetAttendanceStatusUseCase:
    """Estado del día; "Not checked in" si no hay registro hoy."""

    def __init__(self, attendance: AttendanceRepository) -> None:
        self._attendance = attendance

    def execute(self, user_id: int) -> AttendanceStatus:
        return current_status(self._attendance.latest_status_today(user_id))


class GetAttendanceHistoryUseCase:
    def __init__(self, attendance: AttendanceRepository, max_days: int = 365) -> None:
        self._attendance = attendance
        self._max_days = max_days

    def execute(
        self, user_id: int, days: int = DEFAULT_HISTORY_DAYS
    ) -> AttendanceHistoryResult:
        if days < 1 or days > self._max_days:
            return AttendanceHistoryResult(
                records=[],
                error=UseCaseError(
                    UseCaseErrorCode.VALIDATION_ERROR,
                    f"days must be between 1 and {self._max_days}",
                ),
            )
        return AttendanceHistoryResult(
            records=self._attendance.list_history(user_id, days)
        )
