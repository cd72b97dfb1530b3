"""Casos de uso de asistencia."""

from .attendance_queries import (
    DEFAULT_HISTORY_DAYS,
    GetAttendanceHistoryUseCase,
    GetAttendanceStatusUseCase,
)
from .check_attendance import CheckAttendanceInput, CheckAttendanceUseCase

__all__ = [
    "DEFAULT_HISTORY_DAYS",
    "CheckAttendanceInput",
    "CheckAttendanceUseCase",
    "GetAttendanceHistoryUseCase",
    "GetAttendanceStatusUseCase",
]
