"""
Use Cases Layer (Business Operations)

Structure
---------
usecases/
├── auth/          # Registro, login, perfil
├── attendance/    # Check-in / check-out, estado e historial
├── employees/     # Alta (employee / admin), edición, baja
├── leaves/        # Solicitudes de licencia y aprobación
└── performance/   # Reviews de desempeño

Usage
-----
    from hrms.application.usecases.attendance import CheckAttendanceUseCase
"""

from .results import (
    AttendanceHistoryResult,
    AttendanceResult,
    AuthResult,
    DeleteResult,
    LeaveResult,
    ReviewResult,
    UseCaseError,
    UseCaseErrorCode,
    UserResult,
)

__all__ = [
    "AttendanceHistoryResult",
    "AttendanceResult",
    "AuthResult",
    "DeleteResult",
    "LeaveResult",
    "ReviewResult",
    "UseCaseError",
    "UseCaseErrorCode",
    "UserResult",
]
