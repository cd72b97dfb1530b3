"""Repositorios PostgreSQL (SQL crudo, parametrizado)."""

from .attendance import PostgresAttendanceRepository
from .department import PostgresDepartmentRepository
from .leave import PostgresLeaveRepository
from .performance import PostgresPerformanceRepository
from .reporting import PostgresReportingRepository
from .user import PostgresUserRepository

__all__ = [
    "PostgresAttendanceRepository",
    "PostgresDepartmentRepository",
    "PostgresLeaveRepository",
    "PostgresPerformanceRepository",
    "PostgresReportingRepository",
    "PostgresUserRepository",
]
