"""Repositorios in-memory (tests / desarrollo sin base de datos)."""

from .attendance import InMemoryAttendanceRepository
from .department import DEFAULT_DEPARTMENTS, InMemoryDepartmentRepository
from .leave import InMemoryLeaveRepository
from .performance import InMemoryPerformanceRepository
from .user import InMemoryUserRepository

__all__ = [
    "DEFAULT_DEPARTMENTS",
    "InMemoryAttendanceRepository",
    "InMemoryDepartmentRepository",
    "InMemoryLeaveRepository",
    "InMemoryPerformanceRepository",
    "InMemoryUserRepository",
]
