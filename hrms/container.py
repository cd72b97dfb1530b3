"""
===============================================================================
TARJETA CRC — hrms/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer repositorios y casos de uso siguiendo DIP.
  - Exponer factories para FastAPI (Depends); los tests las reemplazan con
    app.dependency_overrides.
  - Mantener singletons con caching (lru_cache).
  - Elegir in-memory vs Postgres según Settings.app_env.

Colaboradores:
  - hrms.crosscutting.config.get_settings
  - hrms.domain.repositories.* (puertos)
  - hrms.infrastructure.repositories.* (implementaciones)
  - hrms.application.usecases.* (casos de uso)

Notas:
  - Este archivo NO contiene lógica de negocio.
  - Este archivo NO depende de FastAPI (solo expone factories).
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from .application.usecases.attendance import (
    CheckAttendanceUseCase,
    GetAttendanceHistoryUseCase,
    GetAttendanceStatusUseCase,
)
from .application.usecases.auth import (
    LoginUseCase,
    RegisterUserUseCase,
    UpdateProfileUseCase,
)
from .application.usecases.employees import (
    CreateAdminUseCase,
    CreateEmployeeUseCase,
    DeleteEmployeeUseCase,
    UpdateEmployeeUseCase,
)
from .application.usecases.leaves import (
    CreateLeaveUseCase,
    DeleteLeaveUseCase,
    UpdateLeaveStatusUseCase,
)
from .application.usecases.performance import AddReviewUseCase
from .crosscutting.config import get_settings
from .domain.repositories import (
    AttendanceRepository,
    DepartmentRepository,
    LeaveRepository,
    PerformanceRepository,
    ReportingRepository,
    UserRepository,
)
from .identity.tokens import TokenService, get_token_service
from .infrastructure.repositories.in_memory import (
    InMemoryAttendanceRepository,
    InMemoryDepartmentRepository,
    InMemoryLeaveRepository,
    InMemoryPerformanceRepository,
    InMemoryUserRepository,
)
from .infrastructure.repositories.postgres import (
    PostgresAttendanceRepository,
    PostgresDepartmentRepository,
    PostgresLeaveRepository,
    PostgresPerformanceRepository,
    PostgresReportingRepository,
    PostgresUserRepository,
)

# =============================================================================
# Helpers internos
# =============================================================================


def _is_test_env() -> bool:
    """app_env ∈ {"test", "testing", "ci"} => adapters in-memory."""
    env = get_settings().app_env.strip().lower()
    return env in {"test", "testing", "ci"}


def uses_in_memory_storage() -> bool:
    """True si los repositorios no necesitan el pool de Postgres."""
    return _is_test_env()


# =============================================================================
# Repositorios (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_user_repository() -> UserRepository:
    if _is_test_env():
        return InMemoryUserRepository()
    return PostgresUserRepository()


@lru_cache(maxsize=1)
def get_department_repository() -> DepartmentRepository:
    if _is_test_env():
        return InMemoryDepartmentRepository()
    return PostgresDepartmentRepository()


@lru_cache(maxsize=1)
def get_attendance_repository() -> AttendanceRepository:
    if _is_test_env():
        return InMemoryAttendanceRepository()
    return PostgresAttendanceRepository()


@lru_cache(maxsize=1)
def get_leave_repository() -> LeaveRepository:
    if _is_test_env():
        return InMemoryLeaveRepository(user_repo=get_user_repository())
    return PostgresLeaveRepository()


@lru_cache(maxsize=1)
def get_performance_repository() -> PerformanceRepository:
    if _is_test_env():
        return InMemoryPerformanceRepository(
            user_repo=get_user_repository(),
            department_repo=get_department_repository(),
        )
    return PostgresPerformanceRepository()


@lru_cache(maxsize=1)
def get_reporting_repository() -> ReportingRepository:
    """Solo Postgres: los tests lo reemplazan con un stub."""
    return PostgresReportingRepository()


def get_token_service_dependency() -> TokenService:
    return get_token_service()


def reset_repositories() -> None:
    """Limpia los singletons (tests / cambio de settings)."""
    for factory in (
        get_user_repository,
        get_department_repository,
        get_attendance_repository,
        get_leave_repository,
        get_performance_repository,
        get_reporting_repository,
    ):
        factory.cache_clear()


# =============================================================================
# Casos de uso (no cacheados: son livianos y dependen de los singletons)
# =============================================================================


def get_register_user_use_case() -> RegisterUserUseCase:
    return RegisterUserUseCase(
        users=get_user_repository(),
        departments=get_department_repository(),
        tokens=get_token_service(),
    )


def get_login_use_case() -> LoginUseCase:
    return LoginUseCase(users=get_user_repository(), tokens=get_token_service())


def get_update_profile_use_case() -> UpdateProfileUseCase:
    return UpdateProfileUseCase(
        users=get_user_repository(), departments=get_department_repository()
    )


def get_check_attendance_use_case() -> CheckAttendanceUseCase:
    return CheckAttendanceUseCase(attendance=get_attendance_repository())


def get_attendance_status_use_case() -> GetAttendanceStatusUseCase:
    return GetAttendanceStatusUseCase(attendance=get_attendance_repository())


def get_attendance_history_use_case() -> GetAttendanceHistoryUseCase:
    return GetAttendanceHistoryUseCase(
        attendance=get_attendance_repository(),
        max_days=get_settings().attendance_history_max_days,
    )


def get_create_employee_use_case() -> CreateEmployeeUseCase:
    return CreateEmployeeUseCase(users=get_user_repository())


def get_create_admin_use_case() -> CreateAdminUseCase:
    return CreateAdminUseCase(users=get_user_repository())


def get_update_employee_use_case() -> UpdateEmployeeUseCase:
    return UpdateEmployeeUseCase(users=get_user_repository())


def get_delete_employee_use_case() -> DeleteEmployeeUseCase:
    return DeleteEmployeeUseCase(users=get_user_repository())


def get_create_leave_use_case() -> CreateLeaveUseCase:
    return CreateLeaveUseCase(leaves=get_leave_repository())


def get_update_leave_status_use_case() -> UpdateLeaveStatusUseCase:
    return UpdateLeaveStatusUseCase(leaves=get_leave_repository())


def get_delete_leave_use_case() -> DeleteLeaveUseCase:
    return DeleteLeaveUseCase(leaves=get_leave_repository())


def get_add_review_use_case() -> AddReviewUseCase:
    return AddReviewUseCase(
        users=get_user_repository(), reviews=get_performance_repository()
    )
