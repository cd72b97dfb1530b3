"""Casos de uso de empleados."""

from .create_employee import (
    ADMIN_PASSWORD_MIN_LENGTH,
    CreateAdminUseCase,
    CreateEmployeeInput,
    CreateEmployeeUseCase,
)
from .update_employee import (
    MSG_EMPLOYEE_NOT_FOUND,
    DeleteEmployeeUseCase,
    UpdateEmployeeInput,
    UpdateEmployeeUseCase,
)

__all__ = [
    "ADMIN_PASSWORD_MIN_LENGTH",
    "MSG_EMPLOYEE_NOT_FOUND",
    "CreateAdminUseCase",
    "CreateEmployeeInput",
    "CreateEmployeeUseCase",
    "DeleteEmployeeUseCase",
    "UpdateEmployeeInput",
    "UpdateEmployeeUseCase",
]
