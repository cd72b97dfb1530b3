"""
===============================================================================
USE CASE: Update Profile
===============================================================================

Business Goal:
    Permitir al usuario editar su propio perfil (nombre, departamento,
    posición). Nunca toca rol, salario ni email.

Notas:
    - El departamento llega por nombre; si no existe se ignora el campo.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from ....domain.repositories import DepartmentRepository, UserRepository
from ..results import UseCaseError, UseCaseErrorCode, UserResult


@dataclass(frozen=True)
class UpdateProfileInput:
    user_id: int
    first_name: str | None = None
    last_name: str | None = None
    department: str | None = None
    position: str | None = None


class UpdateProfileUseCase:
    def __init__(
        self, users: UserRepository, departments: DepartmentRepository
    ) -> None:
        self._users = users
        self._departments = departments

    def execute(self, input_data: UpdateProfileInput) -> UserResult:
        fields: dict[str, object] = {
            "first_name": input_data.first_name,
            "last_name": input_data.last_name,
            "position": input_data.position,
        }
        if input_data.department and input_data.department.strip():
            department = self._departments.find_by_name(input_data.department)
            if department is not None:
                fields["department_id"] = department.id

        user = self._users.update_user(input_data.user_id, fields)
        if user is None:
            return UserResult(
                error=UseCaseError(UseCaseErrorCode.NOT_FOUND, "User not found")
            )
        return UserResult(user=user)
