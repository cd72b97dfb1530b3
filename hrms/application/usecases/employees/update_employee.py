"""
===============================================================================
USE CASES: Update / Delete Employee
===============================================================================

Invariantes:
    - Update: self o admin. Solo un admin cambia salario o departamento.
    - Delete: nunca borra admins; se reportan como NOT_FOUND.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ....domain.repositories import UserRepository
from ....identity.rbac import is_admin, is_self_or_admin
from ....identity.users import AuthenticatedUser
from ..results import DeleteResult, UseCaseError, UseCaseErrorCode, UserResult

MSG_EMPLOYEE_NOT_FOUND = "Employee not found"
MSG_ACCESS_DENIED = "Access denied"

_ADMIN_ONLY_FIELDS = ("salary", "department_id")


@dataclass(frozen=True)
class UpdateEmployeeInput:
    employee_id: int
    actor: AuthenticatedUser
    first_name: str | None = None
    last_name: str | None = None
    department_id: int | None = None
    position: str | None = None
    salary: Decimal | None = None
    phone: str | None = None
    address: str | None = None


class UpdateEmployeeUseCase:
    def __init__(self, users: UserRepository) -> None:
        self._users = users

    def execute(self, input_data: UpdateEmployeeInput) -> UserResult:
        actor = input_data.actor
        if not is_self_or_admin(actor.role, input_data.employee_id, actor.id):
            return UserResult(
                error=UseCaseError(UseCaseErrorCode.FORBIDDEN, MSG_ACCESS_DENIED)
            )

        fields: dict[str, object] = {
            "first_name": input_data.first_name,
            "last_name": input_data.last_name,
            "department_id": input_data.department_id,
            "position": input_data.position,
            "salary": input_data.salary,
            "phone": input_data.phone,
            "address": input_data.address,
        }
        if not is_admin(actor.role):
            for name in _ADMIN_ONLY_FIELDS:
                fields.pop(name)

        user = self._users.update_user(input_data.employee_id, fields)
        if user is None:
            return UserResult(
                error=UseCaseError(UseCaseErrorCode.NOT_FOUND, MSG_EMPLOYEE_NOT_FOUND)
            )
        return UserResult(user=user)


class DeleteEmployeeUseCase:
    def __init__(self, users: UserRepository) -> None:
        self._users = users

    def execute(self, employee_id: int) -> DeleteResult:
        if not self._users.delete_non_admin_user(employee_id):
            return DeleteResult(
                deleted=False,
                error=UseCaseError(UseCaseErrorCode.NOT_FOUND, MSG_EMPLOYEE_NOT_FOUND),
            )
        return DeleteResult(deleted=True)
