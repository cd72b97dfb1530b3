"""
===============================================================================
USE CASES: Create Employee / Create Admin
===============================================================================

Business Goal:
    Alta de cuentas por un administrador.

Invariantes:
    - POST /employees nunca crea admins (FORBIDDEN con la ruta correcta).
    - Los admins se crean solo por CreateAdminUseCase:
        * password >= 8 caracteres
        * hash con el cost factor de admin (bcrypt_admin_rounds)
        * la creación queda logueada con el actor
    - Email duplicado -> CONFLICT "Email already exists".

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Classes:
    CreateEmployeeUseCase, CreateAdminUseCase

Collaborators:
    - UserRepository.create_user
    - identity.passwords.hash_password
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ....crosscutting.logger import logger
from ....domain.errors import DuplicateEmailError
from ....domain.repositories import UserRepository
from ....identity.passwords import hash_password
from ....identity.users import UserRole
from ..results import UseCaseError, UseCaseErrorCode, UserResult

MSG_USE_ADMIN_ENDPOINT = "Use /api/employees/admin endpoint to create admin accounts"
MSG_ADMIN_PASSWORD_TOO_SHORT = "Admin passwords must be at least 8 characters long"
MSG_EMAIL_EXISTS = "Email already exists"
MSG_INVALID_ROLE = "Invalid role"
MSG_PASSWORD_REQUIRED = "Password is required"

ADMIN_PASSWORD_MIN_LENGTH = 8


@dataclass(frozen=True)
class CreateEmployeeInput:
    email: str
    password: str | None
    first_name: str
    last_name: str
    role: str = UserRole.EMPLOYEE.value
    department_id: int | None = None
    position: str | None = None
    salary: Decimal | None = None
    phone: str | None = None


def _conflict() -> UserResult:
    return UserResult(error=UseCaseError(UseCaseErrorCode.CONFLICT, MSG_EMAIL_EXISTS))


class CreateEmployeeUseCase:
    def __init__(self, users: UserRepository) -> None:
        self._users = users

    def execute(self, input_data: CreateEmployeeInput) -> UserResult:
        raw_role = (input_data.role or UserRole.EMPLOYEE.value).strip().lower()
        if raw_role == UserRole.ADMIN.value:
            return UserResult(
                error=UseCaseError(UseCaseErrorCode.FORBIDDEN, MSG_USE_ADMIN_ENDPOINT)
            )
        try:
            role = UserRole(raw_role)
        except ValueError:
            return UserResult(
                error=UseCaseError(UseCaseErrorCode.VALIDATION_ERROR, MSG_INVALID_ROLE)
            )
        if not input_data.password:
            return UserResult(
                error=UseCaseError(UseCaseErrorCode.VALIDATION_ERROR, MSG_PASSWORD_REQUIRED)
            )

        try:
            user = self._users.create_user(
                email=input_data.email,
                password_hash=hash_password(input_data.password),
                first_name=input_data.first_name,
                last_name=input_data.last_name,
                role=role,
                department_id=input_data.department_id,
                position=input_data.position,
                salary=input_data.salary,
                phone=input_data.phone,
            )
        except DuplicateEmailError:
            return _conflict()
        return UserResult(user=user)


class CreateAdminUseCase:
    def __init__(self, users: UserRepository) -> None:
        self._users = users

    def execute(self, input_data: CreateEmployeeInput, *, actor_email: str) -> UserResult:
        if len(input_data.password or "") < ADMIN_PASSWORD_MIN_LENGTH:
            return UserResult(
                error=UseCaseError(
                    UseCaseErrorCode.VALIDATION_ERROR, MSG_ADMIN_PASSWORD_TOO_SHORT
                )
            )

        try:
            user = self._users.create_user(
                email=input_data.email,
                password_hash=hash_password(input_data.password, admin=True),
                first_name=input_data.first_name,
                last_name=input_data.last_name,
                role=UserRole.ADMIN,
                department_id=input_data.department_id,
                position=input_data.position,
                salary=input_data.salary,
                phone=input_data.phone,
            )
        except DuplicateEmailError:
            return _conflict()

        logger.warning(
            "Admin account created",
            extra={"created_by": actor_email, "admin_user_id": user.id},
        )
        return UserResult(user=user)
