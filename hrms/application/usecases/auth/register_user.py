"""
===============================================================================
USE CASE: Register User
===============================================================================

Business Goal:
    Alta self-service de un empleado y emisión de su primer token.

Invariantes:
    - El rol SIEMPRE es employee, sin importar lo que mande el cliente.
    - El email se guarda normalizado; duplicados -> CONFLICT.
    - El departamento llega por nombre (case-insensitive); si no existe se
      ignora y el usuario queda sin departamento.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    RegisterUserUseCase

Collaborators:
    - UserRepository.create_user (DuplicateEmailError)
    - DepartmentRepository.find_by_name
    - identity.passwords.hash_password
    - identity.tokens.TokenService.issue
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from ....crosscutting.logger import logger
from ....domain.errors import DuplicateEmailError
from ....domain.repositories import DepartmentRepository, UserRepository
from ....identity.passwords import hash_password
from ....identity.tokens import TokenService
from ....identity.users import UserRole
from ..results import AuthResult, UseCaseError, UseCaseErrorCode

MSG_DUPLICATE_EMAIL = "User with this email already exists"


@dataclass(frozen=True)
class RegisterUserInput:
    email: str
    password: str
    first_name: str
    last_name: str
    department: str | None = None
    position: str | None = None


class RegisterUserUseCase:
    def __init__(
        self,
        users: UserRepository,
        departments: DepartmentRepository,
        tokens: TokenService,
    ) -> None:
        self._users = users
        self._departments = departments
        self._tokens = tokens

    def execute(self, input_data: RegisterUserInput) -> AuthResult:
        department_id = None
        if input_data.department and input_data.department.strip():
            department = self._departments.find_by_name(input_data.department)
            department_id = department.id if department else None

        try:
            user = self._users.create_user(
                email=input_data.email,
                password_hash=hash_password(input_data.password),
                first_name=input_data.first_name.strip(),
                last_name=input_data.last_name.strip(),
                role=UserRole.EMPLOYEE,
                department_id=department_id,
                position=input_data.position,
            )
        except DuplicateEmailError:
            return AuthResult(
                error=UseCaseError(UseCaseErrorCode.CONFLICT, MSG_DUPLICATE_EMAIL)
            )

        logger.info("User registered", extra={"user_id": user.id})
        return AuthResult(user=user, token=self._tokens.issue(user.id, user.email))
