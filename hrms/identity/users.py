"""
===============================================================================
TARJETA CRC — identity/users.py
===============================================================================

Módulo:
    Modelos de Usuario

Responsabilidades:
    - Definir el enum de roles (employee / admin / manager).
    - Definir el registro User persistido (incluye password_hash).
    - Definir AuthenticatedUser: la vista pública que el Access Guard adjunta
      al request (nunca incluye el hash).

Colaboradores:
    - identity/auth_users.py: resuelve tokens a AuthenticatedUser.
    - infrastructure/repositories/*/user.py: mapea filas -> User.
    - identity/access_control.py: decide por role.

Notas:
    - Solo "shapes" de datos; la lógica vive en identity/* y application/*.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any


class UserRole(str, Enum):
    """Roles soportados."""

    EMPLOYEE = "employee"
    ADMIN = "admin"
    MANAGER = "manager"


def normalize_email(email: str) -> str:
    """Los emails se comparan y guardan en minúsculas, sin espacios."""
    return (email or "").strip().lower()


@dataclass(frozen=True, slots=True)
class User:
    """Registro de usuario tal como vive en el Credential Store."""

    id: int
    email: str
    password_hash: str
    first_name: str
    last_name: str
    role: UserRole = UserRole.EMPLOYEE
    department_id: int | None = None
    position: str | None = None
    hire_date: date | None = None
    salary: Decimal = Decimal("0")
    phone: str | None = None
    address: str | None = None
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def public(self) -> "AuthenticatedUser":
        return AuthenticatedUser(
            id=self.id,
            email=self.email,
            first_name=self.first_name,
            last_name=self.last_name,
            role=self.role,
            department_id=self.department_id,
            position=self.position,
        )

    def to_public_dict(self) -> dict[str, Any]:
        """Serialización sin password_hash (respuesta de login/registro)."""
        return {
            "id": self.id,
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "role": self.role.value,
            "department_id": self.department_id,
            "position": self.position,
            "hire_date": self.hire_date,
            "salary": self.salary,
            "phone": self.phone,
            "address": self.address,
            "is_active": self.is_active,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


@dataclass(frozen=True, slots=True)
class AuthenticatedUser:
    """Identidad resuelta por el Access Guard (request.state.user)."""

    id: int
    email: str
    first_name: str
    last_name: str
    role: UserRole
    department_id: int | None = None
    position: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "role": self.role.value,
            "department_id": self.department_id,
            "position": self.position,
        }
