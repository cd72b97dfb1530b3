"""
===============================================================================
TARJETA CRC — hrms/api/schemas.py (Modelos HTTP / DTOs)
===============================================================================

Responsabilidades:
  - Validar bodies de entrada con pydantic.
  - Mensajes de validación estables ("Valid email is required", ...);
    el handler los aplana a errors:[{field, message}].

Notas:
  - Los campos cuya ausencia tiene mensaje propio de negocio (acción de
    asistencia, fechas de licencia, rating, status) son opcionales acá y
    se validan en el caso de uso.
===============================================================================
"""

from __future__ import annotations

import re
from datetime import date
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field, field_validator

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _valid_email(value: str) -> str:
    normalized = (value or "").strip().lower()
    if not _EMAIL_RE.match(normalized):
        raise ValueError("Valid email is required")
    return normalized


def _strip_optional(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


# -----------------------------------------------------------------------------
# Auth
# -----------------------------------------------------------------------------


class RegisterRequest(BaseModel):
    email: str = Field(..., max_length=255)
    password: str = Field(..., max_length=512)
    first_name: str = Field(..., max_length=100)
    last_name: str = Field(..., max_length=100)
    department: str | None = None
    position: str | None = Field(None, max_length=100)
    # R: Se acepta para no romper clientes, pero se ignora (siempre employee).
    role: str | None = None

    @field_validator("email")
    @classmethod
    def validar_email(cls, v: str) -> str:
        return _valid_email(v)

    @field_validator("password")
    @classmethod
    def validar_password(cls, v: str) -> str:
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters")
        return v

    @field_validator("first_name")
    @classmethod
    def validar_first_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("First name is required")
        return v.strip()

    @field_validator("last_name")
    @classmethod
    def validar_last_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Last name is required")
        return v.strip()

    @field_validator("department", "position")
    @classmethod
    def recortar(cls, v: str | None) -> str | None:
        return _strip_optional(v)


class LoginRequest(BaseModel):
    email: str = Field(..., max_length=255)
    password: str = Field(..., max_length=512)

    @field_validator("email")
    @classmethod
    def validar_email(cls, v: str) -> str:
        return _valid_email(v)

    @field_validator("password")
    @classmethod
    def validar_password(cls, v: str) -> str:
        if not v:
            raise ValueError("Password is required")
        return v


class ProfileUpdateRequest(BaseModel):
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    department: str | None = None
    position: str | None = Field(None, max_length=100)

    @field_validator("first_name", "last_name", "department", "position")
    @classmethod
    def recortar(cls, v: str | None) -> str | None:
        return _strip_optional(v)


# -----------------------------------------------------------------------------
# Attendance
# -----------------------------------------------------------------------------


class AttendanceCheckRequest(BaseModel):
    # R: Cualquier valor; la acción se valida en el use case.
    action: Any = None


# -----------------------------------------------------------------------------
# Employees
# -----------------------------------------------------------------------------


class EmployeeCreateRequest(BaseModel):
    email: str = Field(..., max_length=255)
    password: str | None = Field(None, max_length=512)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    department_id: int | None = None
    position: str | None = Field(None, max_length=100)
    salary: Decimal | None = Field(None, ge=0)
    phone: str | None = Field(None, max_length=20)
    role: str = "employee"

    @field_validator("email")
    @classmethod
    def validar_email(cls, v: str) -> str:
        return _valid_email(v)


class EmployeeUpdateRequest(BaseModel):
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    department_id: int | None = None
    position: str | None = Field(None, max_length=100)
    salary: Decimal | None = Field(None, ge=0)
    phone: str | None = Field(None, max_length=20)
    address: str | None = None


# -----------------------------------------------------------------------------
# Leaves
# -----------------------------------------------------------------------------


class LeaveCreateRequest(BaseModel):
    leave_type: str | None = Field(None, max_length=50)
    start_date: date | None = None
    end_date: date | None = None
    reason: str | None = None


class LeaveStatusRequest(BaseModel):
    status: str | None = None


# -----------------------------------------------------------------------------
# Performance
# -----------------------------------------------------------------------------


class ReviewCreateRequest(BaseModel):
    rating: int | None = None
    comments: str | None = None
