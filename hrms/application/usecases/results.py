"""
===============================================================================
USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Business Goal:
    Contrato estable de resultados y errores para todos los casos de uso,
    para que la API traduzca a HTTP en un único lugar (api/error_mapping.py).

Why (Context / Intención):
    - Los use cases devuelven resultados tipados en lugar de lanzar
      excepciones de negocio hacia afuera.
    - El mensaje viaja tal cual al cliente: es parte del contrato HTTP.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Component:
    results (module)

Responsibilities:
    - UseCaseErrorCode: categorías estables.
    - UseCaseError: code + message.
    - Resultados por feature (auth, attendance, employees, leaves, reviews).

Collaborators:
    - identity.users.User
    - domain.entities (AttendanceRecord, LeaveRequest, PerformanceReview)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ...domain.entities import (
    AttendanceRecord,
    AttendanceStatus,
    LeaveRequest,
    PerformanceReview,
)
from ...identity.users import User


class UseCaseErrorCode(str, Enum):
    """
    Códigos:
      - VALIDATION_ERROR: inputs inválidos o incompletos (400).
      - UNAUTHORIZED: credenciales inválidas (401).
      - FORBIDDEN: actor no autorizado para la operación (403).
      - NOT_FOUND: recurso inexistente (404).
      - CONFLICT: email duplicado (400 en este API).
      - BUSINESS_RULE: regla de negocio violada (400).
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    BUSINESS_RULE = "BUSINESS_RULE"


@dataclass(frozen=True)
class UseCaseError:
    code: UseCaseErrorCode
    message: str


@dataclass
class AuthResult:
    """Registro / login: usuario + token emitido."""

    user: User | None = None
    token: str | None = None
    error: UseCaseError | None = None


@dataclass
class AttendanceResult:
    status: AttendanceStatus | None = None
    message: str | None = None
    record: AttendanceRecord | None = None
    error: UseCaseError | None = None


@dataclass
class AttendanceHistoryResult:
    records: list[AttendanceRecord]
    error: UseCaseError | None = None


@dataclass
class UserResult:
    user: User | None = None
    error: UseCaseError | None = None


@dataclass
class LeaveResult:
    leave: LeaveRequest | None = None
    error: UseCaseError | None = None


@dataclass
class DeleteResult:
    deleted: bool
    error: UseCaseError | None = None


@dataclass
class ReviewResult:
    review: PerformanceReview | None = None
    error: UseCaseError | None = None
