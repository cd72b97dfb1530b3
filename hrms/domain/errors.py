"""
===============================================================================
TARJETA CRC — domain/errors.py
===============================================================================

Responsabilidades:
  - Taxonomía de errores de negocio, independiente de HTTP.
  - Cada error trae un mensaje apto para el usuario final.

Colaboradores:
  - domain.attendance_policy (AlreadyCheckedIn / MustCheckInFirst)
  - infrastructure.repositories.* (DuplicateEmailError)
  - api/* (traducen a 400/404 con el sobre de su familia)
===============================================================================
"""

from __future__ import annotations


class HRMSDomainError(Exception):
    """Base de errores de negocio."""

    default_message: str = "Operation not allowed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class DuplicateEmailError(HRMSDomainError):
    default_message = "Email already exists"


class NotFoundError(HRMSDomainError):
    default_message = "Resource not found"


class BusinessRuleViolation(HRMSDomainError):
    """Regla de negocio violada (orden de asistencia, fechas de licencia, ...)."""


class AlreadyCheckedInError(BusinessRuleViolation):
    default_message = "Already checked in today"


class MustCheckInFirstError(BusinessRuleViolation):
    default_message = "Must check in before checking out"
