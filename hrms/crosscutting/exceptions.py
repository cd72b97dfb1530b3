"""
===============================================================================
MÓDULO: Excepciones tipadas de infraestructura
===============================================================================

Objetivo
--------
Tener excepciones internas coherentes, con:
- error_code estable
- error_id para correlación con logs
- message "humana" (sin filtrar secretos)

Colaboradores:
  - api/exception_handlers.py (loguea y responde 500 genérico)
  - infrastructure/db/* (DatabaseError y derivados)
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4


class HRMSError(Exception):
    """
    Base para errores internos del sistema (no de negocio).

    Proveer error_code + error_id + message; el error_id se loguea y,
    en desarrollo, se devuelve al cliente para rastrear el incidente.
    """

    error_code: str = "HRMS_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)


class DatabaseError(HRMSError):
    """Errores de DB (conexión, query, timeout, pool). Equivale a StorageUnavailable."""

    error_code: str = "DATABASE_ERROR"
