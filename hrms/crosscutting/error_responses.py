"""
===============================================================================
MÓDULO: Respuestas de error estándar (dos sobres de respuesta)
===============================================================================

Objetivo
--------
Uniformar los errores HTTP respetando los dos contratos que consumen los
clientes existentes:

- Sobre "status"  (auth, guard, performance, reports):
      {"message": "...", "status": "error"[, "errors": [...]]}
- Sobre "success" (attendance, employees, leaves, dashboard):
      {"success": false, "message": "..."}

Ambos conviven y NO se unifican: cada familia de endpoints conserva el suyo.

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  AppHTTPException + factories + handler

Responsabilidades:
  - Definir catálogo de códigos de error (ErrorCode)
  - Elegir el sobre (Envelope) por punto de emisión
  - Proveer factories de errores frecuentes
  - Renderizar el payload en el handler FastAPI

Colaboradores:
  - api/exception_handlers.py (registra handlers y mapea errores internos)
  - identity/* (guard y role policy)
===============================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel


class ErrorCode(str, Enum):
    # 4xx
    VALIDATION_ERROR = "VALIDATION_ERROR"
    DUPLICATE_EMAIL = "DUPLICATE_EMAIL"
    BUSINESS_RULE = "BUSINESS_RULE"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"

    # 5xx
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


class Envelope(str, Enum):
    """Convención de sobre de respuesta de una familia de endpoints."""

    STATUS = "status"
    SUCCESS = "success"


class StatusErrorBody(BaseModel):
    message: str
    status: str = "error"
    errors: list[dict[str, Any]] | None = None


class SuccessErrorBody(BaseModel):
    success: bool = False
    message: str


OPENAPI_ERROR_RESPONSES = {
    "400": {"description": "Validation / business rule failure"},
    "401": {"description": "Missing, invalid or expired token", "model": StatusErrorBody},
    "403": {"description": "Authenticated but not allowed"},
    "404": {"description": "Not found"},
    "500": {"description": "Unexpected failure"},
}


def render_error_body(
    message: str,
    envelope: Envelope,
    *,
    errors: list[dict[str, Any]] | None = None,
    extra: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Construye el body de error para el sobre pedido.

    `extra` agrega claves opcionales (ej: error / error_id en desarrollo).
    """
    if envelope is Envelope.STATUS:
        body = StatusErrorBody(message=message, errors=errors).model_dump(
            exclude_none=True
        )
    else:
        body = SuccessErrorBody(message=message).model_dump()
        if errors:
            body["errors"] = errors
    if extra:
        body.update(extra)
    return body


class AppHTTPException(HTTPException):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      AppHTTPException

    Responsabilidades:
      - Adjuntar un ErrorCode estable
      - Transportar el sobre de respuesta (Envelope)
      - Transportar errores de validación (errors[])

    Colaboradores:
      - app_exception_handler()
    ----------------------------------------------------------------------------
    """

    def __init__(
        self,
        status_code: int,
        code: ErrorCode,
        detail: str,
        *,
        envelope: Envelope = Envelope.SUCCESS,
        errors: list[dict[str, Any]] | None = None,
    ):
        super().__init__(status_code=status_code, detail=detail)
        self.code = code
        self.envelope = envelope
        self.errors = errors


# ---------------------------------------------------------------------------
# Factories de error (helpers)
# ---------------------------------------------------------------------------
def validation_error(
    detail: str = "Validation failed",
    errors: list[dict[str, Any]] | None = None,
    *,
    envelope: Envelope = Envelope.SUCCESS,
) -> AppHTTPException:
    return AppHTTPException(
        400, ErrorCode.VALIDATION_ERROR, detail, envelope=envelope, errors=errors
    )


def bad_request(
    detail: str,
    *,
    code: ErrorCode = ErrorCode.BUSINESS_RULE,
    envelope: Envelope = Envelope.SUCCESS,
) -> AppHTTPException:
    return AppHTTPException(400, code, detail, envelope=envelope)


def unauthorized(detail: str = "Access token required") -> AppHTTPException:
    # R: Las fallas de identidad siempre usan el sobre "status".
    return AppHTTPException(
        401, ErrorCode.UNAUTHORIZED, detail, envelope=Envelope.STATUS
    )


def forbidden(
    detail: str = "Access denied", *, envelope: Envelope = Envelope.SUCCESS
) -> AppHTTPException:
    return AppHTTPException(403, ErrorCode.FORBIDDEN, detail, envelope=envelope)


def not_found(
    detail: str, *, envelope: Envelope = Envelope.SUCCESS
) -> AppHTTPException:
    return AppHTTPException(404, ErrorCode.NOT_FOUND, detail, envelope=envelope)


def payload_too_large(max_size: str) -> AppHTTPException:
    return AppHTTPException(
        413,
        ErrorCode.PAYLOAD_TOO_LARGE,
        f"Request body exceeds the maximum allowed size ({max_size})",
    )


def internal_error(
    detail: str = "Internal server error", *, envelope: Envelope = Envelope.SUCCESS
) -> AppHTTPException:
    return AppHTTPException(500, ErrorCode.INTERNAL_ERROR, detail, envelope=envelope)


# ---------------------------------------------------------------------------
# Handler FastAPI
# ---------------------------------------------------------------------------
async def app_exception_handler(
    request: Request, exc: AppHTTPException
) -> JSONResponse:
    """
    Handler para AppHTTPException: renderiza el sobre que trae la excepción.
    """
    headers = getattr(exc, "headers", None)
    return JSONResponse(
        status_code=exc.status_code,
        content=render_error_body(str(exc.detail), exc.envelope, errors=exc.errors),
        headers=headers,
    )


# ---------------------------------------------------------------------------
# Sobre por familia de endpoints
# ---------------------------------------------------------------------------
# R: Familias cuyo contrato de error es {message, status:"error"}.
STATUS_ENVELOPE_PREFIXES: tuple[str, ...] = (
    "/api/auth",
    "/api/performance",
    "/api/reports",
    "/api/db-test",
)


def envelope_for_path(path: str) -> Envelope:
    """Sobre de error de la familia a la que pertenece `path`."""
    if any(
        path == prefix or path.startswith(prefix + "/")
        for prefix in STATUS_ENVELOPE_PREFIXES
    ):
        return Envelope.STATUS
    return Envelope.SUCCESS
