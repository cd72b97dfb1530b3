"""
===============================================================================
TARJETA CRC — hrms/api/exception_handlers.py (Manejo Centralizado de Excepciones)
===============================================================================

Responsabilidades:
  - Traducir excepciones a respuestas HTTP con el sobre de cada familia.
  - Validación de request -> 400 {message:"Validation failed", errors:[{field, message}]}.
  - Rutas inexistentes -> 404 {message:"Route not found"}.
  - Centralizar logging de errores con request_id + error_id.
  - Evitar filtrar detalles internos fuera de desarrollo.

Patrones aplicados:
  - Exception Mapping (Presentation Layer).
  - Fail-safe: cualquier excepción no tipada -> 500 genérico (con logging).

Colaboradores:
  - crosscutting.error_responses: AppHTTPException, envelope_for_path, render_error_body
  - crosscutting.exceptions: HRMSError / DatabaseError
  - domain.errors: errores de negocio que escapan de un caso de uso
  - crosscutting.config.get_settings (nivel de detalle)
===============================================================================
"""

from __future__ import annotations

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import (
    AppHTTPException,
    app_exception_handler,
    envelope_for_path,
    render_error_body,
)
from ..crosscutting.exceptions import HRMSError
from ..crosscutting.logger import logger
from ..domain.errors import BusinessRuleViolation, HRMSDomainError, NotFoundError

MSG_ROUTE_NOT_FOUND = "Route not found"
MSG_VALIDATION_FAILED = "Validation failed"
MSG_INTERNAL_ERROR = "Internal server error"

_VALUE_ERROR_PREFIX = "Value error, "


def _request_id_from(request: Request) -> str | None:
    return getattr(getattr(request, "state", None), "request_id", None)


def _field_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """Aplana errores de pydantic a [{field, message}]."""
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        message = str(err.get("msg", "Invalid value"))
        if message.startswith(_VALUE_ERROR_PREFIX):
            message = message[len(_VALUE_ERROR_PREFIX) :]
        errors.append({"field": ".".join(loc) or "body", "message": message})
    return errors


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content=render_error_body(
            MSG_VALIDATION_FAILED,
            envelope_for_path(request.url.path),
            errors=_field_errors(exc),
        ),
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """404/405 de routing (y cualquier HTTPException no tipada)."""
    message = MSG_ROUTE_NOT_FOUND if exc.status_code == 404 else str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": message},
        headers=getattr(exc, "headers", None),
    )


async def domain_error_handler(request: Request, exc: HRMSDomainError) -> JSONResponse:
    status_code = 404 if isinstance(exc, NotFoundError) else 400
    if not isinstance(exc, (NotFoundError, BusinessRuleViolation)):
        logger.warning(
            "Error de negocio no mapeado por el caso de uso",
            extra={"error_type": type(exc).__name__, "request_id": _request_id_from(request)},
        )
    return JSONResponse(
        status_code=status_code,
        content=render_error_body(exc.message, envelope_for_path(request.url.path)),
    )


def _internal_error_response(
    request: Request, *, detail: str | None, error_id: str | None
) -> JSONResponse:
    extra: dict[str, Any] | None = None
    if get_settings().is_development():
        extra = {"error": detail, "error_id": error_id}
    return JSONResponse(
        status_code=500,
        content=render_error_body(
            MSG_INTERNAL_ERROR, envelope_for_path(request.url.path), extra=extra
        ),
    )


async def hrms_error_handler(request: Request, exc: HRMSError) -> JSONResponse:
    """DatabaseError (StorageUnavailable) y demás errores internos tipados."""
    logger.error(
        "Error de servicio",
        extra={
            "code": exc.error_code,
            "error_id": exc.error_id,
            "error_message": exc.message,
            "request_id": _request_id_from(request),
        },
    )
    return _internal_error_response(request, detail=exc.message, error_id=exc.error_id)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handler para excepciones no tipadas.

    - Log completo (stacktrace).
    - Respuesta genérica (el detalle solo viaja en desarrollo).
    """
    logger.error(
        "Excepción no controlada",
        exc_info=exc,
        extra={"request_id": _request_id_from(request), "error": str(exc)},
    )
    return _internal_error_response(request, detail=str(exc), error_id=None)


def register_exception_handlers(app) -> None:
    """
    Registra handlers en la app FastAPI.

    Importante:
      - AppHTTPException se registra antes que la HTTPException de Starlette
        (la resolución es por MRO, gana la más específica).
      - Exception genérica queda como fallback.
    """
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(HRMSDomainError, domain_error_handler)
    app.add_exception_handler(HRMSError, hrms_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]
