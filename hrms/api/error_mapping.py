"""
===============================================================================
TARJETA CRC — hrms/api/error_mapping.py (UseCase Error -> HTTP)
===============================================================================

Responsabilidades:
  - Traducir UseCaseError a AppHTTPException con el sobre de la familia.
  - Centralizar el mapeo para evitar duplicación en routers.
  - Mantener la capa application libre de HTTP.

Colaboradores:
  - application.usecases.results (UseCaseError / UseCaseErrorCode)
  - crosscutting.error_responses (bad_request, forbidden, not_found, ...)
===============================================================================
"""

from __future__ import annotations

from typing import NoReturn

from ..application.usecases.results import UseCaseError, UseCaseErrorCode
from ..crosscutting.error_responses import (
    AppHTTPException,
    Envelope,
    ErrorCode,
    bad_request,
    forbidden,
    not_found,
)


def raise_use_case_error(
    error: UseCaseError, *, envelope: Envelope = Envelope.SUCCESS
) -> NoReturn:
    """
    Traduce UseCaseErrorCode -> HTTP.

    Nota:
      - CONFLICT (email duplicado) es 400 en este API, no 409.
    """
    if error.code == UseCaseErrorCode.FORBIDDEN:
        raise forbidden(error.message, envelope=envelope)
    if error.code == UseCaseErrorCode.NOT_FOUND:
        raise not_found(error.message, envelope=envelope)
    if error.code == UseCaseErrorCode.UNAUTHORIZED:
        raise AppHTTPException(
            401, ErrorCode.UNAUTHORIZED, error.message, envelope=envelope
        )
    if error.code == UseCaseErrorCode.CONFLICT:
        raise bad_request(error.message, code=ErrorCode.DUPLICATE_EMAIL, envelope=envelope)
    if error.code == UseCaseErrorCode.VALIDATION_ERROR:
        raise bad_request(error.message, code=ErrorCode.VALIDATION_ERROR, envelope=envelope)
    raise bad_request(error.message, envelope=envelope)
