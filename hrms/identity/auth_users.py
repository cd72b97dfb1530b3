"""
===============================================================================
TARJETA CRC — identity/auth_users.py
===============================================================================

Módulo:
    Access Guard (token -> usuario activo)

Responsabilidades:
    - Extraer el token desde `Authorization: Bearer <token>`.
    - Resolver token -> usuario activo y adjuntarlo a request.state.user.
    - Traducir cada falla a un 401 con mensaje estable (sobre "status").

Colaboradores:
    - identity.tokens.TokenService / TokenError
    - container.get_user_repository / get_token_service_dependency
    - crosscutting.error_responses: unauthorized / internal_error
    - crosscutting.metrics.record_auth_failure
    - context.set_user_context: user_id en los logs del request

Decisiones:
    - El usuario se relee en cada request: desactivarlo invalida sus tokens
      en el siguiente uso.
===============================================================================
"""

from __future__ import annotations

from typing import Callable

from fastapi import Depends, Header, Request

from ..container import get_token_service_dependency, get_user_repository
from ..context import set_user_context
from ..crosscutting.error_responses import Envelope, internal_error, unauthorized
from ..crosscutting.exceptions import DatabaseError
from ..crosscutting.logger import logger
from ..crosscutting.metrics import record_auth_failure
from ..domain.repositories import UserRepository
from .tokens import TokenError, TokenExpiredError, TokenService
from .users import AuthenticatedUser

MSG_TOKEN_REQUIRED = "Access token required"
MSG_INVALID_TOKEN = "Invalid token"
MSG_TOKEN_EXPIRED = "Token expired"
MSG_USER_INACTIVE = "User not found or inactive"
MSG_AUTH_ERROR = "Authentication error"


def extract_bearer_token(authorization: str | None) -> str | None:
    """Extrae token desde `Authorization: Bearer <token>`."""
    if not authorization:
        return None
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    token = parts[1].strip()
    return token or None


def resolve_user(
    token: str, tokens: TokenService, users: UserRepository
) -> AuthenticatedUser:
    """
    Token -> AuthenticatedUser.

    Raises:
        AppHTTPException 401 por token inválido/expirado o usuario inactivo.
        DatabaseError si el store falla (lo traduce el guard).
    """
    try:
        claims = tokens.verify(token)
    except TokenExpiredError as exc:
        record_auth_failure("expired_token")
        raise unauthorized(MSG_TOKEN_EXPIRED) from exc
    except TokenError as exc:
        record_auth_failure("invalid_token")
        raise unauthorized(MSG_INVALID_TOKEN) from exc

    user = users.get_active_user_by_id(claims.user_id)
    if user is None:
        record_auth_failure("inactive_user")
        raise unauthorized(MSG_USER_INACTIVE)
    return user.public()


async def _access_guard(
    request: Request,
    authorization: str | None = Header(None, alias="Authorization"),
    tokens: TokenService = Depends(get_token_service_dependency),
    users: UserRepository = Depends(get_user_repository),
) -> AuthenticatedUser:
    token = extract_bearer_token(authorization)
    if not token:
        record_auth_failure("missing_token")
        raise unauthorized(MSG_TOKEN_REQUIRED)

    try:
        user = resolve_user(token, tokens, users)
    except DatabaseError as exc:
        logger.error(
            "Access guard: user lookup failed",
            extra={"error_id": exc.error_id, "error_code": exc.error_code},
        )
        raise internal_error(MSG_AUTH_ERROR, envelope=Envelope.STATUS) from exc

    set_user_context(user.id)
    request.state.user = user
    return user


def require_user() -> Callable:
    """Dependency FastAPI: requiere usuario autenticado por JWT."""
    # R: Siempre la misma función; FastAPI la resuelve una sola vez por request.
    return _access_guard
