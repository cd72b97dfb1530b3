"""
===============================================================================
TARJETA CRC — identity/access_control.py
===============================================================================

Módulo:
    Role Policy

Responsabilidades:
    - Re-exportar los predicados de identity.rbac.
    - Dependencias FastAPI que niegan con 403 (nunca 401) una vez que el
      Access Guard ya resolvió al usuario.

Colaboradores:
    - identity.rbac (predicados) / identity.users.AuthenticatedUser
    - identity.auth_users.require_user
    - crosscutting.error_responses.forbidden (sobre por familia de endpoints)

Notas:
    - Los predicados viven en identity.rbac (sin FastAPI).
===============================================================================
"""

from __future__ import annotations

from typing import Callable

from fastapi import Depends

from ..crosscutting.error_responses import Envelope, forbidden
from .auth_users import require_user
from .rbac import (
    is_admin,
    is_admin_or_manager,
    is_self_admin_or_manager,
    is_self_or_admin,
)
from .users import AuthenticatedUser

MSG_ADMIN_REQUIRED = "Admin access required"
MSG_ADMIN_OR_MANAGER_REQUIRED = "Admin or manager access required"
MSG_ACCESS_DENIED = "Access denied"


def require_admin(
    envelope: Envelope = Envelope.SUCCESS, detail: str = MSG_ADMIN_REQUIRED
) -> Callable:
    """Dependency FastAPI: usuario autenticado con rol admin."""

    async def dependency(
        user: AuthenticatedUser = Depends(require_user()),
    ) -> AuthenticatedUser:
        if not is_admin(user.role):
            raise forbidden(detail, envelope=envelope)
        return user

    return dependency


def require_admin_or_manager(
    envelope: Envelope = Envelope.STATUS,
    detail: str = MSG_ADMIN_OR_MANAGER_REQUIRED,
) -> Callable:
    """Dependency FastAPI: usuario autenticado con rol admin o manager."""

    async def dependency(
        user: AuthenticatedUser = Depends(require_user()),
    ) -> AuthenticatedUser:
        if not is_admin_or_manager(user.role):
            raise forbidden(detail, envelope=envelope)
        return user

    return dependency


__all__ = [
    "MSG_ACCESS_DENIED",
    "MSG_ADMIN_OR_MANAGER_REQUIRED",
    "MSG_ADMIN_REQUIRED",
    "is_admin",
    "is_admin_or_manager",
    "is_self_admin_or_manager",
    "is_self_or_admin",
    "require_admin",
    "require_admin_or_manager",
]
