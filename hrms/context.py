"""
===============================================================================
TARJETA CRC — hrms/context.py (Contexto por request)
===============================================================================

Responsabilidades:
  - Mantener contexto "request-scoped" usando ContextVars (async-safe).
  - Permitir correlación de logs/métricas sin pasar parámetros por todo el stack.
  - Proveer helpers mínimos: set_*(), get_context_dict(), clear_context().

Colaboradores:
  - hrms.crosscutting.middleware: setea request_id/method/path al inicio del request.
  - hrms.identity.auth_users: setea user_id cuando el Access Guard resuelve al usuario.
  - hrms.crosscutting.logger: enriquece logs leyendo get_context_dict().

Restricciones:
  - Solo tipos primitivos (str) para serialización segura.
  - Defaults vacíos ("") para evitar None y simplificar JSON.
===============================================================================
"""

from __future__ import annotations

from contextvars import ContextVar
from typing import Final

# Identificador del request (UUID o el X-Request-Id recibido).
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Usuario autenticado (id numérico como string) una vez resuelto el token.
user_id_var: ContextVar[str] = ContextVar("user_id", default="")

# Metadatos HTTP básicos para logs (método y path).
http_method_var: ContextVar[str] = ContextVar("http_method", default="")
http_path_var: ContextVar[str] = ContextVar("http_path", default="")

_CTX_REQUEST_ID: Final[str] = "request_id"
_CTX_USER_ID: Final[str] = "user_id"
_CTX_METHOD: Final[str] = "method"
_CTX_PATH: Final[str] = "path"


def set_request_context(
    *, request_id: str = "", method: str = "", path: str = ""
) -> None:
    """
    Setea el contexto mínimo del request.

    Regla:
      - Strings vacíos significan "no disponible".
    """
    request_id_var.set(request_id or "")
    http_method_var.set(method or "")
    http_path_var.set(path or "")


def set_user_context(user_id: int | str | None) -> None:
    """Asocia el usuario autenticado al contexto actual."""
    user_id_var.set("" if user_id is None else str(user_id))


def get_context_dict() -> dict[str, str]:
    """
    Devuelve el contexto actual como dict, omitiendo claves vacías.
    """
    ctx: dict[str, str] = {}

    if val := request_id_var.get():
        ctx[_CTX_REQUEST_ID] = val
    if val := user_id_var.get():
        ctx[_CTX_USER_ID] = val
    if val := http_method_var.get():
        ctx[_CTX_METHOD] = val
    if val := http_path_var.get():
        ctx[_CTX_PATH] = val

    return ctx


def clear_context() -> None:
    """
    Limpia el contexto al final del request.

    Importante:
      - Evita "filtración de contexto" entre requests servidos por el mismo worker.
    """
    request_id_var.set("")
    user_id_var.set("")
    http_method_var.set("")
    http_path_var.set("")
