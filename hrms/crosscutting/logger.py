"""
===============================================================================
TARJETA CRC — crosscutting/logger.py
===============================================================================

Componente:
  Logger "hrms-api" (JSON de una línea o texto plano)

Responsabilidades:
  - Emitir cada LogRecord con nivel, origen, request_id y user_id del request.
  - Copiar los `extra=` del caller como campos de primer nivel.
  - Nunca escribir passwords, hashes, tokens ni el secreto JWT.
  - Acotar strings, bytes y estructuras anidadas.

Colaboradores:
  - hrms/context.py: get_context_dict()
  - crosscutting/config.py: LOG_LEVEL / LOG_JSON

Notas:
  - Las claves reservadas del LogRecord ("message", "args", ...) no pueden
    usarse en `extra=`; logging levanta KeyError en makeRecord.
===============================================================================
"""

from __future__ import annotations

import json
import logging
import os
import sys
import traceback
from datetime import datetime, timezone
from typing import Any

from ..context import get_context_dict

REDACTED = "***REDACTADO***"
TRUNCATED = "***TRUNCADO***"

# Atributos que trae todo LogRecord; lo demás vino por `extra=`.
_RECORD_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime", "taskName"}


class _Redactor:
    """Sanitiza valores de `extra=` antes de serializarlos."""

    SENSITIVE_KEYS = frozenset(
        {
            "password",
            "password_hash",
            "passwd",
            "secret",
            "jwt_secret",
            "token",
            "access_token",
            "authorization",
            "credential",
        }
    )

    def __init__(self, max_str: int = 4_000, max_depth: int = 4):
        self._max_str = max_str
        self._max_depth = max_depth

    def is_sensitive(self, key: str | None) -> bool:
        return bool(key) and key.lower() in self.SENSITIVE_KEYS

    def sanitize(self, value: Any, *, depth: int = 0, key: str | None = None) -> Any:
        if self.is_sensitive(key):
            return REDACTED
        if depth > self._max_depth:
            return TRUNCATED

        if isinstance(value, str):
            return self._clip(value)
        if isinstance(value, (bytes, bytearray)):
            return f"<bytes {len(value)}B>"
        if isinstance(value, dict):
            return {
                str(k): self.sanitize(v, depth=depth + 1, key=str(k))
                for k, v in value.items()
            }
        if isinstance(value, (list, tuple, set)):
            return [self.sanitize(v, depth=depth + 1, key=key) for v in value]
        if value is None or isinstance(value, (bool, int, float)):
            return value
        return self._clip(str(value))

    def _clip(self, text: str) -> str:
        if len(text) <= self._max_str:
            return text
        return f"{text[: self._max_str]}…(+{len(text) - self._max_str} chars)"


class RequestContextFilter(logging.Filter):
    """Adjunta request_id / user_id al record ("-" fuera de un request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        ctx = get_context_dict()
        record.request_id = getattr(record, "request_id", None) or ctx.get(
            "request_id", "-"
        )
        record.user_id = getattr(record, "user_id", None) or ctx.get("user_id", "-")
        return True


class JSONFormatter(logging.Formatter):
    """LogRecord -> JSON compacto de una línea."""

    def __init__(self, redactor: _Redactor | None = None):
        super().__init__()
        self._redactor = redactor or _Redactor()

    def format(self, record: logging.LogRecord) -> str:
        payload = self._base_fields(record)
        payload.update(get_context_dict())
        payload.update(self._extra_fields(record))
        if record.exc_info:
            payload["exception"] = self._exception_fields(record.exc_info)
        return json.dumps(
            payload, ensure_ascii=False, default=str, separators=(",", ":")
        )

    @staticmethod
    def _base_fields(record: logging.LogRecord) -> dict[str, Any]:
        return {
            "timestamp": datetime.fromtimestamp(
                record.created, timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "source": f"{record.module}.{record.funcName}:{record.lineno}",
            "pid": os.getpid(),
        }

    def _extra_fields(self, record: logging.LogRecord) -> dict[str, Any]:
        return {
            key: self._redactor.sanitize(value, key=key)
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS
        }

    @staticmethod
    def _exception_fields(exc_info) -> dict[str, Any]:
        exc_type, exc, tb = exc_info
        return {
            "type": exc_type.__name__ if exc_type else None,
            "message": str(exc) if exc else None,
            "stacktrace": traceback.format_exception(exc_type, exc, tb),
        }


_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(request_id)s] %(message)s"


def setup_logger(name: str = "hrms-api") -> logging.Logger:
    """
    Configura el logger de la app una sola vez (reimports no duplican handlers).

    LOG_JSON=false cambia a texto plano con request_id, útil en desarrollo.
    """
    from .config import get_settings

    settings = get_settings()
    log = logging.getLogger(name)
    log.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

    if log.handlers:
        return log

    handler = logging.StreamHandler(sys.stdout)
    if settings.log_json:
        handler.setFormatter(JSONFormatter())
    else:
        handler.addFilter(RequestContextFilter())
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT))
    log.addHandler(handler)
    return log


logger = setup_logger()
