"""
===============================================================================
MÓDULO: Middlewares HTTP (contexto + límites de payload)
===============================================================================

1) RequestContextMiddleware:
   - Generar/propagar X-Request-Id
   - Setear contextvars (method/path)
   - Log de acceso y métricas por request

2) BodyLimitMiddleware:
   - Cortar payloads gigantes (Content-Length o chunked) con 413

Colaboradores:
  - hrms/context.py
  - crosscutting/metrics.py
  - crosscutting/error_responses.py (sobre "success" para el 413)
===============================================================================
"""

from __future__ import annotations

import json
import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ..context import clear_context, set_request_context
from .error_responses import Envelope, payload_too_large, render_error_body
from .logger import logger
from .metrics import record_request_metrics

REQUEST_ID_HEADER = "X-Request-Id"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Genera/acepta X-Request-Id, setea el contexto de logs y registra
    log + métricas al finalizar cada request. Siempre limpia el contexto.
    """

    _QUIET_PATHS = {"/api/health", "/metrics"}

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        incoming = (request.headers.get(REQUEST_ID_HEADER) or "").strip()
        request_id = (
            incoming if self._is_valid_request_id(incoming) else str(uuid.uuid4())
        )

        set_request_context(
            request_id=request_id, method=request.method, path=request.url.path
        )
        request.state.request_id = request_id

        start = time.perf_counter()
        status_code = 500

        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        except Exception:
            logger.exception(
                "request falló",
                extra={
                    "status_code": 500,
                    "latency_ms": round((time.perf_counter() - start) * 1000, 2),
                },
            )
            raise
        finally:
            latency = time.perf_counter() - start
            record_request_metrics(
                endpoint=_route_template(request),
                method=request.method,
                status_code=status_code,
                latency_seconds=latency,
            )
            if request.url.path not in self._QUIET_PATHS:
                logger.info(
                    "request completado",
                    extra={
                        "status_code": status_code,
                        "latency_ms": round(latency * 1000, 2),
                    },
                )
            clear_context()

    @staticmethod
    def _is_valid_request_id(value: str) -> bool:
        return bool(value) and len(value) <= 128


def _route_template(request: Request) -> str:
    """
    Path con placeholders (/api/leaves/{leave_id}) para no explotar la
    cardinalidad de métricas con ids concretos.
    """
    route = request.scope.get("route")
    template = getattr(route, "path", None)
    return template or "unmatched"


class _BodyTooLarge(Exception):
    pass


class BodyLimitMiddleware:
    """
    Middleware ASGI puro: rechaza requests cuyo body exceda max_body_bytes,
    tanto con Content-Length como con transferencia chunked.
    """

    def __init__(self, app, max_bytes: int | None = None):
        from .config import get_settings

        self.app = app
        self._max_bytes = max_bytes or get_settings().max_body_bytes

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = {k.decode().lower(): v.decode() for k, v in scope.get("headers", [])}
        path = scope.get("path", "")

        cl = headers.get("content-length")
        if cl and cl.isdigit() and int(cl) > self._max_bytes:
            logger.warning(
                "payload demasiado grande (content-length)",
                extra={"content_length": cl, "max_bytes": self._max_bytes, "path": path},
            )
            await self._send_413(send)
            return

        started = False

        async def send_wrapper(message):
            nonlocal started
            if message["type"] == "http.response.start":
                started = True
            await send(message)

        received = 0

        async def receive_limited():
            nonlocal received
            msg = await receive()
            if msg["type"] == "http.request":
                received += len(msg.get("body", b"") or b"")
                if received > self._max_bytes:
                    raise _BodyTooLarge()
            return msg

        try:
            await self.app(scope, receive_limited, send_wrapper)
        except _BodyTooLarge:
            # Si ya arrancó la respuesta no se puede enviar otra.
            if started:
                logger.error(
                    "payload excedió límite luego de iniciar respuesta",
                    extra={"path": path},
                )
                raise
            logger.warning(
                "payload demasiado grande (streaming)",
                extra={"received_bytes": received, "max_bytes": self._max_bytes},
            )
            await self._send_413(send)

    async def _send_413(self, send) -> None:
        exc = payload_too_large(f"{self._max_bytes} bytes")
        body = json.dumps(
            render_error_body(str(exc.detail), Envelope.SUCCESS), ensure_ascii=False
        ).encode("utf-8")

        await send(
            {
                "type": "http.response.start",
                "status": exc.status_code,
                "headers": [(b"content-type", b"application/json")],
            }
        )
        await send({"type": "http.response.body", "body": body})
