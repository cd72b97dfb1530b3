"""
============================================================
TARJETA CRC — client/api_client.py
============================================================
Class: HRMSClient

Responsibilities:
  - Consumir la API HRMS con httpx (login, registro, asistencia, licencias).
  - Adjuntar el bearer token guardado en cada request.
  - Ante cualquier 401: descartar el token y avisar (on_unauthorized).
  - Traducir respuestas no-2xx a HRMSAPIError con el mensaje del server.

Collaborators:
  - httpx.Client (event_hooks de request/response)
  - TokenStore (dónde vive el token entre llamadas)

Notes:
  - Los hooks se inyectan al construir el cliente; no se parchea nada global.
  - Sin reintentos: un 401 es definitivo para ese token.
============================================================
"""

from __future__ import annotations

from datetime import date
from typing import Any, Callable, Optional, Protocol

import httpx

from ..crosscutting.logger import logger

DEFAULT_TIMEOUT_SECONDS = 10.0


class TokenStore(Protocol):
    def get(self) -> Optional[str]: ...

    def set(self, token: str) -> None: ...

    def clear(self) -> None: ...


class InMemoryTokenStore:
    def __init__(self, token: Optional[str] = None) -> None:
        self._token = token

    def get(self) -> Optional[str]:
        return self._token

    def set(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None


class HRMSAPIError(Exception):
    """Respuesta no-2xx de la API."""

    def __init__(self, message: str, status_code: int, payload: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return f"HTTP {response.status_code}"


class HRMSClient:
    def __init__(
        self,
        base_url: str,
        *,
        token_store: Optional[TokenStore] = None,
        on_unauthorized: Optional[Callable[[httpx.Response], None]] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._tokens = token_store if token_store is not None else InMemoryTokenStore()
        self._on_unauthorized = on_unauthorized
        self._http = httpx.Client(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
            event_hooks={
                "request": [self._attach_token],
                "response": [self._handle_unauthorized],
            },
        )

    # =========================================================
    # Hooks
    # =========================================================
    def _attach_token(self, request: httpx.Request) -> None:
        token = self._tokens.get()
        if token and "Authorization" not in request.headers:
            request.headers["Authorization"] = f"Bearer {token}"

    def _handle_unauthorized(self, response: httpx.Response) -> None:
        if response.status_code != 401:
            return
        logger.info(
            "HRMS client: 401 received, discarding token",
            extra={"path": response.request.url.path},
        )
        self._tokens.clear()
        if self._on_unauthorized is not None:
            self._on_unauthorized(response)

    # =========================================================
    # Lifecycle
    # =========================================================
    @property
    def token(self) -> Optional[str]:
        return self._tokens.get()

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "HRMSClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # =========================================================
    # Transport helpers
    # =========================================================
    def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        response = self._http.request(method, path, **kwargs)
        if response.is_error:
            raise HRMSAPIError(
                _error_message(response),
                status_code=response.status_code,
                payload=response.text,
            )
        return response.json()

    def _store_token(self, payload: dict[str, Any]) -> dict[str, Any]:
        token = payload.get("token")
        if token:
            self._tokens.set(token)
        return payload

    # =========================================================
    # Auth
    # =========================================================
    def login(self, email: str, password: str) -> dict[str, Any]:
        payload = self._request(
            "POST", "/api/auth/login", json={"email": email, "password": password}
        )
        return self._store_token(payload)

    def register(
        self,
        *,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        department: Optional[str] = None,
        position: Optional[str] = None,
    ) -> dict[str, Any]:
        body = {
            "email": email,
            "password": password,
            "first_name": first_name,
            "last_name": last_name,
            "department": department,
            "position": position,
        }
        payload = self._request("POST", "/api/auth/register", json=body)
        return self._store_token(payload)

    def validate(self) -> dict[str, Any]:
        return self._request("GET", "/api/auth/validate")

    def logout(self) -> None:
        self._tokens.clear()

    # =========================================================
    # Attendance
    # =========================================================
    def attendance_status(self) -> str:
        return self._request("GET", "/api/attendance/status")["status"]

    def check_in(self) -> dict[str, Any]:
        return self._request("POST", "/api/attendance/check", json={"action": "checkin"})

    def check_out(self) -> dict[str, Any]:
        return self._request("POST", "/api/attendance/check", json={"action": "checkout"})

    # =========================================================
    # Leaves
    # =========================================================
    def create_leave(
        self,
        *,
        leave_type: str,
        start_date: date,
        end_date: date,
        reason: Optional[str] = None,
    ) -> dict[str, Any]:
        body = {
            "leave_type": leave_type,
            "start_date": start_date.isoformat(),
            "end_date": end_date.isoformat(),
            "reason": reason,
        }
        return self._request("POST", "/api/leaves", json=body)["data"]

    def list_leaves(self) -> list[dict[str, Any]]:
        return self._request("GET", "/api/leaves")["data"]
