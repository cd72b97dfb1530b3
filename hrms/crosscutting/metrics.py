"""
===============================================================================
ARCHIVO: crosscutting/metrics.py
===============================================================================

CRC CARD (Módulo)
-------------------------------------------------------------------------------
Nombre:
    Métricas (Prometheus)

Responsabilidades:
    - Definir métricas Prometheus en un registry propio.
    - Proveer funciones pequeñas y estables para registrar eventos/duraciones.
    - Cuidar cardinalidad (NO user_id, NO SQL completo, NO IDs dinámicos).
    - Generar la respuesta de /metrics.

Colaboradores:
    - crosscutting.middleware: latencia y conteo HTTP.
    - identity.auth_users: fallas de autenticación por motivo.
    - application.usecases.attendance: transiciones de asistencia.
    - infrastructure.db.instrumentation: duración de queries.
===============================================================================
"""

from __future__ import annotations

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

_registry = CollectorRegistry()

# ------------------------
# HTTP
# ------------------------
_requests_total = Counter(
    "hrms_requests_total",
    "Total de requests HTTP",
    ["endpoint", "method", "status"],
    registry=_registry,
)

_request_latency = Histogram(
    "hrms_request_latency_seconds",
    "Latencia de requests HTTP (segundos)",
    ["endpoint", "method"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
    registry=_registry,
)

# ------------------------
# Auth
# ------------------------
_auth_failures_total = Counter(
    "hrms_auth_failures_total",
    "Fallas de autenticación por motivo",
    ["reason"],
    registry=_registry,
)

# ------------------------
# Attendance
# ------------------------
_attendance_transitions_total = Counter(
    "hrms_attendance_transitions_total",
    "Transiciones de asistencia solicitadas",
    ["action", "outcome"],
    registry=_registry,
)

# ------------------------
# DB (baja cardinalidad)
# ------------------------
_db_query_duration = Histogram(
    "hrms_db_query_duration_seconds",
    "Duración de queries DB (segundos)",
    ["kind"],
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
    registry=_registry,
)


def record_request_metrics(
    endpoint: str,
    method: str,
    status_code: int,
    latency_seconds: float,
) -> None:
    """Registra métricas HTTP. El status se agrupa por 2xx/4xx/5xx."""
    _requests_total.labels(
        endpoint=endpoint, method=method, status=_status_bucket(status_code)
    ).inc()
    _request_latency.labels(endpoint=endpoint, method=method).observe(
        latency_seconds
    )


def record_auth_failure(reason: str) -> None:
    """reason: missing_token | invalid_token | expired_token | inactive_user | bad_credentials."""
    _auth_failures_total.labels(reason=reason).inc()


def record_attendance_transition(action: str, outcome: str) -> None:
    _attendance_transitions_total.labels(action=action, outcome=outcome).inc()


def observe_db_query_duration(kind: str, seconds: float) -> None:
    """
    Reglas:
      - `kind` debe ser baja cardinalidad (SELECT/INSERT/UPDATE/...).
      - NO incluir SQL completo.
    """
    _db_query_duration.labels(kind=(kind or "UNKNOWN").upper()).observe(seconds)


def _status_bucket(code: int) -> str:
    if 200 <= code < 300:
        return "2xx"
    if 300 <= code < 400:
        return "3xx"
    if 400 <= code < 500:
        return "4xx"
    return "5xx"


def get_metrics_response() -> tuple[bytes, str]:
    """Devuelve (body, content_type) para el endpoint /metrics."""
    return generate_latest(_registry), CONTENT_TYPE_LATEST
