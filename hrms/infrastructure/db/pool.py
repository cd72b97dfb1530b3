"""
===============================================================================
CRC CARD — infrastructure/db/pool.py
===============================================================================

Componente:
  Pool de conexiones PostgreSQL (singleton)

Responsabilidades:
  - Inicializar, exponer y cerrar el pool de conexiones.
  - Configurar conexiones: statement_timeout.
  - Acotar la espera por conexión (timeout) y cerrar ociosas (max_idle).
  - Devolver un pool instrumentado (observabilidad sin tocar repos).
  - Probar conectividad para /api/health y /api/db-test.

Colaboradores:
  - psycopg_pool.ConnectionPool
  - infrastructure/db/instrumentation.InstrumentedConnectionPool
===============================================================================
"""

from __future__ import annotations

import threading
from typing import Optional

from ...crosscutting.logger import logger
from .errors import PoolAlreadyInitializedError, PoolNotInitializedError
from .instrumentation import InstrumentedConnectionPool

_pool: Optional[InstrumentedConnectionPool] = None
_pool_lock = threading.Lock()


def _make_configure(statement_timeout_ms: int):
    def _configure_connection(conn) -> None:
        # Guardrail contra queries colgadas.
        if statement_timeout_ms > 0:
            conn.execute(f"SET statement_timeout = {int(statement_timeout_ms)}")
            conn.commit()

    return _configure_connection


def init_pool(
    database_url: str,
    min_size: int,
    max_size: int,
    *,
    timeout_seconds: float = 2.0,
    max_idle_seconds: float = 30.0,
    statement_timeout_ms: int = 30000,
    slow_query_seconds: float = 0.25,
    healthcheck_on_acquire: bool = False,
) -> InstrumentedConnectionPool:
    """
    Inicializa el pool (una vez por proceso).

    `timeout_seconds` es el tiempo máximo de espera para adquirir una
    conexión; al vencer, el repositorio recibe DatabaseConnectionError.
    """
    global _pool

    with _pool_lock:
        if _pool is not None:
            raise PoolAlreadyInitializedError("El pool ya fue inicializado.")

        # Lazy import: los tests unitarios no necesitan libpq.
        from psycopg_pool import ConnectionPool

        logger.info(
            "Inicializando pool DB",
            extra={"min_size": min_size, "max_size": max_size},
        )

        real_pool = ConnectionPool(
            conninfo=database_url,
            min_size=min_size,
            max_size=max_size,
            timeout=timeout_seconds,
            max_idle=max_idle_seconds,
            configure=_make_configure(statement_timeout_ms),
            open=True,
        )

        _pool = InstrumentedConnectionPool(
            real_pool,
            slow_query_seconds=slow_query_seconds,
            healthcheck_on_acquire=healthcheck_on_acquire,
        )

        logger.info("Pool DB inicializado")
        return _pool


def get_pool() -> InstrumentedConnectionPool:
    """Retorna el pool instrumentado singleton."""
    if _pool is None:
        raise PoolNotInitializedError(
            "Pool no inicializado. Llamar init_pool() primero."
        )
    return _pool


def is_pool_initialized() -> bool:
    return _pool is not None


def check_connection() -> bool:
    """
    SELECT 1 contra la base. Devuelve False (y loguea) si no hay conectividad.
    """
    if _pool is None:
        return False
    try:
        with _pool.connection() as conn:
            conn.execute("SELECT 1")
        return True
    except Exception as exc:
        logger.warning("DB healthcheck falló", extra={"error": str(exc)})
        return False


def close_pool() -> None:
    """Cierra el pool (idempotente)."""
    global _pool

    with _pool_lock:
        if _pool is not None:
            logger.info("Cerrando pool DB")
            try:
                _pool.close()
            finally:
                _pool = None
            logger.info("Pool DB cerrado")


def reset_pool() -> None:
    """Reset para tests: descarta el singleton sin cerrar el pool real."""
    global _pool

    with _pool_lock:
        _pool = None
