"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/_base.py
============================================================
Class: PostgresRepository (base)

Responsibilities:
- Resolver el pool (inyectado en tests, global en runtime).
- Helpers DRY de ejecución: fetchone / fetchall / fetch_dicts / execute.
- Errores consistentes: todo fallo de driver -> DatabaseError con logging.

Collaborators:
- infrastructure.db.pool.get_pool
- crosscutting.exceptions.DatabaseError
- crosscutting.logger.logger

Constraints:
- SQL siempre parametrizado (los f-strings solo componen fragmentos fijos).
- `with pool.connection()` garantiza devolver la conexión en todos los caminos.
============================================================
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger


class PostgresRepository:
    """R: Base de repositorios PostgreSQL con pool inyectable."""

    def __init__(self, pool: Optional[ConnectionPool] = None):
        self._pool = pool

    def _get_pool(self):
        if self._pool is not None:
            return self._pool

        from ...db.pool import get_pool

        return get_pool()

    def _fail(self, context_msg: str, extra: dict, exc: Exception) -> DatabaseError:
        logger.exception(context_msg, extra={**extra, "error": str(exc)})
        return DatabaseError(f"{context_msg}: {exc}", original_error=exc)

    def _fetchone(
        self,
        *,
        query: str,
        params: Iterable[object] = (),
        context_msg: str,
        extra: dict | None = None,
    ) -> tuple | None:
        try:
            with self._get_pool().connection() as conn:
                return conn.execute(query, tuple(params)).fetchone()
        except DatabaseError:
            raise
        except Exception as exc:
            raise self._fail(context_msg, extra or {}, exc) from exc

    def _fetchall(
        self,
        *,
        query: str,
        params: Iterable[object] = (),
        context_msg: str,
        extra: dict | None = None,
    ) -> list[tuple]:
        try:
            with self._get_pool().connection() as conn:
                return conn.execute(query, tuple(params)).fetchall()
        except DatabaseError:
            raise
        except Exception as exc:
            raise self._fail(context_msg, extra or {}, exc) from exc

    def _fetch_dicts(
        self,
        *,
        query: str,
        params: Iterable[object] = (),
        context_msg: str,
        extra: dict | None = None,
    ) -> list[dict[str, Any]]:
        """Filas como dicts (columna -> valor) para reportes."""
        try:
            with self._get_pool().connection() as conn:
                cur = conn.execute(query, tuple(params))
                columns = [col.name for col in cur.description or []]
                return [dict(zip(columns, row)) for row in cur.fetchall()]
        except DatabaseError:
            raise
        except Exception as exc:
            raise self._fail(context_msg, extra or {}, exc) from exc

    def _execute(
        self,
        *,
        query: str,
        params: Iterable[object] = (),
        context_msg: str,
        extra: dict | None = None,
    ) -> int:
        """Ejecuta un statement sin resultado; devuelve rowcount."""
        try:
            with self._get_pool().connection() as conn:
                return conn.execute(query, tuple(params)).rowcount
        except DatabaseError:
            raise
        except Exception as exc:
            raise self._fail(context_msg, extra or {}, exc) from exc
