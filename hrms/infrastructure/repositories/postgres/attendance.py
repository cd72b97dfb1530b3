"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/attendance.py
============================================================
Class: PostgresAttendanceRepository

Responsibilities:
- Log de asistencia append-only (solo INSERT y SELECT).
- Derivar el estado del día: último registro con check_time::date = CURRENT_DATE.
- Aplicar una transición de forma atómica:
    BEGIN
      pg_advisory_xact_lock(namespace, user_id)   -- serializa por usuario
      SELECT último estado de hoy
      decide(estado)                              -- política pura
      INSERT nuevo registro
    COMMIT

Collaborators:
- postgres._base.PostgresRepository
- domain.entities.AttendanceRecord / AttendanceStatus
- domain.errors (las excepciones de decide() se propagan tal cual)

Notes:
- El lock es transaccional: se libera con COMMIT/ROLLBACK, sin cleanup manual.
- "Hoy" es la fecha local del servidor de base de datos (CURRENT_DATE).
============================================================
"""

from __future__ import annotations

from typing import Optional

from ....crosscutting.exceptions import DatabaseError
from ....domain.entities import AttendanceRecord, AttendanceStatus
from ....domain.errors import HRMSDomainError
from ....domain.repositories import TransitionDecision
from ._base import PostgresRepository

# R: Primer argumento de pg_advisory_xact_lock(int, int); aísla estos locks
#    de cualquier otro uso de advisory locks en la misma base.
ATTENDANCE_LOCK_NAMESPACE = 4101

_RECORD_COLUMNS = "id, user_id, status, check_time, notes"

_LATEST_TODAY_SQL = """
    SELECT status
    FROM attendance
    WHERE user_id = %s AND check_time::date = CURRENT_DATE
    ORDER BY check_time DESC, id DESC
    LIMIT 1
"""


def _row_to_record(row: tuple) -> AttendanceRecord:
    return AttendanceRecord(
        id=row[0],
        user_id=row[1],
        status=AttendanceStatus(row[2]),
        check_time=row[3],
        notes=row[4],
    )


class PostgresAttendanceRepository(PostgresRepository):
    """R: Implementación PostgreSQL del log de asistencia."""

    def latest_status_today(self, user_id: int) -> Optional[AttendanceStatus]:
        row = self._fetchone(
            query=_LATEST_TODAY_SQL,
            params=(user_id,),
            context_msg="PostgresAttendanceRepository: latest_status_today failed",
            extra={"user_id": user_id},
        )
        return AttendanceStatus(row[0]) if row else None

    def record_transition(
        self, user_id: int, decide: TransitionDecision
    ) -> AttendanceRecord:
        try:
            with self._get_pool().connection() as conn:
                with conn.transaction():
                    conn.execute(
                        "SELECT pg_advisory_xact_lock(%s, %s)",
                        (ATTENDANCE_LOCK_NAMESPACE, user_id),
                    )
                    current_row = conn.execute(_LATEST_TODAY_SQL, (user_id,)).fetchone()
                    current = AttendanceStatus(current_row[0]) if current_row else None

                    new_status = decide(current)

                    row = conn.execute(
                        f"""
                        INSERT INTO attendance (user_id, status, check_time)
                        VALUES (%s, %s, CURRENT_TIMESTAMP)
                        RETURNING {_RECORD_COLUMNS}
                        """,
                        (user_id, new_status.value),
                    ).fetchone()
        except (HRMSDomainError, DatabaseError):
            raise
        except Exception as exc:
            raise self._fail(
                "PostgresAttendanceRepository: record_transition failed",
                {"user_id": user_id},
                exc,
            ) from exc

        if not row:
            raise DatabaseError(
                "PostgresAttendanceRepository: record_transition failed (no row returned)"
            )
        return _row_to_record(row)

    def list_history(self, user_id: int, days: int) -> list[AttendanceRecord]:
        rows = self._fetchall(
            query=f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance
                WHERE user_id = %s
                  AND check_time >= CURRENT_DATE - make_interval(days => %s)
                ORDER BY check_time DESC, id DESC
            """,
            params=(user_id, days),
            context_msg="PostgresAttendanceRepository: list_history failed",
            extra={"user_id": user_id, "days": days},
        )
        return [_row_to_record(r) for r in rows]
