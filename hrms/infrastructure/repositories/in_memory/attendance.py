"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/attendance.py
============================================================
Class: InMemoryAttendanceRepository

Responsibilities:
  - Log de asistencia append-only en memoria.
  - record_transition: leer-decidir-insertar bajo un único Lock, que
    cumple el rol del advisory lock por usuario de Postgres.

Collaborators:
  - domain.entities.AttendanceRecord / AttendanceStatus
  - domain.repositories.TransitionDecision

Notes:
  - "Hoy" es la fecha local del proceso (datetime.now().date()).
  - `clock` es inyectable para tests que cruzan medianoche.
============================================================
"""

from __future__ import annotations

from datetime import datetime, timedelta
from threading import Lock
from typing import Callable, List, Optional

from ....domain.entities import AttendanceRecord, AttendanceStatus
from ....domain.repositories import TransitionDecision


class InMemoryAttendanceRepository:
    def __init__(self, clock: Callable[[], datetime] = datetime.now) -> None:
        self._lock = Lock()
        self._records: List[AttendanceRecord] = []
        self._next_id = 1
        self._clock = clock

    def _latest_today_unlocked(self, user_id: int) -> Optional[AttendanceStatus]:
        today = self._clock().date()
        for record in reversed(self._records):
            if record.user_id == user_id and record.check_time.date() == today:
                return record.status
        return None

    def latest_status_today(self, user_id: int) -> Optional[AttendanceStatus]:
        with self._lock:
            return self._latest_today_unlocked(user_id)

    def record_transition(
        self, user_id: int, decide: TransitionDecision
    ) -> AttendanceRecord:
        with self._lock:
            new_status = decide(self._latest_today_unlocked(user_id))
            record = AttendanceRecord(
                id=self._next_id,
                user_id=user_id,
                status=new_status,
                check_time=self._clock(),
            )
            self._records.append(record)
            self._next_id += 1
        return record

    def list_history(self, user_id: int, days: int) -> list[AttendanceRecord]:
        since = datetime.combine(self._clock().date(), datetime.min.time()) - timedelta(
            days=days
        )
        with self._lock:
            values = [
                r
                for r in self._records
                if r.user_id == user_id and r.check_time >= since
            ]
        return sorted(values, key=lambda r: (r.check_time, r.id), reverse=True)
