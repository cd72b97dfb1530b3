"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/leave.py
============================================================
Class: PostgresLeaveRepository

Responsibilities:
- CRUD de solicitudes de licencia.
- Lecturas con join a users (solicitante y aprobador) para los listados.
- Estadísticas por estado (globales o por usuario).

Collaborators:
- postgres._base.PostgresRepository
- domain.entities.LeaveRequest / LeaveStatus / LeaveStats

Constraints:
- Las reglas (quién ve qué, solo se borran pendientes) viven en application.
============================================================
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from ....crosscutting.exceptions import DatabaseError
from ....domain.entities import LeaveRequest, LeaveStats, LeaveStatus
from ._base import PostgresRepository

_LEAVE_COLUMNS = """
    l.id, l.user_id, l.leave_type, l.start_date, l.end_date, l.reason,
    l.status, l.approved_by, l.created_at, l.updated_at
"""

_JOINED_SELECT = f"""
    SELECT {_LEAVE_COLUMNS},
           u.first_name, u.last_name, u.email,
           approver.first_name, approver.last_name
    FROM leaves l
    JOIN users u ON l.user_id = u.id
    LEFT JOIN users approver ON l.approved_by = approver.id
"""


def _row_to_leave(row: tuple) -> LeaveRequest:
    leave = LeaveRequest(
        id=row[0],
        user_id=row[1],
        leave_type=row[2],
        start_date=row[3],
        end_date=row[4],
        reason=row[5],
        status=LeaveStatus(row[6]),
        approved_by=row[7],
        created_at=row[8],
        updated_at=row[9],
    )
    if len(row) > 10:
        (
            leave.first_name,
            leave.last_name,
            leave.email,
            leave.approver_first_name,
            leave.approver_last_name,
        ) = row[10:15]
    return leave


class PostgresLeaveRepository(PostgresRepository):
    """R: Implementación PostgreSQL de licencias."""

    def list_leaves(self, user_id: Optional[int] = None) -> list[LeaveRequest]:
        where_sql = "WHERE l.user_id = %s" if user_id is not None else ""
        params = (user_id,) if user_id is not None else ()
        rows = self._fetchall(
            query=f"{_JOINED_SELECT} {where_sql} ORDER BY l.created_at DESC, l.id DESC",
            params=params,
            context_msg="PostgresLeaveRepository: list_leaves failed",
            extra={"user_id": user_id},
        )
        return [_row_to_leave(r) for r in rows]

    def get_leave(self, leave_id: int) -> Optional[LeaveRequest]:
        row = self._fetchone(
            query=f"{_JOINED_SELECT} WHERE l.id = %s",
            params=(leave_id,),
            context_msg="PostgresLeaveRepository: get_leave failed",
            extra={"leave_id": leave_id},
        )
        return _row_to_leave(row) if row else None

    def create_leave(
        self,
        *,
        user_id: int,
        leave_type: str,
        start_date: date,
        end_date: date,
        reason: Optional[str] = None,
    ) -> LeaveRequest:
        row = self._fetchone(
            query="""
                INSERT INTO leaves AS l (user_id, leave_type, start_date, end_date, reason, status)
                VALUES (%s, %s, %s, %s, %s, 'pending')
                RETURNING """
            + _LEAVE_COLUMNS,
            params=(user_id, leave_type, start_date, end_date, reason),
            context_msg="PostgresLeaveRepository: create_leave failed",
            extra={"user_id": user_id},
        )
        if not row:
            raise DatabaseError(
                "PostgresLeaveRepository: create_leave failed (no row returned)"
            )
        return _row_to_leave(row)

    def update_status(
        self, leave_id: int, status: LeaveStatus, approved_by: int
    ) -> Optional[LeaveRequest]:
        row = self._fetchone(
            query="""
                UPDATE leaves AS l
                SET status = %s, approved_by = %s, updated_at = CURRENT_TIMESTAMP
                WHERE l.id = %s
                RETURNING """
            + _LEAVE_COLUMNS,
            params=(status.value, approved_by, leave_id),
            context_msg="PostgresLeaveRepository: update_status failed",
            extra={"leave_id": leave_id, "status": status.value},
        )
        return _row_to_leave(row) if row else None

    def delete_leave(self, leave_id: int) -> bool:
        deleted = self._execute(
            query="DELETE FROM leaves WHERE id = %s",
            params=(leave_id,),
            context_msg="PostgresLeaveRepository: delete_leave failed",
            extra={"leave_id": leave_id},
        )
        return deleted > 0

    def leave_stats(self, user_id: Optional[int] = None) -> LeaveStats:
        where_sql = "WHERE user_id = %s" if user_id is not None else ""
        params = (user_id,) if user_id is not None else ()
        row = self._fetchone(
            query=f"""
                SELECT
                    COUNT(*),
                    COUNT(*) FILTER (WHERE status = 'pending'),
                    COUNT(*) FILTER (WHERE status = 'approved'),
                    COUNT(*) FILTER (WHERE status = 'rejected')
                FROM leaves
                {where_sql}
            """,
            params=params,
            context_msg="PostgresLeaveRepository: leave_stats failed",
            extra={"user_id": user_id},
        )
        if not row:
            return LeaveStats()
        return LeaveStats(
            total_leaves=row[0],
            pending_leaves=row[1],
            approved_leaves=row[2],
            rejected_leaves=row[3],
        )
