"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/leave.py
============================================================
Class: InMemoryLeaveRepository

Responsibilities:
  - Solicitudes de licencia en memoria.
  - Completar nombres de solicitante/aprobador (lo que Postgres resuelve
    con joins) si se inyecta un UserRepository.

Collaborators:
  - domain.entities.LeaveRequest / LeaveStatus / LeaveStats
  - domain.repositories.UserRepository (opcional)
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from threading import Lock
from typing import Dict, Optional

from ....domain.entities import LeaveRequest, LeaveStats, LeaveStatus
from ....domain.repositories import UserRepository


class InMemoryLeaveRepository:
    def __init__(self, user_repo: Optional[UserRepository] = None) -> None:
        self._lock = Lock()
        self._leaves: Dict[int, LeaveRequest] = {}
        self._next_id = 1
        self._user_repo = user_repo

    def _with_names(self, leave: LeaveRequest) -> LeaveRequest:
        """R: Copia con nombres resueltos; nunca expone la instancia interna."""
        view = replace(leave)
        if self._user_repo is None:
            return view
        requester = self._user_repo.get_user_by_id(leave.user_id)
        if requester is not None:
            view.first_name = requester.first_name
            view.last_name = requester.last_name
            view.email = requester.email
        if leave.approved_by is not None:
            approver = self._user_repo.get_user_by_id(leave.approved_by)
            if approver is not None:
                view.approver_first_name = approver.first_name
                view.approver_last_name = approver.last_name
        return view

    def list_leaves(self, user_id: Optional[int] = None) -> list[LeaveRequest]:
        with self._lock:
            values = [
                l
                for l in self._leaves.values()
                if user_id is None or l.user_id == user_id
            ]
        values.sort(key=lambda l: (l.created_at or datetime.min, l.id), reverse=True)
        return [self._with_names(l) for l in values]

    def get_leave(self, leave_id: int) -> Optional[LeaveRequest]:
        with self._lock:
            leave = self._leaves.get(leave_id)
        return self._with_names(leave) if leave else None

    def create_leave(
        self,
        *,
        user_id: int,
        leave_type: str,
        start_date: date,
        end_date: date,
        reason: Optional[str] = None,
    ) -> LeaveRequest:
        now = datetime.now()
        with self._lock:
            leave = LeaveRequest(
                id=self._next_id,
                user_id=user_id,
                leave_type=leave_type,
                start_date=start_date,
                end_date=end_date,
                reason=reason,
                status=LeaveStatus.PENDING,
                created_at=now,
                updated_at=now,
            )
            self._leaves[leave.id] = leave
            self._next_id += 1
        return replace(leave)

    def update_status(
        self, leave_id: int, status: LeaveStatus, approved_by: int
    ) -> Optional[LeaveRequest]:
        with self._lock:
            current = self._leaves.get(leave_id)
            if current is None:
                return None
            updated = replace(
                current,
                status=status,
                approved_by=approved_by,
                updated_at=datetime.now(),
            )
            self._leaves[leave_id] = updated
        return replace(updated)

    def delete_leave(self, leave_id: int) -> bool:
        with self._lock:
            return self._leaves.pop(leave_id, None) is not None

    def leave_stats(self, user_id: Optional[int] = None) -> LeaveStats:
        with self._lock:
            values = [
                l
                for l in self._leaves.values()
                if user_id is None or l.user_id == user_id
            ]
        return LeaveStats(
            total_leaves=len(values),
            pending_leaves=sum(1 for l in values if l.status == LeaveStatus.PENDING),
            approved_leaves=sum(1 for l in values if l.status == LeaveStatus.APPROVED),
            rejected_leaves=sum(1 for l in values if l.status == LeaveStatus.REJECTED),
        )
