"""
===============================================================================
TARJETA CRC — domain/entities.py
===============================================================================

Módulo:
    Entidades del Dominio (Department, AttendanceRecord, LeaveRequest,
    PerformanceReview)

Responsabilidades:
    - Definir estructuras centrales del negocio (sin infraestructura).
    - Enumerar estados con sus literales de wire ("Checked In", "pending"...).
    - Serializar a dict para las respuestas HTTP.

Colaboradores:
    - domain.repositories: persisten/recuperan estas entidades.
    - domain.attendance_policy: transiciones de AttendanceStatus.
    - application/usecases: construyen/consumen estas entidades.

Principios:
    - Sin dependencias a DB/FastAPI.
    - El User vive en identity/users.py (es parte del Credential Store).
===============================================================================
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional


# ---------------------------------------------------------------------------
# Department
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Department:
    id: int
    name: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Attendance
# ---------------------------------------------------------------------------


class AttendanceStatus(str, Enum):
    """
    Estado diario de asistencia.

    NOT_CHECKED_IN nunca se persiste: es el default sintetizado cuando no
    hay registro para el día.
    """

    NOT_CHECKED_IN = "Not checked in"
    CHECKED_IN = "Checked In"
    CHECKED_OUT = "Checked Out"


class AttendanceAction(str, Enum):
    CHECKIN = "checkin"
    CHECKOUT = "checkout"


@dataclass(frozen=True)
class AttendanceRecord:
    """Entrada inmutable del log de asistencia (solo insert)."""

    id: int
    user_id: int
    status: AttendanceStatus
    check_time: datetime
    notes: Optional[str] = None

    def to_history_dict(self) -> dict[str, Any]:
        return {
            "date": self.check_time.date(),
            "status": self.status.value,
            "check_time": self.check_time,
        }


# ---------------------------------------------------------------------------
# Leaves
# ---------------------------------------------------------------------------


class LeaveStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


@dataclass
class LeaveRequest:
    """
    Solicitud de licencia.

    Los nombres (solicitante / aprobador) solo vienen poblados en lecturas
    con join; son opcionales para que el insert no los necesite.
    """

    id: int
    user_id: int
    leave_type: str
    start_date: date
    end_date: date
    reason: Optional[str] = None
    status: LeaveStatus = LeaveStatus.PENDING
    approved_by: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    approver_first_name: Optional[str] = None
    approver_last_name: Optional[str] = None

    @property
    def is_pending(self) -> bool:
        return self.status == LeaveStatus.PENDING

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["status"] = self.status.value
        return data


@dataclass(frozen=True)
class LeaveStats:
    total_leaves: int = 0
    pending_leaves: int = 0
    approved_leaves: int = 0
    rejected_leaves: int = 0

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Performance
# ---------------------------------------------------------------------------

MIN_RATING = 1
MAX_RATING = 5


@dataclass(frozen=True)
class PerformanceReview:
    id: int
    employee_id: int
    reviewer_id: Optional[int]
    rating: int
    comments: Optional[str] = None
    review_date: Optional[datetime] = None
    reviewer_first_name: Optional[str] = None
    reviewer_last_name: Optional[str] = None
    reviewer_role: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "rating": self.rating,
            "comments": self.comments,
            "review_date": self.review_date,
            "reviewer_first_name": self.reviewer_first_name,
            "reviewer_last_name": self.reviewer_last_name,
            "reviewer_role": self.reviewer_role,
        }
