"""
===============================================================================
USE CASE: Check Attendance (check-in / check-out)
===============================================================================

Business Goal:
    Aplicar una transición de la máquina de estados diaria de asistencia.

Why (Context / Intención):
    - El estado del día se deriva del log append-only (último registro de hoy).
    - Leer-decidir-insertar corre atómicamente dentro del repositorio
      (advisory lock por usuario en Postgres, Lock en memoria): dos requests
      concurrentes del mismo usuario no pueden duplicar un check-in.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    CheckAttendanceUseCase

Responsibilities:
    - Validar la acción ("checkin" | "checkout").
    - Delegar la transición atómica al repositorio con la política pura.
    - Mapear violaciones de regla a BUSINESS_RULE con su mensaje.
    - Registrar métricas por acción / resultado.

Collaborators:
    - AttendanceRepository.record_transition
    - domain.attendance_policy (current_status, next_status, success_message)
    - crosscutting.metrics.record_attendance_transition
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ....crosscutting.logger import logger
from ....crosscutting.metrics import record_attendance_transition
from ....domain.attendance_policy import current_status, next_status, success_message
from ....domain.entities import AttendanceAction, AttendanceStatus
from ....domain.errors import BusinessRuleViolation
from ....domain.repositories import AttendanceRepository
from ..results import AttendanceResult, UseCaseError, UseCaseErrorCode

MSG_INVALID_ACTION = 'Invalid action. Use "checkin" or "checkout"'


@dataclass(frozen=True)
class CheckAttendanceInput:
    user_id: int
    action: Any


class CheckAttendanceUseCase:
    def __init__(self, attendance: AttendanceRepository) -> None:
        self._attendance = attendance

    @staticmethod
    def _parse_action(raw: Any) -> AttendanceAction | None:
        if raw is not None and not isinstance(raw, str):
            return None
        try:
            return AttendanceAction((raw or "").strip())
        except ValueError:
            return None

    def execute(self, input_data: CheckAttendanceInput) -> AttendanceResult:
        action = self._parse_action(input_data.action)
        if action is None:
            record_attendance_transition("invalid", "rejected")
            return AttendanceResult(
                error=UseCaseError(UseCaseErrorCode.VALIDATION_ERROR, MSG_INVALID_ACTION)
            )

        def decide(latest: AttendanceStatus | None) -> AttendanceStatus:
            return next_status(current_status(latest), action)

        try:
            record = self._attendance.record_transition(input_data.user_id, decide)
        except BusinessRuleViolation as exc:
            record_attendance_transition(action.value, "rejected")
            logger.info(
                "Attendance transition rejected",
                extra={"action": action.value, "reason": exc.message},
            )
            return AttendanceResult(
                error=UseCaseError(UseCaseErrorCode.BUSINESS_RULE, exc.message)
            )

        record_attendance_transition(action.value, "accepted")
        return AttendanceResult(
            status=record.status, message=success_message(action), record=record
        )
