"""
===============================================================================
USE CASE: Create Leave Request
===============================================================================

Business Goal:
    Registrar una solicitud de licencia en estado pending.

Invariantes:
    - leave_type, start_date y end_date son obligatorios.
    - start_date >= hoy (fecha local del servidor).
    - end_date >= start_date.

Collaborators:
    - LeaveRepository.create_leave
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable

from ....domain.repositories import LeaveRepository
from ..results import LeaveResult, UseCaseError, UseCaseErrorCode

MSG_MISSING_FIELDS = "Missing required fields"
MSG_START_IN_PAST = "Start date cannot be in the past"
MSG_END_BEFORE_START = "End date must be after start date"


@dataclass(frozen=True)
class CreateLeaveInput:
    user_id: int
    leave_type: str | None
    start_date: date | None
    end_date: date | None
    reason: str | None = None


def _validation(message: str) -> LeaveResult:
    return LeaveResult(error=UseCaseError(UseCaseErrorCode.VALIDATION_ERROR, message))


class CreateLeaveUseCase:
    def __init__(
        self, leaves: LeaveRepository, today: Callable[[], date] = date.today
    ) -> None:
        self._leaves = leaves
        self._today = today

    def execute(self, input_data: CreateLeaveInput) -> LeaveResult:
        leave_type = (input_data.leave_type or "").strip()
        if not leave_type or input_data.start_date is None or input_data.end_date is None:
            return _validation(MSG_MISSING_FIELDS)

        if input_data.start_date < self._today():
            return _validation(MSG_START_IN_PAST)

        if input_data.end_date < input_data.start_date:
            return _validation(MSG_END_BEFORE_START)

        leave = self._leaves.create_leave(
            user_id=input_data.user_id,
            leave_type=leave_type,
            start_date=input_data.start_date,
            end_date=input_data.end_date,
            reason=input_data.reason,
        )
        return LeaveResult(leave=leave)
