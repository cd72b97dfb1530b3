"""
===============================================================================
TARJETA CRC — hrms/api/routers/attendance.py
===============================================================================

Responsabilidades:
  - GET  /attendance/status   estado del día del usuario autenticado.
  - POST /attendance/check    aplica checkin / checkout (state machine).
  - GET  /attendance/history  log de los últimos N días.

Colaboradores:
  - application.usecases.attendance (Check / Status / History)
  - identity.auth_users.require_user
  - api.error_mapping.raise_use_case_error (sobre "success")
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from ...application.usecases.attendance import (
    CheckAttendanceInput,
    CheckAttendanceUseCase,
    GetAttendanceHistoryUseCase,
    GetAttendanceStatusUseCase,
)
from ...application.usecases.attendance.attendance_queries import DEFAULT_HISTORY_DAYS
from ...container import (
    get_attendance_history_use_case,
    get_attendance_status_use_case,
    get_check_attendance_use_case,
)
from ...identity.auth_users import require_user
from ...identity.users import AuthenticatedUser
from ..error_mapping import raise_use_case_error
from ..schemas import AttendanceCheckRequest

router = APIRouter(prefix="/attendance", tags=["attendance"])


@router.get("/status")
def attendance_status(
    user: AuthenticatedUser = Depends(require_user()),
    use_case: GetAttendanceStatusUseCase = Depends(get_attendance_status_use_case),
):
    return {"success": True, "status": use_case.execute(user.id).value}


@router.post("/check")
def check_attendance(
    req: AttendanceCheckRequest,
    user: AuthenticatedUser = Depends(require_user()),
    use_case: CheckAttendanceUseCase = Depends(get_check_attendance_use_case),
):
    result = use_case.execute(CheckAttendanceInput(user_id=user.id, action=req.action))
    if result.error:
        raise_use_case_error(result.error)

    return {"success": True, "status": result.status.value, "message": result.message}


@router.get("/history")
def attendance_history(
    days: int = Query(DEFAULT_HISTORY_DAYS),
    user: AuthenticatedUser = Depends(require_user()),
    use_case: GetAttendanceHistoryUseCase = Depends(get_attendance_history_use_case),
):
    result = use_case.execute(user.id, days)
    if result.error:
        raise_use_case_error(result.error)

    return {"success": True, "data": [r.to_history_dict() for r in result.records]}
