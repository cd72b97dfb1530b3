"""
===============================================================================
TARJETA CRC — hrms/api/routers/dashboard.py
===============================================================================

Responsabilidades:
  - Tarjetas del dashboard (cifras de salario y pendientes solo para admin).
  - Feed de actividad reciente con etiquetas "time ago".
  - Datos personales del usuario autenticado (asistencia, licencias, salario).

Colaboradores:
  - domain.repositories.ReportingRepository
  - application.activity_feed.build_activity_feed
  - application.usecases.attendance.GetAttendanceStatusUseCase
===============================================================================
"""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends

from ...application.activity_feed import build_activity_feed
from ...application.usecases.attendance import GetAttendanceStatusUseCase
from ...container import get_attendance_status_use_case, get_reporting_repository
from ...domain.repositories import ReportingRepository
from ...identity.access_control import is_admin
from ...identity.auth_users import require_user
from ...identity.users import AuthenticatedUser

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats")
def dashboard_stats(
    user: AuthenticatedUser = Depends(require_user()),
    reports: ReportingRepository = Depends(get_reporting_repository),
):
    stats = reports.dashboard_stats(include_admin_figures=is_admin(user.role))
    return {"success": True, "data": stats}


@router.get("/activity")
def dashboard_activity(
    _user: AuthenticatedUser = Depends(require_user()),
    reports: ReportingRepository = Depends(get_reporting_repository),
):
    feed = build_activity_feed(reports.recent_activity(), now=datetime.now())
    return {"success": True, "data": feed}


@router.get("/user-data")
def user_data(
    user: AuthenticatedUser = Depends(require_user()),
    reports: ReportingRepository = Depends(get_reporting_repository),
    attendance: GetAttendanceStatusUseCase = Depends(get_attendance_status_use_case),
):
    info = reports.user_dashboard(user.id)
    return {
        "success": True,
        "data": {
            "attendanceStatus": attendance.execute(user.id).value,
            "leaveBalance": {
                "total": int(info.get("total_leaves") or 0),
                "approved": int(info.get("approved_leaves") or 0),
                "pending": int(info.get("pending_leaves") or 0),
            },
            "salary": {"amount": float(info.get("salary") or 0), "currency": "USD"},
            "position": info.get("position"),
            "department": info.get("department_name"),
            "hireDate": info.get("hire_date"),
        },
    }
