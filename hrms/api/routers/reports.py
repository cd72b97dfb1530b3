"""
===============================================================================
TARJETA CRC — hrms/api/routers/reports.py
===============================================================================

Responsabilidades:
  - Reportes agregados de solo lectura (admin o manager).
  - Mapear filtros de query (camelCase) a parámetros del repositorio.

Colaboradores:
  - domain.repositories.ReportingRepository
  - application.payroll.payroll_summary
  - identity.access_control.require_admin_or_manager (sobre "status")
===============================================================================
"""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query

from ...application.payroll import payroll_summary
from ...container import get_reporting_repository
from ...domain.repositories import ReportingRepository
from ...identity.access_control import require_admin_or_manager

router = APIRouter(
    prefix="/reports",
    tags=["reports"],
    dependencies=[Depends(require_admin_or_manager())],
)


@router.get("/attendance")
def attendance_report(
    start_date: date | None = Query(None, alias="startDate"),
    end_date: date | None = Query(None, alias="endDate"),
    department_id: int | None = Query(None, alias="departmentId"),
    reports: ReportingRepository = Depends(get_reporting_repository),
):
    data = reports.attendance_report(
        start_date=start_date, end_date=end_date, department_id=department_id
    )
    return {"success": True, "data": data}


@router.get("/leaves")
def leave_report(
    start_date: date | None = Query(None, alias="startDate"),
    end_date: date | None = Query(None, alias="endDate"),
    status: str | None = Query(None),
    department_id: int | None = Query(None, alias="departmentId"),
    reports: ReportingRepository = Depends(get_reporting_repository),
):
    data = reports.leave_report(
        start_date=start_date,
        end_date=end_date,
        status=status,
        department_id=department_id,
    )
    return {"success": True, "data": data}


@router.get("/payroll")
def payroll_report(
    department_id: int | None = Query(None, alias="departmentId"),
    reports: ReportingRepository = Depends(get_reporting_repository),
):
    rows = reports.payroll_report(department_id=department_id)
    return {"success": True, "data": rows, "summary": payroll_summary(rows)}


@router.get("/performance")
def performance_report(
    start_date: date | None = Query(None, alias="startDate"),
    end_date: date | None = Query(None, alias="endDate"),
    department_id: int | None = Query(None, alias="departmentId"),
    reports: ReportingRepository = Depends(get_reporting_repository),
):
    data = reports.performance_report(
        start_date=start_date, end_date=end_date, department_id=department_id
    )
    return {"success": True, "data": data}


@router.get("/departments")
def department_report(
    reports: ReportingRepository = Depends(get_reporting_repository),
):
    return {"success": True, "data": reports.department_report()}


@router.get("/analytics")
def analytics(reports: ReportingRepository = Depends(get_reporting_repository)):
    return {"success": True, "data": reports.analytics()}
