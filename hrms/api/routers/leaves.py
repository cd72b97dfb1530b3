"""
===============================================================================
TARJETA CRC — hrms/api/routers/leaves.py
===============================================================================

Responsabilidades:
  - Solicitudes de licencia: listar / ver / crear / borrar (dueño o admin).
  - Aprobación y rechazo (solo admin; approved_by = admin actual).
  - Estadísticas por estado (globales para admin, propias para el resto).

Colaboradores:
  - application.usecases.leaves
  - identity.access_control (require_admin, is_admin, is_self_or_admin)
  - domain.repositories.LeaveRepository
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ...application.usecases.leaves import (
    MSG_ACCESS_DENIED,
    MSG_LEAVE_NOT_FOUND,
    CreateLeaveInput,
    CreateLeaveUseCase,
    DeleteLeaveUseCase,
    UpdateLeaveStatusUseCase,
)
from ...container import (
    get_create_leave_use_case,
    get_delete_leave_use_case,
    get_leave_repository,
    get_update_leave_status_use_case,
)
from ...crosscutting.error_responses import forbidden, not_found
from ...domain.repositories import LeaveRepository
from ...identity.access_control import is_admin, is_self_or_admin, require_admin
from ...identity.auth_users import require_user
from ...identity.users import AuthenticatedUser
from ..error_mapping import raise_use_case_error
from ..schemas import LeaveCreateRequest, LeaveStatusRequest

router = APIRouter(prefix="/leaves", tags=["leaves"])


def _scope(user: AuthenticatedUser) -> int | None:
    """R: None => todas las licencias (vista admin)."""
    return None if is_admin(user.role) else user.id


@router.get("")
def list_leaves(
    user: AuthenticatedUser = Depends(require_user()),
    leaves: LeaveRepository = Depends(get_leave_repository),
):
    return {"success": True, "data": [l.to_dict() for l in leaves.list_leaves(_scope(user))]}


@router.get("/stats/overview")
def leave_stats(
    user: AuthenticatedUser = Depends(require_user()),
    leaves: LeaveRepository = Depends(get_leave_repository),
):
    return {"success": True, "data": leaves.leave_stats(_scope(user)).to_dict()}


@router.get("/{leave_id}")
def get_leave(
    leave_id: int,
    user: AuthenticatedUser = Depends(require_user()),
    leaves: LeaveRepository = Depends(get_leave_repository),
):
    leave = leaves.get_leave(leave_id)
    if leave is None:
        raise not_found(MSG_LEAVE_NOT_FOUND)
    if not is_self_or_admin(user.role, leave.user_id, user.id):
        raise forbidden(MSG_ACCESS_DENIED)
    return {"success": True, "data": leave.to_dict()}


@router.post("", status_code=201)
def create_leave(
    req: LeaveCreateRequest,
    user: AuthenticatedUser = Depends(require_user()),
    use_case: CreateLeaveUseCase = Depends(get_create_leave_use_case),
):
    result = use_case.execute(
        CreateLeaveInput(
            user_id=user.id,
            leave_type=req.leave_type,
            start_date=req.start_date,
            end_date=req.end_date,
            reason=req.reason,
        )
    )
    if result.error:
        raise_use_case_error(result.error)
    return {"success": True, "data": result.leave.to_dict()}


@router.put("/{leave_id}/status")
def update_leave_status(
    leave_id: int,
    req: LeaveStatusRequest,
    admin: AuthenticatedUser = Depends(require_admin()),
    use_case: UpdateLeaveStatusUseCase = Depends(get_update_leave_status_use_case),
):
    result = use_case.execute(leave_id, req.status, approver_id=admin.id)
    if result.error:
        raise_use_case_error(result.error)
    return {"success": True, "data": result.leave.to_dict()}


@router.delete("/{leave_id}")
def delete_leave(
    leave_id: int,
    user: AuthenticatedUser = Depends(require_user()),
    use_case: DeleteLeaveUseCase = Depends(get_delete_leave_use_case),
):
    result = use_case.execute(leave_id, actor=user)
    if result.error:
        raise_use_case_error(result.error)
    return {"success": True, "message": "Leave request deleted successfully"}
