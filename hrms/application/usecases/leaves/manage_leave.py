"""
===============================================================================
USE CASES: Update Leave Status / Delete Leave
===============================================================================

Invariantes:
    - Update status: solo admin (lo garantiza la ruta); status en
      {approved, rejected, pending}; approved_by = admin que decide.
    - Delete: dueño o admin, y solo mientras la solicitud está pending.

Collaborators:
    - LeaveRepository.get_leave / update_status / delete_leave
    - identity.rbac.is_self_or_admin
===============================================================================
"""

from __future__ import annotations

from ....crosscutting.logger import logger
from ....domain.entities import LeaveStatus
from ....domain.repositories import LeaveRepository
from ....identity.rbac import is_self_or_admin
from ....identity.users import AuthenticatedUser
from ..results import DeleteResult, LeaveResult, UseCaseError, UseCaseErrorCode

MSG_INVALID_STATUS = "Invalid status"
MSG_LEAVE_NOT_FOUND = "Leave not found"
MSG_ACCESS_DENIED = "Access denied"
MSG_CANNOT_DELETE = "Cannot delete approved/rejected leave"


class UpdateLeaveStatusUseCase:
    def __init__(self, leaves: LeaveRepository) -> None:
        self._leaves = leaves

    def execute(
        self, leave_id: int, raw_status: str | None, *, approver_id: int
    ) -> LeaveResult:
        try:
            status = LeaveStatus((raw_status or "").strip())
        except ValueError:
            return LeaveResult(
                error=UseCaseError(UseCaseErrorCode.VALIDATION_ERROR, MSG_INVALID_STATUS)
            )

        leave = self._leaves.update_status(leave_id, status, approver_id)
        if leave is None:
            return LeaveResult(
                error=UseCaseError(UseCaseErrorCode.NOT_FOUND, MSG_LEAVE_NOT_FOUND)
            )

        logger.info(
            "Leave status updated",
            extra={"leave_id": leave_id, "status": status.value, "approved_by": approver_id},
        )
        return LeaveResult(leave=leave)


class DeleteLeaveUseCase:
    def __init__(self, leaves: LeaveRepository) -> None:
        self._leaves = leaves

    def execute(self, leave_id: int, *, actor: AuthenticatedUser) -> DeleteResult:
        leave = self._leaves.get_leave(leave_id)
        if leave is None:
            return DeleteResult(
                deleted=False,
                error=UseCaseError(UseCaseErrorCode.NOT_FOUND, MSG_LEAVE_NOT_FOUND),
            )

        if not is_self_or_admin(actor.role, leave.user_id, actor.id):
            return DeleteResult(
                deleted=False,
                error=UseCaseError(UseCaseErrorCode.FORBIDDEN, MSG_ACCESS_DENIED),
            )

        if not leave.is_pending:
            return DeleteResult(
                deleted=False,
                error=UseCaseError(UseCaseErrorCode.BUSINESS_RULE, MSG_CANNOT_DELETE),
            )

        return DeleteResult(deleted=self._leaves.delete_leave(leave_id))
