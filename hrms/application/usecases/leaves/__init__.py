"""Casos de uso de licencias."""

from .create_leave import CreateLeaveInput, CreateLeaveUseCase
from .manage_leave import (
    MSG_ACCESS_DENIED,
    MSG_LEAVE_NOT_FOUND,
    DeleteLeaveUseCase,
    UpdateLeaveStatusUseCase,
)

__all__ = [
    "MSG_ACCESS_DENIED",
    "MSG_LEAVE_NOT_FOUND",
    "CreateLeaveInput",
    "CreateLeaveUseCase",
    "DeleteLeaveUseCase",
    "UpdateLeaveStatusUseCase",
]
