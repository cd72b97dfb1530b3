"""
===============================================================================
TARJETA CRC — domain/attendance_policy.py
===============================================================================

Módulo:
    Máquina de estados de asistencia diaria

Responsabilidades:
    - Decidir el próximo estado dada la acción pedida y el estado del día.
    - Ser 100% pura: sin DB, sin reloj, sin FastAPI.

Colaboradores:
    - domain.entities.AttendanceStatus / AttendanceAction
    - application.usecases.attendance: aplica la transición dentro de la
      transacción con lock por usuario.

Tabla (estado actual del día, acción -> resultado):
    Not checked in  + checkin  -> Checked In
    Not checked in  + checkout -> MustCheckInFirst
    Checked In      + checkin  -> AlreadyCheckedIn
    Checked In      + checkout -> Checked Out
    Checked Out     + checkin  -> AlreadyCheckedIn   (un solo par por día)
    Checked Out     + checkout -> MustCheckInFirst
===============================================================================
"""

from __future__ import annotations

from .entities import AttendanceAction, AttendanceStatus
from .errors import AlreadyCheckedInError, MustCheckInFirstError


def current_status(latest_today: AttendanceStatus | None) -> AttendanceStatus:
    """Estado del día: el último registro de hoy o NOT_CHECKED_IN."""
    return latest_today or AttendanceStatus.NOT_CHECKED_IN


def next_status(
    current: AttendanceStatus, action: AttendanceAction
) -> AttendanceStatus:
    """
    Aplica la tabla de transiciones.

    Raises:
        AlreadyCheckedInError: checkin con el día ya iniciado.
        MustCheckInFirstError: checkout sin un checkin abierto.
    """
    if action == AttendanceAction.CHECKIN:
        if current == AttendanceStatus.NOT_CHECKED_IN:
            return AttendanceStatus.CHECKED_IN
        raise AlreadyCheckedInError()

    if current == AttendanceStatus.CHECKED_IN:
        return AttendanceStatus.CHECKED_OUT
    raise MustCheckInFirstError()


def success_message(action: AttendanceAction) -> str:
    verb = "checked in" if action == AttendanceAction.CHECKIN else "checked out"
    return f"Successfully {verb}"
