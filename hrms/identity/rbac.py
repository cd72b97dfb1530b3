"""
===============================================================================
TARJETA CRC — identity/rbac.py
===============================================================================

Módulo:
    Predicados de la Role Policy (lógica pura)

Responsabilidades:
    - Decidir por rol y propiedad del recurso.

Colaboradores:
    - identity.users.UserRole
    - identity.access_control: dependencias FastAPI sobre estos predicados.
    - application.usecases.*: chequeos de dueño vs admin.

Notas:
    - Sin FastAPI ni repositorios: los casos de uso lo importan sin arrastrar
      el Access Guard.
===============================================================================
"""

from __future__ import annotations

from .users import UserRole


def is_admin(role: UserRole) -> bool:
    return role == UserRole.ADMIN


def is_admin_or_manager(role: UserRole) -> bool:
    return role in (UserRole.ADMIN, UserRole.MANAGER)


def is_self_or_admin(role: UserRole, owner_id: int, user_id: int) -> bool:
    return is_admin(role) or owner_id == user_id


def is_self_admin_or_manager(role: UserRole, owner_id: int, user_id: int) -> bool:
    return is_admin_or_manager(role) or owner_id == user_id
