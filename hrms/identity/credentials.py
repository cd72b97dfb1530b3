"""
===============================================================================
TARJETA CRC — identity/credentials.py
===============================================================================

Responsabilidades:
    - Validar credenciales contra el Credential Store (solo usuarios activos).

Colaboradores:
    - domain.repositories.UserRepository
    - identity.passwords.verify_password

Decisiones:
    - Login uniforme: usuario inexistente, inactivo o password incorrecto
      devuelven None (evita enumeración de cuentas).
    - Un email inexistente igual verifica contra un hash descartable, así
      el tiempo de respuesta no revela si la cuenta existe.
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from ..domain.repositories import UserRepository
from .passwords import hash_password, verify_password
from .users import User, normalize_email


@lru_cache(maxsize=1)
def _dummy_password_hash() -> str:
    """Hash descartable con el cost configurado para emails inexistentes."""
    return hash_password("hrms-unknown-account")


def authenticate_user(
    users: UserRepository, email: str, password: str
) -> User | None:
    """Valida credenciales y retorna el usuario activo o None."""
    normalized_email = normalize_email(email)
    if not normalized_email or not password:
        return None

    user = users.get_user_by_email(normalized_email)
    if user is None:
        # R: Mismo costo bcrypt que un usuario existente.
        verify_password(password, _dummy_password_hash())
        return None

    if not verify_password(password, user.password_hash):
        return None

    return user if user.is_active else None
