"""
===============================================================================
TARJETA CRC — identity/passwords.py
===============================================================================

Módulo:
    Hashing de passwords (bcrypt)

Responsabilidades:
    - Hashear con el cost factor de la cuenta (regular vs admin).
    - Verificar un password contra el hash almacenado sin lanzar excepciones
      por hashes corruptos.

Colaboradores:
    - crosscutting.config.get_settings: bcrypt_rounds / bcrypt_admin_rounds.
    - identity.auth_users / application.usecases.*: consumidores.

Notas:
    - bcrypt solo usa los primeros 72 bytes; se truncan explícitamente para
      que passwords largos no fallen en bcrypt >= 4.1.
    - Los hashes `$2a$` existentes verifican sin migración.
===============================================================================
"""

from __future__ import annotations

import bcrypt

from ..crosscutting.config import get_settings

BCRYPT_MAX_BYTES = 72


def _encode(plain: str) -> bytes:
    return (plain or "").encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(plain: str, *, admin: bool = False, rounds: int | None = None) -> str:
    """Hashea `plain`; `rounds` explícito gana sobre settings."""
    if rounds is None:
        settings = get_settings()
        rounds = settings.bcrypt_admin_rounds if admin else settings.bcrypt_rounds
    return bcrypt.hashpw(_encode(plain), bcrypt.gensalt(rounds)).decode("ascii")


def verify_password(plain: str, password_hash: str) -> bool:
    """True si coincide. Un hash mal formado devuelve False."""
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(_encode(plain), password_hash.encode("utf-8"))
    except ValueError:
        return False
