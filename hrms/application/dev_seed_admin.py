# =============================================================================
# FILE: application/dev_seed_admin.py
# =============================================================================
"""
===============================================================================
TASK: Dev Seed Admin (Local-only)
===============================================================================

Qué es:
    Asegura que exista un usuario admin para desarrollo cuando está
    configurado (DEV_SEED_ADMIN=true). Reemplaza el admin hardcodeado que
    creaba el esquema original: nunca corre fuera de entornos locales.

Seguridad:
    - Guard estricto: solo app_env development/dev/local.

Patrones:
    - Dependency Injection (repo + hasher)
    - Fail-fast guard (safety boundary)
    - Idempotencia (ensure-create / optional reset)

CRC:
    Component: ensure_dev_admin
    Responsibilities:
      - Validar guard de ambiente
      - Asegurar usuario (create, o reset de password si force_reset)
    Collaborators:
      - UserRepository
      - password_hasher (identity.passwords.hash_password con admin=True)
      - Settings
===============================================================================
"""

from __future__ import annotations

from typing import Callable

from ..crosscutting.config import Settings
from ..crosscutting.logger import logger
from ..domain.errors import DuplicateEmailError
from ..domain.repositories import UserRepository
from ..identity.users import UserRole


def _assert_allowed_environment(settings: Settings) -> None:
    if not settings.is_development():
        raise RuntimeError(
            f"FATAL: DEV_SEED_ADMIN is enabled but APP_ENV is '{settings.app_env}' "
            "(must be development/dev/local). Safety guard prevents accidental overrides."
        )


def ensure_dev_admin(
    settings: Settings,
    *,
    user_repo: UserRepository,
    password_hasher: Callable[[str], str],
) -> None:
    """
    Ensure a development admin user exists if configured.

    Behavior:
      - If disabled: no-op
      - If enabled:
          - Create user if missing
          - If force_reset: re-hash password and reactivate
          - Otherwise: skip if exists
    """
    if not settings.dev_seed_admin:
        return

    _assert_allowed_environment(settings)

    email = (settings.dev_seed_admin_email or "").strip()
    password = settings.dev_seed_admin_password or ""
    if not email or not password:
        raise ValueError("Dev seed admin is enabled but email/password are empty")

    logger.info(
        "Dev seed admin: ensuring admin user",
        extra={"email": email, "force_reset": settings.dev_seed_admin_force_reset},
    )

    existing = user_repo.get_user_by_email(email)

    if existing is None:
        try:
            user_repo.create_user(
                email=email,
                password_hash=password_hasher(password),
                first_name=settings.dev_seed_admin_first_name,
                last_name=settings.dev_seed_admin_last_name,
                role=UserRole.ADMIN,
            )
        except DuplicateEmailError:
            logger.info("Dev seed admin: created concurrently; skipping", extra={"email": email})
            return
        logger.info("Dev seed admin: user created", extra={"email": email})
        return

    if settings.dev_seed_admin_force_reset:
        user_repo.update_password(existing.id, password_hasher(password))
        user_repo.set_user_active(existing.id, True)
        logger.info("Dev seed admin: user reset applied", extra={"email": email})
        return

    logger.info("Dev seed admin: user exists; skipping", extra={"email": email})
