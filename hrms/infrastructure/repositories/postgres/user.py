"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/user.py
============================================================
Class: PostgresUserRepository

Responsibilities:
  - Credential Store: cargar usuarios por email / id, crear usuarios.
  - Registros de empleados: listados, update parcial (COALESCE), baja.
  - Mapear filas crudas -> entidad `User` y validar `UserRole`.
  - Traducir la violación de unicidad de email a DuplicateEmailError.

Collaborators:
  - postgres._base.PostgresRepository (pool + helpers)
  - identity.users.User / UserRole / normalize_email
  - domain.errors.DuplicateEmailError
  - crosscutting.exceptions.DatabaseError

Constraints / Notes:
  - Repositorio puro: NO define reglas de negocio (quién puede crear admins, etc.).
  - Retorna None cuando no existe el recurso.
  - Emails se guardan normalizados; el índice único es sobre lower(email).
  - Orden estable en listados: created_at DESC, id DESC.
============================================================
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from psycopg import errors as pg_errors

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger
from ....domain.errors import DuplicateEmailError
from ....identity.users import User, UserRole, normalize_email
from ._base import PostgresRepository

# R: Lista explícita de columnas para mantener el contrato estable con migraciones.
_USER_COLUMNS = """
    id, email, password_hash, first_name, last_name, role, department_id,
    position, hire_date, salary, phone, address, is_active, created_at, updated_at
"""

_USER_ORDER_BY = "created_at DESC, id DESC"

# R: Campos editables por PUT /employees/:id y PUT /auth/profile.
_UPDATABLE_FIELDS = (
    "first_name",
    "last_name",
    "department_id",
    "position",
    "salary",
    "phone",
    "address",
)


def _row_to_user(row: tuple) -> User:
    """
    Convierte una fila de `users` a `User`.

    Role casting estricto: un valor fuera del enum es drift de datos -> DatabaseError.
    """
    try:
        role = UserRole(row[5])
    except ValueError as exc:
        raise DatabaseError(f"Invalid user role in database: {row[5]}") from exc

    return User(
        id=row[0],
        email=row[1],
        password_hash=row[2],
        first_name=row[3],
        last_name=row[4],
        role=role,
        department_id=row[6],
        position=row[7],
        hire_date=row[8],
        salary=row[9] if row[9] is not None else Decimal("0"),
        phone=row[10],
        address=row[11],
        is_active=row[12],
        created_at=row[13],
        updated_at=row[14],
    )


class PostgresUserRepository(PostgresRepository):
    """R: Implementación PostgreSQL del Credential Store / empleados."""

    # =========================================================
    # Lectura
    # =========================================================
    def get_user_by_email(self, email: str) -> Optional[User]:
        row = self._fetchone(
            query=f"""
                SELECT {_USER_COLUMNS}
                FROM users
                WHERE lower(email) = %s
            """,
            params=(normalize_email(email),),
            context_msg="PostgresUserRepository: get_user_by_email failed",
        )
        return _row_to_user(row) if row else None

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        row = self._fetchone(
            query=f"SELECT {_USER_COLUMNS} FROM users WHERE id = %s",
            params=(user_id,),
            context_msg="PostgresUserRepository: get_user_by_id failed",
            extra={"user_id": user_id},
        )
        return _row_to_user(row) if row else None

    def get_active_user_by_id(self, user_id: int) -> Optional[User]:
        row = self._fetchone(
            query=f"""
                SELECT {_USER_COLUMNS}
                FROM users
                WHERE id = %s AND is_active = true
            """,
            params=(user_id,),
            context_msg="PostgresUserRepository: get_active_user_by_id failed",
            extra={"user_id": user_id},
        )
        return _row_to_user(row) if row else None

    def list_non_admin_users(self) -> list[User]:
        rows = self._fetchall(
            query=f"""
                SELECT {_USER_COLUMNS}
                FROM users
                WHERE role != 'admin'
                ORDER BY {_USER_ORDER_BY}
            """,
            context_msg="PostgresUserRepository: list_non_admin_users failed",
        )
        return [_row_to_user(r) for r in rows]

    def list_active_employees(self) -> list[User]:
        rows = self._fetchall(
            query=f"""
                SELECT {_USER_COLUMNS}
                FROM users
                WHERE role = 'employee' AND is_active = true
                ORDER BY first_name, last_name
            """,
            context_msg="PostgresUserRepository: list_active_employees failed",
        )
        return [_row_to_user(r) for r in rows]

    # =========================================================
    # Escritura
    # =========================================================
    def create_user(
        self,
        *,
        email: str,
        password_hash: str,
        first_name: str,
        last_name: str,
        role: UserRole = UserRole.EMPLOYEE,
        department_id: Optional[int] = None,
        position: Optional[str] = None,
        salary: Optional[Decimal] = None,
        phone: Optional[str] = None,
    ) -> User:
        """
        Crea un usuario y devuelve el registro.

        Raises:
            DuplicateEmailError: si lower(email) ya existe (incluye carreras
                entre dos registros concurrentes, resueltas por el índice único).
        """
        normalized = normalize_email(email)
        try:
            with self._get_pool().connection() as conn:
                row = conn.execute(
                    f"""
                    INSERT INTO users (
                        email, password_hash, first_name, last_name, role,
                        department_id, position, salary, phone
                    )
                    VALUES (%s, %s, %s, %s, %s, %s, %s, COALESCE(%s, 0), %s)
                    RETURNING {_USER_COLUMNS}
                    """,
                    (
                        normalized,
                        password_hash,
                        first_name,
                        last_name,
                        role.value,
                        department_id,
                        position,
                        salary,
                        phone,
                    ),
                ).fetchone()
        except pg_errors.UniqueViolation as exc:
            raise DuplicateEmailError() from exc
        except DatabaseError:
            raise
        except Exception as exc:
            raise self._fail(
                "PostgresUserRepository: create_user failed",
                {"email": normalized, "role": role.value},
                exc,
            ) from exc

        if not row:
            raise DatabaseError(
                "PostgresUserRepository: create_user failed (no row returned)"
            )
        logger.info(
            "Usuario creado", extra={"user_id": row[0], "role": role.value}
        )
        return _row_to_user(row)

    def update_user(self, user_id: int, fields: dict[str, Any]) -> Optional[User]:
        """
        Update parcial: solo columnas permitidas; None conserva el valor actual.
        """
        updates: list[str] = []
        params: list[object] = []
        for name in _UPDATABLE_FIELDS:
            value = fields.get(name)
            if value is None:
                continue
            # R: nombres de columna vienen de _UPDATABLE_FIELDS (no del input).
            updates.append(f"{name} = %s")
            params.append(value)

        if not updates:
            return self.get_user_by_id(user_id)

        updates.append("updated_at = CURRENT_TIMESTAMP")
        params.append(user_id)

        row = self._fetchone(
            query=f"""
                UPDATE users
                SET {", ".join(updates)}
                WHERE id = %s
                RETURNING {_USER_COLUMNS}
            """,
            params=params,
            context_msg="PostgresUserRepository: update_user failed",
            extra={"user_id": user_id, "fields": sorted(fields)},
        )
        return _row_to_user(row) if row else None

    def update_password(self, user_id: int, password_hash: str) -> None:
        self._execute(
            query="""
                UPDATE users
                SET password_hash = %s, updated_at = CURRENT_TIMESTAMP
                WHERE id = %s
            """,
            params=(password_hash, user_id),
            context_msg="PostgresUserRepository: update_password failed",
            extra={"user_id": user_id},
        )

    def set_user_active(self, user_id: int, is_active: bool) -> Optional[User]:
        row = self._fetchone(
            query=f"""
                UPDATE users
                SET is_active = %s, updated_at = CURRENT_TIMESTAMP
                WHERE id = %s
                RETURNING {_USER_COLUMNS}
            """,
            params=(is_active, user_id),
            context_msg="PostgresUserRepository: set_user_active failed",
            extra={"user_id": user_id, "is_active": is_active},
        )
        return _row_to_user(row) if row else None

    def delete_non_admin_user(self, user_id: int) -> bool:
        deleted = self._execute(
            query="DELETE FROM users WHERE id = %s AND role != 'admin'",
            params=(user_id,),
            context_msg="PostgresUserRepository: delete_non_admin_user failed",
            extra={"user_id": user_id},
        )
        return deleted > 0
