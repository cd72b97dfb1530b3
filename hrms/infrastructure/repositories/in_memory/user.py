"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/user.py
============================================================
Class: InMemoryUserRepository

Responsibilities:
  - Credential Store en memoria (tests / desarrollo sin DB).
  - Replicar el contrato de PostgresUserRepository: emails en minúsculas,
    DuplicateEmailError, update parcial, nunca borrar admins.
  - Ordering determinístico alineado con Postgres (created_at DESC, id DESC).

Collaborators:
  - identity.users.User / UserRole / normalize_email
  - domain.errors.DuplicateEmailError

Constraints / Notes:
  - Thread-safe: acceso protegido por Lock.
  - Ids autoincrementales, como SERIAL en Postgres.
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from threading import Lock
from typing import Any, Dict, List, Optional

from ....domain.errors import DuplicateEmailError
from ....identity.users import User, UserRole, normalize_email

_UPDATABLE_FIELDS = (
    "first_name",
    "last_name",
    "department_id",
    "position",
    "salary",
    "phone",
    "address",
)


class InMemoryUserRepository:
    """
    Repositorio in-memory, thread-safe, para usuarios.

    Modelo mental:
    - _users es la "tabla" (id -> User).
    - La unicidad de email se chequea bajo el mismo lock que el insert.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._users: Dict[int, User] = {}
        self._next_id = 1

    @staticmethod
    def _now() -> datetime:
        return datetime.now()

    @staticmethod
    def _sorted(users: List[User]) -> List[User]:
        return sorted(
            users,
            key=lambda u: (u.created_at or datetime.min, u.id),
            reverse=True,
        )

    # =========================================================
    # Lectura
    # =========================================================
    def get_user_by_email(self, email: str) -> Optional[User]:
        wanted = normalize_email(email)
        with self._lock:
            for user in self._users.values():
                if user.email == wanted:
                    return user
        return None

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def get_active_user_by_id(self, user_id: int) -> Optional[User]:
        user = self.get_user_by_id(user_id)
        return user if user is not None and user.is_active else None

    def list_non_admin_users(self) -> list[User]:
        with self._lock:
            values = [u for u in self._users.values() if u.role != UserRole.ADMIN]
        return self._sorted(values)

    def list_active_employees(self) -> list[User]:
        with self._lock:
            values = [
                u
                for u in self._users.values()
                if u.role == UserRole.EMPLOYEE and u.is_active
            ]
        return sorted(values, key=lambda u: (u.first_name, u.last_name))

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
        normalized = normalize_email(email)
        now = self._now()
        with self._lock:
            if any(u.email == normalized for u in self._users.values()):
                raise DuplicateEmailError()
            user = User(
                id=self._next_id,
                email=normalized,
                password_hash=password_hash,
                first_name=first_name,
                last_name=last_name,
                role=role,
                department_id=department_id,
                position=position,
                hire_date=date.today(),
                salary=Decimal(salary) if salary is not None else Decimal("0"),
                phone=phone,
                is_active=True,
                created_at=now,
                updated_at=now,
            )
            self._users[user.id] = user
            self._next_id += 1
        return user

    def update_user(self, user_id: int, fields: dict[str, Any]) -> Optional[User]:
        changes = {
            name: fields[name]
            for name in _UPDATABLE_FIELDS
            if fields.get(name) is not None
        }
        with self._lock:
            current = self._users.get(user_id)
            if current is None:
                return None
            if not changes:
                return current
            if "salary" in changes:
                changes["salary"] = Decimal(changes["salary"])
            updated = replace(current, updated_at=self._now(), **changes)
            self._users[user_id] = updated
        return updated

    def update_password(self, user_id: int, password_hash: str) -> None:
        with self._lock:
            current = self._users.get(user_id)
            if current is not None:
                self._users[user_id] = replace(
                    current, password_hash=password_hash, updated_at=self._now()
                )

    def set_user_active(self, user_id: int, is_active: bool) -> Optional[User]:
        with self._lock:
            current = self._users.get(user_id)
            if current is None:
                return None
            updated = replace(current, is_active=is_active, updated_at=self._now())
            self._users[user_id] = updated
        return updated

    def delete_non_admin_user(self, user_id: int) -> bool:
        with self._lock:
            current = self._users.get(user_id)
            if current is None or current.role == UserRole.ADMIN:
                return False
            del self._users[user_id]
        return True
