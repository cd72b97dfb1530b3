"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/department.py
============================================================
Class: PostgresDepartmentRepository

Responsibilities:
- Listar departamentos (orden alfabético) y resolver por id / nombre.

Collaborators:
- postgres._base.PostgresRepository
- domain.entities.Department
============================================================
"""

from __future__ import annotations

from typing import Optional

from ....domain.entities import Department
from ._base import PostgresRepository

_DEPARTMENT_COLUMNS = "id, name, description, created_at"


def _row_to_department(row: tuple) -> Department:
    return Department(id=row[0], name=row[1], description=row[2], created_at=row[3])


class PostgresDepartmentRepository(PostgresRepository):
    def list_departments(self) -> list[Department]:
        rows = self._fetchall(
            query=f"SELECT {_DEPARTMENT_COLUMNS} FROM departments ORDER BY name",
            context_msg="PostgresDepartmentRepository: list_departments failed",
        )
        return [_row_to_department(r) for r in rows]

    def get_department(self, department_id: int) -> Optional[Department]:
        row = self._fetchone(
            query=f"SELECT {_DEPARTMENT_COLUMNS} FROM departments WHERE id = %s",
            params=(department_id,),
            context_msg="PostgresDepartmentRepository: get_department failed",
            extra={"department_id": department_id},
        )
        return _row_to_department(row) if row else None

    def find_by_name(self, name: str) -> Optional[Department]:
        row = self._fetchone(
            query=f"""
                SELECT {_DEPARTMENT_COLUMNS}
                FROM departments
                WHERE lower(name) = lower(%s)
                LIMIT 1
            """,
            params=(name.strip(),),
            context_msg="PostgresDepartmentRepository: find_by_name failed",
        )
        return _row_to_department(row) if row else None
