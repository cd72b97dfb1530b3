"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/department.py
============================================================
Class: InMemoryDepartmentRepository

Responsibilities:
  - Catálogo de departamentos en memoria, sembrado con los mismos
    10 departamentos que la migración inicial.

Collaborators:
  - domain.entities.Department
============================================================
"""

from __future__ import annotations

from datetime import datetime
from threading import Lock
from typing import Dict, Iterable, Optional

from ....domain.entities import Department

DEFAULT_DEPARTMENTS: tuple[tuple[str, str], ...] = (
    ("Information Technology", "Software Development, IT Support, and System Administration"),
    ("Human Resources", "Recruitment, Employee Relations, and HR Operations"),
    ("Finance & Accounting", "Financial Planning, Accounting, and Budget Management"),
    ("Sales & Marketing", "Sales Operations, Digital Marketing, and Brand Management"),
    ("Operations", "Business Operations, Process Management, and Quality Assurance"),
    ("Customer Support", "Customer Service, Technical Support, and Client Relations"),
    ("Research & Development", "Product Development, Innovation, and Technical Research"),
    ("Legal & Compliance", "Legal Affairs, Regulatory Compliance, and Risk Management"),
    ("Supply Chain", "Procurement, Logistics, and Inventory Management"),
    ("Product Management", "Product Strategy, Roadmap Planning, and Market Analysis"),
)


class InMemoryDepartmentRepository:
    def __init__(
        self, seed: Iterable[tuple[str, str]] = DEFAULT_DEPARTMENTS
    ) -> None:
        self._lock = Lock()
        now = datetime.now()
        self._departments: Dict[int, Department] = {
            idx: Department(id=idx, name=name, description=description, created_at=now)
            for idx, (name, description) in enumerate(seed, start=1)
        }

    def list_departments(self) -> list[Department]:
        with self._lock:
            values = list(self._departments.values())
        return sorted(values, key=lambda d: d.name)

    def get_department(self, department_id: int) -> Optional[Department]:
        with self._lock:
            return self._departments.get(department_id)

    def find_by_name(self, name: str) -> Optional[Department]:
        wanted = (name or "").strip().lower()
        with self._lock:
            for department in self._departments.values():
                if department.name.lower() == wanted:
                    return department
        return None
