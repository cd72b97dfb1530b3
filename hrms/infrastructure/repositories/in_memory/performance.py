"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/performance.py
============================================================
Class: InMemoryPerformanceRepository

Responsibilities:
  - Reviews de desempeño en memoria.
  - Resolver nombres de empleado/reviewer/departamento cuando se inyectan
    los repositorios correspondientes.

Collaborators:
  - domain.entities.PerformanceReview
  - domain.repositories.UserRepository / DepartmentRepository (opcionales)
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from threading import Lock
from typing import Any, List, Optional

from ....domain.entities import PerformanceReview
from ....domain.repositories import DepartmentRepository, UserRepository


class InMemoryPerformanceRepository:
    def __init__(
        self,
        user_repo: Optional[UserRepository] = None,
        department_repo: Optional[DepartmentRepository] = None,
    ) -> None:
        self._lock = Lock()
        self._reviews: List[PerformanceReview] = []
        self._next_id = 1
        self._user_repo = user_repo
        self._department_repo = department_repo

    def _user(self, user_id: Optional[int]):
        if self._user_repo is None or user_id is None:
            return None
        return self._user_repo.get_user_by_id(user_id)

    def _newest_first(self) -> list[PerformanceReview]:
        with self._lock:
            values = list(self._reviews)
        return sorted(
            values, key=lambda r: (r.review_date or datetime.min, r.id), reverse=True
        )

    def add_review(
        self,
        *,
        employee_id: int,
        reviewer_id: int,
        rating: int,
        comments: Optional[str] = None,
    ) -> PerformanceReview:
        with self._lock:
            review = PerformanceReview(
                id=self._next_id,
                employee_id=employee_id,
                reviewer_id=reviewer_id,
                rating=rating,
                comments=comments,
                review_date=datetime.now(),
            )
            self._reviews.append(review)
            self._next_id += 1
        return review

    def list_for_employee(self, employee_id: int) -> list[PerformanceReview]:
        result = []
        for review in self._newest_first():
            if review.employee_id != employee_id:
                continue
            reviewer = self._user(review.reviewer_id)
            if reviewer is not None:
                review = replace(
                    review,
                    reviewer_first_name=reviewer.first_name,
                    reviewer_last_name=reviewer.last_name,
                    reviewer_role=reviewer.role.value,
                )
            result.append(review)
        return result

    def list_all(self) -> list[dict[str, Any]]:
        rows: list[dict[str, Any]] = []
        for review in self._newest_first():
            employee = self._user(review.employee_id)
            reviewer = self._user(review.reviewer_id)
            department = None
            if (
                employee is not None
                and employee.department_id is not None
                and self._department_repo is not None
            ):
                department = self._department_repo.get_department(
                    employee.department_id
                )
            rows.append(
                {
                    "id": review.id,
                    "rating": review.rating,
                    "comments": review.comments,
                    "review_date": review.review_date,
                    "employee_first_name": employee.first_name if employee else None,
                    "employee_last_name": employee.last_name if employee else None,
                    "employee_email": employee.email if employee else None,
                    "employee_position": employee.position if employee else None,
                    "employee_department": department.name if department else None,
                    "reviewer_first_name": reviewer.first_name if reviewer else None,
                    "reviewer_last_name": reviewer.last_name if reviewer else None,
                    "reviewer_role": reviewer.role.value if reviewer else None,
                }
            )
        return rows
