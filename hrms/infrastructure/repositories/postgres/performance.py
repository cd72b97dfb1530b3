"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/performance.py
============================================================
Class: PostgresPerformanceRepository

Responsibilities:
- Insertar reviews (rating 1..5 garantizado también por CHECK en DB).
- Listar reviews de un empleado con datos del reviewer.
- Listar todas las reviews con empleado, departamento y reviewer.

Collaborators:
- postgres._base.PostgresRepository
- domain.entities.PerformanceReview
============================================================
"""

from __future__ import annotations

from typing import Any, Optional

from ....crosscutting.exceptions import DatabaseError
from ....domain.entities import PerformanceReview
from ._base import PostgresRepository


class PostgresPerformanceRepository(PostgresRepository):
    def add_review(
        self,
        *,
        employee_id: int,
        reviewer_id: int,
        rating: int,
        comments: Optional[str] = None,
    ) -> PerformanceReview:
        row = self._fetchone(
            query="""
                INSERT INTO performance_reviews (employee_id, reviewer_id, rating, comments)
                VALUES (%s, %s, %s, %s)
                RETURNING id, employee_id, reviewer_id, rating, comments, review_date
            """,
            params=(employee_id, reviewer_id, rating, comments),
            context_msg="PostgresPerformanceRepository: add_review failed",
            extra={"employee_id": employee_id, "reviewer_id": reviewer_id},
        )
        if not row:
            raise DatabaseError(
                "PostgresPerformanceRepository: add_review failed (no row returned)"
            )
        return PerformanceReview(
            id=row[0],
            employee_id=row[1],
            reviewer_id=row[2],
            rating=row[3],
            comments=row[4],
            review_date=row[5],
        )

    def list_for_employee(self, employee_id: int) -> list[PerformanceReview]:
        rows = self._fetchall(
            query="""
                SELECT r.id, r.employee_id, r.reviewer_id, r.rating, r.comments,
                       r.review_date, u.first_name, u.last_name, u.role
                FROM performance_reviews r
                LEFT JOIN users u ON r.reviewer_id = u.id
                WHERE r.employee_id = %s
                ORDER BY r.review_date DESC, r.id DESC
            """,
            params=(employee_id,),
            context_msg="PostgresPerformanceRepository: list_for_employee failed",
            extra={"employee_id": employee_id},
        )
        return [
            PerformanceReview(
                id=r[0],
                employee_id=r[1],
                reviewer_id=r[2],
                rating=r[3],
                comments=r[4],
                review_date=r[5],
                reviewer_first_name=r[6],
                reviewer_last_name=r[7],
                reviewer_role=r[8],
            )
            for r in rows
        ]

    def list_all(self) -> list[dict[str, Any]]:
        return self._fetch_dicts(
            query="""
                SELECT
                    r.id, r.rating, r.comments, r.review_date,
                    emp.first_name AS employee_first_name,
                    emp.last_name AS employee_last_name,
                    emp.email AS employee_email,
                    emp.position AS employee_position,
                    d.name AS employee_department,
                    rev.first_name AS reviewer_first_name,
                    rev.last_name AS reviewer_last_name,
                    rev.role AS reviewer_role
                FROM performance_reviews r
                JOIN users emp ON r.employee_id = emp.id
                LEFT JOIN departments d ON emp.department_id = d.id
                LEFT JOIN users rev ON r.reviewer_id = rev.id
                ORDER BY r.review_date DESC, r.id DESC
            """,
            context_msg="PostgresPerformanceRepository: list_all failed",
        )
