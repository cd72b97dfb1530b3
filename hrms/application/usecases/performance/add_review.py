"""
===============================================================================
USE CASE: Add Performance Review
===============================================================================

Invariantes:
    - rating entero en 1..5 (la DB lo refuerza con un CHECK).
    - El evaluado debe ser un employee activo.
    - reviewer_id = usuario autenticado (admin o manager, lo garantiza la ruta).

Collaborators:
    - UserRepository.get_active_user_by_id
    - PerformanceRepository.add_review
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from ....domain.entities import MAX_RATING, MIN_RATING
from ....domain.repositories import PerformanceRepository, UserRepository
from ....identity.users import UserRole
from ..results import ReviewResult, UseCaseError, UseCaseErrorCode

MSG_INVALID_RATING = "Rating must be between 1 and 5"
MSG_EMPLOYEE_NOT_FOUND = "Employee not found or inactive"


@dataclass(frozen=True)
class AddReviewInput:
    employee_id: int
    reviewer_id: int
    rating: int | None
    comments: str | None = None


class AddReviewUseCase:
    def __init__(self, users: UserRepository, reviews: PerformanceRepository) -> None:
        self._users = users
        self._reviews = reviews

    def execute(self, input_data: AddReviewInput) -> ReviewResult:
        rating = input_data.rating
        if (
            rating is None
            or isinstance(rating, bool)
            or not MIN_RATING <= rating <= MAX_RATING
        ):
            return ReviewResult(
                error=UseCaseError(UseCaseErrorCode.VALIDATION_ERROR, MSG_INVALID_RATING)
            )

        employee = self._users.get_active_user_by_id(input_data.employee_id)
        if employee is None or employee.role != UserRole.EMPLOYEE:
            return ReviewResult(
                error=UseCaseError(UseCaseErrorCode.NOT_FOUND, MSG_EMPLOYEE_NOT_FOUND)
            )

        review = self._reviews.add_review(
            employee_id=employee.id,
            reviewer_id=input_data.reviewer_id,
            rating=rating,
            comments=input_data.comments or None,
        )
        return ReviewResult(review=review)
