"""
===============================================================================
TARJETA CRC — hrms/api/routers/performance.py
===============================================================================

Responsabilidades:
  - Reviews de desempeño: alta y listados (admin / manager).
  - Un empleado puede ver sus propias reviews.

Colaboradores:
  - application.usecases.performance.AddReviewUseCase
  - identity.access_control (require_admin_or_manager, is_self_admin_or_manager)
  - domain.repositories.PerformanceRepository / UserRepository

Notas:
  - Éxitos con {success, ...}; errores con el sobre "status".
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ...application.usecases.performance import AddReviewInput, AddReviewUseCase
from ...container import (
    get_add_review_use_case,
    get_department_repository,
    get_performance_repository,
    get_user_repository,
)
from ...crosscutting.error_responses import Envelope, forbidden
from ...domain.repositories import (
    DepartmentRepository,
    PerformanceRepository,
    UserRepository,
)
from ...identity.access_control import (
    MSG_ACCESS_DENIED,
    is_self_admin_or_manager,
    require_admin_or_manager,
)
from ...identity.auth_users import require_user
from ...identity.users import AuthenticatedUser
from ..error_mapping import raise_use_case_error
from ..schemas import ReviewCreateRequest

router = APIRouter(prefix="/performance", tags=["performance"])


@router.get("/employees/list")
def list_reviewable_employees(
    _reviewer: AuthenticatedUser = Depends(require_admin_or_manager()),
    users: UserRepository = Depends(get_user_repository),
    departments: DepartmentRepository = Depends(get_department_repository),
):
    names = {d.id: d.name for d in departments.list_departments()}
    data = [
        {
            "id": u.id,
            "first_name": u.first_name,
            "last_name": u.last_name,
            "email": u.email,
            "position": u.position,
            "department_name": names.get(u.department_id) if u.department_id else None,
        }
        for u in users.list_active_employees()
    ]
    return {"success": True, "data": data}


@router.get("")
def list_reviews(
    _reviewer: AuthenticatedUser = Depends(require_admin_or_manager()),
    reviews: PerformanceRepository = Depends(get_performance_repository),
):
    return {"success": True, "data": reviews.list_all()}


@router.post("/{employee_id}")
def add_review(
    employee_id: int,
    req: ReviewCreateRequest,
    reviewer: AuthenticatedUser = Depends(require_admin_or_manager()),
    use_case: AddReviewUseCase = Depends(get_add_review_use_case),
):
    result = use_case.execute(
        AddReviewInput(
            employee_id=employee_id,
            reviewer_id=reviewer.id,
            rating=req.rating,
            comments=req.comments,
        )
    )
    if result.error:
        raise_use_case_error(result.error, envelope=Envelope.STATUS)
    return {"success": True, "message": "Performance review added successfully"}


@router.get("/{employee_id}")
def employee_reviews(
    employee_id: int,
    user: AuthenticatedUser = Depends(require_user()),
    reviews: PerformanceRepository = Depends(get_performance_repository),
):
    if not is_self_admin_or_manager(user.role, employee_id, user.id):
        raise forbidden(MSG_ACCESS_DENIED, envelope=Envelope.STATUS)
    return {
        "success": True,
        "data": [r.to_dict() for r in reviews.list_for_employee(employee_id)],
    }
