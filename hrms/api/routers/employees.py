"""
===============================================================================
TARJETA CRC — hrms/api/routers/employees.py
===============================================================================

Responsabilidades:
  - CRUD de empleados (admin) y lectura/edición del propio registro.
  - Catálogo de departamentos (público y autenticado).
  - Alta de cuentas admin en un endpoint separado y auditado en logs.

Colaboradores:
  - application.usecases.employees
  - identity.access_control (require_admin, is_self_or_admin)
  - domain.repositories.UserRepository / DepartmentRepository
  - api.error_mapping.raise_use_case_error (sobre "success")

Reglas:
  - Las rutas estáticas (/departments, /admin) se declaran antes que /{id}.
  - Un admin nunca se borra por esta vía (se reporta como 404).
===============================================================================
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from ...application.usecases.employees import (
    MSG_EMPLOYEE_NOT_FOUND,
    CreateAdminUseCase,
    CreateEmployeeInput,
    CreateEmployeeUseCase,
    DeleteEmployeeUseCase,
    UpdateEmployeeInput,
    UpdateEmployeeUseCase,
)
from ...container import (
    get_create_admin_use_case,
    get_create_employee_use_case,
    get_delete_employee_use_case,
    get_department_repository,
    get_update_employee_use_case,
    get_user_repository,
)
from ...crosscutting.error_responses import forbidden, not_found
from ...domain.repositories import DepartmentRepository, UserRepository
from ...identity.access_control import (
    MSG_ACCESS_DENIED,
    is_self_or_admin,
    require_admin,
)
from ...identity.auth_users import require_user
from ...identity.users import AuthenticatedUser, User
from ..error_mapping import raise_use_case_error
from ..schemas import EmployeeCreateRequest, EmployeeUpdateRequest

router = APIRouter(prefix="/employees", tags=["employees"])


def _department_names(departments: DepartmentRepository) -> dict[int, str]:
    return {d.id: d.name for d in departments.list_departments()}


def _employee_dict(user: User, names: dict[int, str]) -> dict[str, Any]:
    data = user.to_public_dict()
    data["department_name"] = names.get(user.department_id) if user.department_id else None
    return data


def _to_create_input(req: EmployeeCreateRequest) -> CreateEmployeeInput:
    return CreateEmployeeInput(
        email=req.email,
        password=req.password,
        first_name=req.first_name,
        last_name=req.last_name,
        role=req.role,
        department_id=req.department_id,
        position=req.position,
        salary=req.salary,
        phone=req.phone,
    )


# -----------------------------------------------------------------------------
# Departamentos
# -----------------------------------------------------------------------------


@router.get("/departments")
def list_departments(
    departments: DepartmentRepository = Depends(get_department_repository),
):
    """Público: lo usa el formulario de registro."""
    return {"success": True, "data": [d.to_dict() for d in departments.list_departments()]}


@router.get("/departments/list")
def list_departments_authenticated(
    _user: AuthenticatedUser = Depends(require_user()),
    departments: DepartmentRepository = Depends(get_department_repository),
):
    return {"success": True, "data": [d.to_dict() for d in departments.list_departments()]}


# -----------------------------------------------------------------------------
# Empleados
# -----------------------------------------------------------------------------


@router.get("")
def list_employees(
    _admin: AuthenticatedUser = Depends(require_admin()),
    users: UserRepository = Depends(get_user_repository),
    departments: DepartmentRepository = Depends(get_department_repository),
):
    names = _department_names(departments)
    return {
        "success": True,
        "data": [_employee_dict(u, names) for u in users.list_non_admin_users()],
    }


@router.post("", status_code=201)
def create_employee(
    req: EmployeeCreateRequest,
    _admin: AuthenticatedUser = Depends(require_admin()),
    use_case: CreateEmployeeUseCase = Depends(get_create_employee_use_case),
    departments: DepartmentRepository = Depends(get_department_repository),
):
    result = use_case.execute(_to_create_input(req))
    if result.error:
        raise_use_case_error(result.error)
    return {"success": True, "data": _employee_dict(result.user, _department_names(departments))}


@router.post("/admin", status_code=201)
def create_admin(
    req: EmployeeCreateRequest,
    admin: AuthenticatedUser = Depends(require_admin()),
    use_case: CreateAdminUseCase = Depends(get_create_admin_use_case),
    departments: DepartmentRepository = Depends(get_department_repository),
):
    """El rol del body se ignora: siempre crea un admin (hash de 12 rondas)."""
    result = use_case.execute(_to_create_input(req), actor_email=admin.email)
    if result.error:
        raise_use_case_error(result.error)
    return {"success": True, "data": _employee_dict(result.user, _department_names(departments))}


@router.get("/{employee_id}")
def get_employee(
    employee_id: int,
    user: AuthenticatedUser = Depends(require_user()),
    users: UserRepository = Depends(get_user_repository),
    departments: DepartmentRepository = Depends(get_department_repository),
):
    if not is_self_or_admin(user.role, employee_id, user.id):
        raise forbidden(MSG_ACCESS_DENIED)

    employee = users.get_user_by_id(employee_id)
    if employee is None:
        raise not_found(MSG_EMPLOYEE_NOT_FOUND)
    return {"success": True, "data": _employee_dict(employee, _department_names(departments))}


@router.put("/{employee_id}")
def update_employee(
    employee_id: int,
    req: EmployeeUpdateRequest,
    user: AuthenticatedUser = Depends(require_user()),
    use_case: UpdateEmployeeUseCase = Depends(get_update_employee_use_case),
    departments: DepartmentRepository = Depends(get_department_repository),
):
    result = use_case.execute(
        UpdateEmployeeInput(
            employee_id=employee_id,
            actor=user,
            first_name=req.first_name,
            last_name=req.last_name,
            department_id=req.department_id,
            position=req.position,
            salary=req.salary,
            phone=req.phone,
            address=req.address,
        )
    )
    if result.error:
        raise_use_case_error(result.error)
    return {"success": True, "data": _employee_dict(result.user, _department_names(departments))}


@router.delete("/{employee_id}")
def delete_employee(
    employee_id: int,
    _admin: AuthenticatedUser = Depends(require_admin()),
    use_case: DeleteEmployeeUseCase = Depends(get_delete_employee_use_case),
):
    result = use_case.execute(employee_id)
    if result.error:
        raise_use_case_error(result.error)
    return {"success": True, "message": "Employee deleted successfully"}
