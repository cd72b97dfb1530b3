"""
===============================================================================
TARJETA CRC — hrms/api/auth_routes.py (Autenticación)
===============================================================================

Responsabilidades:
  - Exponer register / login / validate / profile bajo /api/auth.
  - Traducir HTTP <-> casos de uso (RegisterUser, Login, UpdateProfile).
  - Responder con el sobre "status" ({message, ..., status}).

Patrones aplicados:
  - Adapter / Presentation Layer: traduce HTTP ↔ caso de uso.
  - Fail-safe security: cualquier falla de credenciales es un 401 genérico.

Colaboradores:
  - container: factories de casos de uso
  - identity.auth_users.require_user (Access Guard)
  - api.error_mapping.raise_use_case_error
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ..application.usecases.auth import (
    LoginUseCase,
    RegisterUserInput,
    RegisterUserUseCase,
    UpdateProfileInput,
    UpdateProfileUseCase,
)
from ..container import (
    get_login_use_case,
    get_register_user_use_case,
    get_update_profile_use_case,
)
from ..crosscutting.error_responses import OPENAPI_ERROR_RESPONSES, Envelope
from ..identity.auth_users import require_user
from ..identity.users import AuthenticatedUser
from .error_mapping import raise_use_case_error
from .schemas import LoginRequest, ProfileUpdateRequest, RegisterRequest

router = APIRouter(prefix="/auth", tags=["auth"], responses=OPENAPI_ERROR_RESPONSES)


@router.post("/register", status_code=201)
def register(
    req: RegisterRequest,
    use_case: RegisterUserUseCase = Depends(get_register_user_use_case),
):
    """Alta pública: el rol siempre es employee (req.role se ignora)."""
    result = use_case.execute(
        RegisterUserInput(
            email=req.email,
            password=req.password,
            first_name=req.first_name,
            last_name=req.last_name,
            department=req.department,
            position=req.position,
        )
    )
    if result.error:
        raise_use_case_error(result.error, envelope=Envelope.STATUS)

    return {
        "message": "User registered successfully",
        "user": result.user.to_public_dict(),
        "token": result.token,
        "status": "success",
    }


@router.post("/login")
def login(
    req: LoginRequest,
    use_case: LoginUseCase = Depends(get_login_use_case),
):
    result = use_case.execute(req.email, req.password)
    if result.error:
        raise_use_case_error(result.error, envelope=Envelope.STATUS)

    return {
        "message": "Login successful",
        "user": result.user.to_public_dict(),
        "token": result.token,
        "status": "success",
    }


@router.get("/validate")
def validate(user: AuthenticatedUser = Depends(require_user())):
    return {"status": "success", "message": "Token is valid", "user": user.to_dict()}


@router.get("/profile")
def get_profile(user: AuthenticatedUser = Depends(require_user())):
    return {
        "message": "Profile retrieved successfully",
        "user": user.to_dict(),
        "status": "success",
    }


@router.put("/profile")
def update_profile(
    req: ProfileUpdateRequest,
    user: AuthenticatedUser = Depends(require_user()),
    use_case: UpdateProfileUseCase = Depends(get_update_profile_use_case),
):
    """Update parcial; un departamento desconocido se ignora."""
    result = use_case.execute(
        UpdateProfileInput(
            user_id=user.id,
            first_name=req.first_name,
            last_name=req.last_name,
            department=req.department,
            position=req.position,
        )
    )
    if result.error:
        raise_use_case_error(result.error, envelope=Envelope.STATUS)

    return {
        "message": "Profile updated successfully",
        "user": result.user.public().to_dict(),
        "status": "success",
    }
