"""Casos de uso de autenticación (registro, login, perfil)."""

from .login import LoginUseCase
from .register_user import RegisterUserInput, RegisterUserUseCase
from .update_profile import UpdateProfileInput, UpdateProfileUseCase

__all__ = [
    "LoginUseCase",
    "RegisterUserInput",
    "RegisterUserUseCase",
    "UpdateProfileInput",
    "UpdateProfileUseCase",
]
