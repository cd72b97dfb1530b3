"""
===============================================================================
USE CASE: Login
===============================================================================

Business Goal:
    Canjear credenciales válidas por un token.

Invariantes:
    - Respuesta uniforme ante cualquier falla de credenciales.

Collaborators:
    - identity.credentials.authenticate_user
    - identity.tokens.TokenService
    - crosscutting.metrics.record_auth_failure
===============================================================================
"""

from __future__ import annotations

from ....crosscutting.logger import logger
from ....crosscutting.metrics import record_auth_failure
from ....domain.repositories import UserRepository
from ....identity.credentials import authenticate_user
from ....identity.tokens import TokenService
from ..results import AuthResult, UseCaseError, UseCaseErrorCode

MSG_INVALID_CREDENTIALS = "Invalid email or password"


class LoginUseCase:
    def __init__(self, users: UserRepository, tokens: TokenService) -> None:
        self._users = users
        self._tokens = tokens

    def execute(self, email: str, password: str) -> AuthResult:
        user = authenticate_user(self._users, email, password)
        if user is None:
            record_auth_failure("invalid_credentials")
            return AuthResult(
                error=UseCaseError(
                    UseCaseErrorCode.UNAUTHORIZED, MSG_INVALID_CREDENTIALS
                )
            )

        logger.info("User logged in", extra={"user_id": user.id})
        return AuthResult(user=user, token=self._tokens.issue(user.id, user.email))
