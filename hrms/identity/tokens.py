"""
===============================================================================
TARJETA CRC — identity/tokens.py
===============================================================================

Módulo:
    Token Service (JWT HS256)

Responsabilidades:
    - Emitir tokens firmados con claims {userId, email, iat, exp}.
    - Verificar firma, expiración y claims mínimos.
    - Distinguir expirado vs inválido (mensajes 401 distintos).

Colaboradores:
    - crosscutting.config: jwt_secret, jwt_expire (parse_duration).
    - identity.auth_users: Access Guard.

Notas:
    - Stateless: no hay revocación; rotar JWT_SECRET invalida todos los tokens.
    - No loguear tokens ni secretos.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from ..crosscutting.config import get_settings

JWT_ALGORITHM: str = "HS256"

CLAIM_USER_ID: str = "userId"
CLAIM_EMAIL: str = "email"
CLAIM_IAT: str = "iat"
CLAIM_EXP: str = "exp"


class TokenError(Exception):
    """Base de fallas de verificación."""


class TokenExpiredError(TokenError):
    pass


class InvalidTokenError(TokenError):
    pass


@dataclass(frozen=True, slots=True)
class TokenClaims:
    user_id: int
    email: str


class TokenService:
    """Emite y verifica access tokens."""

    def __init__(
        self, secret: str, ttl: timedelta, algorithm: str = JWT_ALGORITHM
    ) -> None:
        if not secret:
            raise ValueError("Token secret must not be empty")
        self._secret = secret
        self._ttl = ttl
        self._algorithm = algorithm

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, user_id: int, email: str, *, now: datetime | None = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        payload: dict[str, object] = {
            CLAIM_USER_ID: user_id,
            CLAIM_EMAIL: email,
            CLAIM_IAT: int(issued_at.timestamp()),
            CLAIM_EXP: int((issued_at + self._ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Valida el token y devuelve sus claims.

        Raises:
            TokenExpiredError: exp en el pasado.
            InvalidTokenError: firma, formato o claims inválidos.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": [CLAIM_USER_ID, CLAIM_EXP]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenExpiredError("Token expired") from exc
        except jwt.InvalidTokenError as exc:
            raise InvalidTokenError("Invalid token") from exc

        user_id = payload.get(CLAIM_USER_ID)
        # R: bool es subclase de int; no es un id válido.
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise InvalidTokenError("Invalid token")

        return TokenClaims(user_id=user_id, email=str(payload.get(CLAIM_EMAIL) or ""))


def get_token_service() -> TokenService:
    """TokenService construido desde Settings (cacheados)."""
    settings = get_settings()
    return TokenService(settings.jwt_secret, settings.jwt_ttl())
