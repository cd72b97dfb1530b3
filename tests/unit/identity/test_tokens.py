"""
Name: Token Service Tests

Responsibilities:
  - issue/verify round trip con claims userId/email/iat/exp
  - Firma con otro secreto o token vencido siempre fallan
  - Claims faltantes o de tipo inválido => InvalidTokenError
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from hrms.identity.tokens import (
    InvalidTokenError,
    TokenError,
    TokenExpiredError,
    TokenService,
    get_token_service,
)

pytestmark = pytest.mark.unit

SECRET = "unit-test-secret"


def _service(ttl: timedelta = timedelta(hours=24), secret: str = SECRET) -> TokenService:
    return TokenService(secret, ttl)


def test_issue_and_verify_round_trip():
    service = _service()
    token = service.issue(42, "ana@example.com")

    claims = service.verify(token)

    assert claims.user_id == 42
    assert claims.email == "ana@example.com"


def test_payload_uses_expected_claim_names():
    now = datetime(2030, 1, 1, tzinfo=timezone.utc)
    token = _service(ttl=timedelta(hours=1)).issue(7, "x@example.com", now=now)

    payload = jwt.decode(token, options={"verify_signature": False})

    assert set(payload) == {"userId", "email", "iat", "exp"}
    assert payload["exp"] - payload["iat"] == 3600


def test_token_signed_with_other_secret_is_invalid():
    token = _service(secret="another-secret").issue(1, "a@example.com")

    with pytest.raises(InvalidTokenError):
        _service().verify(token)


def test_expired_token_raises_expired():
    issued = datetime.now(timezone.utc) - timedelta(hours=2)
    token = _service(ttl=timedelta(hours=1)).issue(1, "a@example.com", now=issued)

    with pytest.raises(TokenExpiredError):
        _service().verify(token)


def test_expired_error_is_a_token_error():
    assert issubclass(TokenExpiredError, TokenError)
    assert issubclass(InvalidTokenError, TokenError)


@pytest.mark.parametrize("garbage", ["", "abc", "a.b.c", "Bearer x"])
def test_malformed_token_is_invalid(garbage):
    with pytest.raises(InvalidTokenError):
        _service().verify(garbage)


def test_missing_user_id_claim_is_invalid():
    exp = int((datetime.now(timezone.utc) + timedelta(hours=1)).timestamp())
    token = jwt.encode({"email": "a@example.com", "exp": exp}, SECRET, algorithm="HS256")

    with pytest.raises(InvalidTokenError):
        _service().verify(token)


@pytest.mark.parametrize("bad_id", ["1", True, 1.5])
def test_non_integer_user_id_is_invalid(bad_id):
    exp = int((datetime.now(timezone.utc) + timedelta(hours=1)).timestamp())
    token = jwt.encode({"userId": bad_id, "exp": exp}, SECRET, algorithm="HS256")

    with pytest.raises(InvalidTokenError):
        _service().verify(token)


def test_empty_secret_is_rejected():
    with pytest.raises(ValueError):
        TokenService("", timedelta(hours=1))


def test_get_token_service_uses_settings_ttl():
    service = get_token_service()

    assert service.ttl == timedelta(hours=24)
