from unittest.mock import patch

import bcrypt
import pytest

from hrms.identity.passwords import hash_password, verify_password

pytestmark = pytest.mark.unit


def test_hash_and_verify():
    hashed = hash_password("secret123", rounds=4)

    assert hashed.startswith("$2b$04$")
    assert verify_password("secret123", hashed)
    assert not verify_password("wrong", hashed)


def test_admin_hash_uses_admin_rounds():
    with patch("hrms.identity.passwords.bcrypt.gensalt", wraps=bcrypt.gensalt) as gensalt:
        hash_password("secret123", admin=True)

    # conftest fija BCRYPT_ADMIN_ROUNDS=4
    gensalt.assert_called_once_with(4)


def test_legacy_2a_hashes_verify():
    legacy = hash_password("secret123", rounds=4).replace("$2b$", "$2a$", 1)

    assert verify_password("secret123", legacy)


@pytest.mark.parametrize("bad_hash", ["", "not-a-hash", "$2b$04$short"])
def test_malformed_hash_returns_false(bad_hash):
    assert verify_password("secret123", bad_hash) is False


def test_passwords_longer_than_72_bytes_are_truncated():
    long_password = "x" * 100
    hashed = hash_password(long_password, rounds=4)

    assert verify_password("x" * 72, hashed)
