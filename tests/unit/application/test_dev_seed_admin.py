from unittest.mock import MagicMock

import pytest

from hrms.application.dev_seed_admin import ensure_dev_admin
from hrms.crosscutting.config import Settings
from hrms.domain.errors import DuplicateEmailError
from hrms.identity.users import User, UserRole

pytestmark = pytest.mark.unit


@pytest.fixture
def repo():
    return MagicMock()


@pytest.fixture
def hasher():
    return MagicMock(return_value="hashed")


def _settings(**overrides) -> Settings:
    data = {
        "dev_seed_admin": True,
        "app_env": "development",
        "dev_seed_admin_email": "admin@hrms.local",
        "dev_seed_admin_password": "admin1234",
    }
    data.update(overrides)
    return Settings(**data)


def test_ensure_dev_admin_disabled(repo, hasher):
    ensure_dev_admin(
        _settings(dev_seed_admin=False), user_repo=repo, password_hasher=hasher
    )

    repo.get_user_by_email.assert_not_called()
    repo.create_user.assert_not_called()
    hasher.assert_not_called()


@pytest.mark.parametrize("env", ["production", "staging", "test"])
def test_ensure_dev_admin_fail_fast_outside_development(repo, hasher, env):
    settings = _settings(app_env=env, jwt_secret="x" * 40)

    with pytest.raises(RuntimeError, match="must be development/dev/local"):
        ensure_dev_admin(settings, user_repo=repo, password_hasher=hasher)

    repo.get_user_by_email.assert_not_called()


def test_ensure_dev_admin_rejects_empty_credentials(repo, hasher):
    with pytest.raises(ValueError):
        ensure_dev_admin(
            _settings(dev_seed_admin_password=""), user_repo=repo, password_hasher=hasher
        )


def test_ensure_dev_admin_create_new(repo, hasher):
    repo.get_user_by_email.return_value = None

    ensure_dev_admin(_settings(app_env="local"), user_repo=repo, password_hasher=hasher)

    repo.get_user_by_email.assert_called_with("admin@hrms.local")
    repo.create_user.assert_called_once()
    kwargs = repo.create_user.call_args[1]
    assert kwargs["email"] == "admin@hrms.local"
    assert kwargs["password_hash"] == "hashed"
    assert kwargs["role"] == UserRole.ADMIN
    hasher.assert_called_once_with("admin1234")
    repo.update_password.assert_not_called()


def test_ensure_dev_admin_tolerates_concurrent_create(repo, hasher):
    repo.get_user_by_email.return_value = None
    repo.create_user.side_effect = DuplicateEmailError()

    ensure_dev_admin(_settings(), user_repo=repo, password_hasher=hasher)

    repo.update_password.assert_not_called()


def _existing() -> User:
    return User(
        id=7,
        email="admin@hrms.local",
        password_hash="old_hash",
        first_name="System",
        last_name="Administrator",
        role=UserRole.ADMIN,
        is_active=False,
    )


def test_ensure_dev_admin_idempotent_existing(repo, hasher):
    repo.get_user_by_email.return_value = _existing()

    ensure_dev_admin(_settings(), user_repo=repo, password_hasher=hasher)

    repo.create_user.assert_not_called()
    repo.update_password.assert_not_called()
    repo.set_user_active.assert_not_called()


def test_ensure_dev_admin_force_reset(repo, hasher):
    repo.get_user_by_email.return_value = _existing()

    ensure_dev_admin(
        _settings(dev_seed_admin_force_reset=True),
        user_repo=repo,
        password_hasher=hasher,
    )

    repo.create_user.assert_not_called()
    repo.update_password.assert_called_once_with(7, "hashed")
    repo.set_user_active.assert_called_once_with(7, True)
