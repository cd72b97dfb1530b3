"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure test environment (APP_ENV=test => in-memory repositories)
  - Keep bcrypt cheap (4 rounds) so auth tests stay fast
  - Reset repository singletons between tests
  - Provide user / token / client factories

Collaborators:
  - pytest: Test framework
  - hrms.container: repository singletons
  - fastapi.testclient.TestClient

Notes:
  - Env vars are set BEFORE importing hrms: Settings is cached by lru_cache
    and hrms.api.main reads it at import time (CORS).
"""

import os
import sys
from pathlib import Path
from typing import Callable

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

os.environ["APP_ENV"] = "test"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["BCRYPT_ADMIN_ROUNDS"] = "4"
os.environ.setdefault("JWT_SECRET", "test-secret-for-unit-tests")
os.environ.pop("DEV_SEED_ADMIN", None)

from hrms.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None
app_config.get_settings.cache_clear()

from hrms.container import get_token_service_dependency, get_user_repository  # noqa: E402
from hrms.container import reset_repositories  # noqa: E402
from hrms.identity.passwords import hash_password  # noqa: E402
from hrms.identity.users import User, UserRole  # noqa: E402


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


@pytest.fixture(autouse=True)
def _fresh_repositories():
    """R: Cada test arranca con stores in-memory vacíos."""
    reset_repositories()
    yield
    reset_repositories()


# ============================================================================
# Factories
# ============================================================================


@pytest.fixture
def make_user() -> Callable[..., User]:
    """R: Crea un usuario en el store in-memory del container."""
    counter = {"n": 0}

    def _make(
        *,
        role: UserRole = UserRole.EMPLOYEE,
        email: str | None = None,
        password: str = "secret123",
        first_name: str = "Test",
        last_name: str = "User",
        department_id: int | None = None,
        is_active: bool = True,
    ) -> User:
        counter["n"] += 1
        user = get_user_repository().create_user(
            email=email or f"{role.value}{counter['n']}@example.com",
            password_hash=hash_password(password),
            first_name=first_name,
            last_name=last_name,
            role=role,
            department_id=department_id,
        )
        if not is_active:
            user = get_user_repository().set_user_active(user.id, False)
        return user

    return _make


@pytest.fixture
def auth_headers() -> Callable[[User], dict[str, str]]:
    def _headers(user: User) -> dict[str, str]:
        token = get_token_service_dependency().issue(user.id, user.email)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from hrms.api.main import app

    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
