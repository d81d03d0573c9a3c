"""
Shared fixtures for unit tests.

Nothing here may read the developer's .env: settings come from defaults,
monkeypatch.setenv(), or explicit constructor arguments.
"""

import pytest

from config import JWTSettings


@pytest.fixture(autouse=True)
def disable_dotenv_loading(monkeypatch):
    """Stop pydantic-settings from picking up a local .env file."""
    import pydantic_settings.sources.providers.dotenv as ps_dotenv

    monkeypatch.setattr(ps_dotenv, "dotenv_values", lambda *a, **kw: {})


@pytest.fixture
def jwt_settings(monkeypatch) -> JWTSettings:
    """HS256 settings, so tests can mint user and share tokens without key files."""
    for var in ("JWT_PRIVATE_KEY", "JWT_PUBLIC_KEY"):
        monkeypatch.delenv(var, raising=False)
    return JWTSettings(jwt_secret="unit-test-secret-long-enough-for-hs256")
