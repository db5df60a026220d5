"""Shared fixtures for web API tests."""

import os
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from cli.config_models import MoodlogConfig


@pytest.fixture
def jwt_secret():
    return "test-jwt-secret"


def _make_auth_token(jwt_secret, user_id, email="u@test.com", name="U"):
    return jwt.encode(
        {"sub": user_id, "email": email, "name": name},
        jwt_secret,
        algorithm="HS256",
    )


@pytest.fixture
def auth_headers(jwt_secret):
    return {"Authorization": f"Bearer {_make_auth_token(jwt_secret, 'user-123')}"}


@pytest.fixture
def auth_headers_b(jwt_secret):
    """Second user for isolation tests."""
    return {"Authorization": f"Bearer {_make_auth_token(jwt_secret, 'user-456')}"}


@pytest.fixture
def web_config():
    return MoodlogConfig()


@pytest.fixture
def web_storage(tmp_path):
    """Real-clock storage so analytics windows line up with wall time."""
    from journal.storage import JournalStorage

    return JournalStorage(tmp_path / "web.db")


@pytest.fixture
def client(jwt_secret, web_storage, web_config):
    """Test client with a temp database and fresh rate limits."""
    from journal.search import JournalSearch
    from web.app import app
    from web.deps import get_config, get_search, get_storage
    from web.rate_limit import reset_rate_limits

    reset_rate_limits()
    app.dependency_overrides[get_storage] = lambda: web_storage
    app.dependency_overrides[get_search] = lambda: JournalSearch(web_storage)
    app.dependency_overrides[get_config] = lambda: web_config

    with patch.dict(os.environ, {"MOODLOG_JWT_SECRET": jwt_secret}):
        yield TestClient(app)

    app.dependency_overrides.clear()
    reset_rate_limits()
