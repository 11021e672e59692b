# tests/conftest.py
import asyncio
from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

import catalog_api.api.dependencies as _deps
from catalog_api.core.config import Settings, get_settings
from catalog_api.main import app, limiter


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        rate_limit_enabled=False,
    )


@pytest.fixture
def client(test_settings: Settings) -> Generator[TestClient, None, None]:
    # Reset the database singleton so each test starts with an empty
    # in-memory SQLite database.
    _deps._database = None
    _deps._database_lock = asyncio.Lock()
    app.dependency_overrides[get_settings] = lambda: test_settings
    previous_limiter_state = limiter.enabled
    limiter.enabled = test_settings.rate_limit_enabled
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.pop(get_settings, None)
        limiter.enabled = previous_limiter_state
        _deps._database = None
