# tests/conftest.py
from __future__ import annotations

from collections.abc import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from pension_api.config.settings import get_settings
from pension_api.main import create_app


@pytest.fixture(autouse=True)
def _fresh_settings() -> Generator[None, None, None]:
    """Make every test read settings from the current environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def app() -> FastAPI:
    """Provide a freshly built application instance."""
    return create_app()


@pytest.fixture()
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """Provide a TestClient that renders unhandled errors as 500 envelopes."""
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
    app.dependency_overrides.clear()
