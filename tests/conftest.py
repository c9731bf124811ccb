"""
Pytest configuration and fixtures for ingredient-translator tests.
"""

import pytest
from fastapi.testclient import TestClient

from helpers import FakeCache


@pytest.fixture
def fake_cache():
    return FakeCache()


@pytest.fixture
def client(fake_cache):
    from server import app, get_cache_store

    app.dependency_overrides[get_cache_store] = lambda: fake_cache
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
