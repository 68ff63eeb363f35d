"""API test fixtures — fake database + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory FakeDatabase
    - get_db dependency overridden to return the fake handle

Design Decisions:
    - Fake over mongomock: the routes use the async driver API, and only five
      collection calls are exercised
"""

import pytest
from httpx import ASGITransport, AsyncClient

from users_api.infrastructure.database import get_db
from users_api.main import app

from tests.fake_mongo import FakeDatabase


@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture
def users_collection(fake_db):
    return fake_db["users"]


@pytest.fixture
async def client(fake_db):
    """FastAPI test client with get_db overridden."""
    async def override_get_db():
        return fake_db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def new_user():
    return {
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "password": "analytical-engine",
        "age": 36,
        "role": "admin",
    }
