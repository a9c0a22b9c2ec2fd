import os
import uuid

# Must be set before the portal settings are imported
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ["PASSWORD_HASH_ROUNDS"] = "1"
os.environ["ENV"] = "test"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from portal.config import settings
from portal.core.db import UserStore
from portal.core.security import hash_password
from portal.main import create_app


TEST_DB_URL = "sqlite://:memory:"


@pytest.fixture(autouse=True)
def _session_secret(monkeypatch):
    """Every test starts with a known signing secret."""
    monkeypatch.setattr(settings, "jwt_secret", "test-secret")


@pytest_asyncio.fixture
async def store():
    """
    Connect a store adapter to a clean in-memory SQLite database.
    Tables are recreated from scratch for every test.
    """
    user_store = UserStore(TEST_DB_URL, generate_schemas=True)
    await user_store.connect()
    yield user_store
    await user_store.close()


@pytest_asyncio.fixture
async def app(store):
    return create_app(store)


@pytest_asyncio.fixture
async def client(app):
    """
    Provide an HTTPX AsyncClient bound to the FastAPI app with a fresh DB.
    Lifespan events are not run; the store fixture owns the connection.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client


@pytest_asyncio.fixture
async def create_user(store):
    """
    Factory fixture to create users directly through the store adapter.
    """

    async def _create_user(password: str = "UserPass!23", preferences: dict | None = None):
        suffix = uuid.uuid4().hex[:6]
        user = await store.insert_one({
            "username": f"user_{suffix}",
            "email": f"{suffix}@example.com",
            "password_hash": hash_password(password),
            "preferences": preferences or {},
        })
        return user, password

    return _create_user
