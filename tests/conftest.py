"""Pytest fixtures for async FastAPI testing.

Loads `.env.test` before any application module reads settings, creates a
clean SQLite schema for the session, and provides an `AsyncClient` bound to
the app through ASGITransport. Tables are emptied after every test.
"""
import os
import pathlib

import pytest
from dotenv import load_dotenv

ROOT = pathlib.Path(__file__).resolve().parent.parent

_dotenv_path = ROOT / ".env.test"
if _dotenv_path.exists():
    load_dotenv(dotenv_path=str(_dotenv_path))

os.environ.setdefault("DATABASE_URL", f"sqlite:///{ROOT / 'test.db'}")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ALGORITHM", "HS256")
os.environ.setdefault("ADMIN_PRINCIPAL", "test-admin")
os.environ.setdefault("CACHE_ENABLED", "False")
os.environ.setdefault("RATE_LIMIT_ENABLED", "False")


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(scope="session")
def prepare_database():
    """Create clean schema for the test session."""
    from dentalbook.core.database import engine, Base

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    yield

    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session(prepare_database):
    """Yield a SQLAlchemy session for direct DB access in tests."""
    from dentalbook.core.database import SessionLocal, Base

    db = SessionLocal()
    try:
        yield db
    finally:
        db.rollback()
        for table in reversed(Base.metadata.sorted_tables):
            db.execute(table.delete())
        db.commit()
        db.close()


@pytest.fixture
def app(prepare_database):
    from dentalbook.main import create_app

    return create_app()


@pytest.fixture
async def async_client(app, db_session):
    """Provide an httpx AsyncClient configured with the FastAPI app."""
    from httpx import AsyncClient, ASGITransport

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        yield client


def _bearer(principal: str) -> dict:
    from dentalbook.core.security import create_access_token

    token, _ = create_access_token(principal)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers():
    from dentalbook.core.config import settings

    return _bearer(settings.ADMIN_PRINCIPAL)


@pytest.fixture
def user_headers():
    return _bearer("patient-principal")


@pytest.fixture
def make_headers():
    return _bearer


class MockRedis:
    """Mock Redis for testing without a real Redis instance."""
    def __init__(self):
        self.store = {}

    async def get(self, key):
        return self.store.get(key)

    async def set(self, key, value, ttl=None):
        self.store[key] = value

    async def delete_pattern(self, pattern):
        prefix = pattern.replace("*", "")
        keys_to_del = [k for k in self.store if k.startswith(prefix)]
        for k in keys_to_del:
            del self.store[k]


@pytest.fixture
def mock_redis(monkeypatch):
    """Fixture to mock the Redis cache."""
    from dentalbook.cache.cache_service import redis_cache

    mm = MockRedis()
    monkeypatch.setattr(redis_cache, "get", mm.get)
    monkeypatch.setattr(redis_cache, "set", mm.set)
    monkeypatch.setattr(redis_cache, "delete_pattern", mm.delete_pattern)
    return mm
