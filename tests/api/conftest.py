"""API test fixtures — async in-memory DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session
    - db_manager patched so the readiness probe sees the test engine
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

import bookstore.infrastructure.database as db_module
from bookstore.api.router import build_api_router
from bookstore.config import Settings
from bookstore.db.base import Base
from bookstore.infrastructure.database import DatabaseSessionManager, get_db
from bookstore.main import create_app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def app():
    return create_app(build_api_router(), Settings())


@pytest.fixture
async def client(app, test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def book_payload():
    """Factory for valid book bodies; keyword overrides replace fields."""
    def _make(**overrides) -> dict:
        payload = {
            "name": "The Pragmatic Programmer",
            "price": 42.5,
            "pages": 352,
            "author": "Andrew Hunt",
            "languages": ["English"],
            "genre": ["Software"],
        }
        payload.update(overrides)
        return payload
    return _make
