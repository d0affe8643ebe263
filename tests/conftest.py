"""
Conftest
"""

from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from api.main import app
from api.shared.db import get_db_session
from api.shared.entities.registry import BaseEntity, PrivateMessage, User

# In-memory SQLite shared across sessions through a single static connection
TEST_DB_URL = "sqlite+aiosqlite:///:memory:"

T0 = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


def at(minutes: int) -> datetime:
    """Timestamp ``minutes`` after a fixed origin."""
    return T0 + timedelta(minutes=minutes)


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(BaseEntity.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(test_engine, expire_on_commit=False)


@pytest.fixture
async def test_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    async def override_get_db_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(test_session):
    async def _make_user(name: str, email: str | None = None) -> User:
        user = User(
            name=name,
            email=email or f"{name.lower()}@example.com",
            password="secret",
        )
        test_session.add(user)
        await test_session.commit()
        return user

    return _make_user


@pytest.fixture
def make_message(test_session):
    async def _make_message(
        sender_id: int,
        receiver_id: int,
        content: str = "hello",
        created_at: datetime | None = None,
    ) -> PrivateMessage:
        message = PrivateMessage(
            sender_id=sender_id,
            receiver_id=receiver_id,
            content=content,
            created_at=created_at or at(0),
        )
        test_session.add(message)
        await test_session.commit()
        return message

    return _make_message
