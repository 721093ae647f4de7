"""Test configuration for database unit tests.

This module provides common fixtures for testing the centralized database
layer with in-memory SQLite and mocked sessions.
"""

from __future__ import annotations

from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlmodel.pool import StaticPool

import moolaegis.core.database.entities  # noqa: F401
from moolaegis.core.database.base import Base
from moolaegis.core.database.entities.users import User
from moolaegis.core.database.utils import create_sessionmaker


@pytest_asyncio.fixture
async def in_memory_engine() -> AsyncGenerator:
    """Create in-memory SQLite engine with all tables."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def in_memory_session(in_memory_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create in-memory SQLite session for testing."""
    async with create_sessionmaker(in_memory_engine)() as session:
        yield session


@pytest_asyncio.fixture
async def two_users(in_memory_session: AsyncSession) -> tuple[User, User]:
    """Persist two accounts and return them."""
    alice = User(username="alice", email="alice@example.com", password_hash="x")
    bob = User(username="bob", email="bob@example.com", password_hash="x")
    in_memory_session.add_all([alice, bob])
    await in_memory_session.commit()
    await in_memory_session.refresh(alice)
    await in_memory_session.refresh(bob)
    return alice, bob


@pytest.fixture
def mock_session():
    """Mock async database session."""
    session = AsyncMock()
    session.add = MagicMock()
    session.commit = AsyncMock()
    session.refresh = AsyncMock()
    session.delete = AsyncMock()
    # Make execute return the mock result directly, not a coroutine
    mock_result = AsyncMock()
    mock_result.scalar_one_or_none = MagicMock()
    mock_result.scalars = MagicMock()
    mock_result.scalars.return_value.all = MagicMock(return_value=[])
    session.execute = AsyncMock(return_value=mock_result)
    return session
