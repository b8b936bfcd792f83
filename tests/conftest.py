"""
Shared test fixtures and configuration for entire test suite.

Provides: SQLite-backed async sessions, download settings, sample users, service mocks
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

from unittest.mock import AsyncMock, MagicMock

import pytest


@pytest.fixture
async def test_engine(tmp_path):
    """
    Create a file-backed SQLite async engine with all tables.

    A file database (rather than :memory:) gives every session its own
    connection, so the lifecycle engine's short-lived sessions behave like
    they do against PostgreSQL.

    Yields:
        AsyncEngine: Engine with schema created (lazy imported to avoid settings issues)
    """
    from sqlalchemy.ext.asyncio import create_async_engine
    from download_tracker.boundary.db.base import Base
    from download_tracker.boundary.db import models  # noqa: F401

    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'downloads.db'}",
        connect_args={"timeout": 30},
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Cleanup
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    """Session factory configured like the application's."""
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


@pytest.fixture
async def test_async_db(session_factory):
    """
    Create async database session for testing.

    Yields:
        AsyncSession: Test database session with cleanup
    """
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def download_settings():
    """Fast download settings: no delay between ticks, four ticks to finish."""
    from download_tracker.configs.downloads import DownloadSettings

    return DownloadSettings(
        allowed_domains=["freepik.com"],
        fallback_name="freepik-image",
        result_dir="uploads",
        progress_step=25,
        tick_interval_seconds=0,
    )


@pytest.fixture
def auth_settings():
    """Auth settings with a fixed secret and cheap hashing."""
    from download_tracker.configs.auth import AuthSettings

    return AuthSettings(
        secret_key="test-secret",
        token_ttl_seconds=3600,
        password_iterations=1000,
    )


async def _create_user(session, name: str, email: str):
    from download_tracker.boundary.db.CRUD.user_crud import user_crud

    user = await user_crud.create(
        session,
        name=name,
        email=email,
        password_hash="pbkdf2_sha256$1000$salt$hash",
    )
    await session.commit()
    return user


@pytest.fixture
async def owner(test_async_db):
    """Persisted user owning downloads under test."""
    return await _create_user(test_async_db, "Alice", "alice@example.com")


@pytest.fixture
async def other_owner(test_async_db):
    """Second persisted user, for ownership checks."""
    return await _create_user(test_async_db, "Bob", "bob@example.com")


@pytest.fixture
def sample_url() -> str:
    """Source page URL with a derivable display name."""
    return "https://www.freepik.com/free-photo/my-cool-image_123456.htm"


@pytest.fixture
def mock_download_engine():
    """
    Create mock DownloadLifecycleEngine for testing.

    Returns:
        MagicMock: Engine whose submit() only records calls
    """
    engine = MagicMock()
    engine.submit = MagicMock()
    engine.shutdown = AsyncMock()
    engine.recover = AsyncMock(return_value=0)
    return engine
