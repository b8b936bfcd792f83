"""
Test suite for the schema management script.
"""

import pytest
from sqlalchemy import inspect

from download_tracker.boundary.db.connection import get_async_engine, get_async_session_factory
from download_tracker.boundary.db.create_tables import create_all_tables, drop_all_tables
from download_tracker.configs import get_settings


@pytest.fixture
def sqlite_url(tmp_path, monkeypatch):
    url = f"sqlite+aiosqlite:///{tmp_path / 'schema.db'}"
    monkeypatch.setenv("POSTGRES_URL", url)
    for cached in (get_settings, get_async_engine, get_async_session_factory):
        cached.cache_clear()
    yield url
    for cached in (get_settings, get_async_engine, get_async_session_factory):
        cached.cache_clear()


async def _table_names() -> set[str]:
    engine = get_async_engine()
    async with engine.connect() as conn:
        names = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
    await engine.dispose()
    return set(names)


@pytest.mark.asyncio
async def test_create_then_drop_all_tables(sqlite_url, capsys) -> None:
    await create_all_tables()
    assert {"users", "downloads"} <= await _table_names()

    # Idempotent
    await create_all_tables()

    await drop_all_tables()
    assert await _table_names() == set()
    assert "All tables dropped successfully." in capsys.readouterr().out
