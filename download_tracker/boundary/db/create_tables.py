"""
Database table creation script.

Creates all tables defined in ORM models using SQLAlchemy metadata.

Dependencies: sqlalchemy, download_tracker.configs
System role: Database schema initialization

Usage:
    python -m download_tracker.boundary.db.create_tables
"""

import asyncio

from download_tracker.boundary.db.base import Base
from download_tracker.boundary.db.connection import get_async_engine, init_models


async def create_all_tables() -> None:
    """
    Create all database tables from registered ORM models.

    Idempotent: calls CREATE TABLE IF NOT EXISTS for each model, so safe
    to run multiple times. Existing tables remain unchanged.

    Raises:
        SQLAlchemyError: If database connection fails or table creation fails
    """
    engine = get_async_engine()
    await init_models(engine)
    await engine.dispose()
    print("All tables created successfully.")


async def drop_all_tables() -> None:
    """
    Drop all database tables and their data.

    WARNING: Irreversible data loss. Only use in development environments.
    """
    engine = get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()
    print("All tables dropped successfully.")


if __name__ == "__main__":
    asyncio.run(create_all_tables())
