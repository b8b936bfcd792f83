"""
Generic CRUD building blocks.

BaseCRUD holds the primary-key operations shared by every model; the
model-specific subclasses add their own queries on top.

Dependencies: sqlalchemy
System role: Foundation for all database CRUD operations
"""

from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from download_tracker.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    Primary-key CRUD for one ORM model.

    Methods never commit: the caller owns the transaction.

    Attributes:
        model: ORM class the operations target
    """

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    async def create(self, session: AsyncSession, **kwargs: Any) -> ModelT:
        """
        Insert a row and return it with defaults populated.

        Args:
            session: Async database session
            **kwargs: Column values

        Returns:
            The flushed instance (ID, timestamps and defaults set)

        Raises:
            IntegrityError: If a constraint such as a unique index is violated
        """
        instance = self.model(**kwargs)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def get_by_id(self, session: AsyncSession, id: UUID) -> ModelT | None:
        """Fetch a row by primary key, or None."""
        result = await session.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()
