"""
User CRUD operations.

Dependencies: sqlalchemy, download_tracker.boundary.db.models
System role: Account persistence operations
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from download_tracker.boundary.db.models.user_model import UserModel
from download_tracker.boundary.db.CRUD.base_crud import BaseCRUD


class UserCRUD(BaseCRUD[UserModel]):
    """CRUD operations for UserModel with email lookup."""

    def __init__(self) -> None:
        """Initialize UserCRUD with UserModel."""
        super().__init__(UserModel)

    async def get_by_email(self, session: AsyncSession, email: str) -> UserModel | None:
        """
        Retrieve user by (normalised) email.

        Args:
            session: Async database session
            email: Lower-cased email address

        Returns:
            UserModel if found, None otherwise
        """
        stmt = select(UserModel).where(UserModel.email == email)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()


user_crud = UserCRUD()
