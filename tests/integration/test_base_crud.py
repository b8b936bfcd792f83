"""
Test suite for BaseCRUD generic operations.

System role: Verification of the shared CRUD building blocks
"""

import uuid

import pytest

from download_tracker.boundary.db.CRUD.base_crud import BaseCRUD
from download_tracker.boundary.db.models.user_model import UserModel


@pytest.fixture
def crud() -> BaseCRUD[UserModel]:
    """Provide a BaseCRUD bound to UserModel."""
    return BaseCRUD(UserModel)


class TestBaseCRUD:
    """Test suite for BaseCRUD."""

    @pytest.mark.asyncio
    async def test_create_and_get_by_id(self, test_async_db, crud) -> None:
        user = await crud.create(
            test_async_db, name="Carol", email="carol@example.com", password_hash="x"
        )

        fetched = await crud.get_by_id(test_async_db, user.id)

        assert fetched.email == "carol@example.com"
        assert fetched.created_at is not None

    @pytest.mark.asyncio
    async def test_get_by_id_should_return_none_when_missing(self, test_async_db, crud) -> None:
        assert await crud.get_by_id(test_async_db, uuid.uuid4()) is None
