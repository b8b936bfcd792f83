"""
Test suite for DownloadService.

Tests download creation, ownership-scoped reads, status updates and result
lookup against a real SQLite store.

System role: Verification of download service orchestration layer
"""

import uuid
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from download_tracker.application.services.download_service import DownloadService
from download_tracker.boundary.db.models.download_model import DownloadStatus
from download_tracker.core.exceptions import (
    DuplicateJobError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)


@pytest.fixture
def download_service(test_async_db, download_settings) -> DownloadService:
    """Provide DownloadService bound to the test database."""
    return DownloadService(db=test_async_db, settings=download_settings)


class TestCreateDownload:
    """Test suite for DownloadService.create_download()."""

    @pytest.mark.asyncio
    async def test_should_create_pending_download(
        self, download_service, owner, sample_url
    ) -> None:
        download = await download_service.create_download(owner.id, sample_url)

        assert download.owner_id == owner.id
        assert download.source_url == sample_url
        assert download.display_name == "my cool image"
        assert download.status is DownloadStatus.PENDING
        assert download.progress == 0
        assert download.result_location is None

    @pytest.mark.asyncio
    async def test_should_use_fallback_display_name(self, download_service, owner) -> None:
        download = await download_service.create_download(
            owner.id, "https://www.freepik.com/photos/sunset"
        )

        assert download.display_name == "freepik-image"

    @pytest.mark.asyncio
    async def test_should_reject_foreign_url(self, download_service, owner) -> None:
        with pytest.raises(ValidationError):
            await download_service.create_download(owner.id, "https://example.com/a_1.htm")

        assert await download_service.list_downloads(owner.id) == []

    @pytest.mark.asyncio
    async def test_should_reject_active_duplicate(
        self, download_service, owner, sample_url
    ) -> None:
        await download_service.create_download(owner.id, sample_url)

        with pytest.raises(DuplicateJobError, match="already been added"):
            await download_service.create_download(owner.id, sample_url)

        assert len(await download_service.list_downloads(owner.id)) == 1

    @pytest.mark.asyncio
    async def test_should_reject_duplicate_of_completed_download(
        self, download_service, owner, sample_url
    ) -> None:
        download = await download_service.create_download(owner.id, sample_url)
        await download_service.update_status(download.id, DownloadStatus.PROCESSING)
        await download_service.update_status(
            download.id, DownloadStatus.COMPLETED, result_location="uploads/x.jpg"
        )

        with pytest.raises(DuplicateJobError):
            await download_service.create_download(owner.id, sample_url)

    @pytest.mark.asyncio
    async def test_should_allow_resubmitting_failed_url(
        self, download_service, owner, sample_url
    ) -> None:
        first = await download_service.create_download(owner.id, sample_url)
        await download_service.update_status(first.id, DownloadStatus.PROCESSING)
        await download_service.update_status(
            first.id, DownloadStatus.FAILED, diagnostic="network down"
        )

        second = await download_service.create_download(owner.id, sample_url)

        assert second.id != first.id
        assert second.status is DownloadStatus.PENDING
        assert len(await download_service.list_downloads(owner.id)) == 2

    @pytest.mark.asyncio
    async def test_should_allow_same_url_for_different_owners(
        self, download_service, owner, other_owner, sample_url
    ) -> None:
        mine = await download_service.create_download(owner.id, sample_url)
        theirs = await download_service.create_download(other_owner.id, sample_url)

        assert mine.id != theirs.id

    @pytest.mark.asyncio
    async def test_should_map_lost_race_to_duplicate(
        self, download_settings, sample_url
    ) -> None:
        db = AsyncMock(spec=AsyncSession)
        service = DownloadService(db=db, settings=download_settings)

        with patch(
            "download_tracker.application.services.download_service.download_crud"
        ) as mock_crud:
            mock_crud.find_active_duplicate = AsyncMock(return_value=None)
            mock_crud.create = AsyncMock(
                side_effect=IntegrityError("INSERT", {}, Exception("unique"))
            )

            with pytest.raises(DuplicateJobError):
                await service.create_download(uuid.uuid4(), sample_url)

        db.rollback.assert_awaited_once()
        db.commit.assert_not_awaited()


class TestReads:
    """Test suite for ownership-scoped reads."""

    @pytest.mark.asyncio
    async def test_get_download_should_return_own_download(
        self, download_service, owner, sample_url
    ) -> None:
        created = await download_service.create_download(owner.id, sample_url)

        fetched = await download_service.get_download(created.id, owner.id)

        assert fetched.id == created.id

    @pytest.mark.asyncio
    async def test_get_download_should_hide_other_owners_download(
        self, download_service, owner, other_owner, sample_url
    ) -> None:
        created = await download_service.create_download(owner.id, sample_url)

        with pytest.raises(NotFoundError):
            await download_service.get_download(created.id, other_owner.id)

    @pytest.mark.asyncio
    async def test_get_download_should_raise_for_unknown_id(
        self, download_service, owner
    ) -> None:
        with pytest.raises(NotFoundError):
            await download_service.get_download(uuid.uuid4(), owner.id)

    @pytest.mark.asyncio
    async def test_list_downloads_should_only_return_own(
        self, download_service, owner, other_owner, sample_url
    ) -> None:
        await download_service.create_download(owner.id, sample_url)
        await download_service.create_download(
            other_owner.id, "https://www.freepik.com/p/other_2.htm"
        )

        downloads = await download_service.list_downloads(owner.id)

        assert [d.source_url for d in downloads] == [sample_url]


class TestUpdateStatus:
    """Test suite for DownloadService.update_status()."""

    @pytest.mark.asyncio
    async def test_should_reject_skipping_processing(
        self, download_service, owner, sample_url
    ) -> None:
        created = await download_service.create_download(owner.id, sample_url)
        # The failed update rolls the session back, expiring loaded rows.
        download_id, owner_id = created.id, owner.id

        with pytest.raises(InvalidTransitionError):
            await download_service.update_status(
                download_id, DownloadStatus.COMPLETED, result_location="uploads/x.jpg"
            )

        current = await download_service.get_download(download_id, owner_id)
        assert current.status is DownloadStatus.PENDING

    @pytest.mark.asyncio
    async def test_should_raise_not_found_for_unknown_id(self, download_service) -> None:
        with pytest.raises(NotFoundError):
            await download_service.update_status(uuid.uuid4(), DownloadStatus.PROCESSING)


class TestGetResult:
    """Test suite for DownloadService.get_result()."""

    @pytest.mark.asyncio
    async def test_should_return_completed_download(
        self, download_service, owner, sample_url
    ) -> None:
        created = await download_service.create_download(owner.id, sample_url)
        await download_service.update_status(created.id, DownloadStatus.PROCESSING)
        await download_service.update_status(
            created.id, DownloadStatus.COMPLETED, result_location="uploads/x.jpg"
        )

        result = await download_service.get_result(created.id, owner.id)

        assert result.result_location == "uploads/x.jpg"

    @pytest.mark.asyncio
    async def test_should_raise_while_not_completed(
        self, download_service, owner, sample_url
    ) -> None:
        created = await download_service.create_download(owner.id, sample_url)

        with pytest.raises(NotFoundError, match="not completed"):
            await download_service.get_result(created.id, owner.id)

    @pytest.mark.asyncio
    async def test_should_raise_for_other_owner(
        self, download_service, owner, other_owner, sample_url
    ) -> None:
        created = await download_service.create_download(owner.id, sample_url)
        await download_service.update_status(created.id, DownloadStatus.PROCESSING)
        await download_service.update_status(
            created.id, DownloadStatus.COMPLETED, result_location="uploads/x.jpg"
        )

        with pytest.raises(NotFoundError):
            await download_service.get_result(created.id, other_owner.id)
