"""
Download service orchestrator.

The job store seen by the API: validates and records new downloads, enforces
ownership on reads, and commits state transitions.

Dependencies: download_tracker.boundary.db.CRUD, download_tracker.core
System role: Download use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from download_tracker.boundary.db.CRUD.download_crud import download_crud
from download_tracker.boundary.db.models.download_model import DownloadModel, DownloadStatus
from download_tracker.configs import get_settings
from download_tracker.configs.downloads import DownloadSettings
from download_tracker.core.exceptions import DuplicateJobError, NotFoundError
from download_tracker.core.locator import derive_display_name, validate_source_url

logger = logging.getLogger(__name__)


class DownloadService:
    """Download service orchestrator."""

    def __init__(self, db: AsyncSession, settings: DownloadSettings | None = None) -> None:
        """
        Initialize download service.

        Args:
            db: AsyncSession for database operations
            settings: Download settings (defaults to application settings)
        """
        self.db = db
        self.settings = settings or get_settings().downloads

    async def create_download(self, owner_id: UUID, source_url: str) -> DownloadModel:
        """
        Record a new pending download for owner_id.

        The row is committed before returning so the lifecycle engine and
        polling clients can see it immediately.

        Args:
            owner_id: Authenticated user's UUID
            source_url: Submitted page URL

        Returns:
            DownloadModel: Created download (status PENDING, progress 0)

        Raises:
            ValidationError: If the URL is malformed or from another site
            DuplicateJobError: If a non-failed download of this URL exists
        """
        url = validate_source_url(source_url, self.settings.allowed_domains)

        if await download_crud.find_active_duplicate(self.db, owner_id, url):
            raise DuplicateJobError(url)

        try:
            download = await download_crud.create(
                self.db,
                owner_id=owner_id,
                source_url=url,
                display_name=derive_display_name(url, self.settings.fallback_name),
                status=DownloadStatus.PENDING,
                progress=0,
            )
            await self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent submission of the same URL
            await self.db.rollback()
            raise DuplicateJobError(url)

        logger.info(
            "Download created",
            extra={"download_id": str(download.id), "owner_id": str(owner_id)},
        )
        return download

    async def get_download(self, download_id: UUID, owner_id: UUID) -> DownloadModel:
        """
        Get a download owned by owner_id.

        Raises:
            NotFoundError: If it does not exist or belongs to someone else
        """
        download = await download_crud.get_for_owner(self.db, download_id, owner_id)
        if download is None:
            raise NotFoundError(f"Download {download_id} not found", download_id=str(download_id))
        return download

    async def list_downloads(self, owner_id: UUID) -> list[DownloadModel]:
        """List all downloads of owner_id, most recently created first."""
        return list(await download_crud.list_by_owner(self.db, owner_id))

    async def update_status(
        self,
        download_id: UUID,
        status: DownloadStatus,
        **fields,
    ) -> DownloadModel:
        """
        Apply and commit one state transition.

        Args:
            download_id: Download UUID
            status: Target status
            **fields: result_location (COMPLETED) or diagnostic (FAILED)

        Returns:
            DownloadModel: Updated download

        Raises:
            NotFoundError: If the download does not exist
            InvalidTransitionError: If the transition is not allowed
        """
        try:
            download = await download_crud.transition(self.db, download_id, status, **fields)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        return download

    async def get_result(self, download_id: UUID, owner_id: UUID) -> DownloadModel:
        """
        Get a completed download owned by owner_id.

        Raises:
            NotFoundError: If missing, not owned, or not completed yet
        """
        download = await download_crud.get_for_owner(self.db, download_id, owner_id)
        if download is None or download.status is not DownloadStatus.COMPLETED:
            raise NotFoundError(
                "Download not found or not completed",
                download_id=str(download_id),
            )
        return download
