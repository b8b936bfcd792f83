"""
Download query service.

Read side of the download store: an owner's downloads together with
per-status counts computed from the very same rows.

Dependencies: download_tracker.boundary.db.CRUD, download_tracker.models
System role: Dashboard listing and statistics
"""

from collections import Counter
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from download_tracker.boundary.db.CRUD.download_crud import download_crud
from download_tracker.boundary.db.models.download_model import DownloadModel, DownloadStatus
from download_tracker.models.download import DownloadStats


class DownloadQueryService:
    """Read-only queries over an owner's downloads."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize query service.

        Args:
            db: AsyncSession for database operations
        """
        self.db = db

    async def list_with_stats(
        self, owner_id: UUID
    ) -> tuple[list[DownloadModel], DownloadStats]:
        """
        List an owner's downloads, newest first, with status counts.

        Counts come from one pass over the returned list, so stats.total
        always equals len(downloads) and the sum of the per-status counts.

        Args:
            owner_id: Owner UUID

        Returns:
            tuple: (downloads, stats)
        """
        downloads = list(await download_crud.list_by_owner(self.db, owner_id))
        counts = Counter(download.status for download in downloads)
        stats = DownloadStats(
            total=len(downloads),
            **{status.value: counts[status] for status in DownloadStatus},
        )
        return downloads, stats
