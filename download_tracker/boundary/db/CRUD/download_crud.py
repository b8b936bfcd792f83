"""
Download CRUD operations.

Provides Create and Read operations for DownloadModel plus the atomic
status transitions and progress updates the lifecycle engine relies on.

Every write is a single conditional UPDATE ... RETURNING: the WHERE clause
carries the expected current status, so two writers can never both observe
"pending" and both move the job to "processing".

Dependencies: sqlalchemy, download_tracker.boundary.db.models, download_tracker.core
System role: Download persistence operations for the job store
"""

from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from download_tracker.boundary.db.base import utcnow
from download_tracker.boundary.db.models.download_model import DownloadModel, DownloadStatus
from download_tracker.boundary.db.CRUD.base_crud import BaseCRUD
from download_tracker.core.download_state import TERMINAL_FIELDS, source_statuses
from download_tracker.core.exceptions import InvalidTransitionError, NotFoundError

# Caller-supplied fields accepted per target status.
_TRANSITION_FIELDS: dict[DownloadStatus, frozenset[str]] = {
    DownloadStatus.PENDING: frozenset(),
    DownloadStatus.PROCESSING: frozenset({"progress"}),
    DownloadStatus.COMPLETED: frozenset({"result_location"}),
    DownloadStatus.FAILED: frozenset({"diagnostic"}),
}


class DownloadCRUD(BaseCRUD[DownloadModel]):
    """
    CRUD operations for DownloadModel.

    Extends BaseCRUD with owner-scoped queries, duplicate detection and
    state-machine-checked updates.
    """

    def __init__(self) -> None:
        """Initialize DownloadCRUD with DownloadModel."""
        super().__init__(DownloadModel)

    async def get_for_owner(
        self,
        session: AsyncSession,
        id: UUID,
        owner_id: UUID,
    ) -> DownloadModel | None:
        """
        Retrieve a download only if it belongs to owner_id.

        Args:
            session: Async database session
            id: Download UUID
            owner_id: Requesting user's UUID

        Returns:
            DownloadModel if found and owned, None otherwise
        """
        stmt = select(DownloadModel).where(
            DownloadModel.id == id,
            DownloadModel.owner_id == owner_id,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_owner(
        self,
        session: AsyncSession,
        owner_id: UUID,
    ) -> Sequence[DownloadModel]:
        """
        Retrieve all downloads of an owner, most recently created first.

        Args:
            session: Async database session
            owner_id: Owner UUID

        Returns:
            Sequence of DownloadModels
        """
        stmt = (
            select(DownloadModel)
            .where(DownloadModel.owner_id == owner_id)
            .order_by(DownloadModel.created_at.desc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_by_status(
        self,
        session: AsyncSession,
        status: DownloadStatus,
        limit: int | None = None,
    ) -> Sequence[DownloadModel]:
        """
        Retrieve downloads by lifecycle status, oldest first.

        Args:
            session: Async database session
            status: Status to filter by
            limit: Maximum number of downloads to return

        Returns:
            Sequence of DownloadModels with matching status
        """
        stmt = (
            select(DownloadModel)
            .where(DownloadModel.status == status)
            .order_by(DownloadModel.created_at)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def find_active_duplicate(
        self,
        session: AsyncSession,
        owner_id: UUID,
        source_url: str,
    ) -> DownloadModel | None:
        """
        Find a non-failed download of owner_id for the same source URL.

        Args:
            session: Async database session
            owner_id: Owner UUID
            source_url: Submitted URL

        Returns:
            The blocking DownloadModel, None if the URL may be submitted
        """
        stmt = (
            select(DownloadModel)
            .where(
                DownloadModel.owner_id == owner_id,
                DownloadModel.source_url == source_url,
                DownloadModel.status != DownloadStatus.FAILED,
            )
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def _current_status(self, session: AsyncSession, id: UUID) -> DownloadStatus:
        stmt = select(DownloadModel.status).where(DownloadModel.id == id)
        current = (await session.execute(stmt)).scalar_one_or_none()
        if current is None:
            raise NotFoundError(f"Download {id} does not exist", download_id=str(id))
        return current

    async def transition(
        self,
        session: AsyncSession,
        id: UUID,
        target: DownloadStatus,
        **fields: Any,
    ) -> DownloadModel:
        """
        Atomically move a download to target status.

        Entering COMPLETED forces progress to 100 and requires result_location;
        entering FAILED requires diagnostic. Both set completed_at.

        Args:
            session: Async database session
            id: Download UUID
            target: Status to move to
            **fields: Extra fields allowed for target (see _TRANSITION_FIELDS)

        Returns:
            Updated DownloadModel

        Raises:
            NotFoundError: If the download does not exist
            InvalidTransitionError: If the current status cannot reach target,
                or fields do not match target
        """
        unexpected = set(fields) - _TRANSITION_FIELDS[target]
        required = TERMINAL_FIELDS.get(target)
        if unexpected or (required and not fields.get(required)):
            raise InvalidTransitionError(
                str(id),
                None,
                target.value,
                details={"fields": sorted(fields)},
            )

        values: dict[str, Any] = {"status": target, **fields}
        if target is DownloadStatus.PROCESSING:
            values.setdefault("progress", 0)
        elif target is DownloadStatus.COMPLETED:
            values["progress"] = 100
            values["completed_at"] = utcnow()
        elif target is DownloadStatus.FAILED:
            values["completed_at"] = utcnow()

        stmt = (
            update(DownloadModel)
            .where(
                DownloadModel.id == id,
                DownloadModel.status.in_(source_statuses(target)),
            )
            .values(**values)
            .returning(DownloadModel)
        )
        updated = (await session.execute(stmt)).scalar_one_or_none()
        if updated is None:
            current = await self._current_status(session, id)
            raise InvalidTransitionError(str(id), current.value, target.value)
        return updated

    async def advance_progress(
        self,
        session: AsyncSession,
        id: UUID,
        progress: int,
    ) -> DownloadModel:
        """
        Atomically raise the progress of a processing download.

        Args:
            session: Async database session
            id: Download UUID
            progress: New percentage (0-100), not lower than the stored one

        Returns:
            Updated DownloadModel

        Raises:
            NotFoundError: If the download does not exist
            InvalidTransitionError: If the download is not processing or the
                new value would lower progress
        """
        if not 0 <= progress <= 100:
            raise InvalidTransitionError(
                str(id),
                None,
                DownloadStatus.PROCESSING.value,
                details={"progress": progress},
            )

        stmt = (
            update(DownloadModel)
            .where(
                DownloadModel.id == id,
                DownloadModel.status == DownloadStatus.PROCESSING,
                DownloadModel.progress <= progress,
            )
            .values(progress=progress)
            .returning(DownloadModel)
        )
        updated = (await session.execute(stmt)).scalar_one_or_none()
        if updated is None:
            current = await self._current_status(session, id)
            raise InvalidTransitionError(
                str(id),
                current.value,
                DownloadStatus.PROCESSING.value,
                details={"progress": progress},
            )
        return updated

    async def mark_processing(self, session: AsyncSession, id: UUID) -> DownloadModel:
        """Claim a pending download: pending -> processing, progress 0."""
        return await self.transition(session, id, DownloadStatus.PROCESSING, progress=0)

    async def mark_completed(
        self,
        session: AsyncSession,
        id: UUID,
        result_location: str,
    ) -> DownloadModel:
        """Finish a processing download with its result location."""
        return await self.transition(
            session, id, DownloadStatus.COMPLETED, result_location=result_location
        )

    async def mark_failed(
        self,
        session: AsyncSession,
        id: UUID,
        diagnostic: str,
    ) -> DownloadModel:
        """Abort a processing download with a diagnostic message."""
        return await self.transition(session, id, DownloadStatus.FAILED, diagnostic=diagnostic)


download_crud = DownloadCRUD()
