"""
Download lifecycle engine.

Drives each submitted download from pending to a terminal state in the
background: claim (pending -> processing), advance progress by a fixed step
on a fixed interval, then complete with a result location. Any error after
the claim fails the job with the error message as diagnostic; nothing is
retried and nothing escapes to the caller that submitted the job.

Each in-flight job owns exactly one asyncio.Task, kept in an arena keyed by
download ID, so a job can never be advanced by two timers at once and all
work can be cancelled together on shutdown.

Dependencies: asyncio, sqlalchemy, download_tracker.boundary.db, download_tracker.configs
System role: Background job execution for simulated downloads
"""

import asyncio
import logging
from typing import Awaitable, Callable
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from download_tracker.boundary.db.CRUD.download_crud import DownloadCRUD, download_crud
from download_tracker.boundary.db.models.download_model import DownloadModel, DownloadStatus
from download_tracker.configs.downloads import DownloadSettings
from download_tracker.core.exceptions import (
    ExecutionFailure,
    InvalidTransitionError,
    NotFoundError,
)
from download_tracker.core.locator import build_result_location
from download_tracker.observability.log_utils import (
    log_exception_with_context,
    log_with_context,
)

logger = logging.getLogger(__name__)

RESTART_DIAGNOSTIC = "Download interrupted by server restart"

ResultLocator = Callable[[DownloadModel], str]


class DownloadLifecycleEngine:
    """
    Background executor for download jobs.

    Attributes:
        session_factory: Source of short-lived sessions, one per store update
        settings: Progress step, tick interval and result directory
        crud: Store operations used for every transition
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        settings: DownloadSettings,
        crud: DownloadCRUD = download_crud,
        result_locator: ResultLocator | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """
        Initialize the engine.

        Args:
            session_factory: Async session factory shared with request handlers
            settings: Download progression settings
            crud: Download CRUD implementation
            result_locator: Builds the result location of a finished job;
                defaults to "<result_dir>/<id>_<display_name>.jpg"
            sleep: Awaitable delay between ticks
        """
        self.session_factory = session_factory
        self.settings = settings
        self.crud = crud
        self._result_locator = result_locator or self._default_result_location
        self._sleep = sleep
        self._tasks: dict[UUID, asyncio.Task] = {}

    def _default_result_location(self, download: DownloadModel) -> str:
        return build_result_location(
            self.settings.result_dir, download.id, download.display_name
        )

    def submit(self, download_id: UUID) -> asyncio.Task:
        """
        Schedule a download for background processing and return at once.

        Submitting an ID that is already in flight returns the existing task.

        Args:
            download_id: ID of a committed, pending download

        Returns:
            asyncio.Task: The task driving this download
        """
        existing = self._tasks.get(download_id)
        if existing is not None and not existing.done():
            return existing

        task = asyncio.create_task(
            self._run(download_id), name=f"download-{download_id}"
        )
        self._tasks[download_id] = task
        task.add_done_callback(lambda _: self._forget(download_id, task))
        log_with_context(logger, logging.DEBUG, "Download scheduled", download_id=download_id)
        return task

    def _forget(self, download_id: UUID, task: asyncio.Task) -> None:
        if self._tasks.get(download_id) is task:
            del self._tasks[download_id]

    def is_active(self, download_id: UUID) -> bool:
        """True while a task for download_id is running."""
        task = self._tasks.get(download_id)
        return task is not None and not task.done()

    @property
    def active_job_ids(self) -> set[UUID]:
        return {job_id for job_id, task in self._tasks.items() if not task.done()}

    async def drain(self) -> None:
        """Wait until every in-flight download has reached a terminal state."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks.values()), return_exceptions=True)

    async def shutdown(self) -> None:
        """Cancel every in-flight download task and wait for them to stop."""
        tasks = list(self._tasks.values())
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks.clear()
        if tasks:
            logger.info(f"Cancelled {len(tasks)} in-flight downloads")

    async def recover(self) -> int:
        """
        Resume work left over by a previous process.

        Pending downloads are scheduled again. Downloads stuck in processing
        had their timer die with the old process and are failed.

        Returns:
            int: Number of pending downloads re-submitted
        """
        async with self.session_factory() as db:
            pending = await self.crud.get_by_status(db, DownloadStatus.PENDING)
            orphaned = [
                download
                for download in await self.crud.get_by_status(db, DownloadStatus.PROCESSING)
                if not self.is_active(download.id)
            ]
            failed = []
            for download in orphaned:
                try:
                    await self.crud.mark_failed(db, download.id, RESTART_DIAGNOSTIC)
                except (InvalidTransitionError, NotFoundError) as e:
                    # Row moved on or vanished since it was listed
                    log_with_context(
                        logger,
                        logging.INFO,
                        "Skipped orphaned download",
                        download_id=download.id,
                        reason=e.message,
                    )
                    continue
                failed.append(download)
            await db.commit()

        for download in failed:
            log_with_context(
                logger, logging.WARNING, "Failed orphaned download", download_id=download.id
            )
        for download in pending:
            self.submit(download.id)
        if pending or failed:
            logger.info(
                f"Recovered downloads: {len(pending)} resumed, {len(failed)} failed"
            )
        return len(pending)

    async def _run(self, download_id: UUID) -> None:
        try:
            download = await self._claim(download_id)
        except (InvalidTransitionError, NotFoundError) as e:
            # Already claimed elsewhere or gone: not ours to fail.
            log_with_context(
                logger,
                logging.WARNING,
                "Download not claimable",
                download_id=download_id,
                reason=e.message,
            )
            return
        except Exception as e:
            log_exception_with_context(
                logger, "Download claim failed", e, download_id=download_id
            )
            return

        try:
            await self._advance(download_id)
            result_location = self._result_locator(download)
            async with self.session_factory() as db:
                await self.crud.mark_completed(db, download_id, result_location)
                await db.commit()
            log_with_context(
                logger,
                logging.INFO,
                "Download completed",
                download_id=download_id,
                result_location=result_location,
            )
        except asyncio.CancelledError:
            log_with_context(
                logger, logging.INFO, "Download task cancelled", download_id=download_id
            )
            raise
        except ExecutionFailure as e:
            await self._fail(download_id, e)
        except Exception as e:
            failure = ExecutionFailure(
                str(e) or type(e).__name__, {"error_type": type(e).__name__}
            )
            failure.__cause__ = e
            await self._fail(download_id, failure)

    async def _claim(self, download_id: UUID) -> DownloadModel:
        async with self.session_factory() as db:
            download = await self.crud.mark_processing(db, download_id)
            await db.commit()
        log_with_context(logger, logging.INFO, "Download processing", download_id=download_id)
        return download

    async def _advance(self, download_id: UUID) -> None:
        step = self.settings.progress_step
        progress = 0
        while progress < 100:
            await self._sleep(self.settings.tick_interval_seconds)
            progress = min(progress + step, 100)
            async with self.session_factory() as db:
                await self.crud.advance_progress(db, download_id, progress)
                await db.commit()
            log_with_context(
                logger,
                logging.DEBUG,
                "Download progress",
                download_id=download_id,
                progress=progress,
            )

    async def _fail(self, download_id: UUID, error: ExecutionFailure) -> None:
        diagnostic = error.message or type(error).__name__
        log_exception_with_context(logger, "Download failed", error, download_id=download_id)
        try:
            async with self.session_factory() as db:
                await self.crud.mark_failed(db, download_id, diagnostic)
                await db.commit()
        except Exception as inner:
            log_exception_with_context(
                logger,
                "Failed to record download failure",
                inner,
                download_id=download_id,
            )
