"""
Download API endpoints.

Routes:
- GET /downloads - List own downloads with status counts
- POST /downloads - Submit a page URL for download
- GET /downloads/{id} - Poll a single download
- GET /downloads/{id}/result - Result handle of a completed download

Dependencies: download_tracker.application.services, download_tracker.core, download_tracker.models
System role: Download management HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends

from download_tracker.api.deps.dependencies import (
    get_current_user,
    get_download_engine,
    get_download_service,
    get_query_service,
)
from download_tracker.application.services import DownloadQueryService, DownloadService
from download_tracker.boundary.db.models.user_model import UserModel
from download_tracker.core.download_lifecycle import DownloadLifecycleEngine
from download_tracker.models.common import ERROR_RESPONSES
from download_tracker.models.download import (
    CreateDownloadRequest,
    DownloadCreatedResponse,
    DownloadListResponse,
    DownloadResponse,
    DownloadResultResponse,
)

from .error_handling import handle_download_errors

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/downloads", tags=["downloads"], responses=ERROR_RESPONSES)


@router.get("", response_model=DownloadListResponse)
@handle_download_errors
async def list_downloads(
    current_user: UserModel = Depends(get_current_user),
    query_service: DownloadQueryService = Depends(get_query_service),
) -> DownloadListResponse:
    """
    List the caller's downloads, newest first, with per-status counts.

    Returns:
        DownloadListResponse: Downloads plus stats computed from the same rows
    """
    downloads, stats = await query_service.list_with_stats(current_user.id)
    return DownloadListResponse(
        downloads=[DownloadResponse.model_validate(d) for d in downloads],
        stats=stats,
    )


@router.post("", response_model=DownloadCreatedResponse, status_code=201)
@handle_download_errors
async def create_download(
    request: CreateDownloadRequest,
    current_user: UserModel = Depends(get_current_user),
    download_service: DownloadService = Depends(get_download_service),
    engine: DownloadLifecycleEngine = Depends(get_download_engine),
) -> DownloadCreatedResponse:
    """
    Submit a page URL and start its download in the background.

    The response is sent while the job is still pending; clients poll
    GET /downloads/{id} for progress.

    Raises:
        HTTPException(400): Malformed or foreign URL, or an active duplicate
    """
    download = await download_service.create_download(current_user.id, request.url)
    engine.submit(download.id)

    logger.info(
        "Download submitted",
        extra={"download_id": str(download.id), "owner_id": str(current_user.id)},
    )

    return DownloadCreatedResponse(
        download_id=download.id,
        download=DownloadResponse.model_validate(download),
    )


@router.get("/{download_id}", response_model=DownloadResponse)
@handle_download_errors
async def get_download(
    download_id: UUID,
    current_user: UserModel = Depends(get_current_user),
    download_service: DownloadService = Depends(get_download_service),
) -> DownloadResponse:
    """
    Get one of the caller's downloads.

    Raises:
        HTTPException(404): Unknown ID or owned by someone else
    """
    download = await download_service.get_download(download_id, current_user.id)
    return DownloadResponse.model_validate(download)


@router.get("/{download_id}/result", response_model=DownloadResultResponse)
@handle_download_errors
async def get_download_result(
    download_id: UUID,
    current_user: UserModel = Depends(get_current_user),
    download_service: DownloadService = Depends(get_download_service),
) -> DownloadResultResponse:
    """
    Get the result handle of a completed download.

    Raises:
        HTTPException(404): Unknown, not owned, or not completed yet
    """
    download = await download_service.get_result(download_id, current_user.id)
    return DownloadResultResponse(
        id=download.id,
        display_name=download.display_name,
        result_location=download.result_location,
        completed_at=download.completed_at,
    )
