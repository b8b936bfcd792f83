"""
Download domain models and schemas.

Request/response schemas for download submission, listing and results.

Dependencies: pydantic
System role: Download API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from download_tracker.core.download_state import DownloadStatus


class CreateDownloadRequest(BaseModel):
    """Request schema for submitting a download."""

    url: str = Field(min_length=1, max_length=2048, description="Source page URL")


class DownloadResponse(BaseModel):
    """Response schema for a single download job."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    source_url: str
    display_name: str
    status: DownloadStatus
    progress: int
    result_location: str | None = None
    diagnostic: str | None = None
    created_at: datetime
    completed_at: datetime | None = None


class DownloadStats(BaseModel):
    """Per-status counts for one owner's downloads."""

    total: int = 0
    pending: int = 0
    processing: int = 0
    completed: int = 0
    failed: int = 0


class DownloadListResponse(BaseModel):
    """Downloads of the current user with their summary counts."""

    downloads: list[DownloadResponse]
    stats: DownloadStats


class DownloadCreatedResponse(BaseModel):
    """Response schema for an accepted download."""

    message: str = "Download added successfully"
    download_id: uuid.UUID
    download: DownloadResponse


class DownloadResultResponse(BaseModel):
    """Handle to the file produced by a completed download."""

    id: uuid.UUID
    display_name: str
    result_location: str
    completed_at: datetime
