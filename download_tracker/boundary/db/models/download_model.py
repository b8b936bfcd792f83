"""
Download ORM model.

Tracks one simulated download job per row: the source URL a user submitted,
its lifecycle status and progress, and the terminal outcome (result location
or diagnostic message).

Dependencies: sqlalchemy, download_tracker.boundary.db.base
System role: Durable job store for the download lifecycle
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, Enum, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from download_tracker.boundary.db.base import Base, UUIDMixin, TimestampMixin
from download_tracker.core.download_state import DownloadStatus

__all__ = ["DownloadModel", "DownloadStatus"]


class DownloadModel(Base, UUIDMixin, TimestampMixin):
    """
    Download ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        owner_id: Owning user; never reassigned
        source_url: URL submitted by the user
        display_name: Human-readable label derived from source_url
        status: Lifecycle state (PENDING/PROCESSING/COMPLETED/FAILED)
        progress: Percentage complete (0-100)
        result_location: Path of the produced file; COMPLETED only
        diagnostic: Failure message; FAILED only
        completed_at: Set once, when the job reaches a terminal state
        created_at: Submission timestamp (UTC)
        updated_at: Last status/progress update (UTC)

    Constraints:
        One non-failed row per (owner_id, source_url), enforced by a
        partial unique index so a failed URL can be submitted again.
    """

    __tablename__ = "downloads"
    __table_args__ = (
        Index("idx_downloads_owner_status", "owner_id", "status"),
        Index("idx_downloads_created_at", "created_at"),
        Index(
            "uq_downloads_owner_url_active",
            "owner_id",
            "source_url",
            unique=True,
            postgresql_where=text("status != 'failed'"),
            sqlite_where=text("status != 'failed'"),
        ),
    )

    owner_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    source_url: Mapped[str] = mapped_column(String(2048), nullable=False)

    display_name: Mapped[str] = mapped_column(String(500), nullable=False)

    status: Mapped[DownloadStatus] = mapped_column(
        Enum(
            DownloadStatus,
            native_enum=False,
            length=20,
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        nullable=False,
        default=DownloadStatus.PENDING,
    )

    progress: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        doc="Progress percentage (0-100)",
    )

    result_location: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    diagnostic: Mapped[str | None] = mapped_column(Text, nullable=True)

    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    owner = relationship("UserModel", back_populates="downloads")
