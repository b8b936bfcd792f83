"""
User ORM model.

Registered account that owns download jobs.

Dependencies: sqlalchemy, download_tracker.boundary.db.base
System role: Identity persistence for authentication
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from download_tracker.boundary.db.base import Base, UUIDMixin, TimestampMixin


class UserModel(Base, UUIDMixin, TimestampMixin):
    """
    User ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        name: Display name (2-100 characters)
        email: Login email, stored lower-cased (unique)
        password_hash: Encoded PBKDF2 hash, never the raw password
        downloads: Download jobs owned by this user (cascade delete)
        created_at: Registration timestamp (UTC)
        updated_at: Last modification timestamp (UTC)
    """

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
    )

    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    downloads = relationship(
        "DownloadModel",
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
