"""
Database models package.

Exports:
  - UserModel: Account ORM model
  - DownloadModel, DownloadStatus: Download job ORM model and status enum

Dependencies: sqlalchemy, download_tracker.boundary.db.base
System role: Database model definitions for domain entities
"""

from download_tracker.boundary.db.models.user_model import UserModel
from download_tracker.boundary.db.models.download_model import DownloadModel, DownloadStatus

__all__ = [
    "UserModel",
    "DownloadModel",
    "DownloadStatus",
]
