"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(), init_models()
  - UserModel, DownloadModel, DownloadStatus: Core domain entities
  - user_crud, download_crud: CRUD operation singletons

Dependencies: sqlalchemy, download_tracker.configs
System role: Database adapter providing persistent storage for users and
their download jobs.
"""

from download_tracker.boundary.db.base import Base, TimestampMixin, UUIDMixin
from download_tracker.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
    init_models,
)
from download_tracker.boundary.db.models.user_model import UserModel
from download_tracker.boundary.db.models.download_model import DownloadModel, DownloadStatus
from download_tracker.boundary.db.CRUD import (
    BaseCRUD,
    DownloadCRUD,
    UserCRUD,
    download_crud,
    user_crud,
)

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    # Connection
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    "init_models",
    # Models
    "UserModel",
    "DownloadModel",
    "DownloadStatus",
    # CRUD classes
    "BaseCRUD",
    "UserCRUD",
    "DownloadCRUD",
    # CRUD singletons
    "user_crud",
    "download_crud",
]
