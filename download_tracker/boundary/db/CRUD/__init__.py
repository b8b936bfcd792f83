"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from download_tracker.boundary.db.CRUD import download_crud, user_crud

    # Use singleton instances
    download = await download_crud.get_for_owner(db, download_id, owner_id)

    # Or instantiate classes directly for custom behavior
    from download_tracker.boundary.db.CRUD import DownloadCRUD
    custom_crud = DownloadCRUD()
"""

from download_tracker.boundary.db.CRUD.base_crud import BaseCRUD
from download_tracker.boundary.db.CRUD.user_crud import UserCRUD, user_crud
from download_tracker.boundary.db.CRUD.download_crud import DownloadCRUD, download_crud

__all__ = [
    "BaseCRUD",
    "UserCRUD",
    "user_crud",
    "DownloadCRUD",
    "download_crud",
]
