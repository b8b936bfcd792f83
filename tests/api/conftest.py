"""
API test fixtures.

Provides a TestClient over a fresh app with services, the lifecycle engine
and the current user replaced through dependency_overrides. The lifespan is
not entered, so no database is touched.
"""

from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock
import uuid

import pytest
from fastapi.testclient import TestClient

from download_tracker.api.deps import (
    get_auth_service,
    get_current_user,
    get_download_engine,
    get_download_service,
    get_query_service,
)
from download_tracker.boundary.db.models.download_model import DownloadStatus
from download_tracker.main import create_app


def _make_download(**overrides) -> SimpleNamespace:
    values = {
        "id": uuid.uuid4(),
        "source_url": "https://www.freepik.com/free-photo/my-cool-image_123456.htm",
        "display_name": "my cool image",
        "status": DownloadStatus.PENDING,
        "progress": 0,
        "result_location": None,
        "diagnostic": None,
        "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
        "completed_at": None,
    }
    values.update(overrides)
    return SimpleNamespace(**values)


@pytest.fixture
def make_download():
    """Factory for objects shaped like DownloadModel, for response mapping."""
    return _make_download


@pytest.fixture
def current_user() -> SimpleNamespace:
    return SimpleNamespace(id=uuid.uuid4(), name="Alice", email="alice@example.com")


@pytest.fixture
def mock_download_service() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def mock_query_service() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def mock_auth_service() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def app(
    current_user,
    mock_download_service,
    mock_query_service,
    mock_auth_service,
    mock_download_engine,
):
    app = create_app()
    app.dependency_overrides[get_current_user] = lambda: current_user
    app.dependency_overrides[get_download_service] = lambda: mock_download_service
    app.dependency_overrides[get_query_service] = lambda: mock_query_service
    app.dependency_overrides[get_auth_service] = lambda: mock_auth_service
    app.dependency_overrides[get_download_engine] = lambda: mock_download_engine
    return app


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)
