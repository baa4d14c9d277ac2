"""Shared fixtures for the file service tests."""

import pytest
from fastapi.testclient import TestClient

from zencloud.config import Settings
from zencloud.main import create_app
from zencloud.services.blob_store import BlobStore


@pytest.fixture
def anyio_backend():
    return 'asyncio'


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a throwaway SQLite database and upload dir.

    Returns:
        Settings instance isolated from the process environment.
    """
    return Settings(
        _env_file=None,
        DATABASE_URL=f'sqlite+aiosqlite:///{tmp_path / "filemeta.db"}',
        UPLOAD_DIR=str(tmp_path / 'uploads'),
        CORS_ORIGIN='http://localhost:5173',
    )


@pytest.fixture
def client(settings):
    """Test client with the application lifespan running.

    Yields:
        TestClient bound to a freshly created app.
    """
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def upload_dir(client):
    """Upload directory of the running app."""
    return client.app.state.blob_store.base_path


@pytest.fixture
def blob_store(tmp_path):
    store = BlobStore(tmp_path / 'blobs')
    store.ensure_dir()
    return store
