"""Shared pytest fixtures for all tests."""

import pytest

from filedrop.config.settings import Settings
from filedrop.infrastructure.storage.local_file_storage import (
    LocalFileStorage,
    LocalFileStorageConfig,
)
from filedrop.main import create_app


@pytest.fixture
def upload_dir(tmp_path):
    """
    Upload directory path inside tmp_path (not created yet).

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        Path of the upload directory
    """
    return tmp_path / "uploads"


@pytest.fixture
def settings(upload_dir):
    """Settings pointing at the temporary upload directory, .env ignored."""
    return Settings(_env_file=None, upload_dir=upload_dir, log_level="WARNING")


@pytest.fixture
def storage(upload_dir):
    """LocalFileStorage over the temporary upload directory."""
    return LocalFileStorage(config=LocalFileStorageConfig(base_path=upload_dir))


@pytest.fixture
def app(settings):
    """Flask app built from the test settings."""
    app = create_app(settings)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture
def stored_names(upload_dir):
    """Callable returning the sorted names currently in the upload directory."""
    def _names():
        return sorted(p.name for p in upload_dir.iterdir())
    return _names
